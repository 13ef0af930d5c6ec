#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_context.py
"""Unit tests for RenderContext variable policies."""

import logging

import pytest

from mailtree.ast import Node
from mailtree.context import RenderContext
from mailtree.exceptions import MissingRequiredVariableError
from mailtree.options import RenderOptions
from mailtree.theme import DEFAULT_THEME
from mailtree.variables import ScopeStack


def make_context(payload=None, **option_kwargs) -> RenderContext:
    return RenderContext(
        theme=DEFAULT_THEME,
        scopes=ScopeStack.from_payload(payload),
        options=RenderOptions(**option_kwargs),
    )


@pytest.mark.unit
class TestVariableText:
    """Tests for variable_text under each policy."""

    def test_value(self) -> None:
        assert make_context({"name": "Alice"}).variable_text("name") == "Alice"

    def test_non_string_value_is_stringified(self) -> None:
        assert make_context({"n": 3, "ok": True}).variable_text("n") == "3"
        assert make_context({"ok": True}).variable_text("ok") == "true"

    def test_fallback(self) -> None:
        assert make_context().variable_text("name", fallback="friend") == "friend"

    def test_unresolved_empty_policy(self) -> None:
        assert make_context().variable_text("name") == ""

    def test_unresolved_bracketed_policy(self) -> None:
        assert make_context(placeholder_policy="bracketed").variable_text("name") == "{{name}}"

    def test_no_replace_writes_placeholder_even_when_set(self) -> None:
        context = make_context({"name": "Alice"}, replace_variables=False)
        assert context.variable_text("name", fallback="x") == "{{name,fallback=x}}"
        assert context.variable_text("name") == "{{name}}"

    def test_required_missing_raises_by_default(self) -> None:
        with pytest.raises(MissingRequiredVariableError):
            make_context().variable_text("token", required=True)

    def test_required_missing_placeholder_policy(self, caplog: pytest.LogCaptureFixture) -> None:
        context = make_context(missing_required_policy="placeholder")
        with caplog.at_level(logging.WARNING, logger="mailtree.context"):
            assert context.variable_text("token", required=True) == "{{token}}"
        assert "token" in caplog.text

    def test_custom_formatter(self) -> None:
        context = make_context(replace_variables=False, variable_formatter=lambda n, f: f"[{n}|{f or ''}]")
        assert context.variable_text("name", fallback="x") == "[name|x]"
        assert context.variable_text("name") == "[name|]"


@pytest.mark.unit
class TestScopes:
    """Tests for iteration scopes."""

    def test_with_item_mapping(self) -> None:
        context = make_context({"x": 1}).with_item({"x": 2})
        assert context.variable_text("x") == "2"

    def test_with_item_scalar_uses_item_key(self) -> None:
        assert make_context().with_item("apple").variable_text("item") == "apple"
        assert make_context(repeat_item_key="fruit").with_item("pear").variable_text("fruit") == "pear"

    def test_with_item_does_not_touch_parent(self) -> None:
        parent = make_context({"x": 1})
        parent.with_item({"x": 2})
        assert parent.variable_text("x") == "1"
        assert parent.scopes.depth == 1


@pytest.mark.unit
class TestAttributeValues:
    """Tests for is<Field>Variable attribute redirection."""

    def test_literal_attribute(self) -> None:
        node = Node("button", attrs={"url": "https://example.com"})
        assert make_context({"https://example.com": "nope"}).attr_value(node, "url") == "https://example.com"

    def test_flagged_attribute_is_resolved(self) -> None:
        node = Node("button", attrs={"url": "cta", "isUrlVariable": True})
        assert make_context({"cta": "https://shop.test"}).attr_value(node, "url") == "https://shop.test"

    def test_flagged_attribute_fallback(self) -> None:
        node = Node("image", attrs={"src": "hero", "isSrcVariable": True, "srcFallback": "https://cdn.test/x.png"})
        assert make_context().attr_value(node, "src") == "https://cdn.test/x.png"

    def test_flagged_attribute_required(self) -> None:
        node = Node("image", attrs={"src": "hero", "isSrcVariable": True, "srcRequired": True})
        with pytest.raises(MissingRequiredVariableError):
            make_context().attr_value(node, "src")

    def test_flagged_attribute_missing_name_uses_default(self) -> None:
        node = Node("button", attrs={"isUrlVariable": True})
        assert make_context().attr_value(node, "url", "#") == "#"

    def test_link_href_replacement(self) -> None:
        context = make_context(link_values={"unsubscribe": "https://example.com/u/123"})
        assert context.link_href("unsubscribe") == "https://example.com/u/123"
        assert context.link_href("https://other.test") == "https://other.test"
        assert context.link_href(None) == ""
