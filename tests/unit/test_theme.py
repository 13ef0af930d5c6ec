#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_theme.py
"""Unit tests for theme defaults and merging."""

import logging

import pytest
from hypothesis import given
from hypothesis import strategies as st

from mailtree.theme import (
    DEFAULT_THEME,
    EmailTheme,
    ThemeButton,
    WebFont,
    deep_merge,
    merge_theme,
    to_snake_case,
)

_colors = st.from_regex(r"#[0-9a-f]{6}", fullmatch=True)


@pytest.mark.unit
class TestHelpers:
    """Tests for key conversion and plain-mapping merge."""

    @pytest.mark.parametrize(
        "key,expected",
        [("backgroundColor", "background_color"), ("maxWidth", "max_width"), ("color", "color"), ("a1B", "a1_b")],
    )
    def test_to_snake_case(self, key: str, expected: str) -> None:
        assert to_snake_case(key) == expected

    def test_deep_merge_recurses(self) -> None:
        base = {"a": {"x": 1, "y": 2}, "b": 1}
        merged = deep_merge(base, {"a": {"y": 3}, "c": 4})
        assert merged == {"a": {"x": 1, "y": 3}, "b": 1, "c": 4}
        assert base == {"a": {"x": 1, "y": 2}, "b": 1}

    def test_deep_merge_replaces_non_mapping(self) -> None:
        assert deep_merge({"a": {"x": 1}}, {"a": 5}) == {"a": 5}


@pytest.mark.unit
class TestMergeTheme:
    """Tests for merge_theme."""

    def test_none_returns_default(self) -> None:
        assert merge_theme(DEFAULT_THEME, None) is DEFAULT_THEME

    def test_empty_returns_default(self) -> None:
        assert merge_theme(DEFAULT_THEME, {}) == DEFAULT_THEME

    def test_theme_instance_replaces_default(self) -> None:
        custom = EmailTheme(button=ThemeButton(background_color="#123456"))
        assert merge_theme(DEFAULT_THEME, custom) is custom

    def test_camel_case_leaf_override(self) -> None:
        theme = merge_theme(DEFAULT_THEME, {"button": {"backgroundColor": "#ff0000"}})
        assert theme.button.background_color == "#ff0000"
        assert theme.button.text_color == DEFAULT_THEME.button.text_color
        assert theme.colors == DEFAULT_THEME.colors

    def test_snake_case_leaf_override(self) -> None:
        theme = merge_theme(DEFAULT_THEME, {"container": {"max_width": "640px"}})
        assert theme.container.max_width == "640px"

    def test_nested_section_override(self) -> None:
        theme = merge_theme(DEFAULT_THEME, {"fontSize": {"footer": {"size": "12px"}}})
        assert theme.font_size.footer.size == "12px"
        assert theme.font_size.footer.line_height == "24px"
        assert theme.font_size.paragraph == DEFAULT_THEME.font_size.paragraph

    def test_unknown_keys_are_kept_in_extra(self) -> None:
        theme = merge_theme(DEFAULT_THEME, {"colors": {"brandAccent": "#abcdef"}, "darkMode": True})
        assert theme.colors.extra == {"brandAccent": "#abcdef"}
        assert theme.extra == {"darkMode": True}

    def test_optional_web_font_section(self) -> None:
        theme = merge_theme(DEFAULT_THEME, {"font": {"webFont": {"url": "https://fonts.test/inter.woff2"}}})
        assert theme.font.web_font == WebFont(url="https://fonts.test/inter.woff2")
        assert DEFAULT_THEME.font.web_font is None

    def test_non_mapping_section_keeps_defaults(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="mailtree.theme"):
            theme = merge_theme(DEFAULT_THEME, {"colors": "red"})
        assert theme.colors == DEFAULT_THEME.colors
        assert "expects an object" in caplog.text

    def test_non_mapping_optional_section_keeps_default(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="mailtree.theme"):
            theme = merge_theme(DEFAULT_THEME, {"font": {"webFont": "https://fonts.test/inter.woff2"}})
        assert theme.font.web_font is None
        assert "webFont" in caplog.text

    def test_null_optional_section(self) -> None:
        theme = merge_theme(DEFAULT_THEME, {"font": {"webFont": None}})
        assert theme.font.web_font is None

    @pytest.mark.parametrize("override", [["colors"], "dark", 42])
    def test_non_mapping_override_is_ignored(self, override, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="mailtree.theme"):
            theme = merge_theme(DEFAULT_THEME, override)
        assert theme is DEFAULT_THEME
        assert "must be an object" in caplog.text

    def test_default_is_not_mutated(self) -> None:
        before = DEFAULT_THEME.button.background_color
        merge_theme(DEFAULT_THEME, {"button": {"backgroundColor": "#ffffff"}})
        assert DEFAULT_THEME.button.background_color == before


@pytest.mark.unit
class TestMergeLaws:
    """Property tests for the merge identity and override precedence."""

    @given(
        button=_colors,
        paragraph=_colors,
    )
    def test_identity_for_any_base(self, button: str, paragraph: str) -> None:
        base = merge_theme(DEFAULT_THEME, {"button": {"backgroundColor": button}, "colors": {"paragraph": paragraph}})
        assert merge_theme(base, {}) == base

    @given(
        section_key=st.sampled_from(["colors", "button", "link"]),
        color=_colors,
    )
    def test_override_wins_per_leaf(self, section_key: str, color: str) -> None:
        leaf = {"colors": "heading", "button": "text_color", "link": "color"}[section_key]
        theme = merge_theme(DEFAULT_THEME, {section_key: {leaf: color}})
        assert getattr(getattr(theme, section_key), leaf) == color

    @given(width=st.integers(min_value=300, max_value=900).map(lambda n: f"{n}px"))
    def test_unspecified_leaves_retain_defaults(self, width: str) -> None:
        theme = merge_theme(DEFAULT_THEME, {"container": {"maxWidth": width}})
        assert theme.container.max_width == width
        assert theme.container.min_width == DEFAULT_THEME.container.min_width
        assert theme.body == DEFAULT_THEME.body
