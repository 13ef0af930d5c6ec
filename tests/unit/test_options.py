#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_options.py
"""Unit tests for render option dataclasses."""

import dataclasses

import pytest

from mailtree.options import HtmlRendererOptions, PlainTextRendererOptions, RenderOptions


@pytest.mark.unit
class TestRenderOptions:
    """Defaults, validation and cloning."""

    def test_defaults(self) -> None:
        options = RenderOptions()
        assert options.replace_variables is True
        assert options.placeholder_policy == "empty"
        assert options.missing_required_policy == "error"
        assert options.max_repeat_iterations is None
        assert options.repeat_item_key == "item"
        assert options.extract_preheader is False
        assert options.preheader_max_length == 150

    def test_frozen(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            RenderOptions().replace_variables = False  # type: ignore[misc]

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"placeholder_policy": "loud"},
            {"missing_required_policy": "ignore"},
            {"max_repeat_iterations": -1},
            {"preheader_max_length": 0},
            {"repeat_item_key": ""},
        ],
    )
    def test_invalid_values_raise(self, kwargs: dict) -> None:
        with pytest.raises(ValueError):
            RenderOptions(**kwargs)

    def test_create_updated_returns_new_instance(self) -> None:
        original = HtmlRendererOptions()
        updated = original.create_updated(standalone=False, placeholder_policy="bracketed")
        assert isinstance(updated, HtmlRendererOptions)
        assert updated.standalone is False
        assert updated.placeholder_policy == "bracketed"
        assert original.standalone is True

    def test_create_updated_validates(self) -> None:
        with pytest.raises(ValueError):
            RenderOptions().create_updated(max_repeat_iterations=-5)

    def test_every_field_has_help(self) -> None:
        for options_class in (RenderOptions, HtmlRendererOptions, PlainTextRendererOptions):
            for f in dataclasses.fields(options_class):
                assert f.metadata.get("help"), f"{options_class.__name__}.{f.name} has no help text"

    def test_formatter_excluded_from_equality(self) -> None:
        assert RenderOptions(variable_formatter=lambda n, f: n) == RenderOptions()


@pytest.mark.unit
class TestFormatOptions:
    """Format-specific option defaults."""

    def test_html_defaults(self) -> None:
        options = HtmlRendererOptions()
        assert options.standalone is True
        assert options.language == "en"
        assert options.title is None

    def test_plaintext_defaults(self) -> None:
        assert PlainTextRendererOptions().include_link_urls is True
