#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mailtree/theme.py
"""Email theme configuration and merging.

The effective theme is a tree of frozen dataclasses. A partial override,
usually straight from editor JSON, is merged onto the defaults once per
render:

- a key naming a nested section recurses into that section
- any other declared key replaces the default leaf
- keys a section does not declare are kept in that section's ``extra``

Override keys may use the editor's camelCase or snake_case. The merge never
fails and ``merge_theme(DEFAULT_THEME, {})`` is ``DEFAULT_THEME``.

Examples
--------
>>> theme = merge_theme(DEFAULT_THEME, {"button": {"backgroundColor": "#ff0000"}})
>>> theme.button.background_color
'#ff0000'
>>> theme.button.text_color
'#ffffff'

"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field, fields, is_dataclass, replace
from typing import Any, Mapping, Optional, TypeVar

logger = logging.getLogger(__name__)

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])([A-Z])")

SectionT = TypeVar("SectionT", bound="ThemeSection")


def to_snake_case(key: str) -> str:
    """Convert an editor camelCase key to snake_case.

    >>> to_snake_case("backgroundColor")
    'background_color'

    """
    return _CAMEL_BOUNDARY.sub(r"_\1", key).lower()


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Recursively merge two plain mappings, ``override`` winning per leaf.

    Parameters
    ----------
    base : Mapping
        Default values
    override : Mapping
        Values that take precedence

    Returns
    -------
    dict
        New merged dictionary; neither input is modified

    """
    result: dict[str, Any] = dict(base)
    for key, value in override.items():
        current = result.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            result[key] = deep_merge(current, value)
        else:
            result[key] = value
    return result


@dataclass(frozen=True)
class ThemeSection:
    """Base class for theme sections.

    Parameters
    ----------
    extra : dict, default = empty dict
        Override keys this section does not declare

    """

    extra: dict[str, Any] = field(default_factory=dict, compare=True)


@dataclass(frozen=True)
class ThemeColors(ThemeSection):
    """Text and accent colors."""

    heading: str = "#111827"
    paragraph: str = "#374151"
    horizontal: str = "#EAEAEA"
    footer: str = "#64748B"
    blockquote_border: str = "#D1D5DB"
    code_background: str = "#EFEFEF"
    code_text: str = "#111827"
    link_card_title: str = "#111827"
    link_card_description: str = "#6B7280"
    link_card_badge_text: str = "#111827"
    link_card_badge_background: str = "#FEF08A"
    link_card_sub_title: str = "#6B7280"


@dataclass(frozen=True)
class FontSizeSpec(ThemeSection):
    """A font size paired with its line height."""

    size: str = "15px"
    line_height: str = "26.25px"


@dataclass(frozen=True)
class ThemeFontSizes(ThemeSection):
    """Font sizes for body copy and the footer."""

    paragraph: FontSizeSpec = field(default_factory=FontSizeSpec)
    footer: FontSizeSpec = field(default_factory=lambda: FontSizeSpec(size="14px", line_height="24px"))


@dataclass(frozen=True)
class ThemeContainer(ThemeSection):
    """Geometry of the centered email container."""

    background_color: str = "#ffffff"
    max_width: str = "600px"
    min_width: str = "300px"
    padding_top: str = "0.5rem"
    padding_right: str = "0.5rem"
    padding_bottom: str = "0.5rem"
    padding_left: str = "0.5rem"
    border_radius: str = "0px"
    border_width: str = "0px"
    border_color: str = "transparent"


@dataclass(frozen=True)
class ThemeBody(ThemeSection):
    """Styling of the area around the container."""

    background_color: str = "#ffffff"
    padding_top: str = "0px"
    padding_right: str = "0px"
    padding_bottom: str = "0px"
    padding_left: str = "0px"


@dataclass(frozen=True)
class ThemeButton(ThemeSection):
    """Default button colors."""

    background_color: str = "#000000"
    text_color: str = "#ffffff"


@dataclass(frozen=True)
class ThemeLink(ThemeSection):
    """Inline link styling."""

    color: str = "#111827"


@dataclass(frozen=True)
class WebFont(ThemeSection):
    """Remote font loaded by the document shell."""

    url: str = ""
    format: str = "woff2"


@dataclass(frozen=True)
class ThemeFont(ThemeSection):
    """Font family configuration."""

    font_family: str = "Inter"
    fallback_font_family: str = "sans-serif"
    web_font: Optional[WebFont] = None

    @property
    def stack(self) -> str:
        """CSS ``font-family`` value with the fallback appended."""
        return ", ".join(str(name) for name in (self.font_family, self.fallback_font_family) if name)


@dataclass(frozen=True)
class EmailTheme(ThemeSection):
    """Complete style configuration consumed by the node renderers."""

    colors: ThemeColors = field(default_factory=ThemeColors)
    font_size: ThemeFontSizes = field(default_factory=ThemeFontSizes)
    container: ThemeContainer = field(default_factory=ThemeContainer)
    body: ThemeBody = field(default_factory=ThemeBody)
    button: ThemeButton = field(default_factory=ThemeButton)
    link: ThemeLink = field(default_factory=ThemeLink)
    font: ThemeFont = field(default_factory=ThemeFont)


DEFAULT_THEME = EmailTheme()

# Optional nested sections that are None by default
_OPTIONAL_SECTIONS: dict[tuple[type, str], type] = {(ThemeFont, "web_font"): WebFont}


def _merge_section(section: SectionT, override: Mapping[str, Any]) -> SectionT:
    declared = {f.name for f in fields(section) if f.name != "extra"}
    updates: dict[str, Any] = {}
    extra_updates: dict[str, Any] = {}

    for raw_key, value in override.items():
        key = to_snake_case(str(raw_key))
        if key not in declared:
            extra_updates[raw_key] = value
            continue
        current = getattr(section, key)
        section_type = _OPTIONAL_SECTIONS.get((type(section), key))
        if current is None and section_type is not None:
            if isinstance(value, Mapping):
                current = section_type()
            elif value is not None:
                logger.warning("Theme section '%s' expects an object, got %s; keeping defaults", raw_key, type(value).__name__)
                continue
        if is_dataclass(current) and isinstance(current, ThemeSection):
            if isinstance(value, Mapping):
                updates[key] = _merge_section(current, value)
            elif value is not None:
                logger.warning("Theme section '%s' expects an object, got %s; keeping defaults", raw_key, type(value).__name__)
        else:
            updates[key] = value

    if extra_updates:
        updates["extra"] = deep_merge(section.extra, extra_updates)
    if not updates:
        return section
    return replace(section, **updates)


def merge_theme(default: EmailTheme, override: Mapping[str, Any] | EmailTheme | None) -> EmailTheme:
    """Merge a partial theme override onto a default theme.

    Parameters
    ----------
    default : EmailTheme
        Base theme
    override : Mapping, EmailTheme or None
        Partial override. An ``EmailTheme`` replaces the default outright;
        any other non-mapping value is ignored with a warning.

    Returns
    -------
    EmailTheme
        The effective theme; ``default`` itself when there is nothing to merge

    """
    if override is None:
        return default
    if isinstance(override, EmailTheme):
        return override
    if not isinstance(override, Mapping):
        logger.warning("Theme override must be an object, got %s; using defaults", type(override).__name__)
        return default
    return _merge_section(default, override)


__all__ = [
    "DEFAULT_THEME",
    "EmailTheme",
    "FontSizeSpec",
    "ThemeBody",
    "ThemeButton",
    "ThemeColors",
    "ThemeContainer",
    "ThemeFont",
    "ThemeFontSizes",
    "ThemeLink",
    "ThemeSection",
    "WebFont",
    "deep_merge",
    "merge_theme",
    "to_snake_case",
]
