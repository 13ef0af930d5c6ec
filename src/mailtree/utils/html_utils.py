"""HTML-related utility helpers."""

from __future__ import annotations

import html
import re
from html import escape as _html_escape
from typing import Any, Mapping

_TAG_RE = re.compile(r"<[^>]+>")
_BLOCK_END_RE = re.compile(r"</(p|h[1-6]|li|tr|blockquote|pre|div)>|<br\s*/?>", re.IGNORECASE)


def escape_html(text: Any, *, enabled: bool = True) -> str:
    """Escape HTML special characters when enabled."""
    text = "" if text is None else str(text)
    if not enabled:
        return text
    return _html_escape(text)


def style_attr(styles: Mapping[str, Any]) -> str:
    """Build an inline ``style`` attribute, skipping empty values.

    >>> style_attr({"color": "#000", "margin": None, "font-size": "14px"})
    ' style="color:#000;font-size:14px"'

    """
    declarations = [f"{prop}:{value}" for prop, value in styles.items() if value is not None and value != ""]
    if not declarations:
        return ""
    return f' style="{_html_escape(";".join(declarations))}"'


def strip_html_tags(content: str) -> str:
    """Remove all HTML tags from content, leaving only text.

    Block-level closing tags and ``<br>`` become spaces so words from
    adjacent blocks do not run together.

    >>> strip_html_tags("<p>Hello <strong>world</strong>!</p><p>Bye</p>")
    'Hello world! Bye '

    """
    text = _BLOCK_END_RE.sub(" ", content)
    text = _TAG_RE.sub("", text)
    return html.unescape(text)


__all__ = ["escape_html", "style_attr", "strip_html_tags"]
