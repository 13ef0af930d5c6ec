#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mailtree/utils/__init__.py
"""Utility modules for mailtree.

This package contains helpers shared by the renderers: HTML escaping and
inline-style building, and writing rendered output to paths or streams.
"""

from mailtree.utils.html_utils import escape_html, strip_html_tags, style_attr
from mailtree.utils.io_utils import OutputDestination, write_content

__all__ = [
    "OutputDestination",
    "escape_html",
    "strip_html_tags",
    "style_attr",
    "write_content",
]
