#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Render options for mailtree output formats."""

from mailtree.options.base import CloneFrozenMixin, RenderOptions, VariableFormatter
from mailtree.options.html import HtmlRendererOptions
from mailtree.options.plaintext import PlainTextRendererOptions

__all__ = [
    "CloneFrozenMixin",
    "RenderOptions",
    "VariableFormatter",
    "HtmlRendererOptions",
    "PlainTextRendererOptions",
]
