#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mailtree/__init__.py
"""mailtree - render email document trees to production HTML and plain text.

An email editor saves its templates as a JSON tree of typed nodes
(paragraphs, buttons, images, sections, columns, repeat blocks, variables).
mailtree turns such a tree, plus a payload of variable values and a partial
theme, into email-client-safe HTML or a plain-text alternative part.

Key Features
------------
- Variable interpolation with per-variable fallbacks and required flags
- Conditional blocks via ``showIfKey`` that are pruned before resolution
- Nested ``repeat`` blocks with scope shadowing (innermost item wins)
- Partial theme overrides merged onto complete defaults
- One rendering rule per node type, checked for completeness at import time
- Table-based HTML with inline styles and a hidden preheader

Examples
--------
Render a template file with a payload:

    >>> from mailtree import render
    >>> html = render("welcome.json", {"name": "Alice"})

Render the plain-text part with bracketed placeholders for missing values:

    >>> from mailtree import render_text
    >>> text = render_text("welcome.json", placeholder_policy="bracketed")

"""

__version__ = "0.1.0"

from mailtree.api import render, render_html, render_text
from mailtree.ast import Mark, MarkType, Node, NodeType, collect_variables, load_template, validate_document
from mailtree.engine import RenderEngine, RenderResult
from mailtree.exceptions import (
    InvalidOptionsError,
    InvariantViolationError,
    MailtreeError,
    MalformedRepeatTargetError,
    MissingRequiredVariableError,
    OutputWriteError,
    ParsingError,
    RenderingError,
    UnsupportedNodeTypeError,
    ValidationError,
)
from mailtree.options import HtmlRendererOptions, PlainTextRendererOptions, RenderOptions
from mailtree.renderers.html import EmailHtmlRenderer
from mailtree.renderers.plaintext import PlainTextRenderer
from mailtree.theme import DEFAULT_THEME, EmailTheme, merge_theme

__all__ = [
    "__version__",
    # API
    "render",
    "render_html",
    "render_text",
    # Document model
    "Mark",
    "MarkType",
    "Node",
    "NodeType",
    "collect_variables",
    "load_template",
    "validate_document",
    # Rendering
    "EmailHtmlRenderer",
    "PlainTextRenderer",
    "RenderEngine",
    "RenderResult",
    # Options and theme
    "HtmlRendererOptions",
    "PlainTextRendererOptions",
    "RenderOptions",
    "DEFAULT_THEME",
    "EmailTheme",
    "merge_theme",
    # Exceptions
    "InvalidOptionsError",
    "InvariantViolationError",
    "MailtreeError",
    "MalformedRepeatTargetError",
    "MissingRequiredVariableError",
    "OutputWriteError",
    "ParsingError",
    "RenderingError",
    "UnsupportedNodeTypeError",
    "ValidationError",
]
