#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for rendering email document trees to HTML."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from mailtree.constants import DEFAULT_HTML_LANGUAGE, DEFAULT_HTML_STANDALONE
from mailtree.options.base import RenderOptions


# src/mailtree/options/html.py
@dataclass(frozen=True)
class HtmlRendererOptions(RenderOptions):
    """Configuration options for rendering to email HTML.

    Parameters
    ----------
    standalone : bool, default=True
        Wrap the body in a complete email document (doctype, head, body,
        centered container and hidden preheader). When False only the body
        fragment is returned.
    language : str, default="en"
        Value of the ``lang`` attribute of the document shell.
    title : str or None, default=None
        ``<title>`` of the document shell.

    """

    standalone: bool = field(
        default=DEFAULT_HTML_STANDALONE,
        metadata={"help": "Wrap output in a complete email document"},
    )
    language: str = field(
        default=DEFAULT_HTML_LANGUAGE,
        metadata={"help": "Document language attribute"},
    )
    title: Optional[str] = field(
        default=None,
        metadata={"help": "Document <title>"},
    )
