#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for the plain-text alternative part."""

from __future__ import annotations

from dataclasses import dataclass, field

from mailtree.constants import DEFAULT_TEXT_INCLUDE_LINK_URLS
from mailtree.options.base import RenderOptions


# src/mailtree/options/plaintext.py
@dataclass(frozen=True)
class PlainTextRendererOptions(RenderOptions):
    """Configuration options for rendering to plain text.

    Parameters
    ----------
    include_link_urls : bool, default=True
        Append ``(url)`` after link text and button labels.

    """

    include_link_urls: bool = field(
        default=DEFAULT_TEXT_INCLUDE_LINK_URLS,
        metadata={"help": "Append link targets after link text"},
    )
