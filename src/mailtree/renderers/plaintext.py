#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mailtree/renderers/plaintext.py
"""Plain-text rendering from document trees.

Produces the ``text/plain`` alternative part of a multipart email: every
formatting mark is dropped, lists get ``-`` or ``1.`` prefixes, quotes get
``> `` prefixes and links can keep their target URL in parentheses.
"""

from __future__ import annotations

import logging
import re
from typing import Sequence

from mailtree.ast.nodes import MarkType, Node, NodeType
from mailtree.context import RenderContext
from mailtree.engine import RenderEngine, RenderResult
from mailtree.options.plaintext import PlainTextRendererOptions
from mailtree.renderers.base import BaseRenderer, Payload, ThemeOverride
from mailtree.renderers.registry import NodeRendererRegistry

logger = logging.getLogger(__name__)

TEXT_RENDERERS = NodeRendererRegistry("text")

_EXCESS_NEWLINES_RE = re.compile(r"\n{3,}")


def _block(text: str) -> str:
    text = text.strip("\n")
    return f"{text}\n\n" if text else ""


def _include_urls(context: RenderContext) -> bool:
    return bool(getattr(context.options, "include_link_urls", True))


@TEXT_RENDERERS.register(NodeType.DOC, NodeType.COLUMN)
def _render_sequence(node: Node, context: RenderContext, children: Sequence[str]) -> str:
    return "".join(children)


@TEXT_RENDERERS.register(NodeType.SECTION, NodeType.COLUMNS)
def _render_group(node: Node, context: RenderContext, children: Sequence[str]) -> str:
    return _block("".join(children))


@TEXT_RENDERERS.register(NodeType.PARAGRAPH, NodeType.FOOTER, NodeType.HEADING, NodeType.CODE_BLOCK)
def _render_text_block(node: Node, context: RenderContext, children: Sequence[str]) -> str:
    return _block("".join(children))


@TEXT_RENDERERS.register(NodeType.HTML_CODE_BLOCK)
def _render_html_code_block(node: Node, context: RenderContext, children: Sequence[str]) -> str:
    # Raw HTML has no plain-text equivalent
    return ""


@TEXT_RENDERERS.register(NodeType.BLOCKQUOTE)
def _render_blockquote(node: Node, context: RenderContext, children: Sequence[str]) -> str:
    inner = "".join(children).strip("\n")
    quoted = "\n".join(f"> {line}" if line else ">" for line in inner.split("\n"))
    return _block(quoted)


@TEXT_RENDERERS.register(NodeType.BULLET_LIST, NodeType.ORDERED_LIST)
def _render_list(node: Node, context: RenderContext, children: Sequence[str]) -> str:
    ordered = node.type == NodeType.ORDERED_LIST.value
    try:
        start = int(node.attr("start", 1))
    except (TypeError, ValueError):
        start = 1

    lines = []
    for index, item in enumerate(children):
        prefix = f"{start + index}. " if ordered else "- "
        indent = " " * len(prefix)
        item_lines = item.strip("\n").split("\n")
        lines.append(prefix + item_lines[0])
        lines.extend(indent + line if line else "" for line in item_lines[1:])
    return _block("\n".join(lines))


@TEXT_RENDERERS.register(NodeType.LIST_ITEM)
def _render_list_item(node: Node, context: RenderContext, children: Sequence[str]) -> str:
    text = "".join(children)
    return _EXCESS_NEWLINES_RE.sub("\n\n", text).strip("\n").replace("\n\n", "\n")


@TEXT_RENDERERS.register(NodeType.HORIZONTAL_RULE)
def _render_horizontal_rule(node: Node, context: RenderContext, children: Sequence[str]) -> str:
    return "---\n\n"


@TEXT_RENDERERS.register(NodeType.HARD_BREAK)
def _render_hard_break(node: Node, context: RenderContext, children: Sequence[str]) -> str:
    return "\n"


@TEXT_RENDERERS.register(NodeType.TEXT)
def _render_text(node: Node, context: RenderContext, children: Sequence[str]) -> str:
    text = node.text or ""
    for mark in node.marks:
        if mark.type == MarkType.LINK.value and _include_urls(context):
            href = context.link_href(mark.attr("href", ""))
            if href and href != text:
                text = f"{text} ({href})"
    return text


@TEXT_RENDERERS.register(NodeType.VARIABLE)
def _render_variable(node: Node, context: RenderContext, children: Sequence[str]) -> str:
    name = node.attr("id")
    if not name:
        logger.warning("Variable node without an id rendered as empty text")
        return ""
    return context.variable_text(str(name), fallback=node.attr("fallback"), required=bool(node.attr("required")))


@TEXT_RENDERERS.register(NodeType.IMAGE, NodeType.INLINE_IMAGE, NodeType.LOGO, NodeType.SPACER)
def _render_media(node: Node, context: RenderContext, children: Sequence[str]) -> str:
    return ""


@TEXT_RENDERERS.register(NodeType.BUTTON)
def _render_button(node: Node, context: RenderContext, children: Sequence[str]) -> str:
    text = str(context.attr_value(node, "text", ""))
    url = context.link_href(context.attr_value(node, "url", ""))
    if url and _include_urls(context):
        return _block(f"{text} ({url})" if text else url)
    return _block(text)


@TEXT_RENDERERS.register(NodeType.LINK_CARD)
def _render_link_card(node: Node, context: RenderContext, children: Sequence[str]) -> str:
    lines = [str(context.attr_value(node, "title", ""))]
    description = context.attr_value(node, "description")
    if description:
        lines.append(str(description))
    link = context.link_href(context.attr_value(node, "link", ""))
    if link and _include_urls(context):
        lines.append(link)
    return _block("\n".join(line for line in lines if line))


TEXT_RENDERERS.freeze()


class PlainTextRenderer(BaseRenderer):
    """Render email document trees to plain text.

    Parameters
    ----------
    options : PlainTextRendererOptions or None, default = None
        Plain-text rendering options

    """

    def __init__(self, options: PlainTextRendererOptions | None = None):
        """Initialize the plain-text renderer with options."""
        BaseRenderer._validate_options_type(options, PlainTextRendererOptions, "text")
        options = options or PlainTextRendererOptions()
        BaseRenderer.__init__(self, options)
        self.options: PlainTextRendererOptions = options
        self.engine = RenderEngine(TEXT_RENDERERS, options)

    def render_result(
        self, doc: Node, payload: Payload | None = None, theme: ThemeOverride | None = None
    ) -> RenderResult:
        """Render the tree to plain text with blank lines between blocks."""
        result = self.engine.render(doc, payload, theme)
        body = _EXCESS_NEWLINES_RE.sub("\n\n", result.body).strip()
        return RenderResult(body=f"{body}\n" if body else "", preview_text=result.preview_text, theme=result.theme)


__all__ = ["TEXT_RENDERERS", "PlainTextRenderer"]
