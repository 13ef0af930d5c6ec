#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mailtree/ast/nodes.py
"""Node classes for email document representation.

This module defines the typed tree produced by the email editor. The editor
emits one generic JSON shape for every element, discriminated by ``type``,
so the tree is modelled as a single immutable ``Node`` class plus a closed
set of known type names rather than one class per element.

Node Categories
---------------
Block containers hold block-level children:
    - section, columns, column, repeat, blockquote, bulletList, orderedList, listItem

Inline containers hold text and inline children:
    - paragraph, heading, footer, codeBlock, htmlCodeBlock

Atomic nodes never hold children:
    - button, image, inlineImage, logo, spacer, variable, horizontalRule,
      hardBreak, linkCard

Text leaves carry ``text`` and optional ``marks``.

Nodes are frozen and ``content`` is a tuple, so a loaded template can be
shared read-only between concurrent renders.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator, Optional


class NodeType(str, Enum):
    """Every node type the renderers know how to draw."""

    DOC = "doc"
    PARAGRAPH = "paragraph"
    TEXT = "text"
    HEADING = "heading"
    BULLET_LIST = "bulletList"
    ORDERED_LIST = "orderedList"
    LIST_ITEM = "listItem"
    BLOCKQUOTE = "blockquote"
    HORIZONTAL_RULE = "horizontalRule"
    HARD_BREAK = "hardBreak"
    CODE_BLOCK = "codeBlock"
    HTML_CODE_BLOCK = "htmlCodeBlock"
    IMAGE = "image"
    INLINE_IMAGE = "inlineImage"
    LOGO = "logo"
    SPACER = "spacer"
    BUTTON = "button"
    LINK_CARD = "linkCard"
    SECTION = "section"
    COLUMNS = "columns"
    COLUMN = "column"
    REPEAT = "repeat"
    VARIABLE = "variable"
    FOOTER = "footer"

    @classmethod
    def has_value(cls, value: str) -> bool:
        """Return True if ``value`` names a known node type."""
        return value in _NODE_TYPE_VALUES


class MarkType(str, Enum):
    """Inline formatting marks applied to text leaves."""

    BOLD = "bold"
    ITALIC = "italic"
    UNDERLINE = "underline"
    STRIKE = "strike"
    CODE = "code"
    LINK = "link"
    TEXT_STYLE = "textStyle"


_NODE_TYPE_VALUES = frozenset(t.value for t in NodeType)

BLOCK_CONTAINER_TYPES: frozenset[str] = frozenset(
    {
        NodeType.SECTION.value,
        NodeType.COLUMNS.value,
        NodeType.COLUMN.value,
        NodeType.REPEAT.value,
        NodeType.BLOCKQUOTE.value,
        NodeType.BULLET_LIST.value,
        NodeType.ORDERED_LIST.value,
        NodeType.LIST_ITEM.value,
    }
)

INLINE_CONTAINER_TYPES: frozenset[str] = frozenset(
    {
        NodeType.PARAGRAPH.value,
        NodeType.HEADING.value,
        NodeType.FOOTER.value,
        NodeType.CODE_BLOCK.value,
        NodeType.HTML_CODE_BLOCK.value,
    }
)

ATOMIC_TYPES: frozenset[str] = frozenset(
    {
        NodeType.BUTTON.value,
        NodeType.IMAGE.value,
        NodeType.INLINE_IMAGE.value,
        NodeType.LOGO.value,
        NodeType.SPACER.value,
        NodeType.VARIABLE.value,
        NodeType.HORIZONTAL_RULE.value,
        NodeType.HARD_BREAK.value,
        NodeType.LINK_CARD.value,
    }
)


@dataclass(frozen=True)
class Mark:
    """Inline formatting applied to a text leaf.

    Parameters
    ----------
    type : str
        Mark type (e.g., "bold", "link")
    attrs : dict, default = empty dict
        Mark-specific attributes (e.g., ``href`` for links)

    """

    type: str
    attrs: dict[str, Any] = field(default_factory=dict)

    def attr(self, name: str, default: Any = None) -> Any:
        """Return attribute ``name``, or ``default`` when absent or null."""
        value = self.attrs.get(name)
        return default if value is None else value


@dataclass(frozen=True)
class Node:
    """A node of the email document tree.

    Parameters
    ----------
    type : str
        Discriminator selecting the rendering variant
    attrs : dict, default = empty dict
        Variant-specific attributes. ``is<Field>Variable`` flags redirect the
        named field through variable resolution.
    content : tuple of Node or None, default = None
        Children. ``None`` means the key was absent; an empty tuple means it
        was present but empty.
    marks : tuple of Mark, default = ()
        Inline formatting, only meaningful on text leaves
    text : str or None, default = None
        Text of a text leaf

    Examples
    --------
    >>> para = Node("paragraph", content=(Node("text", text="Hello"),))
    >>> para.text_content()
    'Hello'

    """

    type: str
    attrs: dict[str, Any] = field(default_factory=dict)
    content: Optional[tuple[Node, ...]] = None
    marks: tuple[Mark, ...] = ()
    text: Optional[str] = None

    @property
    def children(self) -> tuple[Node, ...]:
        """Children of this node, empty when ``content`` is absent."""
        return self.content or ()

    @property
    def is_text(self) -> bool:
        """True for text leaves."""
        return self.type == NodeType.TEXT.value

    @property
    def is_atomic(self) -> bool:
        """True for node types that never hold children."""
        return self.type in ATOMIC_TYPES

    def attr(self, name: str, default: Any = None) -> Any:
        """Return attribute ``name``, or ``default`` when absent or null.

        The editor serializes unset attributes as ``null``, so ``None`` is
        treated the same as a missing key.
        """
        value = self.attrs.get(name)
        return default if value is None else value

    def text_content(self) -> str:
        """Concatenate the raw text of every text leaf under this node."""
        if self.is_text:
            return self.text or ""
        return "".join(child.text_content() for child in self.children)


def iter_nodes(node: Node) -> Iterator[Node]:
    """Yield ``node`` and all of its descendants in pre-order."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))


def variable_flag_name(field_name: str) -> str:
    """Return the ``is<Field>Variable`` flag that redirects ``field_name``.

    >>> variable_flag_name("url")
    'isUrlVariable'
    >>> variable_flag_name("externalLink")
    'isExternalLinkVariable'

    """
    return f"is{field_name[:1].upper()}{field_name[1:]}Variable"


def flagged_variable_fields(node: Node) -> list[str]:
    """Return the attribute names of ``node`` flagged as variable references."""
    fields = []
    for key, value in node.attrs.items():
        if key.startswith("is") and key.endswith("Variable") and len(key) > len("isVariable") and value:
            name = key[2:-len("Variable")]
            fields.append(name[:1].lower() + name[1:])
    return fields


def collect_variables(node: Node) -> list[str]:
    """Collect every variable name a document tree refers to.

    Includes ``variable`` node ids, ``is*Variable``-flagged attribute values,
    ``showIfKey`` conditions and ``repeat`` targets, in first-seen order.

    Parameters
    ----------
    node : Node
        Root of the tree to scan

    Returns
    -------
    list of str
        Unique variable names

    """
    seen: dict[str, None] = {}
    for current in iter_nodes(node):
        show_if = current.attr("showIfKey")
        if show_if:
            seen.setdefault(str(show_if), None)
        if current.type == NodeType.VARIABLE.value and current.attr("id"):
            seen.setdefault(str(current.attr("id")), None)
        if current.type == NodeType.REPEAT.value and current.attr("each"):
            seen.setdefault(str(current.attr("each")), None)
        for field_name in flagged_variable_fields(current):
            value = current.attr(field_name)
            if value:
                seen.setdefault(str(value), None)
    return list(seen)


__all__ = [
    "NodeType",
    "MarkType",
    "Mark",
    "Node",
    "BLOCK_CONTAINER_TYPES",
    "INLINE_CONTAINER_TYPES",
    "ATOMIC_TYPES",
    "iter_nodes",
    "variable_flag_name",
    "flagged_variable_fields",
    "collect_variables",
]
