#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mailtree/ast/validation.py
"""Structural validation of email document trees.

``validate_document`` is run once per render, before any variable is
resolved. It only looks at the shape of the tree, never at the payload, so
a template either always passes or always fails regardless of which
``showIfKey`` branches a particular payload would hide.
"""

from __future__ import annotations

from mailtree.ast.nodes import INLINE_CONTAINER_TYPES, NodeType, Node
from mailtree.exceptions import InvariantViolationError, UnsupportedNodeTypeError

# Children an inline container (paragraph, heading, ...) may hold.
INLINE_CONTENT_TYPES: frozenset[str] = frozenset(
    {
        NodeType.TEXT.value,
        NodeType.VARIABLE.value,
        NodeType.HARD_BREAK.value,
        NodeType.INLINE_IMAGE.value,
    }
)


def _check_node(node: Node, parent: Node | None, path: str) -> None:
    if not NodeType.has_value(node.type):
        raise UnsupportedNodeTypeError(node.type, message=f"Unsupported node type '{node.type}' (at {path})")

    if node.is_atomic and node.content:
        raise InvariantViolationError(f"Atomic '{node.type}' node must not have content", node.type, path)

    if node.marks and not node.is_text:
        raise InvariantViolationError(f"Marks are only allowed on text nodes, found on '{node.type}'", node.type, path)

    if node.is_text and node.content:
        raise InvariantViolationError("Text nodes must not have content", node.type, path)

    if node.type == NodeType.COLUMNS.value:
        for index, child in enumerate(node.children):
            if child.type != NodeType.COLUMN.value:
                raise InvariantViolationError(
                    f"'columns' may only contain 'column' nodes, found '{child.type}'",
                    node.type,
                    f"{path}/{index}",
                )

    if node.type in INLINE_CONTAINER_TYPES:
        for index, child in enumerate(node.children):
            # unknown types are reported when the child itself is checked
            if child.type not in INLINE_CONTENT_TYPES and NodeType.has_value(child.type):
                raise InvariantViolationError(
                    f"'{node.type}' may only contain inline content, found '{child.type}'",
                    node.type,
                    f"{path}/{index}",
                )

    if node.type == NodeType.DOC.value and parent is not None:
        raise InvariantViolationError("'doc' is only allowed at the root", node.type, path)

    if node.type == NodeType.VARIABLE.value and parent is not None and parent.type == NodeType.DOC.value:
        raise InvariantViolationError("'variable' nodes are inline and cannot be direct children of 'doc'", node.type, path)


def validate_document(doc: Node) -> None:
    """Check a document tree against the structural invariants.

    Parameters
    ----------
    doc : Node
        Root of the tree

    Raises
    ------
    UnsupportedNodeTypeError
        If any node has a type no renderer handles
    InvariantViolationError
        If the root is not a non-empty ``doc``, an atomic node has children,
        ``columns`` holds anything but ``column``, an inline container holds
        block content, marks sit on a non-text node, or a ``variable`` is a
        direct child of ``doc``

    """
    if doc.type != NodeType.DOC.value:
        raise InvariantViolationError(f"Root node must be 'doc', got '{doc.type}'", doc.type, "root")
    if not doc.content:
        raise InvariantViolationError("Root 'doc' node must have non-empty content", doc.type, "root")

    stack: list[tuple[Node, Node | None, str]] = [(doc, None, "doc")]
    while stack:
        node, parent, path = stack.pop()
        _check_node(node, parent, path)
        for index, child in enumerate(node.children):
            stack.append((child, node, f"{path}/{index}:{child.type}"))


__all__ = ["validate_document"]
