#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mailtree/ast/serialization.py
"""JSON serialization and deserialization for email document trees.

The editor stores templates as JSON objects of the shape::

    {"type": "doc", "content": [{"type": "paragraph", "content": [...]}]}

with optional ``attrs``, ``marks`` and ``text`` keys. This module converts
between that JSON and the frozen ``Node`` tree. Keys that were absent stay
absent on the way back out, so an untouched template round-trips.

Unknown ``type`` strings are accepted here; they are rejected when the tree
is validated for rendering.

Examples
--------
>>> doc = json_to_node('{"type": "doc", "content": [{"type": "paragraph"}]}')
>>> doc.children[0].type
'paragraph'
>>> node_to_json(doc)
'{"type": "doc", "content": [{"type": "paragraph"}]}'

"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Mapping, Union

from mailtree.ast.nodes import Mark, Node
from mailtree.exceptions import ParsingError

logger = logging.getLogger(__name__)

TemplateSource = Union[Node, Mapping[str, Any], str, bytes, Path]


def _deserialize_mark(data: Any) -> Mark:
    if isinstance(data, str):
        # Some editor versions store bare mark names
        return Mark(type=data)
    if not isinstance(data, Mapping) or not isinstance(data.get("type"), str):
        raise ParsingError(f"Invalid mark: {data!r}", parsing_stage="node_construction")
    attrs = data.get("attrs") or {}
    if not isinstance(attrs, Mapping):
        raise ParsingError(f"Mark 'attrs' must be an object, got {type(attrs).__name__}", "node_construction")
    return Mark(type=data["type"], attrs=dict(attrs))


def dict_to_node(data: Mapping[str, Any]) -> Node:
    """Convert a dictionary representation into a ``Node`` tree.

    Parameters
    ----------
    data : Mapping
        Editor JSON object for one node

    Returns
    -------
    Node
        Reconstructed node with all descendants

    Raises
    ------
    ParsingError
        If the dictionary is missing ``type`` or has wrongly-typed fields

    """
    if not isinstance(data, Mapping):
        raise ParsingError(f"Node must be an object, got {type(data).__name__}", parsing_stage="node_construction")

    node_type = data.get("type")
    if not isinstance(node_type, str) or not node_type:
        raise ParsingError("Node object must contain a non-empty 'type' field", parsing_stage="node_construction")

    attrs = data.get("attrs") or {}
    if not isinstance(attrs, Mapping):
        raise ParsingError(
            f"'attrs' of {node_type} node must be an object, got {type(attrs).__name__}",
            parsing_stage="node_construction",
        )

    content: tuple[Node, ...] | None = None
    if "content" in data and data["content"] is not None:
        raw_content = data["content"]
        if not isinstance(raw_content, list):
            raise ParsingError(
                f"'content' of {node_type} node must be a list, got {type(raw_content).__name__}",
                parsing_stage="node_construction",
            )
        content = tuple(dict_to_node(child) for child in raw_content)

    raw_marks = data.get("marks") or []
    if not isinstance(raw_marks, list):
        raise ParsingError(f"'marks' of {node_type} node must be a list", parsing_stage="node_construction")
    marks = tuple(_deserialize_mark(mark) for mark in raw_marks)

    text = data.get("text")
    if text is not None and not isinstance(text, str):
        logger.debug("Coercing non-string text of %s node to str", node_type)
        text = str(text)

    return Node(type=node_type, attrs=dict(attrs), content=content, marks=marks, text=text)


def node_to_dict(node: Node) -> dict[str, Any]:
    """Convert a ``Node`` tree back into editor JSON.

    Parameters
    ----------
    node : Node
        Node to serialize

    Returns
    -------
    dict
        JSON-compatible dictionary

    """
    result: dict[str, Any] = {"type": node.type}
    if node.attrs:
        result["attrs"] = dict(node.attrs)
    if node.content is not None:
        result["content"] = [node_to_dict(child) for child in node.content]
    if node.marks:
        result["marks"] = [
            {"type": mark.type, "attrs": dict(mark.attrs)} if mark.attrs else {"type": mark.type}
            for mark in node.marks
        ]
    if node.text is not None:
        result["text"] = node.text
    return result


def node_to_json(node: Node, indent: int | None = None) -> str:
    """Serialize a ``Node`` tree to a JSON string.

    Parameters
    ----------
    node : Node
        Node to serialize
    indent : int or None, default = None
        Number of spaces for indentation (None for compact format)

    Returns
    -------
    str
        JSON text

    """
    return json.dumps(node_to_dict(node), indent=indent, ensure_ascii=False)


def json_to_node(json_str: str | bytes) -> Node:
    """Deserialize a JSON string into a ``Node`` tree.

    Parameters
    ----------
    json_str : str or bytes
        JSON text of one node (normally the ``doc`` root)

    Returns
    -------
    Node
        Reconstructed tree

    Raises
    ------
    ParsingError
        If the text is not valid JSON or does not describe a node

    """
    try:
        data = json.loads(json_str)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ParsingError(f"Invalid JSON in template: {e}", parsing_stage="json_parsing", original_error=e) from e
    return dict_to_node(data)


def load_template(source: TemplateSource) -> Node:
    """Load a template from any supported source.

    Parameters
    ----------
    source : Node, Mapping, str, bytes or Path
        An existing tree, an editor JSON object, JSON text, raw JSON bytes, or
        a path to a JSON file. Strings that do not start with ``{`` are
        treated as file paths.

    Returns
    -------
    Node
        Root node of the template

    Raises
    ------
    ParsingError
        If the source cannot be read or parsed

    """
    if isinstance(source, Node):
        return source
    if isinstance(source, Mapping):
        return dict_to_node(source)
    if isinstance(source, bytes):
        return json_to_node(source)
    if isinstance(source, str) and source.lstrip().startswith("{"):
        return json_to_node(source)
    if isinstance(source, (str, Path)):
        path = Path(source)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ParsingError(
                f"Could not read template file {path}: {e}", parsing_stage="file_read", original_error=e
            ) from e
        return json_to_node(text)
    raise ParsingError(f"Unsupported template source type: {type(source).__name__}", parsing_stage="input")


__all__ = [
    "TemplateSource",
    "dict_to_node",
    "node_to_dict",
    "node_to_json",
    "json_to_node",
    "load_template",
]
