#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mailtree/ast/__init__.py
"""Document model for email templates.

The editor produces a JSON tree of typed nodes; this package holds the
immutable in-memory form of that tree, its (de)serialization and the
structural checks run before rendering.

Examples
--------
>>> from mailtree.ast import Node, NodeType, node_to_dict
>>> doc = Node(NodeType.DOC.value, content=(Node("paragraph"),))
>>> node_to_dict(doc)
{'type': 'doc', 'content': [{'type': 'paragraph'}]}

"""

from mailtree.ast.nodes import (
    ATOMIC_TYPES,
    BLOCK_CONTAINER_TYPES,
    INLINE_CONTAINER_TYPES,
    Mark,
    MarkType,
    Node,
    NodeType,
    collect_variables,
    flagged_variable_fields,
    iter_nodes,
    variable_flag_name,
)
from mailtree.ast.serialization import (
    TemplateSource,
    dict_to_node,
    json_to_node,
    load_template,
    node_to_dict,
    node_to_json,
)
from mailtree.ast.validation import validate_document

__all__ = [
    "ATOMIC_TYPES",
    "BLOCK_CONTAINER_TYPES",
    "INLINE_CONTAINER_TYPES",
    "Mark",
    "MarkType",
    "Node",
    "NodeType",
    "TemplateSource",
    "collect_variables",
    "dict_to_node",
    "flagged_variable_fields",
    "iter_nodes",
    "json_to_node",
    "load_template",
    "node_to_dict",
    "node_to_json",
    "validate_document",
    "variable_flag_name",
]
