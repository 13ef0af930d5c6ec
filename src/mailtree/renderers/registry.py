#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mailtree/renderers/registry.py
"""Node renderer registries.

A registry maps each node type to a rule with one uniform signature::

    rule(node, context, children) -> str

where ``children`` holds the already-rendered fragments of the node's
children, in order. The engine never branches on node type itself; it only
asks the registry.

Registries are filled with the ``register`` decorator and then frozen.
``freeze`` fails unless every ``NodeType`` has a rule, so a missing rule is
caught at import time rather than when some template happens to use it.
``repeat`` is the exception: the engine expands it into its iterations
and splices their fragments into the parent, so it never reaches a rule.

Examples
--------
>>> registry = NodeRendererRegistry("demo")
>>> @registry.register(NodeType.TEXT)
... def render_text(node, context, children):
...     return node.text or ""

"""

from __future__ import annotations

import logging
from typing import Callable, Sequence, Union

from mailtree.ast.nodes import Node, NodeType
from mailtree.context import RenderContext
from mailtree.exceptions import UnsupportedNodeTypeError

logger = logging.getLogger(__name__)

NodeRule = Callable[[Node, RenderContext, Sequence[str]], str]
TextExtractor = Callable[[str], str]

# Node types the engine expands itself instead of rendering through a rule
EXPANDED_BY_ENGINE: frozenset[str] = frozenset({NodeType.REPEAT.value})


def _identity(fragment: str) -> str:
    return fragment


class NodeRendererRegistry:
    """Mapping from node type to rendering rule for one output format.

    Parameters
    ----------
    name : str
        Output format name, used in error messages
    extract_text : callable, optional
        Converts a rendered fragment to visible text (used for preview-text
        extraction). Defaults to the identity.

    """

    def __init__(self, name: str, extract_text: TextExtractor | None = None):
        """Initialize an empty registry."""
        self.name = name
        self.extract_text: TextExtractor = extract_text or _identity
        self._rules: dict[str, NodeRule] = {}
        self._frozen = False

    def register(self, *node_types: Union[NodeType, str]) -> Callable[[NodeRule], NodeRule]:
        """Register the decorated function as the rule for ``node_types``.

        Raises
        ------
        RuntimeError
            If the registry is frozen or a type is registered twice

        """

        def decorator(func: NodeRule) -> NodeRule:
            for node_type in node_types:
                key = node_type.value if isinstance(node_type, NodeType) else node_type
                if self._frozen:
                    raise RuntimeError(f"Cannot register '{key}': {self.name} registry is frozen")
                if key in self._rules:
                    raise RuntimeError(f"Duplicate {self.name} rule for node type '{key}'")
                self._rules[key] = func
            return func

        return decorator

    def freeze(self) -> NodeRendererRegistry:
        """Check every node type has a rule and forbid further registration.

        Raises
        ------
        RuntimeError
            If any ``NodeType`` outside ``EXPANDED_BY_ENGINE`` is missing a rule

        """
        missing = sorted(
            t.value for t in NodeType if t.value not in self._rules and t.value not in EXPANDED_BY_ENGINE
        )
        if missing:
            raise RuntimeError(f"{self.name} registry is missing rules for: {', '.join(missing)}")
        self._frozen = True
        return self

    def __contains__(self, node_type: object) -> bool:
        key = node_type.value if isinstance(node_type, NodeType) else node_type
        return key in self._rules

    @property
    def node_types(self) -> frozenset[str]:
        """Node types this registry can render."""
        return frozenset(self._rules)

    def render(self, node: Node, context: RenderContext, children: Sequence[str]) -> str:
        """Render one node from its already-rendered children.

        Raises
        ------
        UnsupportedNodeTypeError
            If no rule is registered for ``node.type``

        """
        rule = self._rules.get(node.type)
        if rule is None:
            raise UnsupportedNodeTypeError(node.type, registry_name=self.name)
        return rule(node, context, children)


__all__ = ["EXPANDED_BY_ENGINE", "NodeRendererRegistry", "NodeRule", "TextExtractor"]
