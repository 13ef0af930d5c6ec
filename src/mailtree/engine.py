#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mailtree/engine.py
"""Render engine: document tree + context to output document.

The engine walks the tree depth-first and assembles output bottom-up:

1. The theme override is merged once and the payload becomes the only
   scope frame.
2. For each node:

   a. ``showIfKey`` is tested first. A falsy or unresolved key drops the
      node and its whole subtree before anything inside it is resolved.
   b. A ``repeat`` node renders its children once per item of the list
      named by ``each``, each time with the item pushed as a new scope
      frame. The resulting fragments are spliced into the parent in order,
      as if the children had been written out once per item.
   c. Any other node renders its children, then hands them to the
      registry rule for its type.

3. The root's fragments are joined into the body and, if requested, the
   preview text is derived from them.

The engine is synchronous and keeps no state between calls; one instance
can serve any number of renders, including from several threads.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from mailtree.ast.nodes import Node, NodeType
from mailtree.ast.validation import validate_document
from mailtree.context import RenderContext
from mailtree.exceptions import MalformedRepeatTargetError
from mailtree.options.base import RenderOptions
from mailtree.renderers.registry import NodeRendererRegistry
from mailtree.theme import DEFAULT_THEME, EmailTheme, merge_theme
from mailtree.variables import ScopeStack, resolve_flag, resolve_sequence

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderResult:
    """Output of one render.

    Parameters
    ----------
    body : str
        Rendered document body
    preview_text : str or None
        Explicit or extracted preview text, if any
    theme : EmailTheme
        Effective theme the body was rendered with

    """

    body: str
    preview_text: Optional[str]
    theme: EmailTheme


class RenderEngine:
    """Drive a node renderer registry over a document tree.

    Parameters
    ----------
    registry : NodeRendererRegistry
        Rules for the target output format
    options : RenderOptions or None, default = None
        Render options; defaults are used when omitted

    Examples
    --------
    >>> from mailtree.ast import dict_to_node
    >>> from mailtree.renderers.html import HTML_RENDERERS
    >>> doc = dict_to_node({"type": "doc", "content": [
    ...     {"type": "paragraph", "content": [{"type": "variable", "attrs": {"id": "name"}}]}]})
    >>> result = RenderEngine(HTML_RENDERERS).render(doc, {"name": "Alice"})
    >>> "Alice" in result.body
    True

    """

    def __init__(self, registry: NodeRendererRegistry, options: RenderOptions | None = None):
        """Initialize the engine with a registry and options."""
        self.registry = registry
        self.options = options or RenderOptions()

    def render(
        self,
        doc: Node,
        payload: Mapping[str, Any] | None = None,
        theme: Mapping[str, Any] | EmailTheme | None = None,
        base_theme: EmailTheme = DEFAULT_THEME,
    ) -> RenderResult:
        """Render a document tree.

        Parameters
        ----------
        doc : Node
            Root ``doc`` node
        payload : Mapping, optional
            Global variable values
        theme : Mapping or EmailTheme, optional
            Partial theme override
        base_theme : EmailTheme, default = DEFAULT_THEME
            Theme the override is merged onto

        Returns
        -------
        RenderResult
            Body, preview text and effective theme

        Raises
        ------
        UnsupportedNodeTypeError
            If the tree contains a node type with no rule
        InvariantViolationError
            If the tree breaks a structural invariant
        MissingRequiredVariableError
            If a visible required variable has no value and the policy is "error"

        """
        validate_document(doc)

        effective_theme = merge_theme(base_theme, theme)
        context = RenderContext(
            theme=effective_theme,
            scopes=ScopeStack.from_payload(payload),
            options=self.options,
        )

        fragments = self._render_children(doc, context)
        body = self.registry.render(doc, context, fragments)
        return RenderResult(body=body, preview_text=self._preview_text(fragments), theme=effective_theme)

    def _render_children(self, node: Node, context: RenderContext) -> list[str]:
        fragments: list[str] = []
        for child in node.children:
            fragments.extend(self._render_node(child, context))
        return fragments

    def _render_node(self, node: Node, context: RenderContext) -> list[str]:
        show_if = node.attr("showIfKey")
        if show_if and not resolve_flag(str(show_if), context.scopes):
            logger.debug("Pruning %s node hidden by showIfKey '%s'", node.type, show_if)
            return []

        if node.type == NodeType.REPEAT.value:
            return self._expand_repeat(node, context)

        return [self.registry.render(node, context, self._render_children(node, context))]

    def _expand_repeat(self, node: Node, context: RenderContext) -> list[str]:
        # Iteration fragments become siblings in the parent, one per rendered child
        each = node.attr("each")
        items: list[Any] = []
        if each:
            try:
                items = resolve_sequence(str(each), context.scopes) or []
            except MalformedRepeatTargetError as e:
                logger.warning("%s; rendering zero iterations", e.message)
        else:
            logger.warning("Repeat node has no 'each' target; rendering zero iterations")

        limit = self.options.max_repeat_iterations
        if limit is not None and len(items) > limit:
            logger.warning("Repeat over '%s' truncated from %d to %d items", each, len(items), limit)
            items = items[:limit]

        fragments: list[str] = []
        for item in items:
            fragments.extend(self._render_children(node, context.with_item(item)))
        return fragments

    def _preview_text(self, fragments: list[str]) -> str | None:
        if self.options.preview_text is not None:
            return self.options.preview_text
        if not self.options.extract_preheader:
            return None

        text = " ".join(self.registry.extract_text(fragment) for fragment in fragments)
        text = " ".join(text.split())
        limit = self.options.preheader_max_length
        if len(text) > limit:
            text = text[:limit].rstrip()
        return text


__all__ = ["RenderEngine", "RenderResult"]
