#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mailtree/context.py
"""Per-render context threaded through the traversal.

A ``RenderContext`` bundles the effective theme, the current scope stack
and the render options. It is frozen: entering a repeat iteration creates a
new context with one more scope frame instead of mutating the current one.
Each render owns its contexts, so concurrent renders of one template share
nothing mutable.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any

from mailtree.ast.nodes import Node, variable_flag_name
from mailtree.exceptions import MissingRequiredVariableError
from mailtree.options.base import RenderOptions
from mailtree.theme import EmailTheme
from mailtree.variables import UNRESOLVED, ScopeStack, format_placeholder, item_frame, resolve, stringify

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderContext:
    """State visible to every node renderer.

    Parameters
    ----------
    theme : EmailTheme
        Effective (merged) theme
    scopes : ScopeStack
        Variable frames, payload outermost
    options : RenderOptions
        Options of the current render

    """

    theme: EmailTheme
    scopes: ScopeStack
    options: RenderOptions

    def with_item(self, item: Any) -> RenderContext:
        """Return a context with one repeat iteration's frame pushed."""
        frame = item_frame(item, self.options.repeat_item_key)
        return replace(self, scopes=self.scopes.push(frame))

    def placeholder(self, name: str, fallback: Any = None) -> str:
        """Format the placeholder for ``name`` using the configured formatter."""
        fallback_text = None if fallback is None or fallback == "" else str(fallback)
        if self.options.variable_formatter is not None:
            return self.options.variable_formatter(name, fallback_text)
        return format_placeholder(name, fallback_text)

    def variable_text(self, name: str, fallback: Any = None, required: bool = False) -> str:
        """Resolve a variable to display text, applying the render policies.

        Parameters
        ----------
        name : str
            Variable name
        fallback : Any, optional
            Literal used when the variable is found nowhere
        required : bool, default = False
            Whether a missing value is an error

        Returns
        -------
        str
            The value, the fallback, a placeholder, or an empty string

        Raises
        ------
        MissingRequiredVariableError
            If the variable is required, missing, has no fallback, and the
            missing-required policy is "error"

        """
        if not self.options.replace_variables:
            return self.placeholder(name, fallback)

        try:
            value = resolve(name, self.scopes, fallback=fallback, required=required)
        except MissingRequiredVariableError:
            if self.options.missing_required_policy == "error":
                raise
            logger.warning("Required variable '%s' is missing; writing placeholder", name)
            return self.placeholder(name)

        if value is UNRESOLVED:
            if self.options.placeholder_policy == "bracketed":
                return self.placeholder(name)
            return ""
        return stringify(value)

    def attr_value(self, node: Node, field_name: str, default: Any = None) -> Any:
        """Read a node attribute, resolving it when flagged as a variable.

        When ``is<Field>Variable`` is set, the attribute holds a variable
        name. ``<field>Fallback`` supplies a fallback literal and
        ``<field>Required`` marks it required.
        """
        raw = node.attr(field_name, default)
        if not node.attr(variable_flag_name(field_name)):
            return raw
        if raw is None or raw == "":
            return default
        return self.variable_text(
            str(raw),
            fallback=node.attr(f"{field_name}Fallback"),
            required=bool(node.attr(f"{field_name}Required", False)),
        )

    def link_href(self, href: Any) -> str:
        """Apply configured link replacement values to ``href``."""
        if href is None:
            return ""
        href = str(href)
        return str(self.options.link_values.get(href, href))


__all__ = ["RenderContext"]
