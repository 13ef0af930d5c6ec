#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mailtree/variables.py
"""Variable resolution against a stack of scopes.

A render starts with one frame, the payload values. Every ``repeat``
iteration pushes one more frame for its item. Lookups search innermost
first, so an item's own fields shadow payload values of the same name.

The stack is an immutable tuple passed down the traversal. Pushing returns
a new stack; nothing is popped in place, so sibling iterations and
concurrent renders can never observe each other's frames.

Placeholder Format
------------------
When rendering without substitution, variables are written back as
``{{name}}`` or ``{{name,fallback=value}}``. ``parse_placeholder`` reverses
``format_placeholder`` so a rendered-but-unpopulated template stays
inspectable.

Examples
--------
>>> scopes = ScopeStack.from_payload({"x": 1}).push({"x": 2})
>>> resolve("x", scopes)
2
>>> resolve("missing", scopes, fallback="friend")
'friend'
>>> format_placeholder("name", "x")
'{{name,fallback=x}}'

"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from mailtree.constants import (
    DEFAULT_REPEAT_ITEM_KEY,
    PLACEHOLDER_CLOSE,
    PLACEHOLDER_FALLBACK_PREFIX,
    PLACEHOLDER_OPEN,
)
from mailtree.exceptions import MalformedRepeatTargetError, MissingRequiredVariableError

logger = logging.getLogger(__name__)


class _Unresolved:
    """Marker for a variable that resolved nowhere and has no fallback."""

    _instance: Optional[_Unresolved] = None

    def __new__(cls) -> _Unresolved:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNRESOLVED"

    def __bool__(self) -> bool:
        return False


UNRESOLVED: Any = _Unresolved()

_PLACEHOLDER_RE = re.compile(r"^\{\{(?P<name>[^,{}]+?)(?:,fallback=(?P<fallback>.*))?\}\}$", re.DOTALL)


@dataclass(frozen=True)
class ScopeStack:
    """Immutable stack of variable frames, outermost first.

    Parameters
    ----------
    frames : tuple of Mapping
        Frames from outermost (payload) to innermost (current iteration)

    """

    frames: tuple[Mapping[str, Any], ...] = ()

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any] | None) -> ScopeStack:
        """Create a stack whose only frame is ``payload``."""
        return cls((dict(payload or {}),))

    def push(self, frame: Mapping[str, Any]) -> ScopeStack:
        """Return a new stack with ``frame`` as the innermost scope."""
        return ScopeStack(self.frames + (frame,))

    def lookup(self, name: str) -> tuple[bool, Any]:
        """Search innermost to outermost for ``name``.

        Returns
        -------
        tuple of (bool, Any)
            ``(True, value)`` on the first hit, ``(False, None)`` otherwise

        """
        for frame in reversed(self.frames):
            if name in frame:
                return True, frame[name]
        return False, None

    @property
    def depth(self) -> int:
        """Number of frames on the stack."""
        return len(self.frames)


def item_frame(item: Any, item_key: str = DEFAULT_REPEAT_ITEM_KEY) -> Mapping[str, Any]:
    """Build the scope frame for one repeat iteration.

    Mapping items expose their fields directly. Any other item is exposed
    under ``item_key``.
    """
    if isinstance(item, Mapping):
        return item
    return {item_key: item}


def resolve(name: str, scopes: ScopeStack, fallback: Any = None, required: bool = False) -> Any:
    """Resolve a variable reference.

    Parameters
    ----------
    name : str
        Variable name
    scopes : ScopeStack
        Current scope stack
    fallback : Any, optional
        Literal returned when the variable is found nowhere. Empty strings
        count as "no fallback".
    required : bool, default = False
        Raise instead of returning ``UNRESOLVED`` when nothing matches

    Returns
    -------
    Any
        The resolved value, the fallback, or ``UNRESOLVED``

    Raises
    ------
    MissingRequiredVariableError
        If ``required`` and the variable has neither a value nor a fallback

    """
    found, value = scopes.lookup(name)
    if found and value is not None:
        return value
    if fallback is not None and fallback != "":
        return fallback
    if required:
        raise MissingRequiredVariableError(name)
    logger.debug("Variable '%s' is unresolved", name)
    return UNRESOLVED


def resolve_flag(name: str, scopes: ScopeStack) -> bool:
    """Truthiness test used by ``showIfKey``; unresolved names are false."""
    found, value = scopes.lookup(name)
    return bool(found and value)


def resolve_sequence(name: str, scopes: ScopeStack) -> list[Any] | None:
    """Resolve the target of a ``repeat`` node.

    Returns
    -------
    list or None
        The items, or ``None`` when the name resolves nowhere

    Raises
    ------
    MalformedRepeatTargetError
        If the name resolves to something other than a list or tuple

    """
    found, value = scopes.lookup(name)
    if not found or value is None:
        return None
    if not isinstance(value, (list, tuple)):
        raise MalformedRepeatTargetError(name, type(value))
    return list(value)


def format_placeholder(name: str, fallback: Any = None) -> str:
    """Encode a variable reference in the stable placeholder format."""
    if fallback is None or fallback == "":
        return f"{PLACEHOLDER_OPEN}{name}{PLACEHOLDER_CLOSE}"
    return f"{PLACEHOLDER_OPEN}{name}{PLACEHOLDER_FALLBACK_PREFIX}{fallback}{PLACEHOLDER_CLOSE}"


def parse_placeholder(text: str) -> tuple[str, str | None] | None:
    """Decode a placeholder produced by ``format_placeholder``.

    Returns
    -------
    tuple of (str, str or None) or None
        ``(name, fallback)``, or ``None`` if ``text`` is not a placeholder

    """
    match = _PLACEHOLDER_RE.match(text)
    if not match:
        return None
    return match.group("name"), match.group("fallback")


def stringify(value: Any) -> str:
    """Convert a resolved value to display text."""
    if value is UNRESOLVED or value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


__all__ = [
    "UNRESOLVED",
    "ScopeStack",
    "item_frame",
    "resolve",
    "resolve_flag",
    "resolve_sequence",
    "format_placeholder",
    "parse_placeholder",
    "stringify",
]
