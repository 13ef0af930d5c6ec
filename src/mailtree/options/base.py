#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mailtree/options/base.py
"""Base classes for render options.

This module defines the options shared by every output renderer: how
variables are substituted, what happens when one is missing, repeat limits
and preview-text handling.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Mapping, Optional

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from mailtree.constants import (
    DEFAULT_EXTRACT_PREHEADER,
    DEFAULT_MISSING_REQUIRED_POLICY,
    DEFAULT_PLACEHOLDER_POLICY,
    DEFAULT_PREHEADER_MAX_LENGTH,
    DEFAULT_REPEAT_ITEM_KEY,
    DEFAULT_REPLACE_VARIABLES,
    MISSING_REQUIRED_POLICIES,
    PLACEHOLDER_POLICIES,
    MissingRequiredPolicy,
    PlaceholderPolicy,
)

VariableFormatter = Callable[[str, Optional[str]], str]


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class RenderOptions(CloneFrozenMixin):
    """Options controlling a single render invocation.

    Parameters
    ----------
    replace_variables : bool, default=True
        Substitute variable values. When False every variable is written as
        its placeholder, e.g. ``{{name,fallback=there}}``.
    placeholder_policy : {"empty", "bracketed"}, default="empty"
        What an unresolved, non-required variable becomes: an empty string,
        or its bracketed placeholder (useful for previews).
    missing_required_policy : {"error", "placeholder"}, default="error"
        Whether a required variable with no value fails the render or is
        written as its placeholder.
    max_repeat_iterations : int or None, default=None
        Cap on items rendered per ``repeat`` node. Longer lists are truncated.
    repeat_item_key : str, default="item"
        Name under which non-mapping repeat items are exposed.
    extract_preheader : bool, default=False
        Derive preview text from the rendered top-level text content.
    preheader_max_length : int, default=150
        Character budget for extracted preview text.
    preview_text : str or None, default=None
        Explicit preview text; takes precedence over extraction.
    link_values : Mapping[str, str], default=empty
        Replacement hrefs keyed by the href stored in the template.
    variable_formatter : callable or None, default=None
        ``(name, fallback) -> str`` used instead of the standard placeholder
        format when writing placeholders.

    """

    replace_variables: bool = field(
        default=DEFAULT_REPLACE_VARIABLES,
        metadata={"help": "Substitute variable values instead of writing placeholders", "importance": "core"},
    )
    placeholder_policy: PlaceholderPolicy = field(
        default=DEFAULT_PLACEHOLDER_POLICY,
        metadata={
            "help": "Unresolved optional variables render as 'empty' text or a 'bracketed' placeholder",
            "choices": list(PLACEHOLDER_POLICIES),
            "importance": "core",
        },
    )
    missing_required_policy: MissingRequiredPolicy = field(
        default=DEFAULT_MISSING_REQUIRED_POLICY,
        metadata={
            "help": "Missing required variables either fail the render ('error') or become placeholders",
            "choices": list(MISSING_REQUIRED_POLICIES),
            "importance": "core",
        },
    )
    max_repeat_iterations: Optional[int] = field(
        default=None,
        metadata={"help": "Maximum items rendered per repeat block", "type": int, "importance": "security"},
    )
    repeat_item_key: str = field(
        default=DEFAULT_REPEAT_ITEM_KEY,
        metadata={"help": "Variable name exposing non-object repeat items", "importance": "advanced"},
    )
    extract_preheader: bool = field(
        default=DEFAULT_EXTRACT_PREHEADER,
        metadata={"help": "Extract preview text from the rendered body", "importance": "core"},
    )
    preheader_max_length: int = field(
        default=DEFAULT_PREHEADER_MAX_LENGTH,
        metadata={"help": "Character budget for extracted preview text", "type": int, "importance": "advanced"},
    )
    preview_text: Optional[str] = field(
        default=None,
        metadata={"help": "Explicit preview text shown by mail clients", "importance": "core"},
    )
    link_values: Mapping[str, str] = field(
        default_factory=dict,
        metadata={"help": "Replacement hrefs keyed by template href", "importance": "advanced"},
    )
    variable_formatter: Optional[VariableFormatter] = field(
        default=None,
        compare=False,
        metadata={"help": "Custom placeholder formatter (API only)", "exclude_from_cli": True},
    )

    def __post_init__(self) -> None:
        """Validate option values.

        Raises
        ------
        ValueError
            If any field value is outside its valid range.

        """
        if self.placeholder_policy not in PLACEHOLDER_POLICIES:
            raise ValueError(
                f"placeholder_policy must be one of {PLACEHOLDER_POLICIES}, got {self.placeholder_policy!r}"
            )
        if self.missing_required_policy not in MISSING_REQUIRED_POLICIES:
            raise ValueError(
                f"missing_required_policy must be one of {MISSING_REQUIRED_POLICIES}, "
                f"got {self.missing_required_policy!r}"
            )
        if self.max_repeat_iterations is not None and self.max_repeat_iterations < 0:
            raise ValueError(f"max_repeat_iterations must be non-negative, got {self.max_repeat_iterations}")
        if self.preheader_max_length <= 0:
            raise ValueError(f"preheader_max_length must be positive, got {self.preheader_max_length}")
        if not self.repeat_item_key:
            raise ValueError("repeat_item_key must not be empty")
