#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mailtree/renderers/base.py
"""Base classes for output renderers.

This module defines the abstract base class every output renderer inherits
from. A renderer pairs the render engine with one node renderer registry and
adds the format-specific finishing (document shell, whitespace cleanup).

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping

from mailtree.ast.nodes import Node
from mailtree.engine import RenderResult
from mailtree.exceptions import InvalidOptionsError
from mailtree.options.base import RenderOptions
from mailtree.theme import EmailTheme
from mailtree.utils.io_utils import OutputDestination, write_content

Payload = Mapping[str, Any]
ThemeOverride = Mapping[str, Any] | EmailTheme


class BaseRenderer(ABC):
    """Abstract base class for all output renderers.

    Parameters
    ----------
    options : RenderOptions or None, default = None
        Format-specific rendering options

    Examples
    --------
    Creating a custom renderer:

        >>> from mailtree.engine import RenderEngine
        >>> from mailtree.renderers.base import BaseRenderer
        >>> from mailtree.renderers.plaintext import TEXT_RENDERERS
        >>>
        >>> class ShoutingRenderer(BaseRenderer):
        ...     def render_result(self, doc, payload=None, theme=None):
        ...         result = RenderEngine(TEXT_RENDERERS, self.options).render(doc, payload, theme)
        ...         return result.__class__(result.body.upper(), result.preview_text, result.theme)

    """

    def __init__(self, options: RenderOptions | None = None):
        """Initialize the renderer with optional configuration.

        Parameters
        ----------
        options : RenderOptions or None, default = None
            Rendering options. If None, default options will be used.

        """
        self.options = options or RenderOptions()

    @abstractmethod
    def render_result(
        self, doc: Node, payload: Payload | None = None, theme: ThemeOverride | None = None
    ) -> RenderResult:
        """Render the tree and return the body together with its preview text.

        Parameters
        ----------
        doc : Node
            Root ``doc`` node
        payload : Mapping, optional
            Global variable values
        theme : Mapping or EmailTheme, optional
            Partial theme override

        Returns
        -------
        RenderResult
            Finished output and preview text

        Raises
        ------
        RenderingError
            If rendering fails

        """

    def render_to_string(
        self, doc: Node, payload: Payload | None = None, theme: ThemeOverride | None = None
    ) -> str:
        """Render the tree to a string.

        Parameters
        ----------
        doc : Node
            Root ``doc`` node
        payload : Mapping, optional
            Global variable values
        theme : Mapping or EmailTheme, optional
            Partial theme override

        Returns
        -------
        str
            Rendered document

        """
        return self.render_result(doc, payload, theme).body

    def render(
        self,
        doc: Node,
        output: OutputDestination,
        payload: Payload | None = None,
        theme: ThemeOverride | None = None,
    ) -> None:
        """Render the tree and write it to ``output``.

        Parameters
        ----------
        doc : Node
            Root ``doc`` node
        output : str, Path, IO[bytes] or IO[str]
            Output destination
        payload : Mapping, optional
            Global variable values
        theme : Mapping or EmailTheme, optional
            Partial theme override

        """
        self.write_text_output(self.render_to_string(doc, payload, theme), output)

    @staticmethod
    def _validate_options_type(options: RenderOptions | None, expected_type: type, renderer_name: str) -> None:
        """Validate that options are of the correct type for this renderer.

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                renderer_name=renderer_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    @staticmethod
    def write_text_output(text: str, output: OutputDestination) -> None:
        """Write text output to a file path or stream."""
        write_content(text, output)


__all__ = ["BaseRenderer", "Payload", "ThemeOverride"]
