#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mailtree/api.py
"""High-level rendering API.

These functions accept a template in any form ``load_template`` understands
(a ``Node``, a dict, a JSON string or bytes, or a path to a JSON file),
run it through the matching renderer and return the result.

Keyword arguments override fields of the given options object, or build a
fresh options object when none is passed::

    >>> html = render("welcome.json", {"name": "Alice"}, placeholder_policy="bracketed")

"""

from __future__ import annotations

import logging
from typing import Any, Optional, Type, TypeVar

from mailtree.ast.serialization import TemplateSource, load_template
from mailtree.constants import OUTPUT_TARGETS, OutputTarget
from mailtree.engine import RenderResult
from mailtree.exceptions import ValidationError
from mailtree.options.base import RenderOptions
from mailtree.options.html import HtmlRendererOptions
from mailtree.options.plaintext import PlainTextRendererOptions
from mailtree.renderers.base import Payload, ThemeOverride
from mailtree.renderers.html import EmailHtmlRenderer
from mailtree.renderers.plaintext import PlainTextRenderer

logger = logging.getLogger(__name__)

_OptionsT = TypeVar("_OptionsT", bound=RenderOptions)


def _prepare_options(options: Optional[RenderOptions], options_class: Type[_OptionsT], **kwargs: Any) -> _OptionsT:
    """Coerce ``options`` to ``options_class`` and apply keyword overrides.

    Shared ``RenderOptions`` fields carry over when a base options object (or
    the other format's options) is passed.

    Raises
    ------
    ValidationError
        If a keyword names no field of ``options_class`` or a value is invalid

    """
    field_names = set(options_class.__dataclass_fields__)
    unknown = sorted(set(kwargs) - field_names)
    if unknown:
        raise ValidationError(
            f"Unknown option(s) for {options_class.__name__}: {', '.join(unknown)}",
            parameter_name=unknown[0],
        )

    if options is None:
        values: dict[str, Any] = {}
    elif isinstance(options, options_class):
        values = {}
    else:
        shared = set(RenderOptions.__dataclass_fields__) & field_names
        values = {name: getattr(options, name) for name in shared}
        options = None
    values.update(kwargs)

    try:
        if options is not None:
            return options.create_updated(**values) if values else options  # type: ignore[return-value]
        return options_class(**values)
    except ValueError as e:
        raise ValidationError(str(e), original_error=e) from e


def render_html(
    template: TemplateSource,
    payload: Payload | None = None,
    theme: ThemeOverride | None = None,
    options: Optional[RenderOptions] = None,
    **kwargs: Any,
) -> RenderResult:
    """Render a template to email HTML.

    Parameters
    ----------
    template : Node, Mapping, str, bytes or Path
        Template tree, its JSON, or a path to a JSON file
    payload : Mapping, optional
        Global variable values
    theme : Mapping or EmailTheme, optional
        Partial theme override merged onto the default theme
    options : RenderOptions, optional
        Render options; ``HtmlRendererOptions`` fields apply when given
    kwargs : Any
        Option fields that override ``options``

    Returns
    -------
    RenderResult
        HTML (a complete document unless ``standalone=False``), preview
        text and the effective theme

    Raises
    ------
    ParsingError
        If the template cannot be loaded
    RenderingError
        If the tree cannot be rendered

    Examples
    --------
    >>> result = render_html({"type": "doc", "content": [{"type": "paragraph"}]}, standalone=False)
    >>> result.body.startswith("<p")
    True

    """
    doc = load_template(template)
    html_options = _prepare_options(options, HtmlRendererOptions, **kwargs)
    return EmailHtmlRenderer(html_options).render_result(doc, payload, theme)


def render_text(
    template: TemplateSource,
    payload: Payload | None = None,
    theme: ThemeOverride | None = None,
    options: Optional[RenderOptions] = None,
    **kwargs: Any,
) -> str:
    """Render a template to its plain-text alternative.

    Parameters
    ----------
    template : Node, Mapping, str, bytes or Path
        Template tree, its JSON, or a path to a JSON file
    payload : Mapping, optional
        Global variable values
    theme : Mapping or EmailTheme, optional
        Partial theme override; only affects validation of the override
    options : RenderOptions, optional
        Render options; ``PlainTextRendererOptions`` fields apply when given
    kwargs : Any
        Option fields that override ``options``

    Returns
    -------
    str
        Plain text ending in a single newline, or an empty string

    """
    doc = load_template(template)
    text_options = _prepare_options(options, PlainTextRendererOptions, **kwargs)
    return PlainTextRenderer(text_options).render_to_string(doc, payload, theme)


def render(
    template: TemplateSource,
    payload: Payload | None = None,
    theme: ThemeOverride | None = None,
    target: OutputTarget = "html",
    options: Optional[RenderOptions] = None,
    **kwargs: Any,
) -> str:
    """Render a template to the given output target.

    Parameters
    ----------
    template : Node, Mapping, str, bytes or Path
        Template tree, its JSON, or a path to a JSON file
    payload : Mapping, optional
        Global variable values
    theme : Mapping or EmailTheme, optional
        Partial theme override
    target : {"html", "text"}, default = "html"
        Output format
    options : RenderOptions, optional
        Render options
    kwargs : Any
        Option fields that override ``options``

    Returns
    -------
    str
        Rendered output

    Raises
    ------
    ValidationError
        If ``target`` is not a known output format

    """
    if target == "html":
        return render_html(template, payload, theme, options, **kwargs).body
    if target == "text":
        return render_text(template, payload, theme, options, **kwargs)
    raise ValidationError(
        f"Unknown output target {target!r}; expected one of {', '.join(OUTPUT_TARGETS)}",
        parameter_name="target",
        parameter_value=target,
    )


__all__ = ["render", "render_html", "render_text"]
