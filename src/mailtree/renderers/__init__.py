#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/mailtree/renderers/__init__.py
"""Output renderers for email document trees.

Each output format is one ``NodeRendererRegistry`` (a rule per node type)
paired with a ``BaseRenderer`` subclass that runs the render engine with it
and finishes the output.

Available renderers:
- EmailHtmlRenderer: Render to email HTML (document shell via Jinja2)
- PlainTextRenderer: Render to the text/plain alternative part

The engine itself imports ``mailtree.renderers.registry``, so the renderer
classes are loaded lazily on first attribute access.

Examples
--------
    >>> from mailtree.ast import load_template
    >>> from mailtree.renderers import EmailHtmlRenderer
    >>> doc = load_template("welcome.json")
    >>> html = EmailHtmlRenderer().render_to_string(doc, {"name": "Alice"})

"""

from typing import Any

_lazy_attributes = {
    "BaseRenderer": "mailtree.renderers.base",
    "EmailHtmlRenderer": "mailtree.renderers.html",
    "HTML_RENDERERS": "mailtree.renderers.html",
    "NodeRendererRegistry": "mailtree.renderers.registry",
    "PlainTextRenderer": "mailtree.renderers.plaintext",
    "TEXT_RENDERERS": "mailtree.renderers.plaintext",
}


def __getattr__(name: str) -> Any:
    """Load renderer classes and registries on first access."""
    import importlib

    if name not in _lazy_attributes:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    # nosemgrep: python.lang.security.audit.non-literal-import.non-literal-import
    module = importlib.import_module(_lazy_attributes[name])
    value = getattr(module, name)
    globals()[name] = value
    return value


__all__ = [
    "BaseRenderer",
    "EmailHtmlRenderer",
    "HTML_RENDERERS",
    "NodeRendererRegistry",
    "PlainTextRenderer",
    "TEXT_RENDERERS",
]
