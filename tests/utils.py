"""Test utilities for the mailtree test suite.

Small builders for editor-shaped template dictionaries, so tests read like
the JSON the editor produces.
"""

from typing import Any


def text(value: str, *marks: Any) -> dict:
    """Build a text leaf; marks may be names or full mark dicts."""
    node: dict[str, Any] = {"type": "text", "text": value}
    if marks:
        node["marks"] = [{"type": m} if isinstance(m, str) else m for m in marks]
    return node


def link(href: str, **attrs: Any) -> dict:
    return {"type": "link", "attrs": {"href": href, **attrs}}


def var(name: str, **attrs: Any) -> dict:
    return {"type": "variable", "attrs": {"id": name, **attrs}}


def para(*inline: dict, **attrs: Any) -> dict:
    node: dict[str, Any] = {"type": "paragraph", "content": list(inline)}
    if attrs:
        node["attrs"] = attrs
    return node


def block(node_type: str, *children: dict, **attrs: Any) -> dict:
    node: dict[str, Any] = {"type": node_type, "content": list(children)}
    if attrs:
        node["attrs"] = attrs
    return node


def atom(node_type: str, **attrs: Any) -> dict:
    node: dict[str, Any] = {"type": node_type}
    if attrs:
        node["attrs"] = attrs
    return node


def repeat(each: str, *children: dict, **attrs: Any) -> dict:
    return block("repeat", *children, each=each, **attrs)


def doc(*children: dict) -> dict:
    return {"type": "doc", "content": list(children)}
