#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mailtree/renderers/html.py
"""Email HTML rendering from document trees.

This module provides the ``HTML_RENDERERS`` registry, one rule per node
type, and the ``EmailHtmlRenderer`` class that runs the render engine with
it. Output targets mail clients rather than browsers: layout uses
presentation tables and every style is inlined.

With ``standalone=True`` the body is wrapped in a complete document shell
(doctype, meta tags, optional web font, centered container and a hidden
preheader) rendered from a Jinja2 template.

"""

from __future__ import annotations

import logging
from dataclasses import replace
from functools import lru_cache
from typing import TYPE_CHECKING, Any, Sequence

from mailtree.ast.nodes import MarkType, Node, NodeType
from mailtree.constants import (
    BUTTON_RADII,
    DEFAULT_COLUMNS_GAP,
    DEFAULT_SPACER_HEIGHT,
    HEADING_FONT_SIZES,
    HEADING_LINE_HEIGHTS,
    LOGO_SIZES,
    PREVIEW_PADDING_ENTITY,
    PREVIEW_PADDING_LENGTH,
    SPACER_HEIGHTS,
)
from mailtree.context import RenderContext
from mailtree.engine import RenderEngine, RenderResult
from mailtree.options.html import HtmlRendererOptions
from mailtree.renderers.base import BaseRenderer, Payload, ThemeOverride
from mailtree.renderers.registry import NodeRendererRegistry
from mailtree.utils.html_utils import escape_html, strip_html_tags, style_attr

if TYPE_CHECKING:
    from jinja2 import Template

logger = logging.getLogger(__name__)

HTML_RENDERERS = NodeRendererRegistry("html", extract_text=strip_html_tags)

_TABLE_ATTRS = 'role="presentation" width="100%" cellpadding="0" cellspacing="0" border="0"'
_ALIGNMENTS = ("left", "center", "right")
_BLOCK_MARGIN = "0 0 20px 0"


def _px(value: Any) -> str | None:
    """Normalize a size attribute: numbers gain ``px``, strings pass through."""
    if value is None or value == "":
        return None
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        return None
    if isinstance(value, (int, float)):
        return f"{value:g}px"
    text = str(value).strip()
    if text.replace(".", "", 1).isdigit():
        return f"{text}px"
    return text


def _alignment(node: Node, default: str = "left") -> str:
    value = node.attr("alignment", default)
    return value if value in _ALIGNMENTS else default


def _text_align(node: Node) -> str | None:
    value = node.attr("textAlign")
    return value if value in ("left", "center", "right", "justify") else None


def _preset(node: Node, name: str, presets: dict[str, Any], default_key: str) -> Any:
    """Look up a named preset attribute such as ``size="lg"``, falling back to ``default_key``."""
    value = node.attr(name, default_key)
    if isinstance(value, str) and value in presets:
        return presets[value]
    logger.warning("Invalid %s %r on '%s'; using '%s'", name, value, node.type, default_key)
    return presets[default_key]


def _box(node: Node, prefix: str) -> str | None:
    """Collapse ``<prefix>Top/Right/Bottom/Left`` attrs into one shorthand."""
    sides = [node.attr(f"{prefix}{side}") for side in ("Top", "Right", "Bottom", "Left")]
    if all(side is None for side in sides):
        return None
    return " ".join(_px(side) or "0px" for side in sides)


def _presentation_table(inner: str, align: str | None = None, styles: dict[str, Any] | None = None) -> str:
    align_attr = f' align="{align}"' if align else ""
    return (
        f"<table {_TABLE_ATTRS}{style_attr(styles or {})}>"
        f"<tbody><tr><td{align_attr}>{inner}</td></tr></tbody></table>"
    )


# ============================================================================
# Containers
# ============================================================================


@HTML_RENDERERS.register(NodeType.DOC)
def _render_sequence(node: Node, context: RenderContext, children: Sequence[str]) -> str:
    return "".join(children)


@HTML_RENDERERS.register(NodeType.SECTION)
def _render_section(node: Node, context: RenderContext, children: Sequence[str]) -> str:
    border_width = _px(node.attr("borderWidth"))
    table_styles = {
        "background-color": node.attr("backgroundColor"),
        "border-radius": _px(node.attr("borderRadius")),
        "border-style": "solid" if border_width else None,
        "border-width": border_width,
        "border-color": node.attr("borderColor"),
        "margin": _box(node, "margin") or _BLOCK_MARGIN,
        "border-collapse": "separate",
    }
    cell_styles = {"padding": _box(node, "padding")}
    align = _alignment(node)
    return (
        f"<table {_TABLE_ATTRS}{style_attr(table_styles)}><tbody><tr>"
        f'<td align="{align}"{style_attr(cell_styles)}>{"".join(children)}</td>'
        f"</tr></tbody></table>"
    )


@HTML_RENDERERS.register(NodeType.COLUMNS)
def _render_columns(node: Node, context: RenderContext, children: Sequence[str]) -> str:
    gap = _px(node.attr("gap", DEFAULT_COLUMNS_GAP)) or f"{DEFAULT_COLUMNS_GAP}px"
    gap_cell = f'<td style="width:{gap};min-width:{gap};font-size:0;line-height:0">&nbsp;</td>'
    return (
        f"<table {_TABLE_ATTRS}{style_attr({'margin': _BLOCK_MARGIN})}><tbody><tr>"
        f"{gap_cell.join(children)}</tr></tbody></table>"
    )


@HTML_RENDERERS.register(NodeType.COLUMN)
def _render_column(node: Node, context: RenderContext, children: Sequence[str]) -> str:
    width = node.attr("width")
    vertical_align = node.attr("verticalAlign", "top")
    styles = {
        "width": None if width in (None, "auto") else (f"{width}%" if isinstance(width, (int, float)) else width),
        "vertical-align": vertical_align,
        "background-color": node.attr("backgroundColor"),
        "border-radius": _px(node.attr("borderRadius")),
        "padding": _box(node, "padding"),
    }
    return f'<td valign="{escape_html(vertical_align)}"{style_attr(styles)}>{"".join(children)}</td>'


@HTML_RENDERERS.register(NodeType.BLOCKQUOTE)
def _render_blockquote(node: Node, context: RenderContext, children: Sequence[str]) -> str:
    styles = {
        "border-left": f"3px solid {context.theme.colors.blockquote_border}",
        "padding-left": "16px",
        "margin": _BLOCK_MARGIN,
    }
    return f"<blockquote{style_attr(styles)}>{''.join(children)}</blockquote>"


@HTML_RENDERERS.register(NodeType.BULLET_LIST, NodeType.ORDERED_LIST)
def _render_list(node: Node, context: RenderContext, children: Sequence[str]) -> str:
    ordered = node.type == NodeType.ORDERED_LIST.value
    tag = "ol" if ordered else "ul"
    start = node.attr("start", 1)
    start_attr = f' start="{escape_html(start)}"' if ordered and start != 1 else ""
    styles = {
        "margin": _BLOCK_MARGIN,
        "padding-left": "26px",
        "list-style-type": "decimal" if ordered else "disc",
    }
    return f"<{tag}{start_attr}{style_attr(styles)}>{''.join(children)}</{tag}>"


@HTML_RENDERERS.register(NodeType.LIST_ITEM)
def _render_list_item(node: Node, context: RenderContext, children: Sequence[str]) -> str:
    styles = {"margin-bottom": "8px", "padding-left": "6px", "color": context.theme.colors.paragraph}
    return f"<li{style_attr(styles)}>{''.join(children)}</li>"


# ============================================================================
# Text blocks
# ============================================================================


@HTML_RENDERERS.register(NodeType.PARAGRAPH)
def _render_paragraph(node: Node, context: RenderContext, children: Sequence[str]) -> str:
    spec = context.theme.font_size.paragraph
    styles = {
        "font-size": spec.size,
        "line-height": spec.line_height,
        "color": context.theme.colors.paragraph,
        "margin": _BLOCK_MARGIN,
        "text-align": _text_align(node),
    }
    return f"<p{style_attr(styles)}>{''.join(children) or '&nbsp;'}</p>"


@HTML_RENDERERS.register(NodeType.FOOTER)
def _render_footer(node: Node, context: RenderContext, children: Sequence[str]) -> str:
    spec = context.theme.font_size.footer
    styles = {
        "font-size": spec.size,
        "line-height": spec.line_height,
        "color": context.theme.colors.footer,
        "margin": _BLOCK_MARGIN,
        "text-align": _text_align(node),
    }
    return f"<p{style_attr(styles)}>{''.join(children)}</p>"


@HTML_RENDERERS.register(NodeType.HEADING)
def _render_heading(node: Node, context: RenderContext, children: Sequence[str]) -> str:
    try:
        level = min(6, max(1, int(node.attr("level", 1))))
    except (TypeError, ValueError):
        logger.warning("Heading has invalid level %r; using 1", node.attr("level"))
        level = 1
    styles = {
        "font-size": HEADING_FONT_SIZES[level],
        "line-height": HEADING_LINE_HEIGHTS[level],
        "font-weight": "600",
        "color": context.theme.colors.heading,
        "margin": "0 0 12px 0",
        "text-align": _text_align(node),
    }
    return f"<h{level}{style_attr(styles)}>{''.join(children)}</h{level}>"


@HTML_RENDERERS.register(NodeType.CODE_BLOCK)
def _render_code_block(node: Node, context: RenderContext, children: Sequence[str]) -> str:
    language = node.attr("language")
    class_attr = f' class="language-{escape_html(language)}"' if language else ""
    styles = {
        "background-color": context.theme.colors.code_background,
        "color": context.theme.colors.code_text,
        "padding": "12px 16px",
        "border-radius": "6px",
        "margin": _BLOCK_MARGIN,
        "overflow-x": "auto",
        "font-size": "14px",
    }
    return f"<pre{style_attr(styles)}><code{class_attr}>{''.join(children)}</code></pre>"


@HTML_RENDERERS.register(NodeType.HTML_CODE_BLOCK)
def _render_html_code_block(node: Node, context: RenderContext, children: Sequence[str]) -> str:
    # Raw HTML authored in the editor is emitted verbatim
    return node.text_content()


@HTML_RENDERERS.register(NodeType.HORIZONTAL_RULE)
def _render_horizontal_rule(node: Node, context: RenderContext, children: Sequence[str]) -> str:
    styles = {
        "width": "100%",
        "border": "none",
        "border-top": f"1px solid {context.theme.colors.horizontal}",
        "margin": "32px 0",
    }
    return f"<hr{style_attr(styles)}>"


@HTML_RENDERERS.register(NodeType.HARD_BREAK)
def _render_hard_break(node: Node, context: RenderContext, children: Sequence[str]) -> str:
    return "<br>"


# ============================================================================
# Inline content
# ============================================================================


def _apply_mark(html: str, mark_type: str, mark: Any, context: RenderContext) -> str:
    if mark_type == MarkType.BOLD.value:
        return f"<strong>{html}</strong>"
    if mark_type == MarkType.ITALIC.value:
        return f"<em>{html}</em>"
    if mark_type == MarkType.UNDERLINE.value:
        return f"<u>{html}</u>"
    if mark_type == MarkType.STRIKE.value:
        return f"<s>{html}</s>"
    if mark_type == MarkType.CODE.value:
        styles = {
            "background-color": context.theme.colors.code_background,
            "color": context.theme.colors.code_text,
            "padding": "2px 4px",
            "border-radius": "6px",
            "font-size": "14px",
        }
        return f"<code{style_attr(styles)}>{html}</code>"
    if mark_type == MarkType.TEXT_STYLE.value:
        color = mark.attr("color")
        return f"<span{style_attr({'color': color})}>{html}</span>" if color else html
    if mark_type == MarkType.LINK.value:
        href = context.link_href(mark.attr("href", ""))
        target = mark.attr("target", "_blank")
        styles = {"color": context.theme.link.color, "text-decoration": "underline", "font-weight": "500"}
        return (
            f'<a href="{escape_html(href)}" target="{escape_html(target)}" rel="noopener noreferrer"'
            f"{style_attr(styles)}>{html}</a>"
        )
    logger.warning("Unknown mark type '%s' ignored", mark_type)
    return html


@HTML_RENDERERS.register(NodeType.TEXT)
def _render_text(node: Node, context: RenderContext, children: Sequence[str]) -> str:
    html = escape_html(node.text or "")
    # Links wrap every other mark so the whole run is clickable
    ordered = sorted(node.marks, key=lambda m: m.type == MarkType.LINK.value)
    for mark in ordered:
        html = _apply_mark(html, mark.type, mark, context)
    return html


@HTML_RENDERERS.register(NodeType.VARIABLE)
def _render_variable(node: Node, context: RenderContext, children: Sequence[str]) -> str:
    name = node.attr("id")
    if not name:
        logger.warning("Variable node without an id rendered as empty text")
        return ""
    value = context.variable_text(str(name), fallback=node.attr("fallback"), required=bool(node.attr("required")))
    return escape_html(value)


# ============================================================================
# Media and actions
# ============================================================================


def _img_tag(src: str, alt: str, styles: dict[str, Any], width: Any = None, height: Any = None, title: Any = None) -> str:
    attrs = [f'src="{escape_html(src)}"', f'alt="{escape_html(alt)}"']
    if title:
        attrs.append(f'title="{escape_html(title)}"')
    if isinstance(width, (int, float)) and not isinstance(width, bool):
        attrs.append(f'width="{width:g}"')
    if isinstance(height, (int, float)) and not isinstance(height, bool):
        attrs.append(f'height="{height:g}"')
    base_styles = {"display": "block", "outline": "none", "border": "none", "text-decoration": "none"}
    base_styles.update(styles)
    return f"<img {' '.join(attrs)}{style_attr(base_styles)}>"


def _link_wrap(inner: str, href: str) -> str:
    if not href:
        return inner
    return f'<a href="{escape_html(href)}" target="_blank" rel="noopener noreferrer">{inner}</a>'


@HTML_RENDERERS.register(NodeType.IMAGE)
def _render_image(node: Node, context: RenderContext, children: Sequence[str]) -> str:
    src = context.attr_value(node, "src")
    if not src:
        logger.warning("Image node without a src skipped")
        return ""
    width = node.attr("width")
    height = node.attr("height")
    styles = {
        "width": None if width in (None, "auto") else _px(width),
        "height": None if height in (None, "auto") else _px(height),
        "max-width": "100%",
    }
    img = _img_tag(str(src), node.attr("alt", ""), styles, width, height, node.attr("title"))
    href = context.link_href(context.attr_value(node, "externalLink", ""))
    return _presentation_table(_link_wrap(img, href), _alignment(node, "center"), {"margin": _BLOCK_MARGIN})


@HTML_RENDERERS.register(NodeType.INLINE_IMAGE)
def _render_inline_image(node: Node, context: RenderContext, children: Sequence[str]) -> str:
    src = context.attr_value(node, "src")
    if not src:
        logger.warning("Inline image node without a src skipped")
        return ""
    width = node.attr("width", 20)
    height = node.attr("height", 20)
    styles = {"display": "inline-block", "vertical-align": "middle", "width": _px(width), "height": _px(height)}
    img = _img_tag(str(src), node.attr("alt", ""), styles, width, height)
    return _link_wrap(img, context.link_href(context.attr_value(node, "externalLink", "")))


@HTML_RENDERERS.register(NodeType.LOGO)
def _render_logo(node: Node, context: RenderContext, children: Sequence[str]) -> str:
    src = context.attr_value(node, "src")
    if not src:
        logger.warning("Logo node without a src skipped")
        return ""
    size = _preset(node, "size", LOGO_SIZES, "md")
    img = _img_tag(str(src), node.attr("alt", ""), {"width": f"{size}px", "height": f"{size}px"}, size, size)
    return _presentation_table(img, _alignment(node), {"margin": _BLOCK_MARGIN})


@HTML_RENDERERS.register(NodeType.SPACER)
def _render_spacer(node: Node, context: RenderContext, children: Sequence[str]) -> str:
    raw = node.attr("height", DEFAULT_SPACER_HEIGHT)
    if isinstance(raw, str) and raw in SPACER_HEIGHTS:
        height = f"{SPACER_HEIGHTS[raw]}px"
    else:
        height = _px(raw)
        if height is None:
            logger.warning("Invalid spacer height %r; using %dpx", raw, DEFAULT_SPACER_HEIGHT)
            height = f"{DEFAULT_SPACER_HEIGHT}px"
    return (
        f"<table {_TABLE_ATTRS}><tbody><tr>"
        f'<td style="height:{height};line-height:{height};font-size:1px">&nbsp;</td>'
        f"</tr></tbody></table>"
    )


@HTML_RENDERERS.register(NodeType.BUTTON)
def _render_button(node: Node, context: RenderContext, children: Sequence[str]) -> str:
    text = context.attr_value(node, "text", "")
    url = context.link_href(context.attr_value(node, "url", "")) or "#"
    theme = context.theme.button
    background = node.attr("buttonColor") or theme.background_color
    foreground = node.attr("textColor") or theme.text_color
    outline = node.attr("variant") == "outline"
    padding = " ".join(
        _px(node.attr(f"padding{side}", default)) or f"{default}px"
        for side, default in (("Top", 10), ("Right", 32), ("Bottom", 10), ("Left", 32))
    )
    styles = {
        "display": "inline-block",
        "padding": padding,
        "background-color": "transparent" if outline else background,
        "border": f"2px solid {background}",
        "border-radius": _preset(node, "borderRadius", BUTTON_RADII, "smooth"),
        "color": background if outline and not node.attr("textColor") else foreground,
        "font-size": "14px",
        "font-weight": "500",
        "line-height": "100%",
        "text-decoration": "none",
    }
    anchor = f'<a href="{escape_html(url)}" target="_blank"{style_attr(styles)}>{escape_html(text)}</a>'
    return _presentation_table(anchor, _alignment(node), {"margin": _BLOCK_MARGIN})


@HTML_RENDERERS.register(NodeType.LINK_CARD)
def _render_link_card(node: Node, context: RenderContext, children: Sequence[str]) -> str:
    colors = context.theme.colors
    href = context.link_href(context.attr_value(node, "link", ""))
    image = context.attr_value(node, "image")
    rows = []
    if image:
        img = _img_tag(str(image), node.attr("title", ""), {"width": "100%", "border-radius": "10px 10px 0 0"})
        rows.append(f"<tr><td>{_link_wrap(img, href)}</td></tr>")

    heading = f'<span{style_attr({"font-size": "18px", "font-weight": "600", "color": colors.link_card_title})}>'
    heading += f"{escape_html(context.attr_value(node, 'title', ''))}</span>"
    badge = node.attr("badgeText")
    if badge:
        badge_styles = {
            "margin-left": "8px",
            "padding": "2px 8px",
            "border-radius": "8px",
            "font-size": "12px",
            "color": colors.link_card_badge_text,
            "background-color": colors.link_card_badge_background,
        }
        heading += f"<span{style_attr(badge_styles)}>{escape_html(badge)}</span>"
    sub_title = node.attr("subTitle")
    if sub_title:
        heading += f"<span{style_attr({'margin-left': '8px', 'font-size': '14px', 'color': colors.link_card_sub_title})}>"
        heading += f"{escape_html(sub_title)}</span>"

    body = _link_wrap(heading, href)
    description = context.attr_value(node, "description")
    if description:
        desc_styles = {"margin": "8px 0 0 0", "font-size": "15px", "color": colors.link_card_description}
        body += f"<p{style_attr(desc_styles)}>{escape_html(description)}</p>"
    link_title = node.attr("linkTitle")
    if link_title and href:
        link_styles = {"display": "inline-block", "margin-top": "8px", "color": context.theme.link.color}
        body += f'<a href="{escape_html(href)}" target="_blank"{style_attr(link_styles)}>{escape_html(link_title)}</a>'
    rows.append(f'<tr><td style="padding:15px">{body}</td></tr>')

    card_styles = {"border": "1px solid #e5e7eb", "border-radius": "10px", "margin": _BLOCK_MARGIN}
    return f"<table {_TABLE_ATTRS}{style_attr(card_styles)}><tbody>{''.join(rows)}</tbody></table>"


HTML_RENDERERS.freeze()


# ============================================================================
# Document shell
# ============================================================================


def _declarations(styles: dict[str, Any]) -> str:
    """Join CSS declarations for a template ``style`` attribute, skipping unset values."""
    return ";".join(f"{prop}:{value}" for prop, value in styles.items() if value is not None and value != "")


def _shorthand(*sides: Any) -> str | None:
    if all(side is None or side == "" for side in sides):
        return None
    return " ".join("0" if side is None or side == "" else str(side) for side in sides)


_SHELL_TEMPLATE = """\
<!DOCTYPE html PUBLIC "-//W3C//DTD XHTML 1.0 Transitional//EN" "http://www.w3.org/TR/xhtml1/DTD/xhtml1-transitional.dtd">
<html lang="{{ language }}" dir="ltr">
<head>
<meta content="text/html; charset=UTF-8" http-equiv="Content-Type">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<meta name="x-apple-disable-message-reformatting">
{% if title %}<title>{{ title }}</title>
{% endif %}{% if font_css %}<style>{{ font_css }}</style>
{% endif %}</head>
<body style="{{ body_style }}">
{% if preview_text %}<div style="display:none;overflow:hidden;line-height:1px;opacity:0;max-height:0;max-width:0">\
{{ preview_text }}<div>{{ preview_padding }}</div></div>
{% endif %}<table align="center" role="presentation" width="100%" cellpadding="0" cellspacing="0" border="0">\
<tbody><tr><td align="center">
<table align="center" role="presentation" width="100%" cellpadding="0" cellspacing="0" border="0" \
style="{{ container_style }}"><tbody><tr><td style="{{ container_padding }}">
{{ body }}
</td></tr></tbody></table>
</td></tr></tbody></table>
</body>
</html>
"""


@lru_cache(maxsize=1)
def _shell_template() -> Template:
    from jinja2 import Environment

    # nosemgrep: python.flask.security.xss.audit.direct-use-of-jinja2.direct-use-of-jinja2
    env = Environment(autoescape=True, keep_trailing_newline=True)
    return env.from_string(_SHELL_TEMPLATE)


class EmailHtmlRenderer(BaseRenderer):
    """Render email document trees to HTML.

    Parameters
    ----------
    options : HtmlRendererOptions or None, default = None
        HTML rendering options

    Examples
    --------
    Basic usage:

        >>> from mailtree.ast import dict_to_node
        >>> from mailtree.options import HtmlRendererOptions
        >>> from mailtree.renderers.html import EmailHtmlRenderer
        >>> doc = dict_to_node({"type": "doc", "content": [
        ...     {"type": "paragraph", "content": [{"type": "text", "text": "Hi"}]}]})
        >>> renderer = EmailHtmlRenderer(HtmlRendererOptions(standalone=False))
        >>> html = renderer.render_to_string(doc)

    """

    def __init__(self, options: HtmlRendererOptions | None = None):
        """Initialize the HTML renderer with options."""
        BaseRenderer._validate_options_type(options, HtmlRendererOptions, "html")
        options = options or HtmlRendererOptions()
        BaseRenderer.__init__(self, options)
        self.options: HtmlRendererOptions = options
        self.engine = RenderEngine(HTML_RENDERERS, options)

    def render_result(
        self, doc: Node, payload: Payload | None = None, theme: ThemeOverride | None = None
    ) -> RenderResult:
        """Render the tree to HTML, wrapped in the document shell when standalone.

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
            HTML body (or full document) and preview text

        """
        result = self.engine.render(doc, payload, theme)
        if not self.options.standalone:
            return result
        return replace(result, body=self._wrap_in_document(result))

    def _wrap_in_document(self, result: RenderResult) -> str:
        """Wrap a rendered body in the email document shell.

        Parameters
        ----------
        result : RenderResult
            Engine output carrying the body, preview text and theme

        Returns
        -------
        str
            Complete HTML document

        """
        from markupsafe import Markup

        theme = result.theme
        container = theme.container
        body = theme.body
        body_style = {
            "margin": "0",
            "background-color": body.background_color,
            "padding": _shorthand(body.padding_top, body.padding_right, body.padding_bottom, body.padding_left),
            "font-family": theme.font.stack,
        }
        container_style = {
            "max-width": container.max_width,
            "min-width": container.min_width,
            "background-color": container.background_color,
            "border-radius": container.border_radius,
            "border-width": container.border_width,
            "border-style": "solid",
            "border-color": container.border_color,
        }
        container_padding = {
            "padding": _shorthand(
                container.padding_top, container.padding_right, container.padding_bottom, container.padding_left
            )
        }

        preview_text = result.preview_text or ""
        padding = PREVIEW_PADDING_ENTITY * max(0, PREVIEW_PADDING_LENGTH - len(preview_text))

        return _shell_template().render(
            language=self.options.language,
            title=self.options.title,
            font_css=Markup(self._font_css(result)),
            body_style=_declarations(body_style),
            container_style=_declarations(container_style),
            container_padding=_declarations(container_padding),
            preview_text=preview_text,
            preview_padding=Markup(padding),
            body=Markup(result.body),
        )

    @staticmethod
    def _font_css(result: RenderResult) -> str:
        """Build the ``@font-face`` rule for the theme's web font, if any."""
        font = result.theme.font
        if font.web_font is None or not font.web_font.url or not font.font_family:
            return ""
        family = str(font.font_family).replace("'", "")
        url = str(font.web_font.url).replace("'", "%27").replace(")", "%29")
        return (
            f"@font-face {{ font-family: '{family}'; font-style: normal; font-weight: 400; "
            f"mso-font-alt: '{font.fallback_font_family}'; "
            f"src: url('{url}') format('{font.web_font.format}'); }} "
            f"* {{ font-family: '{family}', {font.fallback_font_family}; }}"
        )


__all__ = ["HTML_RENDERERS", "EmailHtmlRenderer"]
