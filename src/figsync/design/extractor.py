"""Style extraction: one design node's own attributes to a CSS property map.

Rules run in a fixed order and later rules overwrite earlier ones when they
touch the same property.  Absent attributes contribute nothing; extraction
never fails.
"""

from __future__ import annotations

from figsync.design.color import color_string, format_number, px
from figsync.model.node import DesignNode, NodeType

CssPropertyMap = dict[str, str]


def _typography(node: DesignNode, styles: CssPropertyMap) -> None:
    style = node.style
    if style is None:
        return
    if style.font_family:
        styles["font-family"] = f"'{style.font_family}'"
    if style.font_size is not None:
        styles["font-size"] = px(style.font_size)
    if style.font_weight is not None:
        styles["font-weight"] = format_number(style.font_weight)
    if style.line_height_px is not None:
        styles["line-height"] = px(style.line_height_px)


def _fills(node: DesignNode, styles: CssPropertyMap) -> None:
    if not node.fills:
        return
    prop = "color" if node.type is NodeType.TEXT else "background-color"
    # Last solid paint wins.
    for fill in node.fills:
        if fill.is_solid:
            styles[prop] = color_string(fill.color, fill.opacity)


def _strokes(node: DesignNode, styles: CssPropertyMap) -> None:
    if not node.strokes:
        return
    for stroke in node.strokes:
        if stroke.is_solid:
            styles["border-style"] = "solid"
            styles["border-color"] = color_string(stroke.color)
            return


def _stroke_weight(node: DesignNode, styles: CssPropertyMap) -> None:
    if node.stroke_weight is not None and node.strokes:
        styles["border-width"] = px(node.stroke_weight)


def _corner_radius(node: DesignNode, styles: CssPropertyMap) -> None:
    if node.corner_radius is not None:
        styles["border-radius"] = px(node.corner_radius)


def _effects(node: DesignNode, styles: CssPropertyMap) -> None:
    if not node.effects:
        return
    for effect in node.effects:
        if not effect.is_shadow or effect.color is None:
            continue
        # Stacked shadows are not composed; the last one is kept.
        prefix = "inset " if effect.is_inset else ""
        styles["box-shadow"] = (
            f"{prefix}{px(effect.offset_x)} {px(effect.offset_y)} "
            f"{px(effect.radius)} {color_string(effect.color)}"
        )


_RULES = (_typography, _fills, _strokes, _stroke_weight, _corner_radius, _effects)


def extract_style(node: DesignNode) -> CssPropertyMap:
    """Return the CSS properties carried by *node* itself (children ignored)."""
    styles: CssPropertyMap = {}
    for rule in _RULES:
        rule(node, styles)
    return styles
