"""Shorthand expansion.

A shorthand declaration is rewritten into the longhand properties it sets,
recursively (``border`` becomes ``border-width``, which becomes
``border-top-width`` and so on), so that maps written in different styles
can be compared property by property.  Only the longhands actually given in
the value are produced; omitted parts are not filled with initial values.
Values that cannot be split are passed through unchanged.
"""

from __future__ import annotations

from typing import Any, Callable

import tinycss2
import tinycss2.color3

Tokens = list[Any]

SIDES = ("top", "right", "bottom", "left")
CORNERS = ("top-left", "top-right", "bottom-right", "bottom-left")

BORDER_STYLES = frozenset(
    {"none", "hidden", "dotted", "dashed", "solid", "double", "groove", "ridge", "inset", "outset"}
)
BORDER_WIDTHS = frozenset({"thin", "medium", "thick"})
FONT_STYLES = frozenset({"italic", "oblique"})
FONT_VARIANTS = frozenset({"small-caps"})
FONT_WEIGHTS = frozenset({"bold", "bolder", "lighter"})
FONT_STRETCHES = frozenset(
    {
        "ultra-condensed",
        "extra-condensed",
        "condensed",
        "semi-condensed",
        "semi-expanded",
        "expanded",
        "extra-expanded",
        "ultra-expanded",
    }
)
FONT_SIZES = frozenset(
    {"xx-small", "x-small", "small", "medium", "large", "x-large", "xx-large", "larger", "smaller"}
)
BACKGROUND_REPEATS = frozenset({"repeat", "repeat-x", "repeat-y", "no-repeat", "space", "round"})
BACKGROUND_ATTACHMENTS = frozenset({"scroll", "fixed", "local"})

IMPORTANT = "!important"


# ---------------------------------------------------------------------------
# Token helpers
# ---------------------------------------------------------------------------


def _tokens(value: str) -> Tokens:
    return [
        t
        for t in tinycss2.parse_component_value_list(value, skip_comments=True)
        if t.type != "whitespace"
    ]


def _text(token: object) -> str:
    return tinycss2.serialize([token])


def _ident(token: object) -> str | None:
    if getattr(token, "type", None) == "ident":
        return token.lower_value  # type: ignore[attr-defined]
    return None


def _is_literal(token: object, char: str) -> bool:
    return getattr(token, "type", None) == "literal" and token.value == char  # type: ignore[attr-defined]


def _is_separator(token: object) -> bool:
    return _is_literal(token, ",") or _is_literal(token, "/")


def _is_length(token: object) -> bool:
    kind = getattr(token, "type", None)
    if kind in ("dimension", "percentage"):
        return True
    if kind == "number":
        return token.value == 0  # type: ignore[attr-defined]
    if kind == "function":
        return token.lower_name in ("calc", "min", "max", "clamp")  # type: ignore[attr-defined]
    return False


def _is_color(token: object) -> bool:
    if getattr(token, "type", None) == "at-keyword":
        # An unresolved LESS variable; most likely a color.
        return True
    return tinycss2.color3.parse_color(token) is not None


def _is_image(token: object) -> bool:
    kind = getattr(token, "type", None)
    if kind == "url":
        return True
    if kind == "function":
        name = token.lower_name  # type: ignore[attr-defined]
        return name == "url" or name.endswith("gradient")
    return _ident(token) == "none"


# ---------------------------------------------------------------------------
# Expanders: return the (possibly still shorthand) parts, or None when the
# value cannot be split.
# ---------------------------------------------------------------------------


def _four(values: list[str]) -> tuple[str, str, str, str] | None:
    if not 1 <= len(values) <= 4:
        return None
    top = values[0]
    right = values[1] if len(values) > 1 else top
    bottom = values[2] if len(values) > 2 else top
    left = values[3] if len(values) > 3 else right
    return (top, right, bottom, left)


def _box(template: str) -> Callable[[Tokens, str], dict[str, str] | None]:
    def expand(tokens: Tokens, raw: str) -> dict[str, str] | None:
        if any(_is_separator(t) for t in tokens):
            return None
        values = _four([_text(t) for t in tokens])
        if values is None:
            return None
        return {template.format(side=side): value for side, value in zip(SIDES, values)}

    return expand


def _border_radius(tokens: Tokens, raw: str) -> dict[str, str] | None:
    if any(_is_literal(t, ",") for t in tokens):
        return None
    slash = next((i for i, t in enumerate(tokens) if _is_literal(t, "/")), None)
    horizontal = tokens if slash is None else tokens[:slash]
    h = _four([_text(t) for t in horizontal])
    if h is None:
        return None
    # top-left, top-right, bottom-right, bottom-left map onto the box order.
    if slash is None:
        return {f"border-{corner}-radius": value for corner, value in zip(CORNERS, h)}
    v = _four([_text(t) for t in tokens[slash + 1 :]])
    if v is None:
        return None
    return {
        f"border-{corner}-radius": hv if hv == vv else f"{hv} {vv}"
        for corner, hv, vv in zip(CORNERS, h, v)
    }


def _line_parts(prefix: str) -> Callable[[Tokens, str], dict[str, str] | None]:
    """Expander for ``<width> || <style> || <color>`` shorthands."""

    def expand(tokens: Tokens, raw: str) -> dict[str, str] | None:
        parts: dict[str, str] = {}
        for token in tokens:
            ident = _ident(token)
            if ident in BORDER_STYLES:
                kind = "style"
            elif ident in BORDER_WIDTHS or _is_length(token):
                kind = "width"
            elif _is_color(token):
                kind = "color"
            else:
                return None
            if kind in parts:
                return None
            parts[kind] = _text(token)
        if not parts:
            return None
        return {f"{prefix}-{kind}": parts[kind] for kind in ("width", "style", "color") if kind in parts}

    return expand


def _background(tokens: Tokens, raw: str) -> dict[str, str] | None:
    if any(_is_literal(t, ",") for t in tokens):
        return None
    parts: dict[str, list[str]] = {}
    for token in tokens:
        ident = _ident(token)
        if _is_image(token):
            kind = "image"
        elif ident in BACKGROUND_REPEATS:
            kind = "repeat"
        elif ident in BACKGROUND_ATTACHMENTS:
            kind = "attachment"
        elif _is_color(token):
            kind = "color"
        else:
            kind = "position"
        parts.setdefault(kind, []).append(_text(token))
    if not parts:
        return None
    return {f"background-{kind}": " ".join(values) for kind, values in parts.items()}


def _font(tokens: Tokens, raw: str) -> dict[str, str] | None:
    result: dict[str, str] = {}
    i = 0
    while i < len(tokens):
        token = tokens[i]
        ident = _ident(token)
        if ident == "normal":
            pass
        elif ident in FONT_STYLES:
            result["font-style"] = _text(token)
        elif ident in FONT_VARIANTS:
            result["font-variant"] = _text(token)
        elif ident in FONT_WEIGHTS or (
            token.type == "number" and token.is_integer and 1 <= token.value <= 1000
        ):
            result["font-weight"] = _text(token)
        elif ident in FONT_STRETCHES:
            result["font-stretch"] = _text(token)
        else:
            break
        i += 1

    if i >= len(tokens):
        return None
    size = tokens[i]
    if not (_is_length(size) or _ident(size) in FONT_SIZES):
        return None
    result["font-size"] = _text(size)
    i += 1

    if i < len(tokens) and _is_literal(tokens[i], "/"):
        if i + 1 >= len(tokens):
            return None
        result["line-height"] = _text(tokens[i + 1])
        i += 2

    if i >= len(tokens):
        return None
    family = tokens[i]
    if "\n" in raw:
        result["font-family"] = tinycss2.serialize(tokens[i:])
    else:
        # Keep the family list as written, quotes included.
        result["font-family"] = raw[family.source_column - 1 :].strip()
    return result


_EXPANDERS: dict[str, Callable[[Tokens, str], dict[str, str] | None]] = {
    "margin": _box("margin-{side}"),
    "padding": _box("padding-{side}"),
    "border-width": _box("border-{side}-width"),
    "border-style": _box("border-{side}-style"),
    "border-color": _box("border-{side}-color"),
    "border-radius": _border_radius,
    "border": _line_parts("border"),
    "border-top": _line_parts("border-top"),
    "border-right": _line_parts("border-right"),
    "border-bottom": _line_parts("border-bottom"),
    "border-left": _line_parts("border-left"),
    "outline": _line_parts("outline"),
    "background": _background,
    "font": _font,
}


def is_shorthand(prop: str) -> bool:
    return prop in _EXPANDERS


def expand_property(prop: str, value: str) -> dict[str, str]:
    """Expand one declaration into longhand declarations.

    ``!important`` is carried over to every longhand.
    """
    expander = _EXPANDERS.get(prop)
    if expander is None:
        return {prop: value}

    raw = value.strip()
    important = ""
    if raw.lower().endswith(IMPORTANT):
        raw = raw[: -len(IMPORTANT)].rstrip()
        important = " " + IMPORTANT

    parts = expander(_tokens(raw), raw)
    if parts is None:
        return {prop: value}

    result: dict[str, str] = {}
    for sub_prop, sub_value in parts.items():
        result.update(expand_property(sub_prop, sub_value + important))
    return result


def expand_properties(
    props: dict[str, str], origins: dict[str, str] | None = None
) -> dict[str, str]:
    """Expand every declaration of *props*; later declarations win.

    When *origins* is given it is filled with ``longhand -> declared property``.
    """
    result: dict[str, str] = {}
    for prop, value in props.items():
        for longhand, longhand_value in expand_property(prop, value).items():
            result[longhand] = longhand_value
            if origins is not None:
                origins[longhand] = prop
    return result
