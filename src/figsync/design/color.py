"""Conversion of design colors into CSS color literals.

Opaque colors are written as uppercase 6-digit hex with channels truncated
to whole bytes.  Translucent colors are written as ``rgba()`` with channels
kept as two-decimal floats in the [0, 255] range.  The asymmetry is
deliberate: generated literals must stay byte-for-byte stable.
"""

from __future__ import annotations

import math

from figsync.model.node import Color


def format_number(value: float) -> str:
    """Format a number the way the design tool prints it (``12`` not ``12.0``)."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def px(value: float) -> str:
    return format_number(value) + "px"


def round2(value: float) -> float:
    """Round half up to two decimal places."""
    return math.floor(value * 100 + 0.5) / 100


def _byte(channel: float) -> int:
    return min(255, max(0, math.floor(channel * 255)))


def color_string(color: Color, opacity: float = 1.0) -> str:
    """Return the CSS literal for *color* with an extra *opacity* multiplier."""
    alpha = round2(color.a * opacity)
    if alpha < 1:
        channels = ",".join(format_number(round2(c * 255)) for c in (color.r, color.g, color.b))
        return f"rgba({channels},{format_number(alpha)})"
    return ("#" + "".join(f"{_byte(c):02x}" for c in (color.r, color.g, color.b))).upper()
