"""Property-aware value comparison.

Color properties are compared as RGBA quadruples so that ``#FFFFFF``,
``rgb(255, 255, 255)`` and ``white`` are all the same value.  Everything
else is compared as text.
"""

from __future__ import annotations

import re

import tinycss2
import tinycss2.color3

RGBA = tuple[float, float, float, float]

# LESS variable references inside a value, e.g. ``@gap`` in ``@gap * 2``.
VARIABLE_RE = re.compile(r"@[\w-]+")


def variables_in(value: str) -> list[str]:
    """Return the variable names referenced in *value*, without the ``@``."""
    return [match[1:] for match in VARIABLE_RE.findall(value)]


def _number_arguments(function: tinycss2.ast.FunctionBlock) -> list[float] | None:
    numbers: list[float] = []
    for token in function.arguments:
        if token.type in ("whitespace", "comment"):
            continue
        if token.type == "literal" and token.value == ",":
            continue
        if token.type != "number":
            return None
        numbers.append(token.value)
    return numbers


def parse_rgba(value: str) -> RGBA | None:
    """Parse a CSS color into ``(r, g, b, a)`` with channels in [0, 1].

    Besides everything CSS Color Level 3 accepts, ``rgb()``/``rgba()`` with
    fractional channels are understood, since generated colors carry them.
    Returns ``None`` for anything that is not a color.
    """
    color = tinycss2.color3.parse_color(value)
    if isinstance(color, tuple):
        return (color.red, color.green, color.blue, color.alpha)

    token = tinycss2.parse_one_component_value(value, skip_comments=True)
    if token.type != "function" or token.lower_name not in ("rgb", "rgba"):
        return None
    numbers = _number_arguments(token)
    if numbers is None or len(numbers) not in (3, 4):
        return None
    r, g, b = (min(255.0, max(0.0, n)) / 255 for n in numbers[:3])
    alpha = min(1.0, max(0.0, numbers[3])) if len(numbers) == 4 else 1.0
    return (r, g, b, alpha)


TRANSPARENT: RGBA = (0.0, 0.0, 0.0, 0.0)


def compare_property(prop: str, value1: str, value2: str) -> bool:
    """Return whether two values of *prop* mean the same thing.

    ``transparent`` only matches a fully transparent black, so
    ``rgba(10,10,10,0)`` is a different value.  This is stricter than
    matching every color with zero alpha: a tinted transparent color still
    interpolates differently in gradients and transitions, so it is reported.
    """
    if "color" in prop:
        a, b = value1.strip(), value2.strip()
        if a.lower() == "transparent" or b.lower() == "transparent":
            other = b if a.lower() == "transparent" else a
            return parse_rgba(other) == TRANSPARENT
        color1, color2 = parse_rgba(a), parse_rgba(b)
        if color1 is not None and color2 is not None:
            return color1 == color2
    return value1 == value2
