"""Style map differences, computed after shorthand expansion on both sides."""

from __future__ import annotations

from figsync.css.compare import compare_property
from figsync.css.shorthand import expand_properties


def find_missing_properties(scope_styles: dict[str, str], layer_styles: dict[str, str]) -> dict[str, str]:
    """Layer properties the scope does not declare, with the layer's values."""
    scope = expand_properties(scope_styles)
    layer = expand_properties(layer_styles)
    return {prop: value for prop, value in layer.items() if prop not in scope}


def diff_intersecting_properties(scope_styles: dict[str, str], layer_styles: dict[str, str]) -> dict[str, str]:
    """Properties declared on both sides whose values differ, with the layer's values."""
    scope = expand_properties(scope_styles)
    layer = expand_properties(layer_styles)
    return {
        prop: layer[prop]
        for prop, value in scope.items()
        if prop in layer and not compare_property(prop, value, layer[prop])
    }
