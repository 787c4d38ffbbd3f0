"""Reconciler: diagnostics for every linked scope/layer pair.

Each rule is a function taking a scope and a layer and returning a list of
Diagnostic objects.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable

from figsync.css.shorthand import expand_properties
from figsync.design.layers import Layer, LayerTree
from figsync.model.diagnostic import Diagnostic, Severity
from figsync.model.link import Link
from figsync.model.source import SourceRange
from figsync.reconcile.differ import diff_intersecting_properties, find_missing_properties
from figsync.stylesheet.scope import ScopeTree, StylesheetScope

logger = logging.getLogger(__name__)

RuleFunc = Callable[[StylesheetScope, Layer], list[Diagnostic]]


def _declaration_range(scope: StylesheetScope, prop: str) -> SourceRange | None:
    """Range of the declaration that set *prop*, possibly through a shorthand."""
    if prop in scope.ranges:
        return scope.ranges[prop]
    origins: dict[str, str] = {}
    expand_properties(scope.styles, origins)
    return scope.get_range(origins.get(prop, prop))


def check_missing_properties(scope: StylesheetScope, layer: Layer) -> list[Diagnostic]:
    """Every layer property the scope lacks."""
    missing = find_missing_properties(scope.styles, layer.derived_style)
    return [
        Diagnostic(
            rule="missing-property",
            severity=Severity.WARNING,
            message=f"missing {prop}: {value};",
            range=scope.selector_range,
            scope_id=scope.css_scope_name,
            layer_id=layer.id,
            css_property=prop,
        )
        for prop, value in missing.items()
    ]


def check_mismatched_properties(scope: StylesheetScope, layer: Layer) -> list[Diagnostic]:
    """Every property both sides declare with different values."""
    different = diff_intersecting_properties(scope.styles, layer.derived_style)
    return [
        Diagnostic(
            rule="mismatched-property",
            severity=Severity.WARNING,
            message=f"expected {prop}: {value};",
            range=_declaration_range(scope, prop),
            scope_id=scope.css_scope_name,
            layer_id=layer.id,
            css_property=prop,
        )
        for prop, value in different.items()
    ]


ALL_RULES: list[RuleFunc] = [check_missing_properties, check_mismatched_properties]


def reconcile(scope: StylesheetScope, layer: Layer) -> list[Diagnostic]:
    diagnostics: list[Diagnostic] = []
    for rule in ALL_RULES:
        diagnostics.extend(rule(scope, layer))
    return diagnostics


class Reconciler:
    """Resolves links against the current trees and reconciles each pair."""

    def __init__(self, scopes: ScopeTree, layers: LayerTree) -> None:
        self.scopes = scopes
        self.layers = layers

    def resolve(self, layer_id: str, scope_id: str) -> tuple[StylesheetScope, Layer] | None:
        """Return the scope and layer for a stored pair, or ``None`` if either is gone."""
        layer = self.layers.get(layer_id)
        scope = self.scopes.get_scope(scope_id)
        if layer is None or scope is None:
            logger.debug("Ignoring unresolved link %s <-> %s", layer_id, scope_id)
            return None
        return scope, layer

    def diagnostics(self, pairs: Iterable[tuple[str, str] | Link]) -> list[Diagnostic]:
        """Diagnostics for every resolvable ``(layer_id, scope_id)`` pair."""
        diagnostics: list[Diagnostic] = []
        for pair in pairs:
            layer_id, scope_id = pair.ids if isinstance(pair, Link) else pair
            resolved = self.resolve(layer_id, scope_id)
            if resolved is not None:
                diagnostics.extend(reconcile(*resolved))
        return diagnostics
