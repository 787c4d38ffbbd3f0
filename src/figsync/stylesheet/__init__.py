"""Stylesheet side: LESS-like text parsed into a tree of selector scopes."""

from figsync.stylesheet.parser import (
    Block,
    Declaration,
    Stylesheet,
    build_scope_tree,
    parse_statements,
    selector_range,
)
from figsync.stylesheet.scope import ScopeTree, StylesheetScope

__all__ = [
    "Block",
    "Declaration",
    "ScopeTree",
    "Stylesheet",
    "StylesheetScope",
    "build_scope_tree",
    "parse_statements",
    "selector_range",
]
