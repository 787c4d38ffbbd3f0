"""Selector scopes of a parsed stylesheet.

Each scope holds its own variables and properties and a weak reference to
its parent; the tree is owned from the base scope downwards.
"""

from __future__ import annotations

import weakref
from typing import Iterator

from figsync.css.compare import VARIABLE_RE
from figsync.model.source import SourceRange

PARENT_REFERENCE = "&"


class StylesheetScope:
    """A (possibly nested) selector block."""

    def __init__(self, selector: str, parent: StylesheetScope | None = None) -> None:
        self.selector = selector
        self._parent = weakref.ref(parent) if parent is not None else None
        self.variables: dict[str, str] = {}
        self.properties: dict[str, str] = {}
        self.children: list[StylesheetScope] = []
        self.ranges: dict[str, SourceRange] = {}

    def __repr__(self) -> str:
        return f"StylesheetScope({self.css_scope_name!r})"

    @property
    def parent(self) -> StylesheetScope | None:
        return self._parent() if self._parent is not None else None

    # ------------------------------------------------------------------
    # Selectors
    # ------------------------------------------------------------------

    @property
    def css_scope_name(self) -> str:
        """The flattened CSS selector, e.g. ``body .button:hover``."""
        parent = self.parent
        if parent is None:
            return self.selector
        if PARENT_REFERENCE in self.selector:
            return self.selector.replace(PARENT_REFERENCE, parent.css_scope_name)
        return f"{parent.css_scope_name} {self.selector}"

    @property
    def resolved_selector(self) -> str:
        return self.css_scope_name

    @property
    def display_name(self) -> str:
        """The selector with ``&`` substituted but without ancestor joining."""
        parent = self.parent
        if parent is not None and PARENT_REFERENCE in self.selector:
            return self.selector.replace(PARENT_REFERENCE, parent.display_name)
        return self.selector

    # ------------------------------------------------------------------
    # Variables and properties
    # ------------------------------------------------------------------

    def resolve_variable(self, name: str) -> str:
        """Value of ``@name`` here or in the nearest ancestor, else ``@name`` itself."""
        scope: StylesheetScope | None = self
        while scope is not None:
            if name in scope.variables:
                return scope.variables[name]
            scope = scope.parent
        return f"@{name}"

    def add_variable(self, name: str, value: str, range: SourceRange | None = None) -> None:
        self.variables[name] = value
        self.add_range(f"@{name}", range)

    def add_property(self, prop: str, value: str, range: SourceRange | None = None) -> None:
        """Store *prop* with every variable reference in *value* resolved now."""
        self.properties[prop] = VARIABLE_RE.sub(lambda m: self.resolve_variable(m.group(0)[1:]), value)
        self.add_range(prop, range)

    @property
    def styles(self) -> dict[str, str]:
        """Own properties layered over every ancestor's."""
        parent = self.parent
        if parent is None:
            return dict(self.properties)
        return {**parent.styles, **self.properties}

    # ------------------------------------------------------------------
    # Ranges
    # ------------------------------------------------------------------

    def add_range(self, key: str, range: SourceRange | None) -> None:
        if range is not None:
            self.ranges[key] = range

    def get_range(self, key: str) -> SourceRange | None:
        """Range recorded for *key*, falling back to the selector's range."""
        if key in self.ranges:
            return self.ranges[key]
        return self.ranges.get(self.selector)

    @property
    def selector_range(self) -> SourceRange | None:
        return self.ranges.get(self.selector)

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------

    def walk(self) -> Iterator[StylesheetScope]:
        """Yield this scope and its descendants in document order."""
        yield self
        for child in self.children:
            yield from child.walk()

    def all_selectors(self) -> list[str]:
        return [scope.css_scope_name for scope in self.walk()]


class ScopeTree:
    """The scopes of one parse, rooted at the synthetic base scope."""

    def __init__(self, base: StylesheetScope) -> None:
        self.base = base

    def __len__(self) -> int:
        return sum(1 for _ in self.base.walk())

    def __iter__(self) -> Iterator[StylesheetScope]:
        return self.base.walk()

    def get_scope(self, selector: str) -> StylesheetScope | None:
        """Depth-first search by full CSS selector."""
        for scope in self.base.walk():
            if scope.css_scope_name == selector:
                return scope
        return None

    def get_all_selectors(self) -> list[str]:
        return self.base.all_selectors()
