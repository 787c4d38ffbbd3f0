"""Layer tree: design nodes decorated with identity, derived style and pruning.

A layer that carries no style of its own inherits the union of its pruned
children's styles, as long as no two children disagree on a property.
Wrapper layers inside a component that add nothing (no own style, and either
an only child or a single-child passthrough) are pruned: they are skipped in
child iteration and in breadcrumb paths, but the underlying node tree is
never modified.

The tree is rebuilt wholesale for every document snapshot.  All derived
values are memoized per ``Layer`` instance.
"""

from __future__ import annotations

import logging
import weakref
from functools import cached_property
from typing import Iterable, Iterator

from figsync.design.extractor import CssPropertyMap, extract_style
from figsync.model.node import DesignDocument, DesignNode, NodeType

logger = logging.getLogger(__name__)


class Layer:
    """One design node in the context of its parent."""

    def __init__(self, node: DesignNode, file_key: str, parent: Layer | None = None) -> None:
        self.node = node
        self.file_key = file_key
        self._parent = weakref.ref(parent) if parent is not None else None
        self.children: list[Layer] = [Layer(child, file_key, self) for child in node.children]

    def __repr__(self) -> str:
        return f"Layer(id={self.id!r}, name={self.name!r}, type={self.type.value})"

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    @property
    def id(self) -> str:
        """Globally unique id, ``<file key>:<node id>``."""
        return f"{self.file_key}:{self.node.id}"

    @property
    def node_id(self) -> str:
        return self.node.id

    @property
    def name(self) -> str:
        return self.node.name

    @property
    def type(self) -> NodeType:
        return self.node.type

    @property
    def parent(self) -> Layer | None:
        return self._parent() if self._parent is not None else None

    # ------------------------------------------------------------------
    # Style
    # ------------------------------------------------------------------

    @cached_property
    def own_style(self) -> CssPropertyMap:
        return extract_style(self.node)

    @property
    def has_own_style(self) -> bool:
        return bool(self.own_style)

    @cached_property
    def derived_style(self) -> CssPropertyMap:
        """Own style, or the conflict-free union of the pruned children's styles.

        A document never has a style.  When two pruned children set the same
        property to different values the result is empty.
        """
        if self.type is NodeType.DOCUMENT:
            return {}
        if self.own_style:
            return self.own_style

        styles: CssPropertyMap = {}
        for child in self.pruned_children:
            for prop, value in child.derived_style.items():
                if prop in styles and styles[prop] != value:
                    logger.warning(
                        "Layer %s (%s): children disagree on %s (%r vs %r); no style derived",
                        self.id,
                        self.name,
                        prop,
                        styles[prop],
                        value,
                    )
                    return {}
                styles[prop] = value
        return styles

    @property
    def has_styles(self) -> bool:
        return bool(self.derived_style)

    def formatted_styles(self, indent: int = 0) -> str:
        """Return the derived style as ``prop: value;`` lines, tab-indented."""
        tab = "\t" * indent
        return "".join(f"{tab}{prop}: {value};\n" for prop, value in self.derived_style.items())

    def text_content(self) -> list[str]:
        """Return the characters of every text layer at or below this one."""
        if self.type is NodeType.TEXT:
            return [self.node.characters or ""]
        texts: list[str] = []
        for child in self.children:
            texts.extend(child.text_content())
        return texts

    # ------------------------------------------------------------------
    # Pruning
    # ------------------------------------------------------------------

    @property
    def sibling_count(self) -> int:
        parent = self.parent
        return len(parent.children) - 1 if parent is not None else 0

    @cached_property
    def is_within_component(self) -> bool:
        parent = self.parent
        if parent is None:
            return False
        return parent.type is NodeType.COMPONENT or parent.is_within_component

    @cached_property
    def is_unnecessary(self) -> bool:
        return (
            self.is_within_component
            and not self.has_own_style
            and (self.sibling_count == 0 or len(self.children) == 1)
        )

    @cached_property
    def pruned_children(self) -> list[Layer]:
        """Children with every unnecessary child replaced by its own pruned children."""
        result: list[Layer] = []
        for child in self.children:
            if child.is_unnecessary:
                result.extend(child.pruned_children)
            else:
                result.append(child)
        return result

    @property
    def pruned_parent(self) -> Layer | None:
        parent = self.parent
        while parent is not None and parent.is_unnecessary:
            parent = parent.parent
        return parent

    @cached_property
    def path(self) -> list[str]:
        """Names from the root down to this layer, pruned ancestors left out."""
        parent = self.pruned_parent
        if parent is None:
            return [self.name]
        return [*parent.path, self.name]

    def walk(self) -> Iterator[Layer]:
        """Yield this layer and every descendant, parents first."""
        yield self
        for child in self.children:
            yield from child.walk()


class LayerTree:
    """All layers of one or more document snapshots, indexed by layer id."""

    def __init__(self, roots: Iterable[Layer] = ()) -> None:
        self.roots: list[Layer] = list(roots)
        self._index: dict[str, Layer] = {}
        for root in self.roots:
            for layer in root.walk():
                self._index[layer.id] = layer

    @classmethod
    def from_documents(cls, documents: Iterable[DesignDocument]) -> LayerTree:
        """Build root layers from the top-level nodes of every page of every document."""
        roots: list[Layer] = []
        for document in documents:
            roots.extend(Layer(node, document.key) for node in document.top_level_nodes)
        roots.sort(key=lambda layer: layer.name.lower())
        return cls(roots)

    def __len__(self) -> int:
        return len(self._index)

    def __contains__(self, layer_id: object) -> bool:
        return layer_id in self._index

    def get(self, layer_id: str) -> Layer | None:
        return self._index.get(layer_id)

    def walk(self) -> Iterator[Layer]:
        for root in self.roots:
            yield from root.walk()

    def visible_children(
        self,
        layer: Layer | None = None,
        *,
        ignore_internal: bool = False,
        internal_prefix: str = "_",
    ) -> list[Layer]:
        """Return what a tree view shows under *layer* (the roots when ``None``).

        Pruned children, optionally without internal layers, sorted by name.
        """
        children = list(self.roots) if layer is None else list(layer.pruned_children)
        if ignore_internal:
            children = [c for c in children if not c.name.startswith(internal_prefix)]
        return sorted(children, key=lambda c: c.name.lower())
