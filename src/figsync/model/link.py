"""Link model: an association between a design layer and a stylesheet scope."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from figsync.design.layers import Layer
    from figsync.stylesheet.scope import StylesheetScope


class IdOrder(Enum):
    """Which side of a link is used as the index key."""

    LAYER = "layer"
    SCOPE = "scope"


@dataclass(frozen=True)
class Link:
    """A link resolved against the current layer and scope trees.

    The persisted form is only the ``(layer_id, scope_id)`` pair; names and
    the breadcrumb path are filled in at resolution time.
    """

    layer_id: str
    scope_id: str
    layer_name: str = ""
    scope_name: str = ""
    layer_path: tuple[str, ...] = ()

    @classmethod
    def between(cls, layer: Layer, scope: StylesheetScope) -> Link:
        return cls(
            layer_id=layer.id,
            scope_id=scope.css_scope_name,
            layer_name=layer.name,
            scope_name=scope.display_name,
            layer_path=tuple(layer.path),
        )

    @property
    def ids(self) -> tuple[str, str]:
        return (self.layer_id, self.scope_id)

    def key(self, order: IdOrder) -> str:
        return self.layer_id if order is IdOrder.LAYER else self.scope_id
