"""figsync model layer -- public type re-exports."""

from figsync.model.diagnostic import Diagnostic, Severity
from figsync.model.link import IdOrder, Link
from figsync.model.node import (
    Color,
    ComponentMeta,
    DesignDocument,
    DesignNode,
    Effect,
    NodeType,
    Paint,
    StyleMeta,
    TypeStyle,
)
from figsync.model.source import SourcePosition, SourceRange

__all__ = [
    # node
    "NodeType",
    "Color",
    "Paint",
    "Effect",
    "TypeStyle",
    "DesignNode",
    "ComponentMeta",
    "StyleMeta",
    "DesignDocument",
    # source
    "SourcePosition",
    "SourceRange",
    # diagnostic
    "Severity",
    "Diagnostic",
    # link
    "IdOrder",
    "Link",
]
