"""Design document model: nodes, paints, effects and the document snapshot.

The design source delivers an untyped JSON tree.  ``DesignNode.from_dict``
turns it into a closed set of node kinds (``NodeType``) with explicit
optional attributes; ``None`` means "this kind of node does not carry the
attribute", which is what the style extractor tests for.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Iterator


class NodeType(Enum):
    """Kind of a design node."""

    DOCUMENT = "DOCUMENT"
    CANVAS = "CANVAS"
    FRAME = "FRAME"
    GROUP = "GROUP"
    SECTION = "SECTION"
    COMPONENT = "COMPONENT"
    COMPONENT_SET = "COMPONENT_SET"
    INSTANCE = "INSTANCE"
    TEXT = "TEXT"
    RECTANGLE = "RECTANGLE"
    ELLIPSE = "ELLIPSE"
    VECTOR = "VECTOR"
    LINE = "LINE"
    STAR = "STAR"
    REGULAR_POLYGON = "REGULAR_POLYGON"
    BOOLEAN_OPERATION = "BOOLEAN_OPERATION"
    SLICE = "SLICE"
    OTHER = "OTHER"

    @classmethod
    def parse(cls, value: object) -> NodeType:
        """Return the matching kind, or ``OTHER`` for kinds we do not know."""
        try:
            return cls(value)
        except ValueError:
            return cls.OTHER


@dataclass(frozen=True)
class Color:
    """An RGBA color with channels in the [0, 1] range."""

    r: float
    g: float
    b: float
    a: float = 1.0

    @classmethod
    def from_dict(cls, data: Any) -> Color | None:
        if not isinstance(data, dict):
            return None
        try:
            return cls(
                r=float(data.get("r", 0.0)),
                g=float(data.get("g", 0.0)),
                b=float(data.get("b", 0.0)),
                a=float(data.get("a", 1.0)),
            )
        except (TypeError, ValueError):
            return None


@dataclass(frozen=True)
class Paint:
    """A fill or stroke paint."""

    type: str
    color: Color | None = None
    opacity: float = 1.0

    @property
    def is_solid(self) -> bool:
        return self.type == "SOLID" and self.color is not None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Paint:
        opacity = data.get("opacity", 1.0)
        return cls(
            type=str(data.get("type", "")),
            color=Color.from_dict(data.get("color")),
            opacity=float(opacity) if isinstance(opacity, (int, float)) else 1.0,
        )


@dataclass(frozen=True)
class Effect:
    """A layer effect (shadows, blurs)."""

    type: str
    color: Color | None = None
    offset_x: float = 0.0
    offset_y: float = 0.0
    radius: float = 0.0

    @property
    def is_shadow(self) -> bool:
        return self.type in ("DROP_SHADOW", "INNER_SHADOW")

    @property
    def is_inset(self) -> bool:
        return self.type == "INNER_SHADOW"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Effect:
        offset = data.get("offset")
        if not isinstance(offset, dict):
            offset = {}
        return cls(
            type=str(data.get("type", "")),
            color=Color.from_dict(data.get("color")),
            offset_x=_number(offset.get("x")) or 0.0,
            offset_y=_number(offset.get("y")) or 0.0,
            radius=_number(data.get("radius")) or 0.0,
        )


@dataclass(frozen=True)
class TypeStyle:
    """Typography attributes of a text node."""

    font_family: str | None = None
    font_size: float | None = None
    font_weight: float | None = None
    line_height_px: float | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TypeStyle:
        family = data.get("fontFamily")
        return cls(
            font_family=str(family) if family else None,
            font_size=_number(data.get("fontSize")),
            font_weight=_number(data.get("fontWeight")),
            line_height_px=_number(data.get("lineHeightPx")),
        )


def _number(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return value


def _paints(value: Any) -> tuple[Paint, ...] | None:
    if not isinstance(value, list):
        return None
    return tuple(Paint.from_dict(p) for p in value if isinstance(p, dict))


@dataclass(frozen=True)
class DesignNode:
    """A single node of the design document tree (read-only)."""

    id: str
    name: str = ""
    type: NodeType = NodeType.OTHER
    children: tuple[DesignNode, ...] = ()
    fills: tuple[Paint, ...] | None = None
    strokes: tuple[Paint, ...] | None = None
    stroke_weight: float | None = None
    corner_radius: float | None = None
    effects: tuple[Effect, ...] | None = None
    style: TypeStyle | None = None
    characters: str | None = None
    component_id: str | None = None
    styles: dict[str, str] = field(default_factory=dict, compare=False)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DesignNode:
        """Build a node (and its subtree) from design-source JSON.

        Attributes that are absent or ill-shaped are dropped rather than
        rejected, so a partially broken document still yields a tree.
        """
        children = data.get("children")
        effects = data.get("effects")
        style = data.get("style")
        characters = data.get("characters")
        component_id = data.get("componentId")
        styles = data.get("styles")
        return cls(
            id=str(data.get("id", "")),
            name=str(data.get("name", "")),
            type=NodeType.parse(data.get("type")),
            children=tuple(
                cls.from_dict(c) for c in children if isinstance(c, dict)
            )
            if isinstance(children, list)
            else (),
            fills=_paints(data.get("fills")),
            strokes=_paints(data.get("strokes")),
            stroke_weight=_number(data.get("strokeWeight")),
            corner_radius=_number(data.get("cornerRadius")),
            effects=tuple(Effect.from_dict(e) for e in effects if isinstance(e, dict))
            if isinstance(effects, list)
            else None,
            style=TypeStyle.from_dict(style) if isinstance(style, dict) else None,
            characters=characters if isinstance(characters, str) else None,
            component_id=str(component_id) if component_id else None,
            styles={str(k): str(v) for k, v in styles.items()} if isinstance(styles, dict) else {},
        )

    def walk(self) -> Iterator[DesignNode]:
        """Yield every descendant depth-first, parents before children."""
        for child in self.children:
            yield child
            yield from child.walk()

    def find_all(self, condition: Callable[[DesignNode], bool]) -> list[DesignNode]:
        """Return all descendants matching *condition* (the node itself excluded)."""
        return [n for n in self.walk() if condition(n)]

    def find_all_by_type(self, node_type: NodeType) -> list[DesignNode]:
        return self.find_all(lambda n: n.type is node_type)


@dataclass(frozen=True)
class ComponentMeta:
    """Component metadata published alongside the document tree."""

    id: str
    name: str = ""
    description: str = ""


@dataclass(frozen=True)
class StyleMeta:
    """A published style (fill, text, effect or grid) referenced by nodes."""

    id: str
    style_type: str = ""
    name: str = ""


@dataclass(frozen=True)
class DesignDocument:
    """A versioned snapshot of one design file.

    ``last_modified`` is the only staleness signal: two snapshots of the same
    key with the same ``last_modified`` are interchangeable.
    """

    key: str
    name: str
    last_modified: str
    document: DesignNode
    components: dict[str, ComponentMeta] = field(default_factory=dict)
    styles: dict[str, StyleMeta] = field(default_factory=dict)
    payload: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_response(cls, key: str, data: dict[str, Any]) -> DesignDocument:
        """Build a snapshot from a design-source file response."""
        root = data.get("document")
        components: dict[str, ComponentMeta] = {}
        raw_components = data.get("components")
        if not isinstance(raw_components, dict):
            raw_components = {}
        for cid, meta in raw_components.items():
            if not isinstance(meta, dict):
                continue
            components[cid] = ComponentMeta(
                id=cid,
                name=str(meta.get("name", "")),
                description=str(meta.get("description") or ""),
            )
        styles: dict[str, StyleMeta] = {}
        raw_styles = data.get("styles")
        if not isinstance(raw_styles, dict):
            raw_styles = {}
        for sid, meta in raw_styles.items():
            if not isinstance(meta, dict):
                continue
            styles[sid] = StyleMeta(
                id=sid,
                style_type=str(meta.get("styleType", "")),
                name=str(meta.get("name", "")),
            )
        return cls(
            key=key,
            name=str(data.get("name", "")),
            last_modified=str(data.get("lastModified", "")),
            document=DesignNode.from_dict(root)
            if isinstance(root, dict)
            else DesignNode(id="0:0", type=NodeType.DOCUMENT),
            components=components,
            styles=styles,
            payload=data,
        )

    @property
    def root_nodes(self) -> dict[str, DesignNode]:
        """Top-level nodes by name, in page order; a later name wins."""
        return {n.name: n for page in self.document.children for n in page.children}

    @property
    def top_level_nodes(self) -> list[DesignNode]:
        """The first children of every page, sorted by name."""
        nodes = [n for page in self.document.children for n in page.children]
        return sorted(nodes, key=lambda n: n.name.lower())

    def component_nodes(self) -> list[DesignNode]:
        """Every COMPONENT node in the document, in document order."""
        return self.document.find_all_by_type(NodeType.COMPONENT)
