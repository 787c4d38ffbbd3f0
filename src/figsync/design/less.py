"""LESS generation from design documents.

Rules nest: adding a child removes from it (and, recursively, from its own
children) every property that merely repeats the parent's value, since the
cascade already provides it.

A whole stylesheet is assembled from dedicated frames: literal tokens, color
samples and typography samples, followed by the component rules.
"""

from __future__ import annotations

import logging
import re

from figsync.config import SyncConfig
from figsync.design.color import color_string
from figsync.design.dependencies import sort_by_dependency
from figsync.design.extractor import CssPropertyMap, extract_style
from figsync.design.metadata import extract_selector
from figsync.model.node import DesignDocument, DesignNode, NodeType

logger = logging.getLogger(__name__)

_NON_WORD_RE = re.compile(r"\W", re.ASCII)


class LessRule:
    """A selector block with its properties and nested rules."""

    def __init__(
        self,
        selector: str,
        node: DesignNode | None = None,
        parent: LessRule | None = None,
    ) -> None:
        self.selector = selector
        self.props: CssPropertyMap = extract_style(node) if node is not None else {}
        self.parent: LessRule | None = None
        self.children: list[LessRule] = []
        self.depth = 0
        if parent is not None:
            parent.add_child(self)

    def add_child(self, rule: LessRule) -> None:
        if any(child is rule for child in self.children):
            return
        self.children.append(rule)
        rule.parent = self
        rule._set_depth(self.depth + 1)
        self.clean_styles()

    def _set_depth(self, depth: int) -> None:
        self.depth = depth
        for child in self.children:
            child._set_depth(depth + 1)

    def clean_styles(self) -> None:
        """Drop child properties that repeat this rule's value, all the way down."""
        for child in self.children:
            for prop in list(child.props):
                if self.props.get(prop) == child.props[prop]:
                    del child.props[prop]
            child.clean_styles()

    def _line(self, text: str) -> str:
        return "\t" * self.depth + text + "\n"

    def render(self) -> str:
        out = self._line(f"{self.selector} {{")
        for prop, value in self.props.items():
            out += self._line(f"\t{prop}: {value};")
        for child in self.children:
            out += "\n" + child.render()
        out += self._line("}")
        return out

    def __str__(self) -> str:
        return self.render()


def generate_component_rules(document: DesignDocument, frame: DesignNode | None = None) -> str:
    """Render a rule for every component whose description names a selector.

    Components (of *frame*, itself included, when given) are emitted in dependency order;
    components with unresolved dependencies or without a selector directive
    produce nothing.
    """
    if frame is None:
        candidates = document.component_nodes()
    else:
        candidates = [n for n in (frame, *frame.walk()) if n.type is NodeType.COMPONENT]
    out = ""
    for component in sort_by_dependency(candidates):
        meta = document.components.get(component.id)
        selector = extract_selector(meta.description) if meta is not None else None
        if selector:
            out += LessRule(selector, component).render()
    return out


def generate_typography_rules(frame: DesignNode, internal_prefix: str = "_") -> str:
    """Render the text styles shown in a typography frame.

    The text layer whose name mentions ``body`` becomes the outer rule; every
    other text layer with a selector directive in its name is nested in it.
    """
    texts = [
        node
        for node in frame.find_all_by_type(NodeType.TEXT)
        if not node.name.startswith(internal_prefix)
    ]
    body = next((node for node in texts if "body" in node.name), None)
    if body is None:
        return ""
    root = LessRule(extract_selector(body.name) or "body", body)
    for node in texts:
        if node is body or "body" in node.name:
            continue
        selector = extract_selector(node.name)
        if selector:
            LessRule(selector, node, parent=root)
    return root.render()


# ---------------------------------------------------------------------------
# Whole stylesheet
# ---------------------------------------------------------------------------

GLOBAL_STYLES = "html { box-sizing: border-box; }\n*, *:before, *:after { box-sizing: inherit; }\n"

COLOR_SAMPLE_NAME = "Main Color"


def clean_name(name: str) -> str:
    """Turn a style name into a variable name: ``"Brand / Primary 1"`` -> ``brand-primary-1``."""
    words = (_NON_WORD_RE.sub("", word) for word in name.split(" "))
    return "-".join(word for word in words if word).lower()


def file_key_comment(key: str) -> str:
    return f"/* Figma file: <<{key}>> (DO NOT REMOVE) */"


def add_block(content: str, comment: str | None = None) -> str:
    """Return *content* under an optional comment header, followed by a blank line."""
    header = f"/*\n\t{comment}\n*/\n" if comment else ""
    return header + content + "\n\n"


def literal_tokens(frame: DesignNode) -> str:
    """Render the ``@key: value;`` text layers of a tokens frame, one per line."""
    out = ""
    for node in frame.find_all_by_type(NodeType.TEXT):
        text = node.characters or ""
        if text.startswith("@") and ":" in text:
            out += text + "\n"
        else:
            logger.warning(
                "Literal token %r not included; tokens must look like '@key: value;'", text
            )
    return out


def color_tokens(frame: DesignNode, document: DesignDocument) -> str:
    """Render a variable for every color sample of a colors frame.

    A sample is a RECTANGLE named ``Main Color`` whose fill is bound to a
    published style; the variable is named after that style.
    """
    out = ""
    for node in frame.find_all(
        lambda n: n.type is NodeType.RECTANGLE and n.name == COLOR_SAMPLE_NAME
    ):
        meta = document.styles.get(node.styles.get("fill", ""))
        if meta is None:
            logger.warning("Color sample %s has no published fill style; skipped", node.id)
            continue
        fill = node.fills[0] if node.fills else None
        if fill is None or not fill.is_solid:
            continue
        assert fill.color is not None
        out += f"@{clean_name(meta.name)}: {color_string(fill.color, fill.opacity)};\n"
    return out


def generate_stylesheet(document: DesignDocument, config: SyncConfig | None = None) -> str:
    """Render a complete stylesheet for *document*.

    Sections, in order: the file-key comment, literal tokens, color tokens,
    global styles, typography and components.  A frame named in *config*
    that the document lacks yields an empty section.  Components are taken
    from ``config.component_frames``, or from every top-level frame that is
    not one of the tokens, colors or typography frames.
    """
    config = config or SyncConfig()
    roots = document.root_nodes

    def frame(name: str) -> DesignNode | None:
        node = roots.get(name)
        if node is None:
            logger.warning("Document %s has no top-level frame named %r", document.key, name)
        return node

    tokens = frame(config.tokens_frame)
    colors = frame(config.colors_frame)
    typography = frame(config.typography_frame)

    if config.component_frames:
        names = list(config.component_frames)
    else:
        special = {config.tokens_frame, config.colors_frame, config.typography_frame}
        names = [name for name in roots if name not in special]
    components = ""
    for name in names:
        node = frame(name)
        if node is not None:
            components += generate_component_rules(document, node)

    return "".join(
        [
            add_block(file_key_comment(document.key)),
            add_block(literal_tokens(tokens) if tokens else "", "Tokens"),
            add_block(color_tokens(colors, document) if colors else "", "Colors"),
            add_block(GLOBAL_STYLES, "Global styles"),
            add_block(
                generate_typography_rules(typography, config.internal_layer_prefix)
                if typography
                else "",
                "Typography",
            ),
            add_block(components, "Components"),
        ]
    )
