"""Design side: style extraction, layer tree, dependency ordering and rule generation."""

from figsync.design.client import DesignClient
from figsync.design.color import color_string, format_number, px
from figsync.design.dependencies import instance_dependencies, sort_by_dependency
from figsync.design.extractor import CssPropertyMap, extract_style
from figsync.design.layers import Layer, LayerTree
from figsync.design.less import (
    LessRule,
    clean_name,
    color_tokens,
    generate_component_rules,
    generate_stylesheet,
    generate_typography_rules,
    literal_tokens,
)
from figsync.design.metadata import extract_selector

__all__ = [
    "CssPropertyMap",
    "DesignClient",
    "Layer",
    "LayerTree",
    "LessRule",
    "clean_name",
    "color_string",
    "color_tokens",
    "extract_selector",
    "extract_style",
    "format_number",
    "generate_component_rules",
    "generate_stylesheet",
    "generate_typography_rules",
    "instance_dependencies",
    "literal_tokens",
    "px",
    "sort_by_dependency",
]
