"""CSS value handling: shorthand expansion and property-aware comparison."""

from figsync.css.compare import VARIABLE_RE, compare_property, parse_rgba, variables_in
from figsync.css.shorthand import expand_properties, expand_property, is_shorthand

__all__ = [
    "VARIABLE_RE",
    "compare_property",
    "expand_properties",
    "expand_property",
    "is_shorthand",
    "parse_rgba",
    "variables_in",
]
