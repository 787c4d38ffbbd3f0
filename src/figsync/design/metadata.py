"""Selector directives embedded in component descriptions and layer names.

A directive is written in angle brackets, e.g. ``Primary button <.button>``.
"""

from __future__ import annotations

import re

_DIRECTIVE_RE = re.compile(r"<([^\s>]+)(\s|>)+")


def extract_selector(text: str | None) -> str | None:
    """Return the first selector directive in *text*, or ``None`` when there is none."""
    if not text:
        return None
    match = _DIRECTIVE_RE.search(text)
    return match.group(1) if match else None
