"""Dependency ordering of components.

A component depends on every component it places an instance of.  The
ordering puts each component after all of its dependencies; components whose
dependencies never resolve (a cycle, or an instance of a component outside
the batch) are dropped from the result and logged.
"""

from __future__ import annotations

import logging
from typing import Sequence

from figsync.model.node import DesignNode, NodeType

logger = logging.getLogger(__name__)


def instance_dependencies(component: DesignNode) -> set[str]:
    """Return the component ids of every instance inside *component*."""
    return {
        node.component_id
        for node in component.find_all_by_type(NodeType.INSTANCE)
        if node.component_id
    }


def sort_by_dependency(components: Sequence[DesignNode]) -> list[DesignNode]:
    """Return *components* ordered so that dependencies come first.

    Repeated passes over the remaining components move every component whose
    dependencies are all placed already; a component placed earlier in the
    same pass counts.  The loop stops as soon as a pass places nothing.
    """
    pending: dict[str, tuple[DesignNode, set[str]]] = {
        c.id: (c, instance_dependencies(c)) for c in components
    }
    ordered: list[DesignNode] = []
    placed: set[str] = set()

    progress = True
    while pending and progress:
        progress = False
        for component_id in list(pending):
            component, dependencies = pending[component_id]
            if dependencies <= placed:
                ordered.append(component)
                placed.add(component_id)
                del pending[component_id]
                progress = True

    if pending:
        logger.warning(
            "Could not resolve dependencies for %d component(s); dropping %s",
            len(pending),
            sorted(pending),
        )
    return ordered
