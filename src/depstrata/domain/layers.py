"""Layering: peel the dependency map into leaves-first layers.

Kahn-style topological peeling that tolerates declared cycles. Each pass
collects every unsettled node whose remaining dependencies are either
empty or consist only of nodes in the circular-exception set, then
removes that layer from the unsettled set and from every remaining
dependency set.

INVARIANT: a pass that settles nothing while nodes remain is fatal.
The caller gets every stuck node name and no partial hierarchy.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from depstrata.domain.errors import LayeringError

logger = logging.getLogger(__name__)

type Layer = frozenset[str]


def build_layers(
    dependencies: Mapping[str, Iterable[str]],
    circular: Iterable[str] = (),
) -> list[Layer]:
    """Partition the nodes of *dependencies* into ordered layers.

    Args:
        dependencies: Node name -> names it depends on. Only keys are
            layered; names that never appear as keys (dangling targets)
            are ignored.
        circular: Names whose mutual dependencies are known to be benign.

    Returns:
        Layers, leaves first. Every key appears in exactly one layer.

    Raises:
        LayeringError: a pass made no progress (an undeclared cycle).
    """
    exceptions = frozenset(circular)
    remaining: dict[str, set[str]] = {name: set(deps) for name, deps in dependencies.items()}
    unsettled = set(remaining)
    hierarchy: list[Layer] = []

    while unsettled:
        logger.debug("layering pass %d: %d unsettled", len(hierarchy) + 1, len(unsettled))
        level: set[str] = set()
        for name in unsettled:
            deps = remaining[name]
            # things we still depend on at this level, minus known cycles
            both = deps & unsettled
            neither = both - exceptions
            if not deps or not neither:
                level.add(name)

        if not level:
            raise LayeringError(unsettled)

        unsettled -= level
        for name in unsettled:
            remaining[name] -= level

        logger.debug("layer %d: %s", len(hierarchy) + 1, ", ".join(sorted(level)))
        hierarchy.append(frozenset(level))

    return hierarchy


def layer_index(hierarchy: Iterable[Layer]) -> dict[str, int]:
    """Map each node name to the index of its layer."""
    return {name: i for i, layer in enumerate(hierarchy) for name in layer}
