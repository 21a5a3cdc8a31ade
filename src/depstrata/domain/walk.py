"""Graph walk: Mermaid edge annotations plus the per-node dependency map.

Depth-first from the root, in declaration order. Each ``(source, target)``
pair is recorded once per walk; that is also what stops the walk on
cyclic trees, since a node is only re-entered through a pair that has not
been recorded yet.

The walk keeps its own stack of edge iterators rather than recursing, so
deep trees never hit the interpreter's recursion limit. Visit order is
the same as the recursive version.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from depstrata.domain.mermaid import edge_annotation

if TYPE_CHECKING:
    from depstrata.domain.tree import Edge, Node

logger = logging.getLogger(__name__)

type OwnershipCheck = Callable[[str], bool]


@dataclass
class WalkResult:
    """Output of :func:`walk`.

    Attributes:
        annotations: One Mermaid edge line per recorded edge, in visit order.
        dependencies: Every entered node mapped to the names it depends on.
            Targets of dangling edges appear in the value sets but never as
            keys.
    """

    annotations: list[str] = field(default_factory=list)
    dependencies: dict[str, set[str]] = field(default_factory=dict)

    @property
    def nodes(self) -> set[str]:
        return set(self.dependencies)

    @property
    def dangling(self) -> set[str]:
        """Targets that were depended on but never entered."""
        targets = set().union(*self.dependencies.values())
        return targets - self.dependencies.keys()

    @property
    def edge_count(self) -> int:
        return sum(len(targets) for targets in self.dependencies.values())


def _edges(node: Node) -> Iterator[Edge]:
    """Yield well-formed edges of *node*; sparse data yields nothing."""
    for edge in node.edges_out or ():
        if edge is None or not edge.name:
            continue
        yield edge


def walk(
    root: Node,
    *,
    only_owned: bool = False,
    is_owned: OwnershipCheck | None = None,
) -> WalkResult:
    """Walk the tree under *root* and collect edges.

    Args:
        root: Tree root (the project itself).
        only_owned: Record only edges whose target passes *is_owned*.
        is_owned: Ownership predicate, required when *only_owned* is set.

    Edges out of dev-only nodes are never recorded.
    """
    if only_owned and is_owned is None:
        msg = "only_owned walk requires an ownership check"
        raise ValueError(msg)

    result = WalkResult()
    stack: list[tuple[Node, Iterator[Edge]]] = []

    def enter(node: Node) -> None:
        result.dependencies.setdefault(node.name, set())
        # dev-only nodes are recorded but contribute no edges
        stack.append((node, iter(()) if node.dev else _edges(node)))

    enter(root)
    while stack:
        node, edges = stack[-1]
        edge = next(edges, None)
        if edge is None:
            stack.pop()
            continue
        name = str(edge.name)
        if only_owned and is_owned is not None and not is_owned(name):
            continue
        seen = result.dependencies[node.name]
        if name in seen:
            continue
        seen.add(name)
        result.annotations.append(edge_annotation(node.name, name))
        if edge.to is not None:
            enter(edge.to)

    logger.debug(
        "walk complete: %d nodes, %d edges (only_owned=%s)",
        len(result.dependencies),
        result.edge_count,
        only_owned,
    )
    return result
