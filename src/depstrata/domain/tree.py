"""Package tree model: nodes and the edges between them.

Trees are produced by an external loader (see
:mod:`depstrata.infrastructure.lockfile`) and treated as read-only during
analysis. Nodes compare by identity so that cyclic trees can be built
without recursing through ``__eq__``/``__hash__``.
"""

from __future__ import annotations

from dataclasses import dataclass, field


def split_scope(name: str) -> tuple[str | None, str]:
    """Split a package name into ``(scope, local_name)``.

    Examples:
        >>> split_scope("@npmcli/arborist")
        ('npmcli', 'arborist')
        >>> split_scope("semver")
        (None, 'semver')
        >>> split_scope("@broken")
        ('broken', '')
    """
    if not name.startswith("@"):
        return None, name
    parts = name[1:].split("/", 1)
    if len(parts) == 2:
        return parts[0], parts[1]
    return parts[0], ""


@dataclass(eq=False)
class Edge:
    """A dependency declared by a node.

    ``to`` is None for dangling edges (optional or peer dependencies that
    are not installed in this tree).
    """

    name: str | None
    to: Node | None = None


@dataclass(eq=False)
class Node:
    """A resolved package in the tree."""

    name: str
    edges_out: list[Edge] | None = field(default_factory=list)
    dev: bool = False
    location: str = ""

    @property
    def scope(self) -> str | None:
        """Namespace of the package (``npmcli`` for ``@npmcli/fs``), if any."""
        return split_scope(self.name)[0]

    def add_edge(self, name: str, to: Node | None = None) -> Edge:
        """Append an outgoing edge and return it."""
        if self.edges_out is None:
            self.edges_out = []
        edge = Edge(name=name, to=to)
        self.edges_out.append(edge)
        return edge

    def __repr__(self) -> str:
        return f"Node({self.name!r}, edges={len(self.edges_out or [])}, dev={self.dev})"
