"""DependencyGraph: lazy-built NetworkX view of a walk's dependency map.

The layering itself runs on plain sets; the NetworkX graph is only built
to list the cycles behind a layering failure. Commands that succeed never
build it.
"""

from __future__ import annotations

import itertools
from collections.abc import Iterable, Mapping

import networkx as nx

type _Graph = nx.DiGraph


def _canonical(cycle: list[str]) -> list[str]:
    """Rotate *cycle* so it starts at its smallest name."""
    if not cycle:
        return cycle
    start = cycle.index(min(cycle))
    return cycle[start:] + cycle[:start]


class DependencyGraph:
    """Directed ``depends-on`` graph over walked package names."""

    def __init__(self, dependencies: Mapping[str, Iterable[str]]) -> None:
        self._dependencies = dependencies
        self._graph: _Graph | None = None

    @property
    def graph(self) -> _Graph:
        """Return the graph, building it on first access."""
        if self._graph is None:
            self._graph = self._build()
        return self._graph

    def _build(self) -> _Graph:
        """Build the DiGraph; dangling targets become plain nodes."""
        g: _Graph = nx.DiGraph()
        g.add_nodes_from(self._dependencies)
        for name, targets in self._dependencies.items():
            for target in targets:
                g.add_edge(name, target)
        return g

    def cycles(self, among: Iterable[str] | None = None, *, limit: int = 10) -> list[list[str]]:
        """Up to *limit* simple cycles, optionally restricted to *among*.

        Each cycle starts at its smallest name; the list is sorted so the
        output is stable across runs.
        """
        g = self.graph if among is None else self.graph.subgraph(among)
        found = itertools.islice(nx.simple_cycles(g), max(limit, 0))
        return sorted(_canonical(list(c)) for c in found)
