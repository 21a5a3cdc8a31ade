"""Exception hierarchy for depstrata."""

from __future__ import annotations

from collections.abc import Iterable


class DepstrataError(Exception):
    """Base class for all depstrata errors."""


class LayeringError(DepstrataError):
    """The layering loop completed a pass without settling any node.

    Either the dependency map holds a real cycle or the circular-exception
    set is missing an entry. ``stuck`` names every node left unsettled.
    """

    def __init__(self, stuck: Iterable[str]) -> None:
        self.stuck = frozenset(stuck)
        super().__init__(
            "Layering made no progress; unresolved cycle among: " + ", ".join(sorted(self.stuck))
        )


class TreeLoadError(DepstrataError):
    """The package tree could not be loaded from disk."""
