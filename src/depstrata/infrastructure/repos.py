"""Known repository list: newline-delimited repo names.

The file is regenerated by hand from the organization's repo listing;
blank lines and ``#`` comments are ignored.
"""

from __future__ import annotations

from pathlib import Path


def parse_known_repos(text: str) -> frozenset[str]:
    """Parse repo names from the contents of a repo list."""
    names: set[str] = set()
    for line in text.splitlines():
        name = line.strip()
        if name and not name.startswith("#"):
            names.add(name)
    return frozenset(names)


def read_known_repos(path: Path) -> frozenset[str]:
    """Read a repo list from *path*.

    Raises:
        FileNotFoundError: *path* does not exist.
    """
    return parse_known_repos(path.read_text(encoding="utf-8"))
