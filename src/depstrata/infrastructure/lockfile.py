"""npm lockfile reader: builds a :class:`~depstrata.domain.tree.Node` tree.

Reads the ``packages`` section of a v2/v3 ``package-lock.json``. Every
package location becomes one node; dependency names are resolved the way
node resolves ``require()``: ``<location>/node_modules/<name>``, then each
parent directory in turn, up to the root ``node_modules``. Names that
never resolve become dangling edges.

Workspace packages appear twice in a lockfile: a ``link: true`` entry
under ``node_modules`` and the real entry at the workspace folder. Edges
to the link land on the real entry.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from depstrata.domain.errors import TreeLoadError
from depstrata.domain.tree import Node

logger = logging.getLogger(__name__)

ROOT_LOCATION = ""

# Order matters: it is the order edges are walked in.
_DEP_FIELDS = ("dependencies", "optionalDependencies", "peerDependencies")
_DEV_FIELD = "devDependencies"


def _name_from_location(location: str) -> str:
    """Derive a package name from its install location.

    Examples:
        >>> _name_from_location("node_modules/a/node_modules/@b/c")
        '@b/c'
        >>> _name_from_location("workspaces/arborist")
        'arborist'
    """
    if "node_modules/" in location:
        return location.rsplit("node_modules/", 1)[1]
    return location.rsplit("/", 1)[-1]


@dataclass(frozen=True)
class Lockfile:
    """Parsed ``package-lock.json``."""

    path: Path
    name: str | None
    packages: dict[str, dict[str, Any]]

    @classmethod
    def read(cls, path: Path) -> Lockfile:
        """Read and minimally validate a lockfile.

        Raises:
            TreeLoadError: missing file, invalid JSON, or no ``packages``
                section (v1 lockfiles are not supported).
        """
        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as exc:
            msg = f"Cannot read lockfile {path}: {exc.strerror or exc}"
            raise TreeLoadError(msg) from exc
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            msg = f"Invalid JSON in {path}: {exc}"
            raise TreeLoadError(msg) from exc

        packages = data.get("packages") if isinstance(data, dict) else None
        if not isinstance(packages, dict) or ROOT_LOCATION not in packages:
            msg = f"{path} has no 'packages' section (lockfileVersion 2 or later required)"
            raise TreeLoadError(msg)
        if not isinstance(packages[ROOT_LOCATION], dict):
            msg = f"{path} has a malformed root package entry"
            raise TreeLoadError(msg)

        return cls(path=path, name=data.get("name"), packages=packages)

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def _entry(self, location: str) -> dict[str, Any]:
        entry = self.packages.get(location)
        return entry if isinstance(entry, dict) else {}

    def _real_location(self, location: str) -> str | None:
        """Follow a workspace link to its target location."""
        entry = self._entry(location)
        if entry.get("link"):
            resolved = entry.get("resolved")
            if isinstance(resolved, str) and resolved in self.packages:
                return resolved
            return None
        return location

    def resolve(self, location: str, name: str) -> str | None:
        """Location that ``name`` resolves to when required from *location*."""
        base = location
        while True:
            candidate = f"{base}/node_modules/{name}" if base else f"node_modules/{name}"
            if candidate in self.packages:
                return self._real_location(candidate)
            if not base:
                return None
            base = base.rpartition("/")[0]

    def workspace_locations(self) -> list[str]:
        """Locations of workspace packages (targets of ``link`` entries)."""
        found: list[str] = []
        for location in self.packages:
            if self._entry(location).get("link"):
                real = self._real_location(location)
                if real is not None and real not in found:
                    found.append(real)
        return found

    def workspace_names(self, *, public_only: bool = False) -> list[str]:
        """Package names of linked workspaces.

        With *public_only*, workspaces whose ``package.json`` sets
        ``"private": true`` are left out.
        """
        return [
            self.package_name(loc)
            for loc in self.workspace_locations()
            if not (public_only and self.is_private(loc))
        ]

    def is_private(self, location: str) -> bool:
        """Whether the package.json at *location* is marked private.

        The lockfile does not record ``private``, so this reads the
        manifest next to the lockfile. A missing or unreadable manifest
        counts as public.
        """
        manifest = self.path.parent / location / "package.json"
        try:
            data = json.loads(manifest.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            logger.debug("No usable manifest at %s: %s", manifest, exc)
            return False
        return isinstance(data, dict) and data.get("private") is True

    def package_name(self, location: str) -> str:
        name = self._entry(location).get("name")
        if isinstance(name, str) and name:
            return name
        return _name_from_location(location)

    # ------------------------------------------------------------------
    # Tree construction
    # ------------------------------------------------------------------

    def tree(self, root_name: str | None = None) -> Node:
        """Build the node tree rooted at the project itself."""
        workspaces = self.workspace_locations()
        nodes: dict[str, Node] = {}

        for location, entry in self.packages.items():
            if not isinstance(entry, dict) or entry.get("link"):
                continue
            nodes[location] = Node(
                name=self.package_name(location),
                dev=bool(entry.get("dev", False)),
                location=location,
            )

        root = nodes[ROOT_LOCATION]
        root.name = root_name or self.name or self._entry(ROOT_LOCATION).get("name") or "root"

        dangling = 0
        for location, node in nodes.items():
            entry = self._entry(location)
            fields = list(_DEP_FIELDS)
            if location == ROOT_LOCATION or location in workspaces:
                fields.append(_DEV_FIELD)
            for field_name in fields:
                declared = entry.get(field_name)
                if not isinstance(declared, dict):
                    continue
                for dep_name in declared:
                    target = self.resolve(location, dep_name)
                    if target is None:
                        dangling += 1
                    node.add_edge(dep_name, nodes.get(target) if target is not None else None)

        # the root also depends on every workspace, declared or not
        declared_by_root = {e.name for e in root.edges_out or []}
        for location in workspaces:
            ws_name = self.package_name(location)
            if ws_name not in declared_by_root and location in nodes:
                root.add_edge(ws_name, nodes[location])
                declared_by_root.add(ws_name)

        logger.debug(
            "loaded %s: %d packages, %d dangling edges",
            self.path,
            len(nodes),
            dangling,
        )
        return root


def load_tree(path: Path, root_name: str | None = None) -> Node:
    """Read *path* and return the root of its package tree."""
    return Lockfile.read(path).tree(root_name)
