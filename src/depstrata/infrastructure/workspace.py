"""Workspace: the single dependency injected into every service.

Owns everything read from disk for one analysis run: the lockfile, the
package tree built from it, and the ownership classifier built from
config plus the known-repo list. Each piece loads lazily on first use so
``--help`` and ``classify`` never touch the lockfile.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from depstrata.domain.ownership import OwnershipClassifier
from depstrata.infrastructure.lockfile import Lockfile
from depstrata.infrastructure.repos import read_known_repos

if TYPE_CHECKING:
    from pathlib import Path

    from depstrata.config.settings import DepstrataSettings
    from depstrata.domain.tree import Node

logger = logging.getLogger(__name__)


class Workspace:
    """Lazily loaded analysis inputs for a project directory."""

    def __init__(self, settings: DepstrataSettings) -> None:
        self.settings = settings
        self.warnings: list[str] = []
        self._lockfile: Lockfile | None = None
        self._tree: Node | None = None
        self._classifier: OwnershipClassifier | None = None

    @property
    def root(self) -> Path:
        return self.settings.project_root

    @property
    def lockfile_path(self) -> Path:
        return self.settings.resolve(self.settings.report.lockfile)

    @property
    def lockfile(self) -> Lockfile:
        """The parsed lockfile. Raises TreeLoadError on first access if unreadable."""
        if self._lockfile is None:
            self._lockfile = Lockfile.read(self.lockfile_path)
        return self._lockfile

    @property
    def tree(self) -> Node:
        """Root node of the package tree."""
        if self._tree is None:
            self._tree = self.lockfile.tree(self.settings.report.root_name)
        return self._tree

    @property
    def classifier(self) -> OwnershipClassifier:
        """Ownership classifier for this project.

        Known names come from the repo list file plus, when enabled, the
        names of the lockfile's public workspaces.
        """
        if self._classifier is None:
            cfg = self.settings.ownership
            classifier = OwnershipClassifier.build(
                org_prefixes=cfg.org_prefixes,
                family_prefixes=cfg.family_prefixes,
                aliases=cfg.aliases,
                namespaced=cfg.namespaced,
                known=self._known_repos(),
            )
            if cfg.include_workspaces and self.lockfile_path.is_file():
                classifier = classifier.with_known(self.lockfile.workspace_names(public_only=True))
            self._classifier = classifier
        return self._classifier

    def _known_repos(self) -> frozenset[str]:
        path = self.settings.resolve(self.settings.ownership.repos_file)
        try:
            names = read_known_repos(path)
        except FileNotFoundError:
            logger.warning("Known repo list not found: %s", path)
            self.warnings.append(f"Known repo list not found: {path}")
            return frozenset()
        logger.debug("Read %d known repos from %s", len(names), path)
        return names
