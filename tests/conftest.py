"""Shared pytest fixtures and test helpers for depstrata tests."""

from __future__ import annotations

import copy
import json
import logging
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from depstrata.config.settings import DepstrataSettings
from depstrata.domain.tree import Node
from depstrata.infrastructure.workspace import Workspace

# A trimmed-down npm CLI lockfile: two workspaces, an alias (semver), a
# known repo (proc-log), third-party packages, dev-only packages and an
# optional dependency that is not installed (fsevents).
SAMPLE_LOCK: dict[str, Any] = {
    "name": "npm",
    "version": "10.0.0",
    "lockfileVersion": 3,
    "requires": True,
    "packages": {
        "": {
            "name": "npm",
            "version": "10.0.0",
            "workspaces": ["workspaces/arborist", "workspaces/libnpmexec"],
            "dependencies": {
                "@npmcli/arborist": "^7.0.0",
                "libnpmexec": "^7.0.0",
                "semver": "^7.5.4",
                "chalk": "^5.3.0",
                "left-pad": "^1.3.0",
            },
            "optionalDependencies": {"fsevents": "^2.3.3"},
            "devDependencies": {
                "@npmcli/mock-registry": "^1.0.0",
                "tap": "^16.3.8",
            },
        },
        "node_modules/@npmcli/arborist": {
            "resolved": "workspaces/arborist",
            "link": True,
        },
        "node_modules/libnpmexec": {
            "resolved": "workspaces/libnpmexec",
            "link": True,
        },
        "workspaces/arborist": {
            "name": "@npmcli/arborist",
            "version": "7.2.0",
            "dependencies": {
                "semver": "^7.3.7",
                "@npmcli/fs": "^3.1.0",
                "proc-log": "^3.0.0",
            },
            "devDependencies": {"@npmcli/mock-registry": "^1.0.0"},
        },
        "workspaces/libnpmexec": {
            "name": "libnpmexec",
            "version": "7.0.0",
            "dependencies": {
                "@npmcli/arborist": "^7.2.0",
                "semver": "^7.3.7",
                "chalk": "^5.2.0",
            },
        },
        "node_modules/semver": {
            "version": "7.5.4",
            "dependencies": {"lru-cache": "^6.0.0"},
        },
        "node_modules/lru-cache": {"version": "6.0.0"},
        "node_modules/@npmcli/fs": {
            "version": "3.1.0",
            "dependencies": {"semver": "^7.3.5"},
        },
        "node_modules/proc-log": {"version": "3.0.0"},
        "node_modules/chalk": {"version": "5.3.0"},
        "node_modules/left-pad": {"version": "1.3.0"},
        "node_modules/@npmcli/mock-registry": {
            "version": "1.0.0",
            "dev": True,
            "dependencies": {"@npmcli/arborist": "^7.0.0"},
        },
        "node_modules/tap": {"version": "16.3.8", "dev": True},
    },
}

SAMPLE_REPOS = "# npm org repos\nnode-semver\nproc-log\nfs\nconfig\n\n"


def sample_lock() -> dict[str, Any]:
    """Deep copy of the sample lockfile, safe to mutate."""
    return copy.deepcopy(SAMPLE_LOCK)


def write_project(root: Path, lock: dict[str, Any] | None = None, repos: str | None = None) -> Path:
    """Write a lockfile (and repo list) into *root*, returning *root*."""
    (root / "package-lock.json").write_text(
        json.dumps(lock if lock is not None else SAMPLE_LOCK, indent=2),
        encoding="utf-8",
    )
    if repos is not None:
        (root / "scripts").mkdir(exist_ok=True)
        (root / "scripts" / "npm-cli-repos.txt").write_text(repos, encoding="utf-8")
    return root


def chain(*names: str) -> Node:
    """Build a linear tree ``names[0] -> names[1] -> ...`` and return its root."""
    nodes = [Node(name) for name in names]
    for parent, child in zip(nodes, nodes[1:], strict=False):
        parent.add_edge(child.name, child)
    return nodes[0]


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Temporary project directory holding the sample lockfile and repo list."""
    return write_project(tmp_path, repos=SAMPLE_REPOS)


@pytest.fixture
def settings(project_root: Path) -> DepstrataSettings:
    return DepstrataSettings.from_cli(project_root=project_root)


@pytest.fixture
def workspace(settings: DepstrataSettings) -> Workspace:
    """Workspace over the sample project."""
    return Workspace(settings)


@pytest.fixture
def _isolated_project(project_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to the sample project so the CLI picks it up.

    Use via ``@pytest.mark.usefixtures("_isolated_project")`` on command
    test classes.
    """
    monkeypatch.delenv("DEPSTRATA_CONFIG", raising=False)
    monkeypatch.chdir(project_root)


@pytest.fixture(autouse=True)
def _reset_logging() -> Generator[None]:
    """Drop handlers the CLI installs so later tests never log to a closed stream."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers = handlers
    root.setLevel(level)
    logging.getLogger("depstrata").setLevel(logging.NOTSET)
