"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, depstrata.toml only contains
overrides. The defaults reproduce the npm CLI's own report.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

# Bare names of repos that are published under the @npmcli scope.
# A bare package with one of these names belongs to someone else.
DEFAULT_NAMESPACED: tuple[str, ...] = (
    "arborist",
    "config",
    "disparity-colors",
    "eslint-config",
    "exec",
    "fs",
    "git",
    "installed-package-contents",
    "lint",
    "mock-registry",
    "map-workspaces",
    "metavuln-calculator",
    "move-file",
    "name-from-folder",
    "node-gyp",
    "package-json",
    "promise-spawn",
    "run-script",
    "template-oss",
)


class OwnershipConfig(BaseModel):
    """[ownership] section."""

    model_config = {"frozen": True}

    org_prefixes: tuple[str, ...] = ("@npmcli",)
    family_prefixes: tuple[str, ...] = ("libnpm",)
    aliases: dict[str, str] = Field(
        default_factory=lambda: {
            "abbrev": "abbrev-js",
            "semver": "node-semver",
            "which": "node-which",
        }
    )
    namespaced: tuple[str, ...] = DEFAULT_NAMESPACED
    repos_file: str = "scripts/npm-cli-repos.txt"
    include_workspaces: bool = True


class LayeringConfig(BaseModel):
    """[layering] section."""

    model_config = {"frozen": True}

    # typically a package with arborist as a dependency that arborist
    # also lists in its devDependencies
    circular: tuple[str, ...] = ("@npmcli/mock-registry",)
    max_reported_cycles: int = 10


class ReportConfig(BaseModel):
    """[report] section."""

    model_config = {"frozen": True}

    lockfile: str = "package-lock.json"
    root_name: str | None = "npm"
    markdown_file: str = "DEPENDENCIES.md"
    json_file: str = "DEPENDENCIES.json"
    title: str = "npm dependencies"
    owned_heading: str = "`github.com/npm/` only"

