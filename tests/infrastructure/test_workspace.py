"""Tests for Workspace: lazy loading of analysis inputs."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from depstrata.config.settings import DepstrataSettings
from depstrata.domain.errors import TreeLoadError
from depstrata.infrastructure.workspace import Workspace
from tests.conftest import SAMPLE_REPOS, sample_lock, write_project


class TestLazyLoading:
    def test_nothing_loaded_up_front(self, workspace: Workspace) -> None:
        assert workspace._lockfile is None
        assert workspace._tree is None
        assert workspace._classifier is None

    def test_tree_uses_configured_root_name(self, workspace: Workspace) -> None:
        assert workspace.tree.name == "npm"
        assert workspace.tree is workspace.tree

    def test_lockfile_path(self, workspace: Workspace, project_root: Path) -> None:
        assert workspace.lockfile_path == project_root / "package-lock.json"
        assert workspace.root == project_root

    def test_missing_lockfile_raises_on_access(self, tmp_path: Path) -> None:
        ws = Workspace(DepstrataSettings.from_cli(project_root=tmp_path))
        with pytest.raises(TreeLoadError):
            _ = ws.tree


class TestClassifier:
    def test_known_repos_and_workspaces(self, workspace: Workspace) -> None:
        c = workspace.classifier
        assert c.is_owned("proc-log")  # repo list
        assert c.is_owned("semver")  # alias
        assert not c.is_owned("config")  # namespaced
        assert "libnpmexec" in c.known  # workspace
        assert workspace.warnings == []

    def test_workspaces_can_be_excluded(self, project_root: Path) -> None:
        settings = DepstrataSettings.from_cli(
            project_root=project_root,
            ownership={"include_workspaces": False},
        )
        assert "libnpmexec" not in Workspace(settings).classifier.known

    def test_missing_repo_list_warns(self, tmp_path: Path) -> None:
        ws = Workspace(DepstrataSettings.from_cli(project_root=write_project(tmp_path)))
        assert ws.classifier.is_owned("proc-log") is False
        assert len(ws.warnings) == 1
        assert "Known repo list not found" in ws.warnings[0]

    def test_no_lockfile_still_classifies(self, tmp_path: Path) -> None:
        ws = Workspace(DepstrataSettings.from_cli(project_root=tmp_path))
        assert ws.classifier.is_owned("@npmcli/fs") is True

    def test_cached(self, workspace: Workspace) -> None:
        assert workspace.classifier is workspace.classifier


class TestPrivateWorkspaces:
    def test_private_workspace_not_known(self, tmp_path: Path) -> None:
        lock = sample_lock()
        lock["packages"]["node_modules/docs"] = {"resolved": "docs", "link": True}
        lock["packages"]["docs"] = {"name": "docs", "version": "1.0.0"}
        lock["packages"]["node_modules/smoke"] = {"resolved": "smoke", "link": True}
        lock["packages"]["smoke"] = {"name": "smoke", "version": "1.0.0"}
        root = write_project(tmp_path, lock, repos=SAMPLE_REPOS)
        for folder, private in (("docs", True), ("smoke", False)):
            (root / folder).mkdir()
            manifest = {"name": folder, "private": private}
            (root / folder / "package.json").write_text(json.dumps(manifest), encoding="utf-8")

        classifier = Workspace(DepstrataSettings.from_cli(project_root=root)).classifier
        assert classifier.is_owned("smoke") is True
        assert classifier.is_owned("docs") is False
