"""AnalysisService: edges, layers, ownership and the dependency report.

Wraps the pure walk/layering functions from the domain layer with
workspace loading, diagnostics and result shaping.
"""

from __future__ import annotations

import logging
from pathlib import Path

from depstrata.domain.errors import LayeringError, TreeLoadError
from depstrata.domain.layers import Layer, build_layers
from depstrata.domain.walk import WalkResult, walk
from depstrata.infrastructure.files import write_together
from depstrata.infrastructure.graph.engine import DependencyGraph
from depstrata.output.report import layer_names, render_json, render_markdown
from depstrata.services.base import BaseService
from depstrata.services.result import ErrorCode, ServiceResult

logger = logging.getLogger(__name__)


class AnalysisService(BaseService):
    """Runs dependency walks and builds the layered hierarchy."""

    # ------------------------------------------------------------------
    # Shared helpers
    # ------------------------------------------------------------------

    def _walk(self, *, only_owned: bool) -> WalkResult:
        ws = self._workspace
        return walk(ws.tree, only_owned=only_owned, is_owned=ws.classifier)

    def _layer(self, result: WalkResult) -> list[Layer]:
        """Layer an owned-only walk. Raises LayeringError."""
        return build_layers(result.dependencies, self._workspace.settings.layering.circular)

    def _cycle_error(self, op: str, result: WalkResult, exc: LayeringError) -> ServiceResult:
        limit = self._workspace.settings.layering.max_reported_cycles
        cycles = DependencyGraph(result.dependencies).cycles(exc.stuck, limit=limit)
        stuck = sorted(exc.stuck)
        logger.info("Layering stuck on %d packages: %s", len(stuck), ", ".join(stuck))
        return self._fail(op, ErrorCode.CYCLE_DETECTED, str(exc), stuck=stuck, cycles=cycles)

    # ------------------------------------------------------------------
    # edges: Mermaid annotations
    # ------------------------------------------------------------------

    def edges(self, *, only_owned: bool = True) -> ServiceResult:
        """Collect the Mermaid edge annotations for the tree.

        Args:
            only_owned: Restrict to edges whose target is an owned package.
        """
        try:
            result = self._walk(only_owned=only_owned)
        except TreeLoadError as exc:
            return self._load_failed("edges", exc)

        annotations = sorted(result.annotations)
        return self._ok(
            "edges",
            {"only_owned": only_owned, "count": len(annotations), "annotations": annotations},
            nodes=len(result.dependencies),
            dangling=len(result.dangling),
        )

    # ------------------------------------------------------------------
    # layers: leaves-first hierarchy of owned packages
    # ------------------------------------------------------------------

    def layers(self) -> ServiceResult:
        """Layer the owned packages, leaves first."""
        try:
            result = self._walk(only_owned=True)
        except TreeLoadError as exc:
            return self._load_failed("layers", exc)

        try:
            hierarchy = self._layer(result)
        except LayeringError as exc:
            return self._cycle_error("layers", result, exc)

        items = [
            {"layer": i, "size": len(names), "packages": names}
            for i, names in enumerate(layer_names(hierarchy))
        ]
        return self._ok(
            "layers",
            {"count": len(items), "layers": items},
            nodes=len(result.dependencies),
        )

    # ------------------------------------------------------------------
    # classify: ownership lookup
    # ------------------------------------------------------------------

    def classify(self, names: list[str]) -> ServiceResult:
        """Report whether each of *names* is an owned package."""
        try:
            classifier = self._workspace.classifier
        except TreeLoadError as exc:
            return self._load_failed("classify", exc)

        items = [{"name": name, "owned": classifier.is_owned(name)} for name in names]
        return self._ok("classify", {"count": len(items), "items": items})

    # ------------------------------------------------------------------
    # report: DEPENDENCIES.md + DEPENDENCIES.json
    # ------------------------------------------------------------------

    def report(self, *, output_dir: Path | None = None, dry_run: bool = False) -> ServiceResult:
        """Build the dependency report and write it next to the lockfile.

        Both files are written together or not at all, and only once the
        hierarchy could be computed.

        Args:
            output_dir: Where to write; defaults to the project root.
            dry_run: Compute everything but write nothing.
        """
        settings = self._workspace.settings
        cfg = settings.report
        try:
            owned = self._walk(only_owned=True)
            everything = self._walk(only_owned=False)
        except TreeLoadError as exc:
            return self._load_failed("report", exc)

        try:
            hierarchy = self._layer(owned)
        except LayeringError as exc:
            return self._cycle_error("report", owned, exc)

        target = output_dir if output_dir is not None else settings.project_root
        md_path = target / cfg.markdown_file
        json_path = target / cfg.json_file
        if not dry_run:
            outputs = {
                md_path: render_markdown(
                    owned.annotations,
                    everything.annotations,
                    hierarchy,
                    title=cfg.title,
                    owned_heading=cfg.owned_heading,
                    root_name=self._workspace.tree.name,
                ),
                json_path: render_json(hierarchy),
            }
            try:
                target.mkdir(parents=True, exist_ok=True)
                write_together(outputs)
            except OSError as exc:
                return self._fail(
                    "report",
                    ErrorCode.REPORT_WRITE_FAILED,
                    f"Cannot write report: {exc}",
                    markdown=str(md_path),
                    json=str(json_path),
                )
            logger.info("Wrote %s and %s", md_path, json_path)

        return self._ok(
            "report",
            {
                "markdown": str(md_path),
                "json": str(json_path),
                "layers": len(hierarchy),
                "edges_owned": len(owned.annotations),
                "edges_all": len(everything.annotations),
                "dry_run": dry_run,
            },
        )
