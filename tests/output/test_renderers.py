"""Tests for operation-specific Rich renderers."""

import pytest

from depstrata.output.renderers import DEP_THEME, render_quiet, render_result
from depstrata.services.result import ErrorCode, ServiceResult

# ── Helpers ───────────────────────────────────────────────────────────

ANNOTATIONS = [
    '  npm-->npmcli-arborist["@npmcli/arborist"];',
    "  npmcli-arborist-->semver;",
]

LAYERS = [
    {"layer": 0, "size": 2, "packages": ["proc-log", "semver"]},
    {"layer": 1, "size": 1, "packages": ["@npmcli/arborist"]},
    {"layer": 2, "size": 1, "packages": ["npm"]},
]


def _ok(op: str, meta: dict[str, object] | None = None, **data: object) -> ServiceResult:
    return ServiceResult.success(op, dict(data), meta=meta)


def _err(op: str, code: ErrorCode, message: str, **detail: object) -> ServiceResult:
    return ServiceResult.failure(op, code, message, detail=dict(detail))


# ── Error rendering ──────────────────────────────────────────────────


class TestErrorRenderer:
    def test_basic_error(self) -> None:
        output = render_result(_err("edges", ErrorCode.TREE_LOAD_FAILED, "Cannot read lockfile"))
        assert "ERROR" in output
        assert "edges" in output
        assert "Cannot read lockfile" in output

    def test_cycles_listed(self) -> None:
        result = _err(
            "layers",
            ErrorCode.CYCLE_DETECTED,
            "Layering made no progress",
            stuck=["a", "b", "c"],
            cycles=[["a", "b"]],
        )
        output = render_result(result)
        assert "a -> b -> a" in output
        assert "stuck" not in output

    def test_verbose_shows_detail(self) -> None:
        result = _err("layers", ErrorCode.CYCLE_DETECTED, "Bad", stuck=["@npmcli/x"], cycles=[])
        output = render_result(result, verbose=True)
        assert "stuck" in output
        assert "@npmcli/x" in output

    def test_no_error_object(self) -> None:
        output = render_result(ServiceResult(ok=False, op="test"))
        assert "Unknown error" in output


# ── Analysis renderers ───────────────────────────────────────────────


class TestEdgesRenderer:
    def test_mermaid_block(self) -> None:
        result = _ok("edges", only_owned=True, count=2, annotations=ANNOTATIONS)
        lines = render_result(result).splitlines()
        assert lines[0] == "graph LR;"
        assert lines[1] == ANNOTATIONS[0]
        assert lines[2] == ANNOTATIONS[1]
        assert lines[-1] == "2 edges (owned)"

    def test_all_scope(self) -> None:
        result = _ok("edges", only_owned=False, count=0, annotations=[])
        assert render_result(result).endswith("0 edges (all)")

    def test_verbose_meta(self) -> None:
        result = _ok(
            "edges",
            meta={"nodes": 3, "dangling": 1},
            only_owned=True,
            count=0,
            annotations=[],
        )
        output = render_result(result, verbose=True)
        assert "dangling: 1" in output


class TestLayersRenderer:
    def test_table_most_dependent_first(self) -> None:
        output = render_result(_ok("layers", count=3, layers=LAYERS))
        assert "Packages" in output
        assert output.index("npm ") < output.index("@npmcli/arborist") < output.index("semver")
        assert "proc-log, semver" in output
        assert output.endswith("3 layers")


class TestClassifyRenderer:
    def test_owned_and_foreign(self) -> None:
        items = [{"name": "semver", "owned": True}, {"name": "left-pad", "owned": False}]
        lines = render_result(_ok("classify", count=2, items=items)).splitlines()
        assert lines == ["owned    semver", "foreign  left-pad"]


class TestReportRenderer:
    def test_paths_and_counts(self) -> None:
        result = _ok(
            "report",
            markdown="/p/DEPENDENCIES.md",
            json="/p/DEPENDENCIES.json",
            layers=5,
            edges_owned=11,
            edges_all=17,
            dry_run=False,
        )
        output = render_result(result)
        assert "OK" in output
        assert "/p/DEPENDENCIES.md" in output
        assert "5 layers, 11 owned edges, 17 edges in all" in output
        assert "dry run" not in output

    def test_dry_run_note(self) -> None:
        result = _ok(
            "report",
            markdown="x.md",
            json="x.json",
            layers=1,
            edges_owned=0,
            edges_all=0,
            dry_run=True,
        )
        assert "dry run, nothing written" in render_result(result)


# ── Quiet mode ───────────────────────────────────────────────────────


class TestQuiet:
    def test_edges(self) -> None:
        result = _ok("edges", only_owned=True, count=2, annotations=ANNOTATIONS)
        assert render_quiet(result) == "\n".join(ANNOTATIONS)

    def test_layers(self) -> None:
        result = _ok("layers", count=3, layers=LAYERS)
        assert render_quiet(result) == "proc-log, semver\n@npmcli/arborist\nnpm"

    def test_classify_prints_owned_only(self) -> None:
        items = [{"name": "semver", "owned": True}, {"name": "left-pad", "owned": False}]
        assert render_quiet(_ok("classify", count=2, items=items)) == "semver"

    def test_other_op(self) -> None:
        assert render_quiet(_ok("report")) == "OK: report"

    def test_error(self) -> None:
        output = render_quiet(_err("layers", ErrorCode.CYCLE_DETECTED, "stuck"))
        assert output.startswith("ERROR: layers")
        assert "stuck" in output


class TestUnknownOp:
    def test_success_for_unknown_op_raises(self) -> None:
        with pytest.raises(KeyError):
            render_result(_ok("mystery"))

    def test_error_for_unknown_op_renders(self) -> None:
        output = render_result(_err("mystery", ErrorCode.TREE_LOAD_FAILED, "nope"))
        assert "mystery" in output


class TestTheme:
    def test_styles_used_by_renderers_are_defined(self) -> None:
        for name in ("dep.ok", "dep.error", "dep.op", "dep.key", "dep.path", "dep.name",
                     "dep.owned", "dep.foreign", "dep.layer"):
            assert name in DEP_THEME.styles

    def test_bracketed_names_survive(self) -> None:
        items = [{"name": "@scope/pkg[x]", "owned": True}]
        assert "@scope/pkg[x]" in render_result(_ok("classify", count=1, items=items))
