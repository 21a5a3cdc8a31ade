"""DEPENDENCIES.md / DEPENDENCIES.json rendering.

Pure string builders; the caller decides where the text goes.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Sequence

HIERARCHY_BLURB = (
    "These are the groups of dependencies in {root} that depend on each other.",
    "Each group depends on packages lower down the chain, nothing depends on",
    "packages higher up the chain.",
)


def layer_names(hierarchy: Iterable[Iterable[str]]) -> list[list[str]]:
    """Sorted name lists, one per layer, preserving layer order."""
    return [sorted(layer) for layer in hierarchy]


def _mermaid_block(annotations: Iterable[str]) -> list[str]:
    return ["```mermaid", "graph LR;", *sorted(annotations), "```"]


def render_markdown(
    owned_annotations: Iterable[str],
    all_annotations: Iterable[str],
    hierarchy: Sequence[Iterable[str]],
    *,
    title: str = "npm dependencies",
    owned_heading: str = "`github.com/npm/` only",
    root_name: str = "npm",
) -> str:
    """Render the full dependency report.

    The hierarchy is listed top-down: the most dependent group first,
    leaf packages last.
    """
    lines = [
        f"# {title}",
        "",
        f"## {owned_heading}",
        *_mermaid_block(owned_annotations),
        "",
        "## all dependencies",
        *_mermaid_block(all_annotations),
        "",
        f"## {root_name} dependency hierarchy",
        "",
        *(line.format(root=root_name) for line in HIERARCHY_BLURB),
        "",
    ]
    lines.extend(f" - {', '.join(names)}" for names in reversed(layer_names(hierarchy)))
    return "\n".join(lines) + "\n"


def render_json(hierarchy: Sequence[Iterable[str]]) -> str:
    """Render the hierarchy leaves-first as a JSON list of name lists."""
    return json.dumps(layer_names(hierarchy), indent=2) + "\n"
