"""Human-readable rendering of analysis results.

``render_result`` picks a renderer by ``result.op`` and draws it on a Rich
console backed by a string buffer, so the CLI can route the text to
stdout or stderr itself. ``render_quiet`` is the bare, pipe-friendly form
behind ``-q``.

Package names and Mermaid lines contain ``[``/``]``, so anything derived
from them is printed as :class:`~rich.text.Text` or with ``markup=False``.
"""

from __future__ import annotations

from collections.abc import Callable
from io import StringIO
from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

if TYPE_CHECKING:
    from depstrata.services.result import ServiceResult

type Renderer = Callable[[ServiceResult, Console, bool], None]

DEP_THEME = Theme(
    {
        "dep.ok": "bold green",
        "dep.error": "bold red",
        "dep.op": "bold cyan",
        "dep.key": "dim",
        "dep.path": "dim",
        "dep.name": "bold blue",
        "dep.owned": "green",
        "dep.foreign": "dim",
        "dep.layer": "magenta",
    }
)

CONSOLE_WIDTH = 120


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render *result* for a terminal.

    Colors are dropped automatically when the output is not a TTY
    (pipes, Click's CliRunner).
    """
    console = Console(file=StringIO(), theme=DEP_THEME, highlight=False, width=CONSOLE_WIDTH)
    renderer = _OP_RENDERERS[result.op] if result.ok else _render_error
    renderer(result, console, verbose)
    if verbose and result.ok and result.meta:
        console.print()
        for key, value in result.meta.items():
            console.print(Text(f"  {key}: ", style="dep.key"), Text(str(value)), sep="")
    assert isinstance(console.file, StringIO)
    return console.file.getvalue().rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """One value per line: annotations, layers, or owned names."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op}: {msg}"

    d = result.data
    if result.op == "edges":
        return "\n".join(d["annotations"])
    if result.op == "layers":
        return "\n".join(", ".join(layer["packages"]) for layer in d["layers"])
    if result.op == "classify":
        return "\n".join(item["name"] for item in d["items"] if item["owned"])
    return f"OK: {result.op}"


def _render_error(result: ServiceResult, console: Console, verbose: bool) -> None:
    err = result.error
    line = Text.assemble(("ERROR", "dep.error"), (f"  {result.op}", "dep.op"), ": ")
    line.append(err.message if err else "Unknown error")
    console.print(line)
    if err is None:
        return

    # cycles are the actionable part of a layering failure
    for cycle in err.detail.get("cycles", []):
        console.print(Text("  cycle: " + " -> ".join([*cycle, cycle[0]])))
    if verbose:
        for key, value in err.detail.items():
            if key != "cycles":
                console.print(f"  {key}: {value}", markup=False, style="dep.key")


def _render_edges(result: ServiceResult, console: Console, verbose: bool) -> None:
    """A ready-to-paste Mermaid block followed by the edge count."""
    d = result.data
    console.print("graph LR;", markup=False)
    for line in d["annotations"]:
        console.print(line, markup=False)
    scope = "owned" if d["only_owned"] else "all"
    console.print(f"\n{d['count']} edges ({scope})", markup=False)


def _render_layers(result: ServiceResult, console: Console, verbose: bool) -> None:
    """Layers as a table, most dependent on top."""
    table = Table(pad_edge=False)
    table.add_column("Layer", style="dep.layer", justify="right")
    table.add_column("Size", justify="right")
    table.add_column("Packages", style="dep.name")
    for layer in reversed(result.data["layers"]):
        table.add_row(str(layer["layer"]), str(layer["size"]), Text(", ".join(layer["packages"])))
    console.print(table)
    console.print(f"\n{result.data['count']} layers", markup=False)


def _render_classify(result: ServiceResult, console: Console, verbose: bool) -> None:
    for item in result.data["items"]:
        label, style = ("owned  ", "dep.owned") if item["owned"] else ("foreign", "dep.foreign")
        console.print(Text(label, style=style), Text(f"  {item['name']}"), sep="")


def _render_report(result: ServiceResult, console: Console, verbose: bool) -> None:
    d = result.data
    console.print(Text("OK", style="dep.ok"), Text(f"  {result.op}", style="dep.op"))
    for key in ("markdown", "json"):
        console.print(Text(f"  {key}: ", style="dep.key"), Text(d[key], style="dep.path"), sep="")
    console.print(
        f"  {d['layers']} layers, {d['edges_owned']} owned edges, {d['edges_all']} edges in all",
        markup=False,
    )
    if d["dry_run"]:
        console.print(Text("  (dry run, nothing written)", style="dim"))


_OP_RENDERERS: dict[str, Renderer] = {
    "edges": _render_edges,
    "layers": _render_layers,
    "classify": _render_classify,
    "report": _render_report,
}
