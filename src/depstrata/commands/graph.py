"""Command group: dependency graph edges and layered hierarchy."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from depstrata.commands._base import DepGroup

if TYPE_CHECKING:
    from depstrata.commands._context import AppContext

_GRAPH_EXAMPLES = """\
  depstrata graph edges
  depstrata graph edges --all
  depstrata graph layers
  depstrata --json graph layers"""


@click.group(cls=DepGroup, examples=_GRAPH_EXAMPLES)
@click.pass_obj
def graph(app: AppContext) -> None:
    """Inspect the package dependency graph."""


@graph.command(
    examples="""\
  depstrata graph edges
  depstrata graph edges --all
  depstrata -q graph edges > edges.mmd"""
)
@click.option(
    "--all",
    "all_packages",
    is_flag=True,
    help="Include third-party packages, not just owned ones.",
)
@click.pass_obj
def edges(app: AppContext, all_packages: bool) -> None:
    """Print Mermaid edge annotations for the tree."""
    app.emit(app.analysis.edges(only_owned=not all_packages))


@graph.command(
    examples="""\
  depstrata graph layers
  depstrata --json graph layers
  depstrata -v graph layers"""
)
@click.pass_obj
def layers(app: AppContext) -> None:
    """Group owned packages into dependency layers, leaves first."""
    app.emit(app.analysis.layers())
