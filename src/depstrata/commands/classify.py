"""Classify command: is a package one of ours?"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from depstrata.commands._base import DepCommand

if TYPE_CHECKING:
    from depstrata.commands._context import AppContext


@click.command(
    cls=DepCommand,
    examples="""\
  depstrata classify semver left-pad
  depstrata classify @npmcli/arborist config
  depstrata -q classify $(cat names.txt)""",
)
@click.argument("names", nargs=-1, required=True)
@click.pass_obj
def classify(app: AppContext, names: tuple[str, ...]) -> None:
    """Report which package NAMES belong to the project family."""
    app.emit(app.analysis.classify(list(names)))
