"""Report command: write DEPENDENCIES.md and DEPENDENCIES.json."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from depstrata.commands._base import DepCommand

if TYPE_CHECKING:
    from depstrata.commands._context import AppContext


@click.command(
    cls=DepCommand,
    examples="""\
  depstrata report
  depstrata report --output docs/
  depstrata --json report --dry-run""",
)
@click.option(
    "--output",
    "output_dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory to write into (default: project root).",
)
@click.option("--dry-run", is_flag=True, help="Build the report without writing files.")
@click.pass_obj
def report(app: AppContext, output_dir: Path | None, dry_run: bool) -> None:
    """Generate the dependency graph and hierarchy documents."""
    app.emit(app.analysis.report(output_dir=output_dir, dry_run=dry_run))
