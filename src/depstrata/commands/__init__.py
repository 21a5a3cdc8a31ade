"""Subcommand modules for depstrata.

Provides register_commands() which uses deferred imports to keep
``depstrata --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all command groups and standalone commands on the root CLI group."""
    # --- Groups ---
    from depstrata.commands.graph import graph

    cli.add_command(graph)

    # --- Standalone commands ---
    from depstrata.commands.classify import classify
    from depstrata.commands.report import report

    cli.add_command(classify)
    cli.add_command(report)
