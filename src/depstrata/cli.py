"""The ``depstrata`` entry point: global flags, then the subcommands."""

from __future__ import annotations

import click

from depstrata import __version__
from depstrata.commands import register_commands
from depstrata.commands._context import AppContext
from depstrata.config.settings import DepstrataSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="depstrata")
@click.option("--json", "json_output", is_flag=True, help="Print results as JSON.")
@click.option("-q", "--quiet", is_flag=True, help="Print bare values only.")
@click.option("-v", "--verbose", is_flag=True, help="Add counts and debug logging.")
@click.option("--log-json", is_flag=True, help="Log to stderr as JSON lines.")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Config file to use instead of the nearest depstrata.toml.",
)
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, **flags: bool) -> None:
    """Dependency graphs and layered hierarchies for npm lockfiles."""
    # unset flags must not mask DEPSTRATA_* variables or depstrata.toml
    overrides = {name: True for name, value in flags.items() if value}
    ctx.obj = AppContext(DepstrataSettings.from_cli(config_path=config_path, **overrides))
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
