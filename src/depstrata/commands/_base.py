"""Click classes shared by depstrata commands.

Every command and group takes an ``examples=`` string. When it is set,
the command grows an ``--examples`` flag that prints those invocations
and exits, so ``--help`` stays short.
"""

from __future__ import annotations

from typing import Any

import click


class ExamplesOption(click.Option):
    """Eager ``--examples`` flag printing a fixed block of invocations."""

    def __init__(self, examples: str) -> None:
        self.examples = examples
        super().__init__(
            ["--examples"],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=self._show,
            help="Show usage examples.",
        )

    def _show(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if value and not ctx.resilient_parsing:
            click.echo(f"Examples for '{ctx.command_path}':\n\n{self.examples}")
            ctx.exit(0)


class ExamplesMixin:
    params: list[click.Parameter]

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            self.params.append(ExamplesOption(examples))


class DepCommand(ExamplesMixin, click.Command):
    """A command that accepts ``examples=``."""


class DepGroup(ExamplesMixin, click.Group):
    """A group whose subcommands are :class:`DepCommand` by default."""

    command_class = DepCommand
