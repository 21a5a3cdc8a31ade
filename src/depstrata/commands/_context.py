"""AppContext: the object ``@click.pass_obj`` hands to every command."""

from __future__ import annotations

from functools import cached_property
from typing import TYPE_CHECKING

import click

from depstrata.config.logging import configure_logging
from depstrata.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from depstrata.config.settings import DepstrataSettings
    from depstrata.services.analysis import AnalysisService
    from depstrata.services.result import ServiceResult


class AppContext:
    """Settings plus a lazily built analysis service.

    Nothing touches the lockfile until a command asks for :attr:`analysis`,
    so ``--help`` and ``--examples`` work outside a project.
    """

    def __init__(self, settings: DepstrataSettings) -> None:
        self.settings = settings
        self.output = OutputSettings(
            json_output=settings.json_output,
            quiet=settings.quiet,
            verbose=settings.verbose,
        )
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @cached_property
    def analysis(self) -> AnalysisService:
        from depstrata.infrastructure.workspace import Workspace
        from depstrata.services.analysis import AnalysisService

        return AnalysisService(Workspace(self.settings))

    def emit(self, result: ServiceResult) -> None:
        """Print *result* and exit 1 if it failed.

        Results go to stdout and failures to stderr. Outside ``--json``
        each warning is echoed to stderr as well, since the human and
        quiet renderings leave them out.
        """
        text = format_result(result, settings=self.output)
        if not result.ok:
            click.echo(text, err=True)
            raise SystemExit(1)

        click.echo(text)
        if not self.output.json_output:
            for warning in result.warnings:
                click.echo(f"WARNING: {warning}", err=True)
