"""Settings for one depstrata run.

Sources, highest priority first:

1. CLI flags handed to :meth:`DepstrataSettings.from_cli`
2. ``DEPSTRATA_*`` environment variables (``__`` separates nested keys,
   e.g. ``DEPSTRATA_LAYERING__MAX_REPORTED_CYCLES=3``)
3. ``depstrata.toml``: the file named by ``--config``, else by
   ``$DEPSTRATA_CONFIG``, else the nearest one above the working directory
4. Defaults in :mod:`depstrata.config.models`
"""

from __future__ import annotations

import os
import tomllib
from contextvars import ContextVar
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

from depstrata.config.models import LayeringConfig, OwnershipConfig, ReportConfig

CONFIG_FILENAME = "depstrata.toml"
CONFIG_ENV_VAR = "DEPSTRATA_CONFIG"

# The TOML file for the settings object under construction. Settings
# sources are built inside BaseSettings.__init__, after from_cli has
# already picked the file.
_active_toml: ContextVar[Path | None] = ContextVar("depstrata_active_toml", default=None)


def find_config(start: Path | None = None) -> Path | None:
    """Locate the config file for a run starting in *start* (default: cwd).

    ``$DEPSTRATA_CONFIG`` wins when set; if it names a missing file there
    is no config at all rather than a fallback to the walk-up.
    """
    if env_path := os.environ.get(CONFIG_ENV_VAR):
        path = Path(env_path)
        return path if path.is_file() else None

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        if (directory / CONFIG_FILENAME).is_file():
            return directory / CONFIG_FILENAME
    return None


class DepstrataSettings(BaseSettings):
    """Everything a command needs to know before it reads the lockfile.

    Attributes:
        project_root: Directory relative paths resolve against: the
            directory holding the config file, or the working directory.
        config_path: The TOML file that was read, if any.
    """

    model_config = SettingsConfigDict(
        frozen=True,
        env_prefix="DEPSTRATA_",
        env_nested_delimiter="__",
    )

    project_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    ownership: OwnershipConfig = Field(default_factory=OwnershipConfig)
    layering: LayeringConfig = Field(default_factory=LayeringConfig)
    report: ReportConfig = Field(default_factory=ReportConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            TomlConfigSettingsSource(settings_cls, toml_file=_active_toml.get()),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        project_root: Path | None = None,
        **cli_flags: Any,
    ) -> DepstrataSettings:
        """Build settings for a CLI invocation.

        An explicit *config_path* that does not exist is ignored. Flags in
        *cli_flags* override every other source, so callers pass only the
        flags the user actually set.

        Raises:
            click.ClickException: the config file is not valid TOML.
        """
        if config_path:
            toml_path = Path(config_path) if Path(config_path).is_file() else None
        else:
            toml_path = find_config(project_root)

        if project_root is None:
            project_root = toml_path.parent if toml_path else Path.cwd()

        token = _active_toml.set(toml_path)
        try:
            return cls(project_root=project_root, config_path=toml_path, **cli_flags)
        except tomllib.TOMLDecodeError as exc:
            raise click.ClickException(f"Invalid TOML in {toml_path}: {exc}") from exc
        finally:
            _active_toml.reset(token)

    def resolve(self, path: str) -> Path:
        """Resolve a configured path against the project root."""
        p = Path(path)
        return p if p.is_absolute() else self.project_root / p
