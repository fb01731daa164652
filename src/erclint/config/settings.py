"""ErclintSettings: CLI flags, env vars, and ``erclint.toml`` in one object.

Sources, highest priority first:

1. keyword arguments (the root CLI group's flags)
2. ``ERCLINT_*`` env vars, nested with ``__`` (``ERCLINT_LINT__FAIL_ON_WARNING``)
3. the TOML file from ``--config`` or discovery
4. defaults baked into the section models
"""

from __future__ import annotations

import threading
import tomllib
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

from erclint.config.discovery import find_config
from erclint.config.models import GrammarConfig, LintConfig

# pydantic-settings builds sources inside __init__, so the TOML path for
# the instance under construction is parked here.
_construction = threading.local()


class ErclintSettings(BaseSettings):
    """Frozen settings for one CLI invocation.

    Attributes:
        project_root: Directory of the config file in effect, else CWD.
        config_path: The TOML file that was read, or None.
    """

    model_config = SettingsConfigDict(
        frozen=True,
        env_prefix="ERCLINT_",
        env_nested_delimiter="__",
    )

    project_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    grammar: GrammarConfig = Field(default_factory=GrammarConfig)
    lint: LintConfig = Field(default_factory=LintConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        toml_file = getattr(_construction, "toml_file", None)
        return (
            init_settings,
            env_settings,
            TomlConfigSettingsSource(settings_cls, toml_file=toml_file),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        project_root: Path | None = None,
        **cli_flags: Any,
    ) -> ErclintSettings:
        """Build settings for a CLI run.

        Raises:
            click.ClickException: *config_path* does not exist, or the
                TOML file cannot be parsed.
        """
        toml_file = _resolve_toml(config_path, project_root)
        if project_root is None:
            project_root = toml_file.parent if toml_file else Path.cwd()

        _construction.toml_file = toml_file
        try:
            return cls(project_root=project_root, config_path=toml_file, **cli_flags)
        except tomllib.TOMLDecodeError as exc:
            msg = f"Invalid TOML in {toml_file}: {exc}"
            raise click.ClickException(msg) from exc
        finally:
            _construction.toml_file = None


def _resolve_toml(config_path: str | None, project_root: Path | None) -> Path | None:
    if not config_path:
        return find_config(project_root)
    explicit = Path(config_path)
    if not explicit.is_file():
        msg = f"Config file not found: {config_path}"
        raise click.ClickException(msg)
    return explicit
