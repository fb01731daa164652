"""Locate and read ``erclint.toml``.

Lookup order: the ``ERCLINT_CONFIG`` env var, then the nearest
``erclint.toml`` in the start directory or any of its parents. The
``--config`` flag bypasses discovery entirely (see ``settings``).
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path

from erclint.config.models import ErclintConfig

CONFIG_FILENAME = "erclint.toml"
CONFIG_ENV_VAR = "ERCLINT_CONFIG"


def _env_config() -> Path | None:
    value = os.environ.get(CONFIG_ENV_VAR)
    return Path(value) if value else None


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file in effect for *start* (default: cwd), or None.

    A set ``ERCLINT_CONFIG`` wins outright. When it names a missing file
    no config is used.
    """
    override = _env_config()
    if override is not None:
        return override if override.is_file() else None

    origin = (start or Path.cwd()).resolve()
    candidates = (d / CONFIG_FILENAME for d in (origin, *origin.parents))
    return next((c for c in candidates if c.is_file()), None)


def load_config(path: Path | None = None, cwd: Path | None = None) -> ErclintConfig:
    """Parse *path* (or the discovered file) into an :class:`ErclintConfig`.

    No file means the built-in defaults.
    """
    source = path or find_config(cwd)
    if source is None:
        return ErclintConfig()
    with source.open("rb") as fh:
        return ErclintConfig.model_validate(tomllib.load(fh))
