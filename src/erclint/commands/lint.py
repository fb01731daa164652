"""Command: lint declaration sources (Solidity, YAML, signature lists)."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from erclint.commands._base import ErcCommand

if TYPE_CHECKING:
    from erclint.commands._context import AppContext


@click.command(
    cls=ErcCommand,
    examples="""\
  erclint lint contracts/
  erclint lint src/IERC20Errors.sol src/IERC721Errors.sol
  erclint lint errors.yaml
  erclint -q lint contracts/
  erclint --json lint contracts/ errors.yaml""",
)
@click.argument(
    "paths",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, path_type=Path),
)
@click.pass_obj
def lint(app: AppContext, paths: tuple[Path, ...]) -> None:
    """Check every error declaration found in PATHS.

    Directories are searched recursively. Collisions are detected
    across all files in one run.
    """
    result = app.lint_service().lint_paths(paths)
    app.emit(result, fail=not result.data.get("conformant", True))
