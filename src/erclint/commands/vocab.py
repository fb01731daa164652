"""Command: show the active grammar vocabulary."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from erclint.commands._base import ErcCommand

if TYPE_CHECKING:
    from erclint.commands._context import AppContext


@click.command(
    cls=ErcCommand,
    examples="""\
  erclint vocab
  erclint -v vocab
  erclint --json vocab""",
)
@click.pass_obj
def vocab(app: AppContext) -> None:
    """Show recognized domains, prefixes, subjects, and per-domain renames."""
    app.emit(app.lint_service().vocabulary())
