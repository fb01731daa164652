"""Command: list the reference EIP-6093 declarations."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from erclint.commands._base import ErcCommand

if TYPE_CHECKING:
    from erclint.commands._context import AppContext


@click.command(
    cls=ErcCommand,
    examples="""\
  erclint catalog
  erclint catalog --domain ERC721
  erclint -q catalog --domain ERC20""",
)
@click.option("--domain", default=None, help="Only show one token standard.")
@click.pass_obj
def catalog(app: AppContext, domain: str | None) -> None:
    """Show the reference error declarations for each token standard."""
    app.emit(app.lint_service().catalog(domain))
