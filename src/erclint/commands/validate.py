"""Command: validate error signatures given on the command line."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from erclint.commands._base import ErcCommand

if TYPE_CHECKING:
    from erclint.commands._context import AppContext


@click.command(
    cls=ErcCommand,
    examples="""\
  erclint validate "ERC20InsufficientBalance(address sender, uint256 balance, uint256 needed)"
  erclint validate "ERC721InvalidOwner(address owner)" "ERC721InvalidSender(address sender)"
  erclint validate "InsufficientApproval(address, amount)" "InsufficientApproval(address, id)"
  erclint --json validate "ERC721InvalidBalance(address owner)" | jq .data.issues""",
)
@click.argument("signatures", nargs=-1, required=True)
@click.pass_obj
def validate(app: AppContext, signatures: tuple[str, ...]) -> None:
    """Check SIGNATURES against the naming grammar.

    All signatures are checked together, so two arguments with the same
    name and different parameters are reported as a collision.
    """
    result = app.lint_service().validate_signatures(signatures)
    app.emit(result, fail=not result.data.get("conformant", True))
