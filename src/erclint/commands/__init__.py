"""Subcommand modules for erclint.

Provides register_commands(), which uses deferred imports so
``erclint --help`` does not load the service layer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from erclint.commands.catalog import catalog
    from erclint.commands.lint import lint
    from erclint.commands.validate import validate
    from erclint.commands.vocab import vocab

    cli.add_command(validate)
    cli.add_command(lint)
    cli.add_command(catalog)
    cli.add_command(vocab)
