"""Click command class with an ``--examples`` flag.

``--help`` stays short; ``--examples`` prints ready-to-paste invocations
and exits. Commands opt in with ``@click.command(cls=ErcCommand,
examples=...)``.
"""

from __future__ import annotations

import textwrap
from typing import Any

import click


def _examples_option(examples: str) -> click.Option:
    def _print_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(examples)
        ctx.exit(0)

    return click.Option(
        ["--examples"],
        is_flag=True,
        expose_value=False,
        is_eager=True,
        callback=_print_examples,
        help="Show usage examples and exit.",
    )


class ErcCommand(click.Command):
    """A command that carries usage examples.

    Args:
        examples: Example invocations, one per line. Common indentation
            is normalized to two spaces.
    """

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = textwrap.indent(textwrap.dedent(examples), "  ") if examples else None
        if self.examples:
            self.params.append(_examples_option(self.examples))

    def format_epilog(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        super().format_epilog(ctx, formatter)
        if self.examples:
            formatter.write_paragraph()
            formatter.write_text(f"Run '{ctx.command_path} --examples' for usage examples.")
