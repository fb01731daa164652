"""Rich Console factory and theme for erclint output.

Consoles render to a StringIO buffer, preserving the
``format_result() -> str`` contract. In non-TTY environments (tests,
pipes) Rich disables color codes on its own.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

ERCLINT_THEME = Theme(
    {
        "erc.ok": "bold green",
        "erc.error": "bold red",
        "erc.warning": "bold yellow",
        "erc.op": "bold cyan",
        "erc.key": "dim",
        "erc.name": "bold",
        "erc.origin": "dim",
        "erc.code": "magenta",
        "erc.domain": "blue",
        "erc.prefix": "yellow",
        "erc.subject": "green",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=ERCLINT_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
