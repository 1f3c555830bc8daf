"""Rich Console factory and theme for almanac output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract.  In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

ALMANAC_THEME = Theme(
    {
        "almanac.ok": "bold green",
        "almanac.error": "bold red",
        "almanac.warning": "bold yellow",
        "almanac.op": "bold cyan",
        "almanac.key": "dim",
        "almanac.answer": "bold magenta",
        "almanac.stage": "bold",
        "almanac.range": "blue",
        "almanac.offset.up": "green",
        "almanac.offset.down": "red",
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
        theme=ALMANAC_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_offset(offset: int) -> str:
    """Green for rules that move values up, red for down, plain for identity."""
    if offset > 0:
        return "almanac.offset.up"
    if offset < 0:
        return "almanac.offset.down"
    return ""
