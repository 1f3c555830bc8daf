"""Command: follow single values through every stage."""

from __future__ import annotations

from typing import TYPE_CHECKING, TextIO

import click

from almanac.commands._base import INPUT_ARGUMENT, AlmanacCommand

if TYPE_CHECKING:
    from almanac.commands._context import AppContext


@click.command(
    cls=AlmanacCommand,
    examples="""\
  almanac trace input.txt
  almanac trace input.txt 79 14
  almanac --json trace input.txt 55""",
)
@INPUT_ARGUMENT
@click.argument("values", nargs=-1, type=click.IntRange(min=0))
@click.pass_obj
def trace(app: AppContext, input_file: TextIO, values: tuple[int, ...]) -> None:
    """Show each stage's value for VALUES (default: every seed)."""
    from almanac.services.solve import SolveService

    app.emit(SolveService(app.settings).trace(input_file.read(), list(values) or None))
