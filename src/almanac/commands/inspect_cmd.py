"""Command: summarize an almanac's stages without running it."""

from __future__ import annotations

from typing import TYPE_CHECKING, TextIO

import click

from almanac.commands._base import INPUT_ARGUMENT, AlmanacCommand

if TYPE_CHECKING:
    from almanac.commands._context import AppContext


@click.command(
    "inspect",
    cls=AlmanacCommand,
    examples="""\
  almanac inspect input.txt
  almanac -v inspect input.txt
  almanac --json inspect input.txt""",
)
@INPUT_ARGUMENT
@click.pass_obj
def inspect_cmd(app: AppContext, input_file: TextIO) -> None:
    """List the stages of INPUT (rule windows with -v)."""
    from almanac.services.check import CheckService

    app.emit(CheckService(app.settings).inspect(input_file.read()))
