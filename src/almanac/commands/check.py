"""Command: almanac integrity checking."""

from __future__ import annotations

from typing import TYPE_CHECKING, TextIO

import click

from almanac.commands._base import INPUT_ARGUMENT, AlmanacCommand

if TYPE_CHECKING:
    from almanac.commands._context import AppContext


@click.command(
    cls=AlmanacCommand,
    examples="""\
  almanac check input.txt
  almanac check input.txt --errors-only
  almanac --json check input.txt""",
)
@INPUT_ARGUMENT
@click.option(
    "--min-severity",
    type=click.Choice(["warning", "error"]),
    default="warning",
    help="Hide issues below this severity.",
)
@click.option("--errors-only", is_flag=True, help="Shortcut for --min-severity error.")
@click.pass_obj
def check(app: AppContext, input_file: TextIO, min_severity: str, errors_only: bool) -> None:
    """Check INPUT for overlapping rules and unusable seed lines."""
    from almanac.services.check import CheckService

    threshold = "error" if errors_only else min_severity
    app.emit(CheckService(app.settings).check(input_file.read(), min_severity=threshold))
