"""Command: fold seeds through every stage and print the minimum."""

from __future__ import annotations

from typing import TYPE_CHECKING, TextIO

import click

from almanac.commands._base import INPUT_ARGUMENT, AlmanacCommand

if TYPE_CHECKING:
    from almanac.commands._context import AppContext


@click.command(
    cls=AlmanacCommand,
    examples="""\
  almanac solve input.txt
  almanac solve input.txt --mode points
  almanac -q solve input.txt --mode ranges
  almanac solve input.txt --workers 4 --show-ranges
  cat input.txt | almanac --json solve -""",
)
@INPUT_ARGUMENT
@click.option(
    "--mode",
    type=click.Choice(["points", "ranges", "both"]),
    default=None,
    help="Seed interpretation (default from [solve] mode).",
)
@click.option(
    "--workers",
    type=click.IntRange(min=1),
    default=None,
    help="Threads used to split ranges within a stage.",
)
@click.option("--show-ranges", is_flag=True, help="Include the final range set.")
@click.pass_obj
def solve(
    app: AppContext,
    input_file: TextIO,
    mode: str | None,
    workers: int | None,
    show_ranges: bool,
) -> None:
    """Print the minimum value reachable from the seeds in INPUT."""
    from almanac.services.solve import SolveService

    text = input_file.read()
    app.emit(
        SolveService(app.settings).solve(
            text, mode=mode, workers=workers, show_ranges=show_ranges
        )
    )
