"""Subcommand modules for almanac.

Provides register_commands() which uses deferred imports to keep
``almanac --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from almanac.commands.check import check
    from almanac.commands.inspect_cmd import inspect_cmd
    from almanac.commands.solve import solve
    from almanac.commands.trace import trace

    cli.add_command(solve)
    cli.add_command(trace)
    cli.add_command(check)
    cli.add_command(inspect_cmd)
