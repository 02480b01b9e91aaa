"""Subcommand modules for mdsite.

Provides register_commands() which uses deferred imports to keep
``mdsite --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from mdsite.commands.build import build
    from mdsite.commands.check import check
    from mdsite.commands.render import render

    cli.add_command(build)
    cli.add_command(render)
    cli.add_command(check)
