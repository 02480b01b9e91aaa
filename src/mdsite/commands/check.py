"""Command: report undefined aliases, broken cross-links, and missing titles."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from mdsite.commands._base import MdsiteCommand

if TYPE_CHECKING:
    from mdsite.commands._context import AppContext


@click.command(
    cls=MdsiteCommand,
    examples="""\
  mdsite check
  mdsite check articles
  mdsite --json check""",
)
@click.argument("source", required=False, type=click.Path(file_okay=False))
@click.pass_obj
def check(app: AppContext, source: str | None) -> None:
    """Check reference aliases and front-matter without rendering."""
    from mdsite.services.check import CheckService

    app.emit(CheckService(app.open_site(source_dir=source)).check())
