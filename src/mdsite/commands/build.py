"""Command: render the whole source tree to HTML."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from mdsite.commands._base import MdsiteCommand

if TYPE_CHECKING:
    from mdsite.commands._context import AppContext


@click.command(
    cls=MdsiteCommand,
    examples="""\
  mdsite build
  mdsite build articles --output public
  mdsite build --clean
  mdsite -v build""",
)
@click.argument("source", required=False, type=click.Path(file_okay=False))
@click.option("-o", "--output", default=None, type=click.Path(), help="Output directory.")
@click.option("--clean", is_flag=True, help="Remove the output directory first.")
@click.pass_obj
def build(app: AppContext, source: str | None, output: str | None, clean: bool) -> None:
    """Render every markdown file under SOURCE into mirrored HTML pages."""
    from mdsite.services.build import BuildService

    site = app.open_site(source_dir=source, output_dir=output)
    app.emit(BuildService(site).build(clean=clean))
