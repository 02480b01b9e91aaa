"""Command: render a single markdown file."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from mdsite.commands._base import MdsiteCommand

if TYPE_CHECKING:
    from mdsite.commands._context import AppContext


@click.command(
    cls=MdsiteCommand,
    examples="""\
  mdsite render presenters.md
  mdsite render presenters.md > presenters.html
  mdsite render presenters.md --output _site/presenters.html""",
)
@click.argument("file", type=click.Path(dir_okay=False))
@click.option(
    "-o",
    "--output",
    "output_file",
    default=None,
    type=click.Path(dir_okay=False),
    help="Output file (omit to print to stdout).",
)
@click.pass_obj
def render(app: AppContext, file: str, output_file: str | None) -> None:
    """Render FILE to a complete HTML page."""
    from mdsite.services.render import RenderService

    output = Path(output_file) if output_file else None
    result = RenderService(app.open_site()).render_file(Path(file), output=output)

    if not result.ok or output is not None or app.settings.json_output:
        app.emit(result)
        return

    # Pipe-friendly: raw HTML to stdout
    click.echo(result.data["html"], nl=False)
    app.emit_warnings(result)
