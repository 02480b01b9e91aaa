"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. Provides Site construction and centralized result
emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from mdsite.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from mdsite.config.settings import MdsiteSettings
    from mdsite.infrastructure.site import Site
    from mdsite.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    Subcommands access it via ``@click.pass_obj``.
    """

    def __init__(self, settings: MdsiteSettings) -> None:
        self.settings = settings

        from mdsite.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    def open_site(
        self,
        *,
        source_dir: str | None = None,
        output_dir: str | None = None,
    ) -> Site:
        """Build a Site, letting command arguments override configured paths."""
        from mdsite.infrastructure.site import Site

        return Site(
            self.settings,
            source_root=Path(source_dir) if source_dir else None,
            output_root=Path(output_dir) if output_dir else None,
        )

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            if output:
                click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output:
                self.emit_warnings(result)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)

    def emit_warnings(self, result: ServiceResult) -> None:
        if self.settings.quiet:
            return
        for warning in result.warnings:
            click.echo(f"WARNING: {warning}", err=True)
