"""Rich Console factory and theme for mdsite output.

Creates Console instances that render to a StringIO buffer, preserving
the ``render_result() -> str`` contract. In non-TTY environments (tests,
pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

MDSITE_THEME = Theme(
    {
        "site.ok": "bold green",
        "site.error": "bold red",
        "site.warning": "bold yellow",
        "site.op": "bold cyan",
        "site.key": "dim",
        "site.path": "dim",
        "site.title": "bold",
    }
)

_SEVERITY_STYLES: dict[str, str] = {
    "error": "site.error",
    "warning": "site.warning",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes.
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=MDSITE_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_severity(severity: str) -> str:
    return _SEVERITY_STYLES.get(severity, "")
