"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from mdsite.output.console import create_console, get_output, style_for_severity

if TYPE_CHECKING:
    from rich.console import Console

    from mdsite.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    if result.op == "build":
        return "\n".join(page["output"] for page in result.data.get("pages", []))
    if result.op == "check":
        return "\n".join(f"{i['path']}: {i['message']}" for i in result.data.get("issues", []))
    if result.op == "render_page" and result.data.get("output"):
        return str(result.data["output"])
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    label = Text("OK", style="site.ok")
    op = Text(f"  {result.op}", style="site.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="site.key")
    if key.endswith("_dir") or key in ("source", "output"):
        v = Text(str(value), style="site.path")
    elif key == "title":
        v = Text(str(value), style="site.title")
    else:
        v = Text(str(value))
    console.print(k, v, end="")
    console.print()


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="site.error")
    op = Text(f"  {result.op}", style="site.op")
    sep = Text(" — ")
    console.print(label, op, sep, msg)

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Operation renderers ───────────────────────────────────────────────


def _render_build(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render build results: directories, counts, and (verbose) the page table."""
    _status_line(console, result)
    d = result.data
    for key in ("source_dir", "output_dir", "page_count", "skipped_count"):
        if key in d:
            _field(console, key, d[key])

    pages = d.get("pages", [])
    if pages and verbose:
        console.print()
        table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
        table.add_column("Source", style="site.path")
        table.add_column("Output", style="site.path")
        table.add_column("Title", style="site.title")
        for page in pages:
            table.add_row(page["source"], page["output"], page["title"] or "(untitled)")
        console.print(table)


def _render_check(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render reference/front-matter findings as a table."""
    d = result.data
    issues = d.get("issues", [])
    if not issues:
        _status_line(console, result)
        _field(console, "document_count", d.get("document_count", 0))
        console.print(Text("  No issues found.", style="site.ok"))
        return

    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Severity")
    table.add_column("Path", style="site.path")
    table.add_column("Category")
    table.add_column("Message")
    for issue in issues:
        severity = str(issue.get("severity", "warning"))
        table.add_row(
            Text(severity, style=style_for_severity(severity)),
            str(issue.get("path", "")),
            str(issue.get("category", "")),
            str(issue.get("message", "")),
        )
    console.print(table)
    console.print(
        f"\n{d.get('count', len(issues))} issues "
        f"({d.get('error_count', 0)} errors, {d.get('warning_count', 0)} warnings) "
        f"in {d.get('document_count', 0)} documents"
    )


def _render_page_summary(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    """Render render_page results without the (large) HTML payload."""
    _status_line(console, result)
    for key in ("source", "title", "output"):
        if result.data.get(key) is not None:
            _field(console, key, result.data[key])


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


_OP_RENDERERS: dict[str, Any] = {
    "build": _render_build,
    "check": _render_check,
    "render_page": _render_page_summary,
}
