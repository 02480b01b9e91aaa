"""Filesystem operations for site sources and rendered pages.

INVARIANT: Files are truth. Each markdown source maps to exactly one
HTML page at the mirrored relative path; nothing else is persisted.

Pure parsing/rendering lives in :mod:`mdsite.domain` (dependency
direction: infrastructure -> domain). This module handles file I/O,
path resolution, and source discovery.
"""

from __future__ import annotations

from pathlib import Path

from mdsite.domain.blocks import Document
from mdsite.domain.document import load_document

SOURCE_SUFFIX = ".md"
OUTPUT_SUFFIX = ".html"

# Directories to skip when discovering sources.
_SKIP_DIRS = frozenset({".git", ".mdsite", "node_modules"})


# ---------------------------------------------------------------------------
# File I/O
# ---------------------------------------------------------------------------


def read_document_file(path: Path, *, source: str | None = None) -> Document:
    """Read and parse a markdown file.

    *source* is the display path recorded on the document (default: file name).

    Raises:
        OSError: If the file cannot be read.
        UnicodeDecodeError: If the file is not valid UTF-8.
    """
    content = path.read_text(encoding="utf-8")
    return load_document(content, source=source or path.name)


def write_page(path: Path, html: str) -> None:
    """Write rendered HTML, creating parent directories as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(html, encoding="utf-8")


# ---------------------------------------------------------------------------
# Path resolution
# ---------------------------------------------------------------------------


def resolve_output_path(source_root: Path, output_root: Path, source: Path) -> Path:
    """Mirror *source* (under *source_root*) into *output_root* with an HTML suffix.

    ``{source_root}/patterns/presenters.md`` -> ``{output_root}/patterns/presenters.html``

    Raises:
        ValueError: If *source* (after resolving symlinks) lies outside *source_root*.
    """
    root = source_root.resolve()
    resolved = source.resolve()
    if not resolved.is_relative_to(root):
        msg = f"Path escapes source root: {source}"
        raise ValueError(msg)

    # An in-tree symlink keeps its own name rather than its target's
    mirrored = source.absolute()
    if mirrored.is_relative_to(root):
        rel = mirrored.relative_to(root)
    else:
        rel = resolved.relative_to(root)
    return output_root / rel.with_suffix(OUTPUT_SUFFIX)


def find_markdown_files(source_root: Path, *, exclude: Path | None = None) -> list[Path]:
    """Discover all markdown sources under *source_root*, sorted.

    Skips hidden directories, ``.git/``, ``.mdsite/``, *exclude* (the output
    directory, when it lives inside the source tree), and symlinks whose
    target lies outside *source_root*.
    """
    if not source_root.is_dir():
        return []

    root = source_root.resolve()
    excluded = exclude.resolve() if exclude is not None else None
    results: list[Path] = []
    for path in root.rglob(f"*{SOURCE_SUFFIX}"):
        if not path.is_file():
            continue
        rel_parts = path.relative_to(root).parts[:-1]
        if any(part in _SKIP_DIRS or part.startswith(".") for part in rel_parts):
            continue
        if excluded is not None and path.is_relative_to(excluded):
            continue
        if not path.resolve().is_relative_to(root):
            continue
        results.append(path)

    return sorted(results)
