"""Block nodes and the Document model.

Blocks are immutable and appear in document order. A Document is read
once at render time and never modified afterwards.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Heading:
    """ATX heading (``#`` .. ``######``)."""

    level: int
    text: str


@dataclass(frozen=True)
class Paragraph:
    """Run of non-blank lines not claimed by any other block."""

    text: str


@dataclass(frozen=True)
class CodeBlock:
    """Fenced code block. ``code`` is kept verbatim."""

    code: str
    info: str = ""

    @property
    def language(self) -> str:
        """First word of the info string, or an empty string."""
        return self.info.split()[0] if self.info.strip() else ""


@dataclass(frozen=True)
class ListItem:
    """A list item; its content is parsed recursively into blocks."""

    blocks: tuple[Block, ...]


@dataclass(frozen=True)
class ListBlock:
    """Bullet or ordered list."""

    ordered: bool
    items: tuple[ListItem, ...]
    start: int = 1


@dataclass(frozen=True)
class ReferenceDefinition:
    """``[alias]: target "title"`` — renders to nothing."""

    alias: str
    target: str
    title: str | None = None


@dataclass(frozen=True)
class ThematicBreak:
    """Horizontal rule."""


Block = Heading | Paragraph | CodeBlock | ListBlock | ReferenceDefinition | ThematicBreak


@dataclass(frozen=True)
class Document:
    """A parsed markdown article."""

    title: str
    body: tuple[Block, ...]
    frontmatter: dict[str, Any] = field(default_factory=dict, compare=False)
    source: str | None = None

    def reference_definitions(self) -> list[ReferenceDefinition]:
        """Return every reference definition, including those nested in lists."""
        return [b for b in iter_blocks(self.body) if isinstance(b, ReferenceDefinition)]


def iter_blocks(blocks: tuple[Block, ...]) -> Iterator[Block]:
    """Yield *blocks* depth-first, descending into list items."""
    for block in blocks:
        yield block
        if isinstance(block, ListBlock):
            for item in block.items:
                yield from iter_blocks(item.blocks)
