"""Document loading — front-matter + body blocks in one step."""

from __future__ import annotations

from mdsite.domain.blocks import Document
from mdsite.domain.frontmatter import extract_title, parse_frontmatter
from mdsite.domain.parser import parse_blocks


def load_document(content: str, *, source: str | None = None) -> Document:
    """Parse raw markdown *content* into an immutable :class:`Document`.

    Never raises for malformed input: a missing or broken front-matter
    block yields an empty title, and the body parser is total.
    """
    frontmatter, body = parse_frontmatter(content)
    return Document(
        title=extract_title(frontmatter),
        body=parse_blocks(body),
        frontmatter=dict(frontmatter),
        source=source,
    )
