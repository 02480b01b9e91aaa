"""Reference aliases — definition tables, usage scanning, href rewriting.

Pure functions, no infrastructure dependencies. Consumed by the renderer
to substitute reference-style links and by the check service to report
undefined, unused and duplicate aliases.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from urllib.parse import unquote, urlsplit, urlunsplit

from mdsite.domain.blocks import Block, Heading, Paragraph, ReferenceDefinition, iter_blocks

# [text][alias] or [alias][] (group 2 empty), or a bare [alias] (group 3).
_REFERENCE_USE = re.compile(
    r"(?<![\\!\]])\[([^\[\]]+)\]\[([^\[\]]*)\]|(?<![\\!\]])\[([^\[\]]+)\](?![\[(:])"
)
_CODE_SPAN = re.compile(r"(`+).+?\1")


@dataclass(frozen=True)
class Reference:
    """A resolved alias target."""

    alias: str
    target: str
    title: str | None = None


@dataclass(frozen=True)
class ReferenceUse:
    """An alias occurrence in body text."""

    alias: str
    explicit: bool = True


def normalize_alias(alias: str) -> str:
    """Case-fold *alias* and collapse internal whitespace."""
    return " ".join(alias.split()).casefold()


class ReferenceTable:
    """Per-document alias → Reference mapping.

    The first definition of an alias wins; later ones are recorded as
    duplicates so they can be reported.
    """

    def __init__(self, definitions: list[ReferenceDefinition] | None = None) -> None:
        self._refs: dict[str, Reference] = {}
        self.duplicates: list[str] = []
        for definition in definitions or []:
            self.define(definition.alias, definition.target, definition.title)

    @classmethod
    def from_blocks(cls, blocks: tuple[Block, ...]) -> ReferenceTable:
        return cls([b for b in iter_blocks(blocks) if isinstance(b, ReferenceDefinition)])

    def define(self, alias: str, target: str, title: str | None = None) -> None:
        key = normalize_alias(alias)
        if key in self._refs:
            self.duplicates.append(alias)
            return
        self._refs[key] = Reference(alias=alias, target=target, title=title)

    def resolve(self, alias: str) -> Reference | None:
        """Look up *alias*; returns None when it is not defined."""
        return self._refs.get(normalize_alias(alias))

    def aliases(self) -> list[str]:
        """Defined aliases in their original spelling, in definition order."""
        return [ref.alias for ref in self._refs.values()]

    def __contains__(self, alias: object) -> bool:
        return isinstance(alias, str) and normalize_alias(alias) in self._refs

    def __len__(self) -> int:
        return len(self._refs)


def extract_reference_uses(blocks: tuple[Block, ...]) -> list[ReferenceUse]:
    """Return reference-link uses in document order.

    Code blocks and code spans are skipped. Bare ``[alias]`` brackets are
    reported with ``explicit=False`` since they may just be prose.
    """
    uses: list[ReferenceUse] = []
    for block in iter_blocks(blocks):
        if not isinstance(block, (Paragraph, Heading)):
            continue
        text = _CODE_SPAN.sub("", block.text)
        for match in _REFERENCE_USE.finditer(text):
            if match.group(3) is not None:
                uses.append(ReferenceUse(alias=match.group(3), explicit=False))
            else:
                uses.append(ReferenceUse(alias=match.group(2) or match.group(1), explicit=True))
    return uses


def rewrite_href(href: str, *, rewrite_md_links: bool = True) -> str:
    """Point relative links at ``.md`` articles to their rendered ``.html`` page.

    Absolute URLs, ``mailto:`` links, and pure fragments are returned unchanged.

    Examples:
        >>> rewrite_href("decorators.md#usage")
        'decorators.html#usage'
        >>> rewrite_href("https://example.com/README.md")
        'https://example.com/README.md'
    """
    if not rewrite_md_links or local_markdown_target(href) is None:
        return href
    parts = urlsplit(href)
    return urlunsplit(("", "", parts.path[:-3] + ".html", parts.query, parts.fragment))


def local_markdown_target(href: str) -> str | None:
    """Return the path of a relative link to a ``.md`` file, or None for anything else."""
    parts = urlsplit(href)
    if parts.scheme or parts.netloc or not parts.path.lower().endswith(".md"):
        return None
    return unquote(parts.path)
