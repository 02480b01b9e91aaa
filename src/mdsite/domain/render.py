"""Block renderer — maps a block sequence to HTML body markup.

Rendering is deterministic: the same document and options always yield
byte-identical markup. Reference-style links are substituted from the
document's own :class:`ReferenceTable`.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from markupsafe import Markup, escape

from mdsite.domain.blocks import (
    Block,
    CodeBlock,
    Document,
    Heading,
    ListBlock,
    ListItem,
    Paragraph,
    ThematicBreak,
)
from mdsite.domain.inline import InlineRenderer, plain_text
from mdsite.domain.references import ReferenceTable


@dataclass(frozen=True)
class RenderOptions:
    """Knobs that change the generated markup."""

    rewrite_md_links: bool = True
    heading_anchors: bool = False


@dataclass(frozen=True)
class RenderedBody:
    """Body markup plus any non-fatal issues found while rendering."""

    html: Markup
    warnings: tuple[str, ...] = ()


def render_document(document: Document, options: RenderOptions | None = None) -> RenderedBody:
    """Render *document*'s body to HTML."""
    references = ReferenceTable.from_blocks(document.body)
    return render_blocks(document.body, references, options)


def render_blocks(
    blocks: tuple[Block, ...],
    references: ReferenceTable,
    options: RenderOptions | None = None,
) -> RenderedBody:
    """Render *blocks* against *references*.

    Unresolved reference aliases never raise; they are reported as warnings
    and rendered as their plain label text.
    """
    opts = options or RenderOptions()
    renderer = _BlockRenderer(
        InlineRenderer(references, rewrite_md_links=opts.rewrite_md_links),
        heading_anchors=opts.heading_anchors,
    )
    html = renderer.render(blocks)
    warnings = [f"Duplicate reference definition: {alias!r}" for alias in references.duplicates]
    warnings.extend(renderer.inline.warnings)
    # one warning per distinct problem, in first-seen order
    return RenderedBody(html=Markup(html), warnings=tuple(dict.fromkeys(warnings)))


def slugify(text: str) -> str:
    """Turn heading text into an anchor id.

    Examples:
        >>> slugify("Decorator Objects & Presenters")
        'decorator-objects-presenters'
    """
    slug = re.sub(r"[^\w\s-]", "", plain_text(text).lower())
    return re.sub(r"[\s_-]+", "-", slug).strip("-") or "section"


class _BlockRenderer:
    def __init__(self, inline: InlineRenderer, *, heading_anchors: bool) -> None:
        self.inline = inline
        self.heading_anchors = heading_anchors
        self._used_ids: set[str] = set()

    def render(self, blocks: tuple[Block, ...]) -> str:
        parts = [self._block(block) for block in blocks]
        rendered = "\n".join(part for part in parts if part)
        return f"{rendered}\n" if rendered else ""

    def _block(self, block: Block) -> str:
        if isinstance(block, Heading):
            text = self.inline.render(block.text)
            return f"<h{block.level}{self._anchor_attr(block.text)}>{text}</h{block.level}>"
        if isinstance(block, Paragraph):
            return f"<p>{self.inline.render(block.text)}</p>"
        if isinstance(block, CodeBlock):
            cls = f' class="language-{escape(block.language)}"' if block.language else ""
            return f"<pre><code{cls}>{escape(block.code)}</code></pre>"
        if isinstance(block, ListBlock):
            tag = "ol" if block.ordered else "ul"
            start = f' start="{block.start}"' if block.ordered and block.start != 1 else ""
            items = "\n".join(self._item(item) for item in block.items)
            return f"<{tag}{start}>\n{items}\n</{tag}>"
        if isinstance(block, ThematicBreak):
            return "<hr>"
        # reference definitions render to nothing
        return ""

    def _item(self, item: ListItem) -> str:
        paragraphs = [b for b in item.blocks if isinstance(b, Paragraph)]
        if len(paragraphs) > 1:
            return f"<li>\n{self.render(item.blocks)}</li>"
        parts: list[str] = []
        for block in item.blocks:
            if isinstance(block, Paragraph):
                parts.append(str(self.inline.render(block.text)))
            else:
                parts.append(self._block(block))
        inner = "\n".join(part for part in parts if part)
        return f"<li>{inner}</li>"

    def _anchor_attr(self, text: str) -> str:
        if not self.heading_anchors:
            return ""
        base = slugify(text)
        slug, n = base, 0
        while slug in self._used_ids:
            n += 1
            slug = f"{base}-{n}"
        self._used_ids.add(slug)
        return f' id="{escape(slug)}"'
