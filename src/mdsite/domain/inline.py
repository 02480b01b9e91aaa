"""Inline markup rendering — spans, links, and reference substitution.

Special spans (code, escapes, links, images, autolinks) are rendered
first and parked behind placeholders, the remaining text is
HTML-escaped, emphasis is applied, and the parked spans are restored.
"""

from __future__ import annotations

import re
from collections.abc import Callable

from markupsafe import Markup, escape

from mdsite.domain.references import ReferenceTable, rewrite_href

_INLINE = re.compile(
    r"""
      (?P<code>(?P<ticks>`+)(?P<code_body>.+?)(?<!`)(?P=ticks)(?!`))
    | (?P<escape>\\(?P<escaped>[!-/:-@\[-`{-~]))
    | (?P<autolink><(?P<auto_href>(?:https?|mailto):[^\s<>]+)>)
    | (?P<image>!\[(?P<image_alt>[^\[\]]*)\]
       \((?P<image_src>[^()\s]*)(?:\s+"(?P<image_title>[^"]*)")?\))
    | (?P<link>\[(?P<link_text>[^\[\]]*)\]
       \((?P<link_href>[^()\s]*)(?:\s+"(?P<link_title>[^"]*)")?\))
    | (?P<ref>\[(?P<ref_text>[^\[\]]+)\]\[(?P<ref_alias>[^\[\]]*)\])
    | (?P<shortcut>\[(?P<shortcut_alias>[^\[\]]+)\](?![\[(]))
    """,
    re.VERBOSE | re.DOTALL,
)
_STRONG = re.compile(r"\*\*(?=\S)(.+?)(?<=\S)\*\*|(?<!\w)__(?=\S)(.+?)(?<=\S)__(?!\w)", re.DOTALL)
_EMPHASIS = re.compile(
    r"\*(?=[^\s*])(.+?)(?<=[^\s*])\*|(?<!\w)_(?=[^\s_])(.+?)(?<=[^\s_])_(?!\w)", re.DOTALL
)
_PLACEHOLDER = re.compile("\x00(\\d+)\x00")


class InlineRenderer:
    """Render inline markdown against one document's reference table.

    Unresolved full (``[text][alias]``) and collapsed (``[alias][]``)
    references degrade to the plain label text and are recorded in
    :attr:`warnings`. Unresolved shortcut brackets stay as brackets
    around their inline-rendered content.
    """

    def __init__(self, references: ReferenceTable, *, rewrite_md_links: bool = True) -> None:
        self.references = references
        self.rewrite_md_links = rewrite_md_links
        self.warnings: list[str] = []

    def render(self, text: str) -> Markup:
        # NUL is reserved for placeholders
        text = text.replace("\x00", "\ufffd")
        stash: list[str] = []

        def keep(html: str) -> str:
            stash.append(html)
            return f"\x00{len(stash) - 1}\x00"

        staged = _INLINE.sub(lambda m: self._render_span(m, keep), text)
        html = str(escape(staged))
        html = _STRONG.sub(lambda m: f"<strong>{m.group(1) or m.group(2)}</strong>", html)
        html = _EMPHASIS.sub(lambda m: f"<em>{m.group(1) or m.group(2)}</em>", html)
        return Markup(_PLACEHOLDER.sub(lambda m: stash[int(m.group(1))], html))

    def _render_span(self, m: re.Match[str], keep: Callable[[str], str]) -> str:
        kind = m.lastgroup
        if kind == "code":
            return keep(f"<code>{escape(_trim_code_span(m.group('code_body')))}</code>")
        if kind == "escape":
            return keep(str(escape(m.group("escaped"))))
        if kind == "autolink":
            href = m.group("auto_href")
            return keep(f'<a href="{escape(href)}">{escape(href)}</a>')
        if kind == "image":
            src = rewrite_href(m.group("image_src"), rewrite_md_links=False)
            title = _title_attr(m.group("image_title"))
            return keep(f'<img src="{escape(src)}" alt="{escape(m.group("image_alt"))}"{title}>')
        if kind == "link":
            anchor = self._anchor(m.group("link_href"), m.group("link_title"), m.group("link_text"))
            return keep(anchor)
        if kind == "ref":
            alias = m.group("ref_alias") or m.group("ref_text")
            ref = self.references.resolve(alias)
            if ref is None:
                self.warnings.append(f"Undefined reference alias: {alias!r}")
                return keep(str(escape(m.group("ref_text"))))
            return keep(self._anchor(ref.target, ref.title, m.group("ref_text")))
        # shortcut
        alias = m.group("shortcut_alias")
        ref = self.references.resolve(alias)
        if ref is None:
            return keep(f"[{self.render(alias)}]")
        return keep(self._anchor(ref.target, ref.title, alias))

    def _anchor(self, href: str, title: str | None, text: str) -> str:
        target = rewrite_href(href, rewrite_md_links=self.rewrite_md_links)
        return f'<a href="{escape(target)}"{_title_attr(title)}>{self.render(text)}</a>'


def _title_attr(title: str | None) -> str:
    return f' title="{escape(title)}"' if title else ""


def _trim_code_span(body: str) -> str:
    body = body.replace("\n", " ")
    if len(body) > 2 and body.startswith(" ") and body.endswith(" ") and body.strip():
        return body[1:-1]
    return body


def _plain_span(m: re.Match[str]) -> str:
    kind = m.lastgroup
    if kind == "code":
        return _trim_code_span(m.group("code_body"))
    if kind == "escape":
        return m.group("escaped")
    if kind == "autolink":
        return m.group("auto_href")
    if kind == "image":
        return m.group("image_alt")
    if kind == "link":
        return m.group("link_text")
    if kind == "ref":
        return m.group("ref_text")
    return m.group("shortcut_alias")


def plain_text(text: str) -> str:
    """Strip inline markup, keeping link labels and code text."""
    stripped = _INLINE.sub(_plain_span, text)
    stripped = _STRONG.sub(lambda m: m.group(1) or m.group(2), stripped)
    stripped = _EMPHASIS.sub(lambda m: m.group(1) or m.group(2), stripped)
    return stripped.strip()
