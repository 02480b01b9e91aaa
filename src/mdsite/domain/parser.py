"""Markdown block parser.

Pure functions, no infrastructure dependencies. Converts raw body text
into a tuple of block nodes in document order.

INVARIANT: parsing is total. Every input yields some block sequence;
an opening code fence without a matching closing fence is kept as
literal paragraph text instead of swallowing the rest of the document.
"""

from __future__ import annotations

import re

from mdsite.domain.blocks import (
    Block,
    CodeBlock,
    Heading,
    ListBlock,
    ListItem,
    Paragraph,
    ReferenceDefinition,
    ThematicBreak,
)

_HEADING = re.compile(r"^ {0,3}(#{1,6})(?:[ \t]+(.*?))?(?:[ \t]+#+)?[ \t]*$")
_FENCE_OPEN = re.compile(r"^( {0,3})(`{3,}|~{3,})[ \t]*([^`]*?)[ \t]*$")
_THEMATIC_BREAK = re.compile(r"^ {0,3}([-*_])(?:[ \t]*\1){2,}[ \t]*$")
_BULLET_ITEM = re.compile(r"^( {0,3})([-*+])([ \t]+|$)(.*)$")
_ORDERED_ITEM = re.compile(r"^( {0,3})(\d{1,9})([.)])([ \t]+|$)(.*)$")
# [alias]: target "optional title"  (title may also use single quotes or parens)
_REFERENCE_DEFINITION = re.compile(
    r"""^\ {0,3}\[(?P<alias>[^\[\]]+)\]:[ \t]*
        <?(?P<target>[^\s>]+)>?
        (?:[ \t]+(?:"(?P<dq>[^"]*)"|'(?P<sq>[^']*)'|\((?P<pq>[^)]*)\)))?
        [ \t]*$""",
    re.VERBOSE,
)


def parse_blocks(text: str) -> tuple[Block, ...]:
    """Parse markdown *text* into block nodes."""
    text = text.replace("\x00", "\ufffd")
    lines = text.replace("\r\n", "\n").replace("\r", "\n").expandtabs(4).split("\n")
    return tuple(_BlockParser(lines).parse())


class _BlockParser:
    """Single-pass line scanner over a list of lines."""

    def __init__(self, lines: list[str]) -> None:
        self._lines = lines
        self._pos = 0

    def parse(self) -> list[Block]:
        blocks: list[Block] = []
        while self._pos < len(self._lines):
            line = self._lines[self._pos]
            if not line.strip():
                self._pos += 1
                continue
            blocks.append(self._parse_block(line))
        return blocks

    def _parse_block(self, line: str) -> Block:
        heading = _HEADING.match(line)
        if heading:
            self._pos += 1
            return Heading(level=len(heading.group(1)), text=(heading.group(2) or "").strip())

        fence = _FENCE_OPEN.match(line)
        if fence:
            close_at = self._find_fence_close(fence)
            if close_at is not None:
                return self._consume_code_block(fence, close_at)

        if _THEMATIC_BREAK.match(line):
            self._pos += 1
            return ThematicBreak()

        if _list_marker(line) is not None:
            return self._parse_list()

        reference = _REFERENCE_DEFINITION.match(line)
        if reference:
            self._pos += 1
            title = reference.group("dq") or reference.group("sq") or reference.group("pq")
            return ReferenceDefinition(
                alias=reference.group("alias").strip(),
                target=reference.group("target"),
                title=title,
            )

        return self._parse_paragraph()

    # -- fenced code --------------------------------------------------------

    def _find_fence_close(self, fence: re.Match[str]) -> int | None:
        marker = fence.group(2)
        closer = re.compile(rf"^ {{0,3}}{re.escape(marker[0])}{{{len(marker)},}}[ \t]*$")
        for idx in range(self._pos + 1, len(self._lines)):
            if closer.match(self._lines[idx]):
                return idx
        return None

    def _consume_code_block(self, fence: re.Match[str], close_at: int) -> CodeBlock:
        indent = len(fence.group(1))
        body = [_strip_indent(ln, indent) for ln in self._lines[self._pos + 1 : close_at]]
        self._pos = close_at + 1
        code = "\n".join(body)
        if body:
            code += "\n"
        return CodeBlock(code=code, info=fence.group(3).strip())

    # -- paragraphs ---------------------------------------------------------

    def _parse_paragraph(self) -> Paragraph:
        collected = [self._lines[self._pos].strip()]
        self._pos += 1
        while self._pos < len(self._lines):
            line = self._lines[self._pos]
            if not line.strip() or self._interrupts_paragraph(line):
                break
            collected.append(line.strip())
            self._pos += 1
        return Paragraph(text="\n".join(collected))

    def _interrupts_paragraph(self, line: str) -> bool:
        if _HEADING.match(line) or _THEMATIC_BREAK.match(line):
            return True
        fence = _FENCE_OPEN.match(line)
        if fence and self._find_fence_close(fence) is not None:
            return True
        return _list_marker(line) is not None

    # -- lists --------------------------------------------------------------

    def _parse_list(self) -> ListBlock:
        first = _list_marker(self._lines[self._pos])
        assert first is not None
        ordered, kind, start, _ = first
        items: list[ListItem] = []

        while self._pos < len(self._lines):
            marker = _list_marker(self._lines[self._pos])
            if marker is None or marker[:2] != (ordered, kind):
                break
            content_indent = marker[3]
            item_lines = [self._lines[self._pos][content_indent:]]
            self._pos += 1

            while self._pos < len(self._lines):
                line = self._lines[self._pos]
                if not line.strip():
                    nxt = self._next_nonblank()
                    if nxt is None or _indent_of(self._lines[nxt]) < content_indent:
                        break
                    item_lines.append("")
                    self._pos += 1
                    continue
                if _indent_of(line) >= content_indent:
                    item_lines.append(line[content_indent:])
                elif _list_marker(line) is not None or self._interrupts_paragraph(line):
                    break
                elif item_lines[-1].strip():
                    # lazy continuation of the item's paragraph
                    item_lines.append(line.strip())
                else:
                    break
                self._pos += 1

            items.append(ListItem(blocks=tuple(_BlockParser(item_lines).parse())))

            nxt = self._next_nonblank()
            if nxt is None:
                self._pos = len(self._lines)
                break
            following = _list_marker(self._lines[nxt])
            if following is None or following[:2] != (ordered, kind):
                break
            self._pos = nxt

        return ListBlock(ordered=ordered, items=tuple(items), start=start)

    def _next_nonblank(self) -> int | None:
        for idx in range(self._pos, len(self._lines)):
            if self._lines[idx].strip():
                return idx
        return None


def _list_marker(line: str) -> tuple[bool, str, int, int] | None:
    """Return ``(ordered, marker_kind, start, content_indent)`` for a list item line."""
    if _THEMATIC_BREAK.match(line):
        return None
    bullet = _BULLET_ITEM.match(line)
    if bullet:
        indent, mark, gap = bullet.group(1), bullet.group(2), bullet.group(3)
        return False, mark, 1, len(indent) + len(mark) + max(len(gap), 1)
    ordered = _ORDERED_ITEM.match(line)
    if ordered:
        indent, num, delim, gap = (ordered.group(i) for i in range(1, 5))
        return True, delim, int(num), len(indent) + len(num) + len(delim) + max(len(gap), 1)
    return None


def _indent_of(line: str) -> int:
    return len(line) - len(line.lstrip(" "))


def _strip_indent(line: str, width: int) -> str:
    """Remove up to *width* leading spaces."""
    return line[min(width, _indent_of(line)) :]
