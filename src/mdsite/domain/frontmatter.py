"""Front-matter parsing, title extraction and re-serialization.

Front-matter is a YAML block delimited by ``---`` lines at the very top
of a markdown file. Only the ``title`` key carries meaning; every other
key is preserved as-is.

INVARIANT: malformed front-matter is never fatal. A missing title, a
non-mapping block, or YAML that fails to parse all recover to an empty
title.
"""

from __future__ import annotations

import logging
from io import StringIO
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

logger = logging.getLogger(__name__)

_FRONTMATTER_DELIMITER = "---"


def _new_yaml() -> YAML:
    """Create a fresh round-trip YAML parser.

    ruamel.yaml's YAML object is stateful; a failed dump can leave a shared
    instance in a broken state, so each operation gets its own.
    """
    y = YAML()
    y.preserve_quotes = True
    y.default_flow_style = False
    return y


class DocumentFrontmatter(BaseModel):
    """Validated view of a document's front-matter."""

    model_config = ConfigDict(frozen=True, extra="allow")

    title: str = ""

    @field_validator("title", mode="before")
    @classmethod
    def _coerce_title(cls, value: Any) -> str:
        if value is None or isinstance(value, (dict, list)):
            return ""
        return str(value).strip()


def split_frontmatter(content: str) -> tuple[str | None, str]:
    """Split *content* into ``(yaml_block, body)``.

    A leading byte-order mark is dropped. Returns ``(None, content)`` when
    the text does not open with a delimiter line or the closing delimiter
    is missing.
    """
    normalized = content.removeprefix("\ufeff").replace("\r\n", "\n")
    lines = normalized.split("\n")
    if not lines or lines[0].strip() != _FRONTMATTER_DELIMITER:
        return None, normalized

    for i, line in enumerate(lines[1:], start=1):
        if line.strip() == _FRONTMATTER_DELIMITER:
            body = "\n".join(lines[i + 1 :])
            if body.startswith("\n"):
                body = body[1:]
            return "\n".join(lines[1:i]), body

    return None, normalized


def parse_frontmatter(content: str) -> tuple[dict[str, Any], str]:
    """Parse YAML front-matter and body from markdown content.

    Returns:
        A ``(frontmatter_dict, body_text)`` tuple. Text without a
        delimited block yields ``({}, content)``. A block that is not
        valid YAML, or not a mapping, yields ``({}, body)``.
    """
    yaml_block, body = split_frontmatter(content)
    if yaml_block is None:
        return {}, body

    try:
        loaded = _new_yaml().load(yaml_block)
    except YAMLError as exc:
        logger.warning("Unparseable front-matter, ignoring it: %s", exc)
        return {}, body

    if loaded is None:
        return {}, body
    if not isinstance(loaded, dict):
        logger.warning("Front-matter is not a mapping, ignoring it")
        return {}, body
    return loaded, body


def extract_title(frontmatter: dict[str, Any]) -> str:
    """Return the document title, or an empty string if absent or malformed."""
    return DocumentFrontmatter.model_validate({"title": frontmatter.get("title")}).title


def render_frontmatter(frontmatter: dict[str, Any], body: str) -> str:
    """Render a front-matter mapping and body text back into markdown.

    ``title`` is emitted first; remaining keys keep their original order.
    ``None`` values are dropped.
    """
    ordered: dict[str, Any] = {}
    if frontmatter.get("title") is not None:
        ordered["title"] = frontmatter["title"]
    for key, value in frontmatter.items():
        if key != "title" and value is not None:
            ordered[key] = value

    parts = [_FRONTMATTER_DELIMITER, "\n"]
    if ordered:
        buf = StringIO()
        _new_yaml().dump(ordered, buf)
        parts.append(buf.getvalue())
    parts.extend([_FRONTMATTER_DELIMITER, "\n"])
    if body:
        parts.append(body)
    return "".join(parts)
