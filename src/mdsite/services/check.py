"""CheckService — report cosmetic problems in the source documents.

Extends BaseService. Nothing found here is fatal: undefined aliases
render as plain text and a missing title renders as an empty one. The
check exists so authors can find broken cross-links before publishing.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from mdsite.domain.blocks import Document
from mdsite.domain.references import (
    ReferenceTable,
    extract_reference_uses,
    local_markdown_target,
    normalize_alias,
)
from mdsite.infrastructure.filesystem import read_document_file
from mdsite.services.base import BaseService
from mdsite.services.contracts import CheckResultData, dump_validated
from mdsite.services.result import ServiceResult, fail

logger = logging.getLogger(__name__)


def _issue(
    category: str,
    path: str,
    message: str,
    *,
    alias: str | None = None,
    severity: str = "warning",
) -> dict[str, Any]:
    return {
        "category": category,
        "severity": severity,
        "path": path,
        "alias": alias,
        "message": message,
    }


def check_document(
    document: Document,
    *,
    base_dir: Path | None = None,
    source_root: Path | None = None,
) -> list[dict[str, Any]]:
    """Collect issues for a single document.

    When *base_dir* is given, relative ``.md`` reference targets are
    resolved against it and reported if the file does not exist.
    Root-absolute targets (``/guide.md``) resolve against *source_root*
    and are skipped when it is not given.
    """
    path = document.source or ""
    issues: list[dict[str, Any]] = []

    if not document.title:
        issues.append(_issue("missing_title", path, "Front-matter has no title"))

    table = ReferenceTable(document.reference_definitions())
    for alias in dict.fromkeys(table.duplicates):
        issues.append(
            _issue(
                "duplicate_reference",
                path,
                f"Alias {alias!r} is defined more than once",
                alias=alias,
            )
        )

    used: set[str] = set()
    reported: set[str] = set()
    for use in extract_reference_uses(document.body):
        key = normalize_alias(use.alias)
        if use.alias in table:
            used.add(key)
        elif use.explicit and key not in reported:
            reported.add(key)
            issues.append(
                _issue(
                    "undefined_reference",
                    path,
                    f"Alias {use.alias!r} is used but never defined",
                    alias=use.alias,
                )
            )

    for alias in table.aliases():
        if normalize_alias(alias) not in used:
            issues.append(
                _issue(
                    "unused_reference",
                    path,
                    f"Alias {alias!r} is defined but never used",
                    alias=alias,
                )
            )

    if base_dir is not None:
        for alias in table.aliases():
            ref = table.resolve(alias)
            target = local_markdown_target(ref.target) if ref else None
            if target is None:
                continue
            if target.startswith("/"):
                if source_root is None:
                    continue
                candidate = source_root / target.lstrip("/")
            else:
                candidate = base_dir / target
            if not candidate.is_file():
                issues.append(
                    _issue(
                        "missing_target",
                        path,
                        f"Alias {alias!r} points at missing article {ref.target!r}",
                        alias=alias,
                    )
                )

    return issues


class CheckService(BaseService):
    """Lint reference aliases and front-matter across the source tree."""

    def check(self) -> ServiceResult:
        op = "check"
        source_root = self._site.source_root
        if not source_root.is_dir():
            return fail(
                op,
                "SOURCE_NOT_FOUND",
                f"Source directory does not exist: {source_root}",
                source_dir=str(source_root),
            )

        issues: list[dict[str, Any]] = []
        documents = 0
        for path in self._site.source_files():
            source = self._site.relative_source(path)
            try:
                document = read_document_file(path, source=source)
            except (OSError, UnicodeDecodeError) as exc:
                issues.append(_issue("unreadable", source, str(exc), severity="error"))
                continue
            documents += 1
            found = check_document(document, base_dir=path.parent, source_root=source_root)
            logger.debug("Checked %s: %d issue(s)", source, len(found))
            issues.extend(found)

        error_count = sum(1 for i in issues if i["severity"] == "error")
        payload = {
            "source_dir": str(source_root),
            "document_count": documents,
            "issues": issues,
            "count": len(issues),
            "error_count": error_count,
            "warning_count": len(issues) - error_count,
            "healthy": error_count == 0,
        }
        return ServiceResult(ok=True, op=op, data=dump_validated(CheckResultData, payload))
