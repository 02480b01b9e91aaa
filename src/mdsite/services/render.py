"""RenderService — one document to one full HTML page.

Extends BaseService. Rendering is a pure, synchronous transformation:
the same source always produces byte-identical HTML.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from jinja2 import TemplateError

from mdsite.domain.blocks import Document
from mdsite.domain.render import render_document
from mdsite.infrastructure.filesystem import read_document_file, write_page
from mdsite.infrastructure.templates import render_page
from mdsite.services.base import BaseService
from mdsite.services.contracts import RenderResultData, dump_validated
from mdsite.services.result import ServiceResult, fail

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderedPage:
    """A complete page plus the non-fatal issues found while producing it."""

    title: str
    html: str
    warnings: tuple[str, ...] = ()


class RenderService(BaseService):
    """Render markdown documents into HTML pages."""

    def render_document(self, document: Document) -> RenderedPage:
        """Render *document* into a full page.

        Raises:
            jinja2.TemplateError: If the page template is missing or broken.
        """
        body = render_document(document, self._site.render_options)
        warnings = list(body.warnings)
        if not document.title:
            warnings.insert(0, "Missing title in front-matter")

        source = document.source or ""
        html = render_page(
            self._site.templates,
            title=document.title,
            content=body.html,
            lang=self._site.settings.site.lang,
            stylesheet=self._site.stylesheet_href(source),
            source=document.source,
        )
        return RenderedPage(title=document.title, html=html, warnings=tuple(warnings))

    def render_file(self, path: Path, *, output: Path | None = None) -> ServiceResult:
        """Render the markdown file at *path*; optionally write it to *output*."""
        op = "render_page"
        if not path.is_file():
            return fail(op, "NOT_FOUND", f"No such file: {path}", path=str(path))

        source = self._site.relative_source(path)
        try:
            document = read_document_file(path, source=source)
        except (OSError, UnicodeDecodeError) as exc:
            return fail(op, "READ_ERROR", f"Cannot read {path}: {exc}", path=str(path))

        try:
            page = self.render_document(document)
        except TemplateError as exc:
            return fail(op, "TEMPLATE_ERROR", f"Page template failed: {exc}")

        if output is not None:
            try:
                write_page(output, page.html)
            except OSError as exc:
                return fail(op, "WRITE_ERROR", f"Cannot write {output}: {exc}", path=str(output))
            logger.debug("Rendered %s -> %s", source, output)

        payload = {
            "source": source,
            "title": page.title,
            "html": page.html,
            "output": str(output) if output is not None else None,
        }
        return ServiceResult(
            ok=True,
            op=op,
            data=dump_validated(RenderResultData, payload),
            warnings=[f"{source}: {w}" for w in page.warnings],
        )
