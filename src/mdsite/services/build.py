"""BuildService — render every source document into the output tree.

Extends BaseService. A build is a one-shot transformation: there is no
cache and no incremental rebuild; every page is rendered each time.
"""

from __future__ import annotations

import logging
import shutil
from typing import Any

from jinja2 import TemplateError

from mdsite.infrastructure.filesystem import read_document_file, write_page
from mdsite.services.base import BaseService
from mdsite.services.contracts import BuildResultData, dump_validated
from mdsite.services.render import RenderService
from mdsite.services.result import ServiceResult, fail

logger = logging.getLogger(__name__)


class BuildService(BaseService):
    """Build the static site."""

    def build(self, *, clean: bool = False) -> ServiceResult:
        """Render all markdown sources to mirrored HTML paths.

        Unreadable sources are skipped with a warning; front-matter and
        reference problems are reported as warnings and never stop the build.
        """
        op = "build"
        source_root = self._site.source_root
        output_root = self._site.output_root

        if not source_root.is_dir():
            return fail(
                op,
                "SOURCE_NOT_FOUND",
                f"Source directory does not exist: {source_root}",
                source_dir=str(source_root),
            )

        if clean and output_root.exists():
            if source_root.is_relative_to(output_root):
                return fail(
                    op,
                    "UNSAFE_CLEAN",
                    "Refusing to clean an output directory that contains the sources",
                    output_dir=str(output_root),
                )
            logger.debug("Removing output directory %s", output_root)
            shutil.rmtree(output_root)

        renderer = RenderService(self._site)
        warnings: list[str] = []
        pages: list[dict[str, Any]] = []
        skipped = 0

        for path in self._site.source_files():
            source = self._site.relative_source(path)
            try:
                document = read_document_file(path, source=source)
            except (OSError, UnicodeDecodeError) as exc:
                warnings.append(f"Skipped {source}: {exc}")
                skipped += 1
                continue

            try:
                page = renderer.render_document(document)
            except TemplateError as exc:
                return fail(op, "TEMPLATE_ERROR", f"Page template failed: {exc}", source=source)

            dest = self._site.output_path_for(path)
            try:
                write_page(dest, page.html)
            except OSError as exc:
                return fail(op, "WRITE_ERROR", f"Cannot write {dest}: {exc}", path=str(dest))

            logger.debug("Rendered %s -> %s", source, dest)
            warnings.extend(f"{source}: {w}" for w in page.warnings)
            pages.append(
                {
                    "source": source,
                    "output": dest.relative_to(output_root).as_posix(),
                    "title": page.title,
                }
            )

        payload = {
            "source_dir": str(source_root),
            "output_dir": str(output_root),
            "page_count": len(pages),
            "skipped_count": skipped,
            "pages": pages,
        }
        return ServiceResult(
            ok=True,
            op=op,
            data=dump_validated(BuildResultData, payload),
            warnings=warnings,
        )
