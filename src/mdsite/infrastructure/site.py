"""Site — the single dependency injected into every service.

The Site owns resolved source/output locations and the lazily built
Jinja2 environment. It performs no rendering of its own; services
combine domain rendering with the page layout it provides.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from mdsite.infrastructure.filesystem import find_markdown_files, resolve_output_path
from mdsite.infrastructure.templates import build_template_environment

if TYPE_CHECKING:
    from jinja2 import Environment

    from mdsite.config.settings import MdsiteSettings
    from mdsite.domain.render import RenderOptions

logger = logging.getLogger(__name__)


class Site:
    """Resolved view of one documentation source tree."""

    def __init__(
        self,
        settings: MdsiteSettings,
        *,
        source_root: Path | None = None,
        output_root: Path | None = None,
    ) -> None:
        self.settings = settings
        root = settings.project_root
        self.source_root = (source_root or settings.site.source_path(root)).resolve()
        self.output_root = (output_root or settings.site.output_path(root)).resolve()
        self._templates: Environment | None = None

    @property
    def templates(self) -> Environment:
        """Jinja2 environment (built on first access)."""
        if self._templates is None:
            templates_dir = self.settings.site.templates_path(self.settings.project_root)
            logger.debug("Building template environment (override dir: %s)", templates_dir)
            self._templates = build_template_environment(templates_dir=templates_dir)
        return self._templates

    @property
    def render_options(self) -> RenderOptions:
        return self.settings.render_options()

    def source_files(self) -> list[Path]:
        """All markdown sources, excluding the output tree if nested inside."""
        exclude = self.output_root if self.output_root.is_relative_to(self.source_root) else None
        return find_markdown_files(self.source_root, exclude=exclude)

    def output_path_for(self, source: Path) -> Path:
        return resolve_output_path(self.source_root, self.output_root, source)

    def relative_source(self, source: Path) -> str:
        """Source path relative to the source root, or its name when outside it."""
        for candidate in (source.absolute(), source.resolve()):
            if candidate.is_relative_to(self.source_root):
                return candidate.relative_to(self.source_root).as_posix()
        return source.name

    def stylesheet_href(self, relative_source: str) -> str | None:
        """Stylesheet link as seen from the page rendered for *relative_source*.

        Relative stylesheet paths are interpreted against the output root, so
        pages in subdirectories get the matching number of ``../`` prefixes.
        """
        stylesheet = self.settings.site.stylesheet
        if not stylesheet or "://" in stylesheet or stylesheet.startswith("/"):
            return stylesheet
        depth = relative_source.count("/")
        return "../" * depth + stylesheet
