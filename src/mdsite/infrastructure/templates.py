"""Jinja2 page template loading with per-project override support."""

from __future__ import annotations

from pathlib import Path

from jinja2 import BaseLoader, ChoiceLoader, Environment, FileSystemLoader, PackageLoader
from markupsafe import Markup

PAGE_TEMPLATE = "page.html.j2"


def build_template_environment(*, templates_dir: Path | None = None) -> Environment:
    """Build a Jinja2 environment with user overrides before packaged defaults.

    A user directory (``[site] templates_dir``) may hold its own
    ``page.html.j2``; anything it does not provide falls back to the
    templates shipped in ``mdsite/templates/page/``.
    """
    loaders: list[BaseLoader] = []
    if templates_dir is not None:
        loaders.append(FileSystemLoader(str(templates_dir)))

    loaders.append(PackageLoader("mdsite", "templates/page"))
    return Environment(
        loader=ChoiceLoader(loaders),
        autoescape=True,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


def render_page(
    env: Environment,
    *,
    title: str,
    content: Markup,
    lang: str = "en",
    stylesheet: str | None = None,
    source: str | None = None,
) -> str:
    """Wrap rendered body *content* in the full page layout."""
    template = env.get_template(PAGE_TEMPLATE)
    return template.render(
        title=title,
        content=content,
        lang=lang,
        stylesheet=stylesheet,
        source=source,
    )
