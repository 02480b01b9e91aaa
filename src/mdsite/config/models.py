"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, mdsite.toml only contains
overrides. A project without any config file renders ``.`` into
``_site``.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel

# --- mdsite.toml sections ---


class SiteConfig(BaseModel):
    """[site] section."""

    model_config = {"frozen": True}

    source_dir: Path = Path(".")
    output_dir: Path = Path("_site")
    lang: str = "en"
    stylesheet: str | None = None
    templates_dir: Path | None = None

    def source_path(self, root: Path) -> Path:
        """Resolve the source directory against the project *root*."""
        return (root / self.source_dir).resolve()

    def output_path(self, root: Path) -> Path:
        """Resolve the output directory against the project *root*."""
        return (root / self.output_dir).resolve()

    def templates_path(self, root: Path) -> Path | None:
        if self.templates_dir is None:
            return None
        return (root / self.templates_dir).resolve()


class RenderConfig(BaseModel):
    """[render] section."""

    model_config = {"frozen": True}

    rewrite_md_links: bool = True
    heading_anchors: bool = False
