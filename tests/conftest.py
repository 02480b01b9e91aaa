"""Shared pytest fixtures and test helpers for mdsite tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

from mdsite.config.settings import MdsiteSettings
from mdsite.infrastructure.site import Site

PRESENTERS = """\
---
title: Presenters
---
# Presenters

A presenter wraps a model for the view. Compare with [decorators][decorator-object].

```ruby
class UserPresenter < SimpleDelegator
end
```

[decorator-object]: decorators.md
"""

DECORATORS = """\
---
title: Decorators
---
# Decorators

Decorators add behaviour. See [presenters][presenter-object] and [query objects][missing].

[presenter-object]: presenters.md#usage
"""


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _no_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's MDSITE_* environment out of the tests."""
    monkeypatch.delenv("MDSITE_CONFIG", raising=False)


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Temporary project with an ``articles/`` source tree.

    Layout::

        articles/presenters.md
        articles/decorators.md
        articles/patterns/query-objects.md
    """
    articles = tmp_path / "articles"
    (articles / "patterns").mkdir(parents=True)
    (articles / "presenters.md").write_text(PRESENTERS, encoding="utf-8")
    (articles / "decorators.md").write_text(DECORATORS, encoding="utf-8")
    (articles / "patterns" / "query-objects.md").write_text(
        "---\ntitle: Query Objects\n---\n# Query Objects\n\n"
        "Back to [presenters](../presenters.md).\n",
        encoding="utf-8",
    )
    return tmp_path


@pytest.fixture
def settings(project_root: Path) -> MdsiteSettings:
    return MdsiteSettings.from_cli(project_root=project_root)


@pytest.fixture
def site(project_root: Path, settings: MdsiteSettings) -> Site:
    """Site over ``articles/`` writing into ``public/``."""
    return Site(
        settings,
        source_root=project_root / "articles",
        output_root=project_root / "public",
    )


@pytest.fixture
def _isolated_project(project_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to the temp project so the CLI resolves paths inside it.

    Use via ``@pytest.mark.usefixtures("_isolated_project")`` on command
    test classes.
    """
    monkeypatch.chdir(project_root)
