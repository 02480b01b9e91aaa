"""Tests for the render CLI command."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from mdsite.cli import cli


@pytest.mark.usefixtures("_isolated_project")
class TestRenderCommand:
    def test_html_to_stdout(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["render", "articles/presenters.md"])
        assert result.exit_code == 0
        assert result.stdout.startswith("<!DOCTYPE html>")
        assert "<title>Presenters</title>" in result.stdout
        assert '<a href="decorators.html">decorators</a>' in result.stdout
        assert result.stderr == ""

    def test_warnings_on_stderr(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["render", "articles/decorators.md"])
        assert result.exit_code == 0
        assert "Undefined reference alias: 'missing'" in result.stderr
        assert "Undefined" not in result.stdout

    def test_output_file(self, cli_runner: CliRunner, project_root: Path) -> None:
        result = cli_runner.invoke(
            cli, ["render", "articles/presenters.md", "--output", "out/presenters.html"]
        )
        assert result.exit_code == 0
        assert "OK" in result.stdout
        assert "<html" not in result.stdout
        written = (project_root / "out" / "presenters.html").read_text(encoding="utf-8")
        assert "<h1>Presenters</h1>" in written

    def test_quiet_output_file(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "render", "articles/presenters.md", "-o", "p.html"])
        assert result.exit_code == 0
        assert result.stdout.strip() == "p.html"

    def test_json(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "render", "articles/presenters.md"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["op"] == "render_page"
        assert data["data"]["title"] == "Presenters"
        assert "<h1>Presenters</h1>" in data["data"]["html"]

    def test_missing_file(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["render", "nope.md"])
        assert result.exit_code == 1
        assert "No such file" in result.stderr
