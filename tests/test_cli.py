"""Tests for the root mdsite CLI."""

from pathlib import Path

import pytest
from click.testing import CliRunner

from mdsite import __version__
from mdsite.cli import cli


def test_cli_help(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "mdsite" in result.output
    for name in ("build", "render", "check"):
        assert name in result.output


def test_cli_version(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_cli_no_args(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, [])
    assert result.exit_code == 0
    assert "Usage" in result.output


# --- Global flags ---


@pytest.mark.parametrize("flag", ["--json", "-q", "-v", "--log-json"])
def test_global_flag_accepted(cli_runner: CliRunner, flag: str) -> None:
    result = cli_runner.invoke(cli, [flag, "--version"])
    assert result.exit_code == 0


def test_config_option_accepted(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["-c", "/tmp/test.toml", "--version"])
    assert result.exit_code == 0


def test_invalid_config_is_reported(cli_runner: CliRunner, tmp_path: Path) -> None:
    bad = tmp_path / "mdsite.toml"
    bad.write_text("[site\n")
    result = cli_runner.invoke(cli, ["-c", str(bad), "check"])
    assert result.exit_code == 1
    assert "Invalid TOML" in result.output

