"""Tests for the root xcsh CLI."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from xcsh import __version__
from xcsh.cli import cli


def test_cli_help(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "xcsh" in result.output
    assert "--headless" in result.output


def test_cli_help_lists_domains(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--help"])
    assert "virtual" in result.output
    assert "domains" in result.output


def test_cli_version(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_cli_no_args_without_tty_prints_help(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, [])
    assert result.exit_code == 0
    assert "Usage" in result.output


def test_cli_examples(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--examples"])
    assert result.exit_code == 0
    assert "xcsh --headless" in result.output


# --- Global flags ---


@pytest.mark.parametrize("flags", [["-v"], ["--log-json"], ["--no-color"], ["-o", "json"], ["-n", "prod"]])
def test_global_flags_accepted(cli_runner: CliRunner, flags: list[str]) -> None:
    result = cli_runner.invoke(cli, [*flags, "--version"])
    assert result.exit_code == 0


def test_invalid_output_choice(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["-o", "xml", "context", "show"])
    assert result.exit_code == 2


def test_missing_config_file(cli_runner: CliRunner, tmp_path: Path) -> None:
    result = cli_runner.invoke(cli, ["-c", str(tmp_path / "nope.toml"), "context", "show"])
    assert result.exit_code == 1
    assert "Config file not found" in result.output


def test_unknown_command(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["gardening"])
    assert result.exit_code == 2


# --- Headless ---


def test_headless_round_trip(cli_runner: CliRunner) -> None:
    stdin = '{"type": "command", "value": "context show"}\n{"type": "exit", "code": 0}\n'
    result = cli_runner.invoke(cli, ["--headless"], input=stdin)
    assert result.exit_code == 0
    messages = [json.loads(line) for line in result.output.splitlines() if line.startswith("{")]
    kinds = [m["type"] for m in messages]
    assert kinds[0] == "event"
    assert messages[0]["event"] == "session_initialized"
    assert "output" in kinds
    assert kinds[-1] == "exit"


def test_headless_session_event_disabled_by_config(cli_runner: CliRunner, tmp_path: Path) -> None:
    (tmp_path / "xcsh.toml").write_text("[headless]\nemit_session_event = false\n")
    result = cli_runner.invoke(cli, ["--headless"], input="")
    messages = [json.loads(line) for line in result.output.splitlines() if line.startswith("{")]
    assert [m["type"] for m in messages] == ["prompt", "exit"]


def test_headless_exit_code(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--headless"], input='{"type": "exit", "code": 3}\n')
    assert result.exit_code == 3
