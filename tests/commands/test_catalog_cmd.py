"""Tests for ``xcsh domains`` commands."""

import json

from click.testing import CliRunner

from xcsh.cli import cli


class TestDomainsList:
    def test_table(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--no-color", "domains", "list"])
        assert result.exit_code == 0
        assert "CATEGORY" in result.output
        assert "virtual" in result.output

    def test_json_category(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-o", "json", "domains", "list", "--category", "ai"])
        assert result.exit_code == 0
        rows = json.loads(result.output)
        assert "ai_services" in [row["name"] for row in rows]
        assert {row["category"] for row in rows} == {"AI"}

    def test_preview_tsv(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-o", "tsv", "domains", "list", "--preview"])
        assert result.exit_code == 0
        names = [line.split("\t")[0] for line in result.output.splitlines()]
        assert "generative_ai" in names

    def test_bad_tier(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["domains", "list", "--tier", "gold"])
        assert result.exit_code == 2
        assert "Unknown tier: gold" in result.output

    def test_examples(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["domains", "list", "--examples"])
        assert result.exit_code == 0
        assert "Examples for" in result.output


class TestDomainsShow:
    def test_yaml(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-o", "yaml", "domains", "show", "virtual"])
        assert result.exit_code == 0
        assert "name: virtual" in result.output
        assert "http_loadbalancer" in result.output

    def test_unknown(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["domains", "show", "virtul"])
        assert result.exit_code == 2
        assert "ERROR [ERR_UNKNOWN_DOMAIN]" in result.output


class TestDomainsRelated:
    def test_limit(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-o", "json", "domains", "related", "virtual", "--limit", "3"])
        assert result.exit_code == 0
        rows = json.loads(result.output)
        assert 0 < len(rows) <= 3
        assert all(row["name"] != "virtual" for row in rows)

    def test_limit_must_be_positive(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["domains", "related", "virtual", "--limit", "0"])
        assert result.exit_code == 2
