"""Tests for XcshSettings: unified settings with TOML source."""

from pathlib import Path

import click
import pytest

from xcsh.config.settings import DEFAULT_NAMESPACE, XcshSettings
from xcsh.domain.types import OutputFormat


class TestXcshSettingsDefaults:
    def test_all_defaults(self) -> None:
        """With no TOML and no env vars, all fields use code defaults."""
        settings = XcshSettings.from_cli()
        assert settings.api_url is None
        assert settings.api_token is None
        assert settings.namespace == DEFAULT_NAMESPACE
        assert settings.tier is None
        assert settings.config_path is None
        assert settings.http.timeout == 30.0
        assert settings.effective_output_format == OutputFormat.TABLE
        assert settings.effective_no_color is False

    def test_frozen(self) -> None:
        settings = XcshSettings.from_cli()
        with pytest.raises(Exception):
            settings.verbose = True  # type: ignore[misc]


class TestTomlSource:
    def test_discovered_in_cwd(self, tmp_path: Path) -> None:
        (tmp_path / "xcsh.toml").write_text('namespace = "staging"\n[http]\ntimeout = 5\n')
        settings = XcshSettings.from_cli()
        assert settings.namespace == "staging"
        assert settings.http.timeout == 5.0
        assert settings.http.verify_tls is True
        assert settings.config_path == (tmp_path / "xcsh.toml").resolve()

    def test_output_section(self, tmp_path: Path) -> None:
        (tmp_path / "xcsh.toml").write_text('[output]\nformat = "json"\nno_color = true\n')
        settings = XcshSettings.from_cli()
        assert settings.effective_output_format == OutputFormat.JSON
        assert settings.effective_no_color is True

    def test_deprecations_table(self, tmp_path: Path) -> None:
        (tmp_path / "xcsh.toml").write_text('[deprecations]\nlegacy_dns = "dns"\n')
        assert XcshSettings.from_cli().deprecations == {"legacy_dns": "dns"}

    def test_empty_toml_uses_defaults(self, tmp_path: Path) -> None:
        (tmp_path / "xcsh.toml").write_text("")
        settings = XcshSettings.from_cli()
        assert settings.namespace == DEFAULT_NAMESPACE
        assert settings.repl.banner is True

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom" / "my.toml"
        custom.parent.mkdir(parents=True)
        custom.write_text('tier = "STANDARD"\n')
        settings = XcshSettings.from_cli(config_path=str(custom))
        assert settings.tier == "STANDARD"
        assert settings.config_path == custom

    def test_missing_config_path(self, tmp_path: Path) -> None:
        with pytest.raises(click.ClickException, match="Config file not found"):
            XcshSettings.from_cli(config_path=str(tmp_path / "absent.toml"))

    def test_invalid_toml(self, tmp_path: Path) -> None:
        (tmp_path / "xcsh.toml").write_text("[http\n")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            XcshSettings.from_cli()


class TestCliFlags:
    def test_cli_flags_override_toml(self, tmp_path: Path) -> None:
        (tmp_path / "xcsh.toml").write_text('namespace = "staging"\n')
        settings = XcshSettings.from_cli(namespace="prod", output_format=OutputFormat.YAML, verbose=True)
        assert settings.namespace == "prod"
        assert settings.effective_output_format == OutputFormat.YAML
        assert settings.verbose is True

    def test_none_flags_dropped(self, tmp_path: Path) -> None:
        (tmp_path / "xcsh.toml").write_text('namespace = "staging"\n')
        settings = XcshSettings.from_cli(namespace=None, output_format=None)
        assert settings.namespace == "staging"
        assert settings.output_format is None


class TestEnvVars:
    def test_connection_env_vars(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("F5XC_API_URL", "https://acme.console.ves.volterra.io")
        monkeypatch.setenv("F5XC_API_TOKEN", "secret")
        monkeypatch.setenv("F5XC_NAMESPACE", "ops")
        settings = XcshSettings.from_cli()
        assert settings.api_url == "https://acme.console.ves.volterra.io"
        assert settings.api_token == "secret"
        assert settings.namespace == "ops"

    def test_env_beats_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "xcsh.toml").write_text('namespace = "staging"\n')
        monkeypatch.setenv("F5XC_NAMESPACE", "ops")
        assert XcshSettings.from_cli().namespace == "ops"

    def test_nested_env_var_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("F5XC_HTTP__TIMEOUT", "12.5")
        assert XcshSettings.from_cli().http.timeout == 12.5
