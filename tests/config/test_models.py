"""Tests for config models: defaults and validation."""

import pytest
from pydantic import ValidationError

from xcsh.config.models import HeadlessConfig, HttpConfig, OutputConfig, ReplConfig, SubscriptionConfig
from xcsh.domain.types import OutputFormat


class TestSectionDefaults:
    def test_defaults(self) -> None:
        assert HttpConfig().timeout == 30.0
        assert HttpConfig().verify_tls is True
        assert OutputConfig().format == OutputFormat.TABLE
        assert ReplConfig().banner is True
        assert HeadlessConfig().emit_session_event is True
        assert SubscriptionConfig().auto_detect_tier is True

    def test_frozen(self) -> None:
        cfg = HttpConfig()
        with pytest.raises(ValidationError):
            cfg.timeout = 1.0  # type: ignore[misc]


class TestValidation:
    def test_timeout_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            HttpConfig(timeout=0)

    def test_output_format_parsed(self) -> None:
        assert OutputConfig(format="tsv").format == OutputFormat.TSV  # type: ignore[arg-type]

    def test_unknown_output_format(self) -> None:
        with pytest.raises(ValidationError):
            OutputConfig(format="xml")  # type: ignore[arg-type]
