"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, xcsh.toml only contains
overrides. An empty file is a valid configuration.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from xcsh.domain.types import OutputFormat


class HttpConfig(BaseModel):
    """[http] section."""

    model_config = {"frozen": True}

    timeout: float = Field(default=30.0, gt=0)
    verify_tls: bool = True


class OutputConfig(BaseModel):
    """[output] section."""

    model_config = {"frozen": True}

    format: OutputFormat = OutputFormat.TABLE
    no_color: bool = False


class ReplConfig(BaseModel):
    """[repl] section."""

    model_config = {"frozen": True}

    banner: bool = True


class HeadlessConfig(BaseModel):
    """[headless] section."""

    model_config = {"frozen": True}

    emit_session_event: bool = True


class SubscriptionConfig(BaseModel):
    """[subscription] section."""

    model_config = {"frozen": True}

    auto_detect_tier: bool = True
