"""Unified settings: CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs: CLI flags passed by Click
  2. Env vars: ``F5XC_*`` prefix, nested sections with ``__``
     (``F5XC_HTTP__TIMEOUT=10``)
  3. TOML file: ``xcsh.toml`` discovered via walk-up
  4. Code defaults baked into the section models
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from xcsh.config.discovery import find_config
from xcsh.config.models import (
    HeadlessConfig,
    HttpConfig,
    OutputConfig,
    ReplConfig,
    SubscriptionConfig,
)
from xcsh.domain.types import OutputFormat

DEFAULT_NAMESPACE = "default"


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from an ``xcsh.toml`` file."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class XcshSettings(BaseSettings):
    """Unified settings for the xcsh CLI, REPL and headless mode.

    Stored on the :class:`~xcsh.commands._context.AppContext` at the
    CLI root.

    Attributes:
        api_url: Tenant URL (``F5XC_API_URL``).
        api_token: API token (``F5XC_API_TOKEN``).
        namespace: Default namespace (``F5XC_NAMESPACE`` or ``-n``).
        tier: Explicit subscription tier (``F5XC_TIER``); skips detection.
        output_format: ``--output`` override of ``[output] format``.
        deprecations: Extra old-name to new-name domain mappings.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "F5XC_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None

    # --- Connection (env vars) ---
    api_url: str | None = None
    api_token: str | None = None
    namespace: str = DEFAULT_NAMESPACE
    tier: str | None = None

    # --- CLI flags ---
    output_format: OutputFormat | None = None
    no_color: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    http: HttpConfig = Field(default_factory=HttpConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    repl: ReplConfig = Field(default_factory=ReplConfig)
    headless: HeadlessConfig = Field(default_factory=HeadlessConfig)
    subscription: SubscriptionConfig = Field(default_factory=SubscriptionConfig)
    deprecations: dict[str, str] = Field(default_factory=dict)

    @property
    def effective_output_format(self) -> OutputFormat:
        return self.output_format or self.output.format

    @property
    def effective_no_color(self) -> bool:
        return self.no_color or self.output.no_color

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(cls, *, config_path: str | None = None, **cli_flags: Any) -> XcshSettings:
        """Construct settings from a CLI invocation.

        Discovers ``xcsh.toml`` via walk-up (or explicit *config_path*).
        Flags left at ``None`` are dropped so env vars and TOML still apply.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if not p.is_file():
                msg = f"Config file not found: {config_path}"
                raise click.ClickException(msg)
            toml_path = p
        else:
            toml_path = find_config()

        overrides = {k: v for k, v in cli_flags.items() if v is not None}
        _tls.toml_path = toml_path
        try:
            return cls(config_path=toml_path, **overrides)
        finally:
            _tls.toml_path = None
