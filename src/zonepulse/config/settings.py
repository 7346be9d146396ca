"""Unified settings: CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  (CLI flags passed by Click)
  2. Env vars     (``ZONEPULSE_*`` prefix, ``__`` for nesting)
  3. TOML file    (``zonepulse.toml`` discovered via walk-up)
  4. Code defaults baked into the section models

``ZONEPULSE_DATABASE__URL=sqlite:///pulse.db`` overrides ``[database] url``.
Nested sections merge key by key, so ``timeseries={"as_of": ...}`` from a
caller keeps the window sizes the TOML file set.
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from zonepulse.config.discovery import ConfigError, find_config, read_toml
from zonepulse.config.models import (
    DatabaseConfig,
    RegionsConfig,
    ServerConfig,
    SynthesisConfig,
    TimeseriesConfig,
)

__all__ = ["ConfigError", "PulseSettings"]


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Sections of one ``zonepulse.toml`` file."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = (
            read_toml(toml_path) if toml_path and toml_path.is_file() else {}
        )

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# TOML path handed to settings_customise_sources during construction.
_tls = threading.local()


class PulseSettings(BaseSettings):
    """Unified settings for the CLI and the HTTP server.

    Frozen after construction. The CLI stores it on ``AppContext``; the
    FastAPI app holds it on ``app.state``.

    Attributes:
        config_path: The TOML file the settings were read from, if any.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "ZONEPULSE_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    synthesis: SynthesisConfig = Field(default_factory=SynthesisConfig)
    timeseries: TimeseriesConfig = Field(default_factory=TimeseriesConfig)
    regions: RegionsConfig = Field(default_factory=RegionsConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)

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
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        start: Path | None = None,
        **cli_flags: Any,
    ) -> PulseSettings:
        """Construct settings from a CLI invocation.

        Discovers ``zonepulse.toml`` via walk-up from *start* (or uses the
        explicit *config_path*) and merges *cli_flags* as highest-priority
        overrides. ``None`` flag values are dropped so they never mask a
        lower-priority source.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if not p.is_file():
                msg = f"Config file not found: {config_path}"
                raise ConfigError(msg)
            toml_path = p
        else:
            toml_path = find_config(start)

        overrides = {k: v for k, v in cli_flags.items() if v is not None}

        _tls.toml_path = toml_path
        try:
            return cls(config_path=toml_path, **overrides)
        finally:
            _tls.toml_path = None
