"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, zonepulse.toml only contains
overrides. With no file at all the engine runs fully synthetic.
"""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, Field, field_validator

from zonepulse.domain.zones import METRO_REGION

# --- zonepulse.toml sections ---


class DatabaseConfig(BaseModel):
    """[database] section.

    ``url`` is a SQLAlchemy URL. None means no backing store: every layer
    is synthesized.
    """

    model_config = {"frozen": True}

    url: str | None = None
    timeout_seconds: float = Field(default=5.0, gt=0)
    fallback_on_error: bool = False
    zone_column: str = "zone"


class SynthesisConfig(BaseModel):
    """[synthesis] section."""

    model_config = {"frozen": True}

    mortgage_rate: float = Field(default=0.065, ge=0)
    loan_term_years: int = Field(default=30, gt=0)
    loan_to_value: float = Field(default=0.80, gt=0, le=1)
    affordability_ratio: float = Field(default=0.28, gt=0, le=1)
    regional_avg_temperature: float = 68.5


class TimeseriesConfig(BaseModel):
    """[timeseries] section.

    ``as_of`` pins the end of every window; None means today.
    """

    model_config = {"frozen": True}

    as_of: date | None = None
    yearly_window: int = Field(default=11, gt=0)
    monthly_window: int = Field(default=60, gt=0)
    seasonal_amplitude: float = Field(default=0.015, ge=0)

    def reference_date(self) -> date:
        return self.as_of or date.today()


class RegionsConfig(BaseModel):
    """[regions] section."""

    model_config = {"frozen": True}

    default_region: str = METRO_REGION
    metro: str = "Austin"
    state: str = "Texas"

    @field_validator("default_region")
    @classmethod
    def _lower(cls, value: str) -> str:
        return value.strip().lower()


class ServerConfig(BaseModel):
    """[server] section."""

    model_config = {"frozen": True}

    host: str = "127.0.0.1"
    port: int = Field(default=8000, gt=0, lt=65536)
    prefix: str = "/api/pulse"

    @field_validator("prefix")
    @classmethod
    def _normalize_prefix(cls, value: str) -> str:
        value = "/" + value.strip("/")
        return "" if value == "/" else value
