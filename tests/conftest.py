"""Shared pytest fixtures for zonepulse tests."""

from __future__ import annotations

from collections.abc import Iterator
from datetime import date
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner
from fastapi.testclient import TestClient
from sqlalchemy import insert

from zonepulse.config.settings import PulseSettings
from zonepulse.infrastructure.database.engine import create_db_engine
from zonepulse.infrastructure.database.schema import metadata, metrics, zillow_data
from zonepulse.infrastructure.repositories.layers import StoreUnavailableError
from zonepulse.infrastructure.store import MarketStore
from zonepulse.services.telemetry import disable_telemetry

AS_OF = date(2025, 6, 15)

# 78704 home values: one row per month, Jan 2024 .. May 2025.
SEEDED_MONTHS = [(2024, m) for m in range(1, 13)] + [(2025, m) for m in range(1, 6)]


def seeded_home_value(index: int) -> float:
    return 650_000.0 + 3_000.0 * index


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """No stray zonepulse.toml, ZONEPULSE_* vars, or telemetry between tests."""
    import os

    for name in list(os.environ):
        if name.startswith("ZONEPULSE_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    yield
    disable_telemetry()


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def settings(tmp_path: Path) -> PulseSettings:
    """Settings with no backing store and a pinned as-of date."""
    return PulseSettings.from_cli(start=tmp_path, timeseries={"as_of": AS_OF})


@pytest.fixture
def store(settings: PulseSettings) -> Iterator[MarketStore]:
    """An absent store: every value is synthesized."""
    s = MarketStore(settings)
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def db_url(tmp_path: Path) -> str:
    """URL of a temp SQLite store with the tables created and a few rows seeded.

    Seeded rows:
      * home_value for 78704 monthly Jan 2024 .. May 2025, plus Jan 2010
      * home_value for 78746 in May 2025
      * home_value for 78745 in Jan 2010 only
      * cap_rate for 78704 in May 2025
    """
    url = f"sqlite:///{tmp_path / 'pulse.db'}"
    engine = create_db_engine(url)
    metadata.create_all(engine)
    rows: list[dict[str, Any]] = [
        {"zone": "78704", "date": date(year, month, 28), "home_value": seeded_home_value(i)}
        for i, (year, month) in enumerate(SEEDED_MONTHS)
    ]
    rows += [
        {"zone": "78704", "date": date(2010, 1, 31), "home_value": 400_000.0},
        {"zone": "78746", "date": date(2025, 5, 31), "home_value": 1_250_000.0},
        {"zone": "78745", "date": date(2010, 1, 31), "home_value": 210_000.0},
    ]
    with engine.begin() as conn:
        conn.execute(insert(zillow_data), rows)
        conn.execute(
            insert(metrics), [{"zone": "78704", "date": date(2025, 5, 31), "cap_rate": 12.0}]
        )
    engine.dispose()
    return url


@pytest.fixture
def seeded_settings(tmp_path: Path, db_url: str) -> PulseSettings:
    return PulseSettings.from_cli(
        start=tmp_path, database={"url": db_url}, timeseries={"as_of": AS_OF}
    )


@pytest.fixture
def seeded_store(seeded_settings: PulseSettings) -> Iterator[MarketStore]:
    """A store backed by the seeded SQLite file."""
    s = MarketStore(seeded_settings)
    try:
        yield s
    finally:
        s.close()


class _FailingLayers:
    def try_latest(self, layer: Any, zones: list[str]) -> None:
        raise StoreUnavailableError("connection refused")

    def try_history(self, layer: Any, zone: str, granularity: Any) -> None:
        raise StoreUnavailableError("connection refused")


class FailingStore:
    """Store stand-in whose every query fails like a dead database."""

    def __init__(self, settings: PulseSettings) -> None:
        self.settings = settings
        self.layers = _FailingLayers()
        self.available = True
        self.engine = None

    def close(self) -> None:
        pass


@pytest.fixture
def failing_store(tmp_path: Path) -> FailingStore:
    settings = PulseSettings.from_cli(start=tmp_path, timeseries={"as_of": AS_OF})
    return FailingStore(settings)


@pytest.fixture
def fallback_store(tmp_path: Path) -> FailingStore:
    """A failing store configured to fall back to synthesis."""
    settings = PulseSettings.from_cli(
        start=tmp_path,
        database={"fallback_on_error": True},
        timeseries={"as_of": AS_OF},
    )
    return FailingStore(settings)


@pytest.fixture
def client(settings: PulseSettings) -> Iterator[TestClient]:
    """TestClient over an app with no backing store."""
    from zonepulse.api.app import create_app

    with TestClient(create_app(settings)) as c:
        yield c


@pytest.fixture
def seeded_client(seeded_settings: PulseSettings) -> Iterator[TestClient]:
    from zonepulse.api.app import create_app

    with TestClient(create_app(seeded_settings)) as c:
        yield c
