"""Tests for MarketStore lifecycle."""

from __future__ import annotations

from pathlib import Path

from zonepulse.config.settings import PulseSettings
from zonepulse.infrastructure.store import MarketStore


class TestMarketStore:
    def test_no_url_is_absent(self, store: MarketStore) -> None:
        assert not store.available
        assert store.engine is None
        assert not store.layers.configured

    def test_missing_sqlite_file_is_absent(self, tmp_path: Path) -> None:
        settings = PulseSettings.from_cli(
            start=tmp_path, database={"url": f"sqlite:///{tmp_path / 'nope.db'}"}
        )
        store = MarketStore(settings)
        assert not store.available
        assert not (tmp_path / "nope.db").exists()

    def test_existing_file_is_available(self, seeded_store: MarketStore) -> None:
        assert seeded_store.available
        assert seeded_store.layers.configured

    def test_close_twice(self, seeded_store: MarketStore) -> None:
        seeded_store.close()
        seeded_store.close()
