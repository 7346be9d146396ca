"""Tests for DataResolver: real-first resolution with synthetic fallback."""

from __future__ import annotations

from typing import Any

import pytest

from zonepulse.domain.catalog import get_layer
from zonepulse.domain.types import Unit
from zonepulse.domain.zones import known_zone_keys, zones_in_region
from zonepulse.infrastructure.repositories.layers import StoreUnavailableError
from zonepulse.infrastructure.store import MarketStore
from zonepulse.services.resolver import DataResolver, DataSource, dedupe_zones


class TestDedupe:
    def test_keeps_first_seen_order(self) -> None:
        assert dedupe_zones(["78704", "78701", "78704"]) == ["78704", "78701"]


class TestSyntheticResolution:
    def test_defaults_to_every_known_zone(self, store: MarketStore) -> None:
        points = DataResolver(store).resolve(get_layer("home_value"))
        assert [p.zone for p in points] == list(known_zone_keys())

    def test_values_match_generator(self, store: MarketStore) -> None:
        resolver = DataResolver(store)
        layer = get_layer("cap_rate")
        for point in resolver.resolve(layer, ["78704", "99999"]):
            assert point.value == resolver.generator.synthesize(layer, point.zone)

    def test_source_and_no_warnings(self, store: MarketStore) -> None:
        resolution = DataResolver(store).resolution(get_layer("home_value"), ["78704"])
        assert resolution.source is DataSource.SYNTHETIC
        assert resolution.warnings == []

    def test_duplicate_zones_resolved_once(self, store: MarketStore) -> None:
        points = DataResolver(store).resolve(get_layer("home_value"), ["78704", "78704"])
        assert len(points) == 1

    def test_repeatable(self, store: MarketStore) -> None:
        resolver = DataResolver(store)
        zones = zones_in_region("travis")
        first = resolver.resolve(get_layer("days_on_market"), zones)
        assert resolver.resolve(get_layer("days_on_market"), zones) == first

    def test_labels_follow_unit(self, store: MarketStore) -> None:
        resolver = DataResolver(store)
        for layer_id, check in (
            ("home_value", lambda s: s.startswith("$")),
            ("cap_rate", lambda s: s.endswith("%")),
            ("days_on_market", lambda s: s.endswith(" days")),
        ):
            for point in resolver.resolve(get_layer(layer_id)):
                assert check(point.formatted_label), (layer_id, point)


class TestStoreResolution:
    def test_real_rows_only(self, seeded_store: MarketStore) -> None:
        resolution = DataResolver(seeded_store).resolution(get_layer("home_value"))
        assert resolution.source is DataSource.STORE
        assert [(p.zone, p.value) for p in resolution.points] == [
            ("78704", 698_000.0),
            ("78745", 210_000.0),
            ("78746", 1_250_000.0),
        ]
        assert resolution.points[2].formatted_label == "$1.2M"

    def test_layer_without_rows_synthesizes(self, seeded_store: MarketStore) -> None:
        resolution = DataResolver(seeded_store).resolution(get_layer("days_on_market"))
        assert resolution.source is DataSource.SYNTHETIC
        assert len(resolution.points) == len(known_zone_keys())

    def test_resolve_one_real(self, seeded_store: MarketStore) -> None:
        point = DataResolver(seeded_store).resolve_one(get_layer("home_value"), "78704")
        assert point is not None
        assert point.value == 698_000.0

    def test_resolve_one_zone_without_rows(self, seeded_store: MarketStore) -> None:
        point = DataResolver(seeded_store).resolve_one(get_layer("home_value"), "78701")
        assert point is not None
        assert point.value == 550_000.0


class TestStoreFailure:
    def test_raises_without_fallback(self, failing_store: Any) -> None:
        with pytest.raises(StoreUnavailableError):
            DataResolver(failing_store).resolve(get_layer("home_value"), ["78704"])

    def test_falls_back_with_warning(self, fallback_store: Any) -> None:
        resolution = DataResolver(fallback_store).resolution(get_layer("home_value"), ["78704"])
        assert resolution.source is DataSource.SYNTHETIC
        assert resolution.points[0].value == 700_000.0
        assert len(resolution.warnings) == 1
        assert "home_value" in resolution.warnings[0]

    def test_layer_unit_unaffected(self, fallback_store: Any) -> None:
        points = DataResolver(fallback_store).resolve(get_layer("avg_temperature"), ["78704"])
        assert get_layer("avg_temperature").unit is Unit.TEMPERATURE
        assert points[0].formatted_label.endswith("°F")
