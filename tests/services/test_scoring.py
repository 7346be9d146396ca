"""Tests for the composite scoring engine."""

from __future__ import annotations

from typing import Any

import pytest

from zonepulse.domain.catalog import get_layer
from zonepulse.domain.models import ScoreComponent
from zonepulse.infrastructure.repositories.layers import StoreUnavailableError
from zonepulse.infrastructure.store import MarketStore
from zonepulse.services.resolver import DataResolver
from zonepulse.services.scoring import (
    FAMILIES,
    INVESTOR,
    NEUTRAL_SCORE,
    ScoringEngine,
    clamp_score,
    composite,
)

ZONES = ("78704", "78746", "76574", "78660", "99999", "A1B")


class TestWeights:
    @pytest.mark.parametrize("family", sorted(FAMILIES))
    def test_weights_sum_to_one(self, family: str) -> None:
        assert sum(spec.weight for spec in FAMILIES[family]) == pytest.approx(1.0)

    def test_components_reference_catalog_layers(self) -> None:
        for specs in FAMILIES.values():
            for spec in specs:
                get_layer(spec.layer_id)


class TestHelpers:
    def test_clamp(self) -> None:
        assert clamp_score(-5) == 0.0
        assert clamp_score(150) == 100.0
        assert clamp_score(42.5) == 42.5

    def test_all_neutral_is_fifty(self) -> None:
        components = tuple(
            ScoreComponent(spec.name, spec.layer_id, None, NEUTRAL_SCORE, spec.weight)
            for spec in INVESTOR
        )
        assert composite(components) == 50


class TestScoreZone:
    def test_bounds(self, store: MarketStore) -> None:
        engine = ScoringEngine(DataResolver(store))
        for zone in ZONES:
            score = engine.score_zone(zone)
            for value in (score.investor_score, score.growth_score, score.market_health_score):
                assert isinstance(value, int)
                assert 0 <= value <= 100

    def test_deterministic(self, store: MarketStore) -> None:
        engine = ScoringEngine(DataResolver(store))
        assert engine.score_zone("78704") == engine.score_zone("78704")

    def test_breakdown_matches_inputs(self, store: MarketStore) -> None:
        resolver = DataResolver(store)
        score = ScoringEngine(resolver).score_zone("78704")
        cap = next(c for c in score.breakdown["investor"] if c.name == "cap_rate")
        raw = resolver.generator.synthesize(get_layer("cap_rate"), "78704")
        assert cap.raw_value == raw
        assert cap.normalized_score == round(clamp_score(10 * raw), 2)

    def test_composite_is_weighted_sum(self, store: MarketStore) -> None:
        score = ScoringEngine(DataResolver(store)).score_zone("78660")
        for family, attr in (
            ("investor", "investor_score"),
            ("growth", "growth_score"),
            ("market_health", "market_health_score"),
        ):
            components = score.breakdown[family]
            expected = round(clamp_score(sum(c.normalized_score * c.weight for c in components)))
            assert getattr(score, attr) == expected

    def test_real_value_clamped(self, seeded_store: MarketStore) -> None:
        score = ScoringEngine(DataResolver(seeded_store)).score_zone("78704")
        cap = next(c for c in score.breakdown["investor"] if c.name == "cap_rate")
        assert cap.raw_value == 12.0
        assert cap.normalized_score == 100.0

    def test_to_dict_nests_breakdown(self, store: MarketStore) -> None:
        data = ScoringEngine(DataResolver(store)).score_zone("78704").to_dict()
        assert set(data["breakdown"]) == {"investor", "growth", "market_health"}
        assert set(data["breakdown"]["market_health"]) == {
            "days_on_market",
            "inventory",
            "sale_to_list",
        }

    def test_store_failure_propagates(self, failing_store: Any) -> None:
        with pytest.raises(StoreUnavailableError):
            ScoringEngine(DataResolver(failing_store)).score_zone("78704")
