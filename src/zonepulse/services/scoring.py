"""ScoringEngine: three weighted 0-100 composite scores per zone.

Each family combines three resolved layers. A raw value is mapped onto
0-100 by a fixed linear normalizer (higher is always better for the
zone) and clamped. An input that cannot be resolved to a finite number
scores the neutral 50, so a missing feed flattens a score without
failing it. Store failures are not "missing": they propagate.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass

from zonepulse.domain.catalog import get_layer
from zonepulse.domain.models import CompositeScore, ScoreComponent
from zonepulse.services.resolver import DataResolver

NEUTRAL_SCORE = 50.0


def clamp_score(value: float) -> float:
    return max(0.0, min(100.0, value))


@dataclass(frozen=True)
class ComponentSpec:
    """How one layer feeds one family."""

    name: str
    layer_id: str
    weight: float
    normalize: Callable[[float], float]


INVESTOR: tuple[ComponentSpec, ...] = (
    ComponentSpec("cap_rate", "cap_rate", 0.40, lambda x: 10 * x),
    ComponentSpec("appreciation", "home_value_growth_yoy", 0.30, lambda x: 50 + 3 * x),
    ComponentSpec("rent_yield", "gross_rent_yield", 0.30, lambda x: 12 * x),
)

GROWTH: tuple[ComponentSpec, ...] = (
    ComponentSpec("population_growth", "population_growth", 0.35, lambda x: 50 + 5 * x),
    ComponentSpec("income_growth", "income_growth", 0.35, lambda x: 50 + 3 * x),
    ComponentSpec("home_value_growth_5yr", "home_value_growth_5yr", 0.30, lambda x: 50 + x),
)

MARKET_HEALTH: tuple[ComponentSpec, ...] = (
    ComponentSpec("days_on_market", "days_on_market", 0.40, lambda x: 100 - x),
    ComponentSpec("inventory", "for_sale_inventory", 0.30, lambda x: 80 - 0.15 * x),
    ComponentSpec("sale_to_list", "sale_to_list", 0.30, lambda x: (x - 0.9) * 500),
)

FAMILIES: dict[str, tuple[ComponentSpec, ...]] = {
    "investor": INVESTOR,
    "growth": GROWTH,
    "market_health": MARKET_HEALTH,
}


def composite(components: tuple[ScoreComponent, ...]) -> int:
    """Weighted sum of normalized scores, rounded and clamped."""
    total = sum(c.normalized_score * c.weight for c in components)
    return round(clamp_score(total))


class ScoringEngine:
    """Combine resolved layers into investor, growth, and market-health scores."""

    def __init__(self, resolver: DataResolver) -> None:
        self._resolver = resolver

    def component(self, spec: ComponentSpec, zone_key: str) -> ScoreComponent:
        point = self._resolver.resolve_one(get_layer(spec.layer_id), zone_key)
        raw = point.value if point is not None else None
        if raw is None or not math.isfinite(raw):
            return ScoreComponent(spec.name, spec.layer_id, None, NEUTRAL_SCORE, spec.weight)
        normalized = round(clamp_score(spec.normalize(raw)), 2)
        return ScoreComponent(spec.name, spec.layer_id, raw, normalized, spec.weight)

    def score_zone(self, zone_key: str) -> CompositeScore:
        """All three composite scores for *zone_key*, with their breakdown.

        Raises:
            StoreUnavailableError: the store failed and fallback is off.
        """
        breakdown = {
            family: tuple(self.component(spec, zone_key) for spec in specs)
            for family, specs in FAMILIES.items()
        }
        return CompositeScore(
            zone=zone_key,
            investor_score=composite(breakdown["investor"]),
            growth_score=composite(breakdown["growth"]),
            market_health_score=composite(breakdown["market_health"]),
            breakdown=breakdown,
        )
