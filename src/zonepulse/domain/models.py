"""Ephemeral per-request value types produced by the engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ResolvedDataPoint:
    """A layer value for one zone, with its unit-formatted label."""

    zone: str
    value: float
    formatted_label: str

    def to_dict(self) -> dict[str, Any]:
        return {"zone": self.zone, "value": self.value, "formatted_label": self.formatted_label}


@dataclass(frozen=True)
class TimeSeriesPoint:
    """One period of a history. ``period`` is ``YYYY`` or ``YYYY-MM``."""

    period: str
    value: float

    def to_dict(self) -> dict[str, Any]:
        return {"date": self.period, "value": self.value}


@dataclass(frozen=True)
class ScoreComponent:
    """One weighted input to a composite score.

    ``raw_value`` is None when the input could not be resolved; the
    normalized score is then the neutral midpoint.
    """

    name: str
    layer_id: str
    raw_value: float | None
    normalized_score: float
    weight: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "layer_id": self.layer_id,
            "raw_value": self.raw_value,
            "normalized_score": self.normalized_score,
            "weight": self.weight,
        }


@dataclass(frozen=True)
class CompositeScore:
    """Investor, growth, and market-health scores for a zone."""

    zone: str
    investor_score: int
    growth_score: int
    market_health_score: int
    breakdown: dict[str, tuple[ScoreComponent, ...]] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "zone": self.zone,
            "investor_score": self.investor_score,
            "growth_score": self.growth_score,
            "market_health_score": self.market_health_score,
            "breakdown": {
                family: {c.name: c.to_dict() for c in components}
                for family, components in self.breakdown.items()
            },
        }
