"""LayerService: catalog, choropleth, time-series, and zone operations.

Five read-only surfaces, each returning ServiceResult:
- list_layers: the public catalog
- layer_data: one layer across every zone of a region, with summary stats
- timeseries: one layer's history for one zone
- zone_summary: every layer for one zone plus forecast and timing hints
- zone_scores: the three composite scores with their breakdown
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from zonepulse.domain.catalog import get_categories, get_layer, iter_layers, layer_count
from zonepulse.domain.formatting import summarize
from zonepulse.domain.seeding import SeededRandom
from zonepulse.domain.zones import get_zone, zones_in_region
from zonepulse.services.base import BaseService, parse_period, require_zone
from zonepulse.services.resolver import DataResolver
from zonepulse.services.result import ServiceResult
from zonepulse.services.scoring import ScoringEngine
from zonepulse.services.synthesis import SyntheticGenerator
from zonepulse.services.telemetry import trace_span, traced
from zonepulse.services.timeseries import TimeSeriesReconstructor

if TYPE_CHECKING:
    from zonepulse.domain.catalog import LayerDefinition
    from zonepulse.infrastructure.store import MarketStore

BEST_BUY_MONTHS = ("January", "February", "October", "November", "December")
BEST_SELL_MONTHS = ("March", "April", "May", "June")
_MONTH_ABBR = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def layer_meta(layer: LayerDefinition, count: int) -> dict[str, Any]:
    return {
        "unit": str(layer.unit),
        "source": str(layer.source_kind),
        "description": layer.description,
        "count": count,
    }


class LayerService(BaseService):
    """Resolve layers, histories and scores for the CLI and the API."""

    def __init__(self, store: MarketStore) -> None:
        super().__init__(store)
        generator = SyntheticGenerator(self.settings.synthesis)
        self._resolver = DataResolver(store, generator)
        self._timeseries = TimeSeriesReconstructor(store, generator)
        self._scoring = ScoringEngine(self._resolver)

    @property
    def resolver(self) -> DataResolver:
        return self._resolver

    @property
    def reconstructor(self) -> TimeSeriesReconstructor:
        return self._timeseries

    # ------------------------------------------------------------------
    # list_layers
    # ------------------------------------------------------------------

    @traced
    def list_layers(self) -> ServiceResult:
        """Every category and its layers, without storage mapping."""
        categories = [
            {
                "id": category.id,
                "label": category.label,
                "layers": [layer.public_dict() for layer in category.layers],
            }
            for category in get_categories()
        ]
        return ServiceResult(
            ok=True,
            op="list_layers",
            data={"categories": categories, "count": layer_count()},
        )

    # ------------------------------------------------------------------
    # layer_data: choropleth values for a region
    # ------------------------------------------------------------------

    @traced
    def layer_data(self, layer_id: str, *, region: str | None = None) -> ServiceResult:
        """Current values of *layer_id* for every zone in *region*.

        Args:
            layer_id: Catalog layer id.
            region: Metro, county, or city name. Defaults to
                ``regions.default_region``.
        """
        return self._run("layer_data", lambda: self._layer_data(layer_id, region))

    def _layer_data(self, layer_id: str, region: str | None) -> ServiceResult:
        layer = get_layer(layer_id)
        region_name = (region or self.settings.regions.default_region).strip().lower()
        zones = zones_in_region(region_name)

        resolution = self._resolver.resolution(layer, zones)
        points = resolution.points
        meta = {
            **summarize(p.value for p in points),
            **layer_meta(layer, len(points)),
            "resolved_from": str(resolution.source),
        }
        return ServiceResult(
            ok=True,
            op="layer_data",
            data={
                "layer_id": layer.id,
                "region": region_name,
                "data": [p.to_dict() for p in points],
                "meta": meta,
            },
            warnings=resolution.warnings,
        )

    # ------------------------------------------------------------------
    # timeseries
    # ------------------------------------------------------------------

    @traced
    def timeseries(self, layer_id: str, zone: str, *, period: str = "yearly") -> ServiceResult:
        """History of *layer_id* for *zone* (``period``: monthly or yearly)."""
        return self._run("timeseries", lambda: self._series(layer_id, zone, period))

    def _series(self, layer_id: str, zone: str, period: str) -> ServiceResult:
        layer = get_layer(layer_id)
        zone_key = require_zone(zone)
        granularity = parse_period(period)
        points = self._timeseries.timeseries(layer, zone_key, granularity)
        return ServiceResult(
            ok=True,
            op="timeseries",
            data={
                "layer_id": layer.id,
                "zone": zone_key,
                "period": str(granularity),
                "data": [p.to_dict() for p in points],
                "meta": layer_meta(layer, len(points)),
            },
        )

    # ------------------------------------------------------------------
    # zone_summary
    # ------------------------------------------------------------------

    @traced
    def zone_summary(self, zone: str) -> ServiceResult:
        """Every layer for *zone*, plus forecast direction, timing and scores."""
        return self._run("zone_summary", lambda: self._summary(zone))

    def _summary(self, zone: str) -> ServiceResult:
        zone_key = require_zone(zone)
        baseline = get_zone(zone_key)
        regions = self.settings.regions

        metrics: dict[str, dict[str, Any]] = {}
        with trace_span("resolve_layers") as span:
            for layer in iter_layers():
                point = self._resolver.resolve_one(layer, zone_key)
                if point is not None:
                    metrics[layer.id] = {
                        "value": point.value,
                        "formatted_label": point.formatted_label,
                    }
            if span:
                span.annotate("layers", len(metrics))

        forecast = metrics.get("home_price_forecast", {}).get("value", 0.0)
        rng = SeededRandom(f"bestmonth-{zone_key}")
        best_buy = rng.choice(BEST_BUY_MONTHS)
        best_sell = rng.choice(BEST_SELL_MONTHS)

        scores = self._scoring.score_zone(zone_key)
        as_of = self._timeseries.as_of

        return ServiceResult(
            ok=True,
            op="zone_summary",
            data={
                "zone": zone_key,
                "county": baseline.county,
                "city": baseline.city or regions.metro,
                "metro": regions.metro,
                "state": regions.state,
                "data_date": f"{_MONTH_ABBR[as_of.month - 1]} {as_of.year}",
                "forecast": {
                    "value": forecast,
                    "direction": "up" if forecast >= 0 else "down",
                },
                "best_month_buy": best_buy,
                "best_month_sell": best_sell,
                "scores": {
                    "investor": scores.investor_score,
                    "growth": scores.growth_score,
                    "market_health": scores.market_health_score,
                },
                "metrics": metrics,
            },
        )

    # ------------------------------------------------------------------
    # zone_scores
    # ------------------------------------------------------------------

    @traced
    def zone_scores(self, zone: str) -> ServiceResult:
        """Investor, growth and market-health scores for *zone*."""
        return self._run("zone_scores", lambda: self._scores(zone))

    def _scores(self, zone: str) -> ServiceResult:
        zone_key = require_zone(zone)
        scores = self._scoring.score_zone(zone_key)
        return ServiceResult(ok=True, op="zone_scores", data=scores.to_dict())

    def store_status(self) -> str:
        """``configured`` when a backing store is present, else ``absent``."""
        return "configured" if self._store.available else "absent"


