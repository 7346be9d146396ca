"""TimeSeriesReconstructor: layer history for one zone over a fixed window.

Real history from the store wins when any of it falls inside the window.
Otherwise the history is modeled backwards from the zone's current
synthetic value:

- home-value-like currency layers follow the metro's appreciation curve
  (steady climb, 2022 peak, correction, partial recovery);
- other currency layers climb linearly to today's value;
- every other unit drifts gently around today's value.

Monthly series interpolate between the yearly anchors and superimpose a
spring-peaking seasonal wave. Each point draws its noise from its own
stream seeded on ``ts-{layer}-{zone}-{period}``.
"""

from __future__ import annotations

import logging
import math
from datetime import date
from typing import TYPE_CHECKING

from zonepulse.config.models import TimeseriesConfig
from zonepulse.domain.catalog import canonical_layer
from zonepulse.domain.models import TimeSeriesPoint
from zonepulse.domain.seeding import SeededRandom, seed_key
from zonepulse.domain.types import Granularity, Unit
from zonepulse.infrastructure.repositories.layers import StoreUnavailableError
from zonepulse.services.synthesis import SyntheticGenerator

if TYPE_CHECKING:
    from zonepulse.domain.catalog import LayerDefinition
    from zonepulse.infrastructure.store import MarketStore

logger = logging.getLogger(__name__)

# Multiplier of today's value by year offset (-10 .. 0).
APPRECIATION_CURVE: tuple[float, ...] = (
    0.50,
    0.53,
    0.57,
    0.62,
    0.65,
    0.68,
    0.85,
    1.08,
    0.97,
    0.98,
    1.00,
)

_HOME_VALUE_MARKERS = ("home_value", "single_family", "condo_value", "median_sale_price")


def is_home_value_like(layer: LayerDefinition) -> bool:
    return layer.unit is Unit.CURRENCY and any(m in layer.id for m in _HOME_VALUE_MARKERS)


def curve_multiplier(year_offset: int) -> float:
    """Appreciation multiplier for *year_offset* years before the as-of year."""
    index = len(APPRECIATION_CURVE) - 1 + year_offset
    if index < 0:
        return APPRECIATION_CURVE[0]
    if index >= len(APPRECIATION_CURVE):
        return APPRECIATION_CURVE[-1]
    return APPRECIATION_CURVE[index]


def yearly_periods(as_of: date, window: int) -> list[int]:
    return list(range(as_of.year - window + 1, as_of.year + 1))


def monthly_periods(as_of: date, window: int) -> list[tuple[int, int]]:
    """``(year, month)`` pairs for *window* months ending at the as-of month."""
    end = as_of.year * 12 + (as_of.month - 1)
    return [divmod(index, 12) for index in range(end - window + 1, end + 1)]


def _month_label(year: int, month0: int) -> str:
    return f"{year:04d}-{month0 + 1:02d}"


class TimeSeriesReconstructor:
    """Build chronological histories, real or modeled."""

    def __init__(
        self,
        store: MarketStore,
        generator: SyntheticGenerator | None = None,
        config: TimeseriesConfig | None = None,
    ) -> None:
        self._store = store
        self._generator = generator or SyntheticGenerator(store.settings.synthesis)
        self._config = config or store.settings.timeseries

    @property
    def as_of(self) -> date:
        return self._config.reference_date()

    def window(self, granularity: Granularity) -> list[str]:
        """Period labels of the current window, oldest first."""
        if granularity is Granularity.YEARLY:
            return [f"{y:04d}" for y in yearly_periods(self.as_of, self._config.yearly_window)]
        return [
            _month_label(y, m) for y, m in monthly_periods(self.as_of, self._config.monthly_window)
        ]

    def timeseries(
        self, layer: LayerDefinition, zone_key: str, granularity: Granularity
    ) -> list[TimeSeriesPoint]:
        """History of *layer* for *zone_key*, ascending.

        A synthetic history always fills the window exactly. Real history is
        clipped to the window but never padded, so a store that only covers
        part of it returns fewer points than the window holds.

        Raises:
            StoreUnavailableError: the store failed and
                ``database.fallback_on_error`` is off.
        """
        real = self._real(layer, zone_key, granularity)
        if real:
            return real
        if granularity is Granularity.YEARLY:
            return self._synthetic_yearly(layer, zone_key)
        return self._synthetic_monthly(layer, zone_key)

    def _real(
        self, layer: LayerDefinition, zone_key: str, granularity: Granularity
    ) -> list[TimeSeriesPoint]:
        try:
            rows = self._store.layers.try_history(layer, zone_key, granularity)
        except StoreUnavailableError as exc:
            if not self._store.settings.database.fallback_on_error:
                raise
            logger.warning("store failed for %s history, synthesizing: %s", layer.id, exc)
            return []
        if not rows:
            return []
        window = set(self.window(granularity))
        clipped = [
            TimeSeriesPoint(row.period, round(row.value, 2)) for row in rows if row.period in window
        ]
        if not clipped:
            logger.debug("real history for %s/%s lies outside the window", layer.id, zone_key)
        return clipped

    def _synthetic_yearly(self, layer: LayerDefinition, zone_key: str) -> list[TimeSeriesPoint]:
        as_of = self.as_of
        current = self._generator.synthesize(layer, zone_key)
        home_like = is_home_value_like(layer)
        seed_id = canonical_layer(layer).id
        points: list[TimeSeriesPoint] = []
        for year in yearly_periods(as_of, self._config.yearly_window):
            offset = year - as_of.year
            rng = SeededRandom(seed_key("ts", seed_id, zone_key, year))
            if home_like:
                noise = 1 + (rng.random() - 0.5) * 0.03
                value = current * curve_multiplier(offset) * noise
            elif layer.unit is Unit.CURRENCY:
                noise = 1 + (rng.random() - 0.5) * 0.03
                value = current * (1 + offset * 0.03) * noise
            else:
                drift = 1 + (rng.random() - 0.45) * 0.06
                value = current * drift * (1 + (offset + 5) * 0.015)
            points.append(TimeSeriesPoint(f"{year:04d}", round(value, 2)))
        return points

    def _synthetic_monthly(self, layer: LayerDefinition, zone_key: str) -> list[TimeSeriesPoint]:
        as_of = self.as_of
        current = self._generator.synthesize(layer, zone_key)
        home_like = is_home_value_like(layer)
        seed_id = canonical_layer(layer).id
        amplitude = self._config.seasonal_amplitude
        periods = monthly_periods(as_of, self._config.monthly_window)
        total = len(periods)
        points: list[TimeSeriesPoint] = []
        for index, (year, month0) in enumerate(periods):
            label = _month_label(year, month0)
            rng = SeededRandom(seed_key("ts", seed_id, zone_key, label))
            seasonal = 1 + math.sin((month0 + 1 - 3) / 12 * 2 * math.pi) * amplitude
            progress = (index + 1) / total
            if home_like:
                offset = year - as_of.year
                start = curve_multiplier(offset)
                end = curve_multiplier(offset + 1) if offset < 0 else start
                interp = start + (end - start) * (month0 / 12)
                noise = 1 + (rng.random() - 0.5) * 0.01
                value = current * interp * seasonal * noise
            elif layer.unit is Unit.CURRENCY:
                noise = 1 + (rng.random() - 0.5) * 0.01
                value = current * (0.7 + progress * 0.3) * seasonal * noise
            else:
                drift = 1 + (rng.random() - 0.45) * 0.03
                value = current * drift * (1 + progress * 0.08) * seasonal
            points.append(TimeSeriesPoint(label, round(value, 2)))
        return points
