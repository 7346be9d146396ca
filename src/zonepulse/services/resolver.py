"""DataResolver: current layer values per zone, real first, synthetic otherwise.

One call resolves one layer over a set of zones and is all-or-nothing on
its source: when the store holds any usable rows, exactly those zones are
returned with their real values; when it holds none, every requested zone
is synthesized. Real and synthetic values are never mixed in one answer.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

from zonepulse.domain.formatting import format_label
from zonepulse.domain.models import ResolvedDataPoint
from zonepulse.domain.zones import known_zone_keys
from zonepulse.infrastructure.repositories.layers import StoreUnavailableError
from zonepulse.services.synthesis import SyntheticGenerator
from zonepulse.services.telemetry import get_current_span

if TYPE_CHECKING:
    from collections.abc import Iterable

    from zonepulse.domain.catalog import LayerDefinition
    from zonepulse.infrastructure.store import MarketStore

logger = logging.getLogger(__name__)


class DataSource(StrEnum):
    STORE = "store"
    SYNTHETIC = "synthetic"


@dataclass(frozen=True)
class Resolution:
    """Points for one layer plus where they came from."""

    points: list[ResolvedDataPoint]
    source: DataSource
    warnings: list[str] = field(default_factory=list)


def dedupe_zones(zone_keys: Iterable[str]) -> list[str]:
    """Drop repeated keys, keeping first-seen order."""
    return list(dict.fromkeys(zone_keys))


class DataResolver:
    """Resolve layer values through the store with synthetic fallback."""

    def __init__(self, store: MarketStore, generator: SyntheticGenerator | None = None) -> None:
        self._store = store
        self._generator = generator or SyntheticGenerator(store.settings.synthesis)

    @property
    def generator(self) -> SyntheticGenerator:
        return self._generator

    def resolve(
        self, layer: LayerDefinition, zone_keys: Iterable[str] | None = None
    ) -> list[ResolvedDataPoint]:
        """Values of *layer* for *zone_keys* (default: every known zone)."""
        return self.resolution(layer, zone_keys).points

    def resolution(
        self, layer: LayerDefinition, zone_keys: Iterable[str] | None = None
    ) -> Resolution:
        """Like :meth:`resolve`, also reporting the source and any warnings.

        Raises:
            StoreUnavailableError: the store failed and
                ``database.fallback_on_error`` is off.
        """
        zones = dedupe_zones(known_zone_keys() if zone_keys is None else zone_keys)
        warnings: list[str] = []

        try:
            rows = self._store.layers.try_latest(layer, zones)
        except StoreUnavailableError as exc:
            if not self._store.settings.database.fallback_on_error:
                raise
            logger.warning("store failed for layer %s, synthesizing: %s", layer.id, exc)
            warnings.append(f"Store unavailable; {layer.id} values are synthetic")
            rows = None

        span = get_current_span()
        if rows is not None:
            points = [
                ResolvedDataPoint(row.zone, row.value, format_label(row.value, layer.unit))
                for row in rows
            ]
            if span:
                span.tally(DataSource.STORE.value)
            return Resolution(points, DataSource.STORE, warnings)

        points = []
        for zone in zones:
            value = self._generator.synthesize(layer, zone)
            points.append(ResolvedDataPoint(zone, value, format_label(value, layer.unit)))
        if span:
            span.tally(DataSource.SYNTHETIC.value)
        return Resolution(points, DataSource.SYNTHETIC, warnings)

    def resolve_one(self, layer: LayerDefinition, zone_key: str) -> ResolvedDataPoint | None:
        """The point for *zone_key*, real or synthetic."""
        points = self.resolve(layer, [zone_key])
        return points[0] if points else None
