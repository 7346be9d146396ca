"""ExportService: CSV downloads of layer data.

With a zone, the export is that zone's monthly history (``date,value``);
without one, it is a snapshot of every zone in a region (``zone,value``).
Values are written exactly as the JSON surfaces return them.
"""

from __future__ import annotations

import csv
import io
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from zonepulse.domain.catalog import get_layer
from zonepulse.domain.types import Granularity
from zonepulse.domain.zones import zones_in_region
from zonepulse.services.base import BaseService, require_zone
from zonepulse.services.layers import LayerService
from zonepulse.services.result import ServiceResult
from zonepulse.services.telemetry import traced

if TYPE_CHECKING:
    from zonepulse.infrastructure.store import MarketStore

CSV_MEDIA_TYPE = "text/csv"


def render_csv(header: tuple[str, str], rows: Iterable[tuple[Any, Any]]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(header)
    writer.writerows(rows)
    return buffer.getvalue()


class ExportService(BaseService):
    """Serialize resolved layers to CSV."""

    def __init__(self, store: MarketStore, layers: LayerService | None = None) -> None:
        super().__init__(store)
        self._layers = layers or LayerService(store)

    @traced
    def export_csv(
        self,
        layer_id: str,
        *,
        zone: str | None = None,
        region: str | None = None,
    ) -> ServiceResult:
        """CSV text for *layer_id*.

        When both *zone* and *region* are given, *zone* wins.

        Returns data ``{content, filename, media_type, rows}``.
        """
        return self._run("export_csv", lambda: self._export(layer_id, zone, region))

    def _export(self, layer_id: str, zone: str | None, region: str | None) -> ServiceResult:
        layer = get_layer(layer_id)
        if zone:
            zone_key = require_zone(zone)
            points = self._layers.reconstructor.timeseries(layer, zone_key, Granularity.MONTHLY)
            content = render_csv(("date", "value"), ((p.period, p.value) for p in points))
            filename = f"{layer.id}_{zone_key}.csv"
            count = len(points)
            warnings: list[str] = []
        else:
            region_name = (region or self.settings.regions.default_region).strip().lower()
            resolution = self._layers.resolver.resolution(layer, zones_in_region(region_name))
            content = render_csv(
                ("zone", "value"), ((p.zone, p.value) for p in resolution.points)
            )
            filename = f"{layer.id}_{region_name.replace(' ', '-')}.csv"
            count = len(resolution.points)
            warnings = resolution.warnings

        return ServiceResult(
            ok=True,
            op="export_csv",
            data={
                "content": content,
                "filename": filename,
                "media_type": CSV_MEDIA_TYPE,
                "rows": count,
            },
            warnings=warnings,
        )
