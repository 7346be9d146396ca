"""Response models for the HTTP API.

Field names are snake_case in Python and camelCase on the wire.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# Catalog


class LayerInfo(CamelModel):
    id: str
    label: str
    source: str
    description: str
    unit: str


class LayerCategory(CamelModel):
    id: str
    label: str
    layers: list[LayerInfo]


class CatalogResponse(CamelModel):
    categories: list[LayerCategory]
    count: int


# Choropleth


class DataPoint(CamelModel):
    """A layer value for one zone."""

    zone: str
    value: float
    formatted_label: str


class LayerMeta(CamelModel):
    min: float
    max: float
    median: float
    unit: str
    source: str
    description: str
    count: int
    resolved_from: str


class LayerDataResponse(CamelModel):
    layer_id: str
    region: str
    data: list[DataPoint]
    meta: LayerMeta
    warnings: list[str] = Field(default_factory=list)


# Time series


class SeriesPoint(CamelModel):
    date: str
    value: float


class SeriesMeta(CamelModel):
    unit: str
    source: str
    description: str
    count: int


class TimeseriesResponse(CamelModel):
    layer_id: str
    zone: str
    period: str
    data: list[SeriesPoint]
    meta: SeriesMeta


# Zones


class Forecast(CamelModel):
    value: float
    direction: str


class ScoreTotals(CamelModel):
    investor: int
    growth: int
    market_health: int


class MetricValue(CamelModel):
    value: float
    formatted_label: str


class ZoneSummaryResponse(CamelModel):
    """Every layer for one zone plus forecast, timing hints and scores.

    ``metrics`` is keyed by layer id.
    """

    zone: str
    county: str | None
    city: str
    metro: str
    state: str
    data_date: str
    forecast: Forecast
    best_month_buy: str
    best_month_sell: str
    scores: ScoreTotals
    metrics: dict[str, MetricValue]


class ScoreComponentOut(CamelModel):
    layer_id: str
    raw_value: float | None
    normalized_score: float
    weight: float


class ZoneScoresResponse(CamelModel):
    """Composite scores; ``breakdown`` is family → component name → component."""

    zone: str
    investor_score: int
    growth_score: int
    market_health_score: int
    breakdown: dict[str, dict[str, ScoreComponentOut]]


class HealthResponse(CamelModel):
    status: str
    store: str
    version: str
