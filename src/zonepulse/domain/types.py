"""Layer units, source kinds, and time-series granularity enums."""

from __future__ import annotations

from enum import StrEnum


class Unit(StrEnum):
    """Measurement unit of a layer. Drives both formatting and synthesis."""

    CURRENCY = "currency"
    PERCENT = "percent"
    COUNT = "count"
    DAYS = "days"
    SCORE = "score"
    RATIO = "ratio"
    TEMPERATURE = "temperature"


class SourceKind(StrEnum):
    """Where a layer's real values come from."""

    EXTERNAL_INDEX = "external-index"
    EXTERNAL_SURVEY = "external-survey"
    EXTERNAL_SALE_RECORD = "external-sale-record"
    DERIVED = "derived"


class Granularity(StrEnum):
    """Time-series period size."""

    MONTHLY = "monthly"
    YEARLY = "yearly"
