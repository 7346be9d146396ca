"""Unit-aware value labels and choropleth summary statistics."""

from __future__ import annotations

import math
from collections.abc import Iterable

from zonepulse.domain.types import Unit

MISSING_LABEL = "—"


def _compact(value: float, decimals_thousands: int) -> str:
    # Tiers are chosen on the rounded text, so 999_600 reads 1.0M, never 1000K.
    magnitude = abs(value)
    units = f"{magnitude:.0f}"
    if float(units) < 1_000:
        return units
    thousands = f"{magnitude / 1_000:.{decimals_thousands}f}"
    if float(thousands) < 1_000:
        return f"{thousands}K"
    return f"{magnitude / 1_000_000:.1f}M"


def format_label(value: float | None, unit: Unit | str) -> str:
    """Human label for *value* in *unit*.

    Examples:
        >>> format_label(550000, "currency")
        '$550K'
        >>> format_label(-150, "currency")
        '-$150'
        >>> format_label(3.14, "percent")
        '3.1%'
        >>> format_label(45.4, "days")
        '45 days'
    """
    if value is None or not math.isfinite(value):
        return MISSING_LABEL

    match Unit(unit):
        case Unit.CURRENCY:
            sign = "-" if value < 0 else ""
            return f"{sign}${_compact(value, 0)}"
        case Unit.PERCENT:
            return f"{value:.1f}%"
        case Unit.DAYS:
            return f"{round(value)} days"
        case Unit.SCORE:
            return f"{round(value)}"
        case Unit.RATIO:
            return f"{value:.2f}"
        case Unit.TEMPERATURE:
            return f"{value:.0f}°F"
        case Unit.COUNT:
            sign = "-" if value < 0 else ""
            return f"{sign}{_compact(value, 1)}"


def median(values: list[float]) -> float:
    """Median of *values*; 0.0 when empty."""
    if not values:
        return 0.0
    ordered = sorted(values)
    mid = len(ordered) // 2
    if len(ordered) % 2 == 0:
        return (ordered[mid - 1] + ordered[mid]) / 2
    return ordered[mid]


def summarize(values: Iterable[float]) -> dict[str, float]:
    """``{min, max, median}`` over the finite entries of *values*."""
    finite = [v for v in values if math.isfinite(v)]
    if not finite:
        return {"min": 0.0, "max": 0.0, "median": 0.0}
    return {"min": min(finite), "max": max(finite), "median": median(finite)}
