"""Tests for unit-aware labels and summary statistics."""

from __future__ import annotations

import math

import pytest

from zonepulse.domain.formatting import MISSING_LABEL, format_label, median, summarize
from zonepulse.domain.types import Unit


class TestFormatLabel:
    @pytest.mark.parametrize(
        ("value", "unit", "expected"),
        [
            (550_000, Unit.CURRENCY, "$550K"),
            (1_500_000, Unit.CURRENCY, "$1.5M"),
            (850, Unit.CURRENCY, "$850"),
            (-150, Unit.CURRENCY, "-$150"),
            (3.14, Unit.PERCENT, "3.1%"),
            (-2.0, Unit.PERCENT, "-2.0%"),
            (1_500, Unit.COUNT, "1.5K"),
            (42, Unit.COUNT, "42"),
            (45.4, Unit.DAYS, "45 days"),
            (72.4, Unit.SCORE, "72"),
            (1.234, Unit.RATIO, "1.23"),
            (68.4, Unit.TEMPERATURE, "68°F"),
        ],
    )
    def test_units(self, value: float, unit: Unit, expected: str) -> None:
        assert format_label(value, unit) == expected

    @pytest.mark.parametrize(
        ("value", "unit", "expected"),
        [
            (999_600, Unit.CURRENCY, "$1.0M"),
            (999_400, Unit.CURRENCY, "$999K"),
            (-999_600, Unit.CURRENCY, "-$1.0M"),
            (999.6, Unit.CURRENCY, "$1K"),
            (999_960, Unit.COUNT, "1.0M"),
            (999.6, Unit.COUNT, "1.0K"),
        ],
    )
    def test_rounding_carries_into_next_tier(
        self, value: float, unit: Unit, expected: str
    ) -> None:
        assert format_label(value, unit) == expected

    def test_accepts_unit_string(self) -> None:
        assert format_label(12.0, "percent") == "12.0%"

    @pytest.mark.parametrize("value", [None, math.nan, math.inf])
    def test_missing(self, value: float | None) -> None:
        assert format_label(value, Unit.CURRENCY) == MISSING_LABEL


class TestSummary:
    def test_median_odd(self) -> None:
        assert median([3.0, 1.0, 2.0]) == 2.0

    def test_median_even(self) -> None:
        assert median([4.0, 1.0, 2.0, 3.0]) == 2.5

    def test_median_empty(self) -> None:
        assert median([]) == 0.0

    def test_summarize(self) -> None:
        assert summarize([5.0, 1.0, 3.0]) == {"min": 1.0, "max": 5.0, "median": 3.0}

    def test_summarize_empty(self) -> None:
        assert summarize([]) == {"min": 0.0, "max": 0.0, "median": 0.0}

    def test_summarize_skips_non_finite(self) -> None:
        assert summarize([1.0, math.nan, 3.0])["max"] == 3.0
