"""Tests for TimeSeriesReconstructor."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Any

import pytest

from zonepulse.config.models import TimeseriesConfig
from zonepulse.domain.catalog import get_layer
from zonepulse.domain.types import Granularity
from zonepulse.infrastructure.repositories.layers import StoreUnavailableError
from zonepulse.infrastructure.store import MarketStore
from zonepulse.services.timeseries import (
    APPRECIATION_CURVE,
    TimeSeriesReconstructor,
    curve_multiplier,
    is_home_value_like,
    monthly_periods,
    yearly_periods,
)


class TestPeriods:
    def test_yearly(self) -> None:
        assert yearly_periods(date(2025, 6, 15), 3) == [2023, 2024, 2025]

    def test_monthly_crosses_year(self) -> None:
        assert monthly_periods(date(2025, 2, 1), 3) == [(2024, 11), (2025, 0), (2025, 1)]

    def test_curve_clamps(self) -> None:
        assert curve_multiplier(0) == 1.0
        assert curve_multiplier(-10) == APPRECIATION_CURVE[0]
        assert curve_multiplier(-25) == APPRECIATION_CURVE[0]
        assert curve_multiplier(2) == 1.0

    def test_home_value_like(self) -> None:
        assert is_home_value_like(get_layer("home_value"))
        assert is_home_value_like(get_layer("condo_value"))
        assert not is_home_value_like(get_layer("mortgage_payment"))
        assert not is_home_value_like(get_layer("home_value_growth_yoy"))


class TestSyntheticSeries:
    def test_yearly_shape(self, store: MarketStore) -> None:
        points = TimeSeriesReconstructor(store).timeseries(
            get_layer("home_value"), "78704", Granularity.YEARLY
        )
        assert [p.period for p in points] == [str(y) for y in range(2015, 2026)]

    def test_monthly_shape(self, store: MarketStore) -> None:
        points = TimeSeriesReconstructor(store).timeseries(
            get_layer("days_on_market"), "78704", Granularity.MONTHLY
        )
        assert len(points) == 60
        assert points[0].period == "2020-07"
        assert points[-1].period == "2025-06"
        assert [p.period for p in points] == sorted(p.period for p in points)

    def test_deterministic(self, store: MarketStore) -> None:
        recon = TimeSeriesReconstructor(store)
        layer = get_layer("median_income")
        assert recon.timeseries(layer, "78660", Granularity.MONTHLY) == recon.timeseries(
            layer, "78660", Granularity.MONTHLY
        )

    def test_home_value_ends_near_current(self, store: MarketStore) -> None:
        points = TimeSeriesReconstructor(store).timeseries(
            get_layer("home_value"), "78704", Granularity.YEARLY
        )
        assert 700_000 * 0.985 <= points[-1].value <= 700_000 * 1.015

    def test_home_value_peaks_in_2022(self, store: MarketStore) -> None:
        points = TimeSeriesReconstructor(store).timeseries(
            get_layer("home_value"), "78746", Granularity.YEARLY
        )
        by_year = {p.period: p.value for p in points}
        assert by_year["2022"] > by_year["2025"]
        assert by_year["2015"] < by_year["2020"]

    def test_other_currency_climbs(self, store: MarketStore) -> None:
        points = TimeSeriesReconstructor(store).timeseries(
            get_layer("mortgage_payment"), "78704", Granularity.YEARLY
        )
        assert points[0].value < points[-1].value

    def test_window_follows_config(self, store: MarketStore) -> None:
        config = TimeseriesConfig(as_of=date(2020, 1, 10), yearly_window=5, monthly_window=12)
        recon = TimeSeriesReconstructor(store, config=config)
        assert recon.window(Granularity.YEARLY) == ["2016", "2017", "2018", "2019", "2020"]
        monthly = recon.window(Granularity.MONTHLY)
        assert monthly[0] == "2019-02"
        assert monthly[-1] == "2020-01"

    def test_shared_column_layers_share_history(self, store: MarketStore) -> None:
        recon = TimeSeriesReconstructor(store)
        for period in (Granularity.YEARLY, Granularity.MONTHLY):
            assert recon.timeseries(get_layer("cap_rate"), "78704", period) == recon.timeseries(
                get_layer("investor_cap_rate"), "78704", period
            )

    @pytest.mark.parametrize("period", [Granularity.YEARLY, Granularity.MONTHLY])
    def test_reference_date_read_once(
        self, store: MarketStore, monkeypatch: pytest.MonkeyPatch, period: Granularity
    ) -> None:
        # Each read returns the next day, as if the call ran across midnight.
        reads: list[date] = []

        def as_of(_self: TimeSeriesReconstructor) -> date:
            reads.append(date(2025, 12, 31) + timedelta(days=len(reads)))
            return reads[-1]

        monkeypatch.setattr(TimeSeriesReconstructor, "as_of", property(as_of))
        points = TimeSeriesReconstructor(store).timeseries(
            get_layer("home_value"), "78704", period
        )
        assert len(reads) == 1
        assert points[-1].period.startswith("2025")


class TestRealSeries:
    def test_monthly_clipped_to_window(self, seeded_store: MarketStore) -> None:
        points = TimeSeriesReconstructor(seeded_store).timeseries(
            get_layer("home_value"), "78704", Granularity.MONTHLY
        )
        assert len(points) == 17
        assert points[0].period == "2024-01"
        assert points[-1].value == 698_000.0

    def test_yearly_averaged(self, seeded_store: MarketStore) -> None:
        points = TimeSeriesReconstructor(seeded_store).timeseries(
            get_layer("home_value"), "78704", Granularity.YEARLY
        )
        assert [p.period for p in points] == ["2024", "2025"]
        assert points[0].value == 666_500.0

    def test_history_outside_window_synthesizes(self, seeded_store: MarketStore) -> None:
        points = TimeSeriesReconstructor(seeded_store).timeseries(
            get_layer("home_value"), "78745", Granularity.YEARLY
        )
        assert len(points) == 11

    def test_monthly_over_yearly_table_synthesizes(self, seeded_store: MarketStore) -> None:
        points = TimeSeriesReconstructor(seeded_store).timeseries(
            get_layer("population"), "78704", Granularity.MONTHLY
        )
        assert len(points) == 60


class TestStoreFailure:
    def test_raises_without_fallback(self, failing_store: Any) -> None:
        with pytest.raises(StoreUnavailableError):
            TimeSeriesReconstructor(failing_store).timeseries(
                get_layer("home_value"), "78704", Granularity.YEARLY
            )

    def test_fallback_synthesizes(self, fallback_store: Any) -> None:
        points = TimeSeriesReconstructor(fallback_store).timeseries(
            get_layer("home_value"), "78704", Granularity.YEARLY
        )
        assert len(points) == 11
