"""Tests for the layer catalog."""

from __future__ import annotations

import pytest

from zonepulse.domain.catalog import (
    UnknownLayerError,
    canonical_layer,
    get_categories,
    get_layer,
    has_layer,
    iter_layers,
    layer_count,
)
from zonepulse.domain.types import SourceKind, Unit


class TestCatalogIntegrity:
    def test_ids_unique(self) -> None:
        ids = [layer.id for layer in iter_layers()]
        assert len(ids) == len(set(ids))
        assert layer_count() == len(ids)

    def test_every_category_has_layers(self) -> None:
        for category in get_categories():
            assert category.layers, category.id

    def test_iter_follows_category_order(self) -> None:
        flattened = [layer.id for c in get_categories() for layer in c.layers]
        assert [layer.id for layer in iter_layers()] == flattened

    def test_units_and_sources_are_enums(self) -> None:
        for layer in iter_layers():
            assert isinstance(layer.unit, Unit)
            assert isinstance(layer.source_kind, SourceKind)


class TestLookup:
    def test_get_known_layer(self) -> None:
        layer = get_layer("home_value")
        assert layer.unit is Unit.CURRENCY
        assert layer.source_kind is SourceKind.EXTERNAL_INDEX

    def test_unknown_layer_raises(self) -> None:
        with pytest.raises(UnknownLayerError) as exc_info:
            get_layer("moon_value")
        assert exc_info.value.layer_id == "moon_value"

    def test_has_layer(self) -> None:
        assert has_layer("cap_rate")
        assert not has_layer("nope")

    def test_survey_layers_are_year_keyed(self) -> None:
        assert get_layer("population").year_keyed
        assert not get_layer("home_value").year_keyed


class TestPublicDict:
    def test_hides_storage_mapping(self) -> None:
        public = get_layer("days_on_market").public_dict()
        assert set(public) == {"id", "label", "source", "description", "unit"}
        assert public["unit"] == "days"
        assert public["source"] == "external-sale-record"


class TestCanonicalLayer:
    @pytest.mark.parametrize(
        ("layer_id", "canonical"),
        [
            ("investor_cap_rate", "cap_rate"),
            ("cap_rate_trend", "cap_rate"),
            ("forecast_trend", "home_price_forecast"),
            ("inventory_trend", "for_sale_inventory"),
            ("dom_trend", "days_on_market"),
            ("sales_trend", "home_sales"),
            ("investor_home_sales", "home_sales"),
        ],
    )
    def test_shared_column_maps_to_first_layer(self, layer_id: str, canonical: str) -> None:
        assert canonical_layer(get_layer(layer_id)).id == canonical

    def test_unshared_layer_is_its_own(self) -> None:
        layer = get_layer("median_income")
        assert canonical_layer(layer) is layer

    def test_canonical_shares_storage_and_unit(self) -> None:
        for layer in iter_layers():
            canonical = canonical_layer(layer)
            assert (canonical.table, canonical.column) == (layer.table, layer.column)
            assert canonical.unit is layer.unit
