"""Tests for zone reference data and regions."""

from __future__ import annotations

import pytest

from zonepulse.domain.zones import (
    METRO_REGION,
    UnknownRegionError,
    get_zone,
    is_valid_zone_key,
    known_zone_keys,
    region_names,
    zones_in_region,
)


class TestZoneKeys:
    @pytest.mark.parametrize("key", ["78704", "76574", "10001-1234", "SW1A"])
    def test_valid(self, key: str) -> None:
        assert is_valid_zone_key(key)

    @pytest.mark.parametrize("key", ["", "-78704", "787 04", "78704!", "x" * 17])
    def test_invalid(self, key: str) -> None:
        assert not is_valid_zone_key(key)


class TestBaselines:
    def test_known_zone(self) -> None:
        zone = get_zone("78746")
        assert zone.county == "Travis"
        assert zone.home_value == 1_200_000.0

    def test_unknown_zone_has_no_attributes(self) -> None:
        zone = get_zone("99999")
        assert zone.key == "99999"
        assert zone.county is None
        assert zone.home_value is None

    def test_known_keys_unique(self) -> None:
        keys = known_zone_keys()
        assert len(keys) == len(set(keys))


class TestRegions:
    def test_metro_holds_every_zone(self) -> None:
        assert zones_in_region(METRO_REGION) == known_zone_keys()

    def test_case_insensitive(self) -> None:
        assert zones_in_region("Travis") == zones_in_region("  travis ")

    def test_city_region(self) -> None:
        assert set(zones_in_region("round rock")) == {"78664", "78665", "78681"}

    def test_county_zones_share_county(self) -> None:
        for key in zones_in_region("williamson"):
            assert get_zone(key).county == "Williamson"

    def test_unknown_region(self) -> None:
        with pytest.raises(UnknownRegionError):
            zones_in_region("atlantis")

    def test_region_names_include_metro(self) -> None:
        assert METRO_REGION in region_names()
