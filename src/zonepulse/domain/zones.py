"""Zone reference data: baseline attributes for the known metro zones.

Baselines seed realistic synthesis (premium zones high, entry-level zones
low). A zone key absent from this table is still a valid zone; the
synthetic generator falls back to generic bands for it.

Regions group zones for choropleth views: the whole metro, each county,
and each city. Region names are matched case-insensitively.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from types import MappingProxyType

METRO_REGION = "austin-metro"

ZONE_KEY_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9-]{0,15}$")


class UnknownRegionError(LookupError):
    """Raised when a region name matches no known zones."""

    def __init__(self, region: str) -> None:
        super().__init__(f"Unknown region: {region}")
        self.region = region


@dataclass(frozen=True)
class ZoneBaseline:
    """Reference attributes for one zone. Every attribute is optional."""

    key: str
    county: str | None = None
    city: str | None = None
    home_value: float | None = None
    income: float | None = None
    population: int | None = None


def _zone(
    key: str, county: str, city: str, home_value: int, income: int, population: int
) -> ZoneBaseline:
    return ZoneBaseline(key, county, city, float(home_value), float(income), population)


# key: county, city, typical home value, median income, population
_ZONES: tuple[ZoneBaseline, ...] = (
    _zone("78701", "Travis", "Austin", 550_000, 85_000, 12_500),  # Downtown
    _zone("78702", "Travis", "Austin", 600_000, 82_000, 28_000),  # East Austin
    _zone("78703", "Travis", "Austin", 950_000, 130_000, 18_000),  # Tarrytown
    _zone("78704", "Travis", "Austin", 700_000, 95_000, 35_000),  # Travis Heights
    _zone("78705", "Travis", "Austin", 500_000, 42_000, 32_000),  # North University
    _zone("78712", "Travis", "Austin", 480_000, 35_000, 8_000),  # UT campus
    _zone("78717", "Travis", "Austin", 520_000, 105_000, 30_000),  # Brushy Creek
    _zone("78719", "Travis", "Austin", 340_000, 55_000, 4_500),  # Airport
    _zone("78721", "Travis", "Austin", 400_000, 52_000, 15_000),
    _zone("78722", "Travis", "Austin", 520_000, 72_000, 12_000),  # Cherrywood
    _zone("78723", "Travis", "Austin", 450_000, 68_000, 35_000),  # Mueller
    _zone("78724", "Travis", "Austin", 320_000, 50_000, 25_000),
    _zone("78725", "Travis", "Austin", 310_000, 48_000, 18_000),
    _zone("78726", "Williamson", "Austin", 580_000, 110_000, 22_000),  # Canyon Creek
    _zone("78727", "Travis", "Austin", 470_000, 85_000, 28_000),
    _zone("78728", "Williamson", "Austin", 420_000, 78_000, 25_000),  # Wells Branch
    _zone("78729", "Williamson", "Austin", 480_000, 92_000, 30_000),  # Anderson Mill
    _zone("78730", "Travis", "Austin", 850_000, 140_000, 10_000),  # River Place
    _zone("78731", "Travis", "Austin", 700_000, 110_000, 25_000),  # NW Hills
    _zone("78732", "Travis", "Austin", 750_000, 125_000, 15_000),  # Steiner Ranch
    _zone("78733", "Travis", "Austin", 900_000, 145_000, 12_000),
    _zone("78734", "Travis", "Austin", 650_000, 100_000, 20_000),  # Lakeway
    _zone("78735", "Travis", "Austin", 620_000, 105_000, 28_000),
    _zone("78736", "Travis", "Austin", 500_000, 90_000, 18_000),  # Oak Hill
    _zone("78737", "Hays", "Austin", 520_000, 95_000, 20_000),
    _zone("78738", "Travis", "Austin", 680_000, 120_000, 25_000),
    _zone("78739", "Travis", "Austin", 530_000, 98_000, 22_000),  # Circle C
    _zone("78741", "Travis", "Austin", 380_000, 55_000, 42_000),  # East Riverside
    _zone("78742", "Travis", "Austin", 300_000, 42_000, 8_000),  # Montopolis
    _zone("78744", "Travis", "Austin", 340_000, 52_000, 40_000),
    _zone("78745", "Travis", "Austin", 450_000, 72_000, 48_000),
    _zone("78746", "Travis", "Austin", 1_200_000, 180_000, 22_000),  # Westlake Hills
    _zone("78747", "Travis", "Austin", 380_000, 68_000, 30_000),
    _zone("78748", "Travis", "Austin", 430_000, 82_000, 35_000),  # Shady Hollow
    _zone("78749", "Travis", "Austin", 520_000, 100_000, 30_000),
    _zone("78750", "Travis", "Austin", 550_000, 105_000, 28_000),
    _zone("78751", "Travis", "Austin", 530_000, 75_000, 18_000),  # Hyde Park
    _zone("78752", "Travis", "Austin", 400_000, 60_000, 22_000),
    _zone("78753", "Travis", "Austin", 360_000, 55_000, 50_000),
    _zone("78754", "Travis", "Austin", 350_000, 52_000, 30_000),
    _zone("78756", "Travis", "Austin", 600_000, 90_000, 12_000),  # Brentwood
    _zone("78757", "Travis", "Austin", 520_000, 82_000, 20_000),  # Allandale
    _zone("78758", "Travis", "Austin", 370_000, 58_000, 42_000),
    _zone("78759", "Travis", "Austin", 560_000, 100_000, 32_000),  # Arboretum
    _zone("78610", "Hays", "Buda", 360_000, 75_000, 35_000),
    _zone("78613", "Williamson", "Cedar Park", 430_000, 95_000, 65_000),
    _zone("78617", "Travis", "Del Valle", 310_000, 50_000, 20_000),
    _zone("78620", "Hays", "Dripping Springs", 600_000, 110_000, 15_000),
    _zone("78621", "Bastrop", "Elgin", 300_000, 55_000, 12_000),
    _zone("78626", "Williamson", "Georgetown", 370_000, 72_000, 40_000),
    _zone("78628", "Williamson", "Georgetown", 400_000, 82_000, 55_000),
    _zone("78633", "Williamson", "Georgetown", 430_000, 75_000, 25_000),  # Sun City
    _zone("78634", "Williamson", "Hutto", 330_000, 72_000, 35_000),
    _zone("78640", "Hays", "Kyle", 300_000, 68_000, 55_000),
    _zone("78641", "Williamson", "Leander", 380_000, 82_000, 70_000),
    _zone("78642", "Williamson", "Liberty Hill", 350_000, 78_000, 20_000),
    _zone("78645", "Travis", "Lago Vista", 520_000, 80_000, 12_000),
    _zone("78653", "Travis", "Manor", 340_000, 62_000, 25_000),
    _zone("78654", "Burnet", "Marble Falls", 380_000, 65_000, 18_000),
    _zone("78660", "Williamson", "Pflugerville", 350_000, 82_000, 70_000),
    _zone("78664", "Williamson", "Round Rock", 360_000, 78_000, 55_000),
    _zone("78665", "Williamson", "Round Rock", 400_000, 88_000, 45_000),
    _zone("78669", "Travis", "Spicewood", 600_000, 105_000, 8_000),
    _zone("78681", "Williamson", "Round Rock", 420_000, 92_000, 45_000),
    _zone("76574", "Williamson", "Taylor", 280_000, 58_000, 18_000),
)

_BY_KEY: MappingProxyType[str, ZoneBaseline] = MappingProxyType({z.key: z for z in _ZONES})


def _region_index() -> MappingProxyType[str, tuple[str, ...]]:
    regions: dict[str, list[str]] = {METRO_REGION: [z.key for z in _ZONES]}
    for zone in _ZONES:
        for name in (zone.county, zone.city):
            if name:
                regions.setdefault(name.lower(), []).append(zone.key)
    return MappingProxyType({name: tuple(keys) for name, keys in regions.items()})


_REGIONS = _region_index()


def is_valid_zone_key(key: str) -> bool:
    """Postal-code-like: alphanumeric with optional dashes, at most 16 chars."""
    return bool(ZONE_KEY_PATTERN.match(key))


def get_zone(key: str) -> ZoneBaseline:
    """Baseline for *key*, or an attribute-less zone when it has none."""
    return _BY_KEY.get(key) or ZoneBaseline(key)


def known_zone_keys() -> tuple[str, ...]:
    """Every zone with reference data, in table order."""
    return tuple(_BY_KEY)


def region_names() -> tuple[str, ...]:
    return tuple(_REGIONS)


def zones_in_region(region: str) -> tuple[str, ...]:
    """Zone keys belonging to *region* (metro, county, or city name).

    Raises:
        UnknownRegionError: if no zone belongs to *region*.
    """
    keys = _REGIONS.get(region.strip().lower())
    if keys is None:
        raise UnknownRegionError(region)
    return keys
