"""SyntheticGenerator: deterministic, plausible values for any (layer, zone).

Every value is a pure function of the layer id, the zone key and the
synthesis config. Four zone primitives (home value, income, population,
rent factor) are seeded on the zone key alone, so every layer derived from
them agrees with every other layer of the same zone: the mortgage payment
is the amortized payment on the synthesized home value, the value/income
ratio divides the two synthesized primitives, and so on.

Layers not derived from primitives draw from a stream seeded on
``{layer.id}-{zone}`` within a unit-specific band. Layers sharing a storage
column resolve to one canonical layer first, so one quantity gets one value
no matter which category shows it. Rules match on layer id substrings in
order; the first match wins.
"""

from __future__ import annotations

from dataclasses import dataclass

from zonepulse.config.models import SynthesisConfig
from zonepulse.domain.catalog import LayerDefinition, canonical_layer, get_layer
from zonepulse.domain.seeding import SeededRandom, seed_key
from zonepulse.domain.types import Unit
from zonepulse.domain.zones import get_zone

HOME_VALUE_LAYERS = frozenset(
    {"home_value", "home_value_detail", "single_family_value", "median_sale_price"}
)

# (id substrings, low, high, decimals)
_PERCENT_BANDS: tuple[tuple[tuple[str, ...], float, float, int], ...] = (
    (("growth_yoy",), -3.0, 4.0, 1),
    (("growth_5yr",), 25.0, 65.0, 1),
    (("growth_mom",), -0.5, 1.0, 1),
    (("forecast",), -6.0, 2.0, 1),
    (("overvalued",), 0.0, 30.0, 1),
    (("peak",), -15.0, -3.0, 1),
    (("crash",), -5.0, 5.0, 1),
    (("cap_rate",), 3.5, 6.5, 1),
    (("property_tax_rate",), 1.6, 2.2, 2),
    (("insurance_pct",), 0.3, 0.5, 2),
    (("price_drops",), 15.0, 40.0, 1),
    (("remote_work",), 15.0, 40.0, 1),
    (("college_degree",), 25.0, 70.0, 1),
    (("homeowners_25_44",), 25.0, 45.0, 1),
    (("homeowners_75_plus",), 5.0, 15.0, 1),
    (("homeownership",), 35.0, 70.0, 1),
    (("mortgaged",), 55.0, 75.0, 1),
    (("poverty",), 5.0, 25.0, 1),
    (("family_households",), 40.0, 70.0, 1),
    (("single_households",), 20.0, 35.0, 1),
    (("rent_growth",), -2.0, 4.0, 1),
    (("vacancy",), 4.0, 12.0, 1),
    (("population_growth", "income_growth"), 0.5, 4.5, 1),
    (("housing_unit_growth",), 1.0, 6.0, 1),
)
_PERCENT_FALLBACK = (-5.0, 10.0, 1)

# (id substrings, low, high); counts are whole numbers
_COUNT_BANDS: tuple[tuple[tuple[str, ...], float, float], ...] = (
    (("population_density",), 1_500, 6_500),
    (("inventory",), 20, 220),
    (("sales", "homes_sold"), 15, 165),
    (("median_age",), 28, 45),
)
_COUNT_FALLBACK = (10, 310)


def _matches(layer_id: str, needles: tuple[str, ...]) -> bool:
    return any(needle in layer_id for needle in needles)


@dataclass(frozen=True)
class ZonePrimitives:
    """Zone-level quantities shared by every layer of one zone."""

    home_value: float
    income: float
    population: float
    rent_factor: float

    @property
    def monthly_rent(self) -> float:
        return self.home_value * self.rent_factor


class SyntheticGenerator:
    """Deterministic synthetic values calibrated to the metro's market."""

    def __init__(self, config: SynthesisConfig | None = None) -> None:
        self._config = config or SynthesisConfig()

    def primitives(self, zone_key: str) -> ZonePrimitives:
        """Reference baselines where known, zone-seeded draws otherwise."""
        zone = get_zone(zone_key)
        home_value = zone.home_value
        if home_value is None:
            home_value = float(round(SeededRandom(f"hv-{zone_key}").uniform(280_000, 600_000)))
        income = zone.income
        if income is None:
            income = float(round(SeededRandom(f"income-{zone_key}").uniform(55_000, 105_000)))
        population = zone.population
        if population is None:
            population = round(SeededRandom(f"pop-{zone_key}").uniform(15_000, 55_000))
        rent_factor = SeededRandom(f"rent-{zone_key}").uniform(0.0045, 0.0065)
        return ZonePrimitives(home_value, income, float(population), rent_factor)

    def mortgage_payment(self, home_value: float) -> float:
        """Monthly payment on a fixed-rate loan at the configured LTV."""
        cfg = self._config
        principal = home_value * cfg.loan_to_value
        n = cfg.loan_term_years * 12
        rate = cfg.mortgage_rate / 12
        if rate == 0:
            return principal / n
        growth = (1 + rate) ** n
        return principal * rate * growth / (growth - 1)

    def synthesize(self, layer: LayerDefinition, zone_key: str) -> float:
        """Plausible current value of *layer* for *zone_key*.

        Layers stored in the same column (``cap_rate`` and ``investor_cap_rate``,
        say) are synthesized as their canonical layer, so they always agree.
        """
        layer = canonical_layer(layer)
        prim = self.primitives(zone_key)
        rng = SeededRandom(seed_key(layer.id, zone_key))
        match layer.unit:
            case Unit.CURRENCY:
                return self._currency(layer.id, zone_key, prim, rng)
            case Unit.PERCENT:
                return self._percent(layer.id, prim, rng)
            case Unit.DAYS:
                return float(round(rng.uniform(25, 80)))
            case Unit.COUNT:
                return self._count(layer.id, prim, rng)
            case Unit.SCORE:
                return float(round(rng.uniform(30, 85)))
            case Unit.RATIO:
                return self._ratio(layer.id, prim, rng)
            case Unit.TEMPERATURE:
                avg = self._config.regional_avg_temperature
                return float(round(rng.uniform(avg - 2.5, avg + 2.5)))

    def _rate_percent(self, layer_id: str, zone_key: str) -> float:
        return self.synthesize(get_layer(layer_id), zone_key)

    def _currency(
        self, layer_id: str, zone_key: str, prim: ZonePrimitives, rng: SeededRandom
    ) -> float:
        if layer_id in HOME_VALUE_LAYERS:
            return prim.home_value
        if "condo_value" in layer_id:
            return float(round(prim.home_value * rng.uniform(0.70, 0.85)))
        if "median_income" in layer_id:
            return prim.income
        if "mortgage_payment" in layer_id:
            return float(round(self.mortgage_payment(prim.home_value)))
        if "salary_to_afford" in layer_id:
            payment = self.mortgage_payment(prim.home_value)
            return float(round(12 * payment / self._config.affordability_ratio))
        if "property_tax_annual" in layer_id:
            rate = self._rate_percent("property_tax_rate", zone_key)
            return float(round(prim.home_value * rate / 100))
        if "insurance_annual" in layer_id:
            rate = self._rate_percent("insurance_pct", zone_key)
            return float(round(prim.home_value * rate / 100))
        if "buy_vs_rent" in layer_id:
            return float(round(self.mortgage_payment(prim.home_value) - prim.monthly_rent))
        return float(round(rng.uniform(800, 3_800)))

    def _percent(self, layer_id: str, prim: ZonePrimitives, rng: SeededRandom) -> float:
        if "mtg_pct_income" in layer_id:
            payment = self.mortgage_payment(prim.home_value)
            return round(12 * payment / prim.income * 100, 1)
        if "gross_rent_yield" in layer_id:
            return round(12 * prim.monthly_rent / prim.home_value * 100, 1)
        low, high, decimals = _PERCENT_FALLBACK
        for needles, band_low, band_high, band_decimals in _PERCENT_BANDS:
            if _matches(layer_id, needles):
                low, high, decimals = band_low, band_high, band_decimals
                break
        return round(rng.uniform(low, high), decimals)

    def _count(self, layer_id: str, prim: ZonePrimitives, rng: SeededRandom) -> float:
        if "population_density" not in layer_id and "population" in layer_id:
            return prim.population
        if "housing_units" in layer_id:
            return float(round(prim.population * rng.uniform(0.35, 0.45)))
        low, high = _COUNT_FALLBACK
        for needles, band_low, band_high in _COUNT_BANDS:
            if _matches(layer_id, needles):
                low, high = band_low, band_high
                break
        return float(round(rng.uniform(low, high)))

    def _ratio(self, layer_id: str, prim: ZonePrimitives, rng: SeededRandom) -> float:
        if "value_income" in layer_id:
            return round(prim.home_value / prim.income, 2)
        if "sale_to_list" in layer_id:
            return round(rng.uniform(0.96, 1.01), 3)
        return round(rng.uniform(3, 8), 2)
