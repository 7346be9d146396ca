"""Layer catalog: the immutable registry of every trackable layer.

Categories are purely organizational. The layer ``id`` is the only key the
rest of the engine uses; ``table``/``column``/``date_column`` say where real
values live in the backing store and are never exposed over the API.

INVARIANT: layer ids are globally unique. Checked once at import time.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from types import MappingProxyType

from zonepulse.domain.types import SourceKind, Unit

INDEX_TABLE = "pulse_zillow_data"
SURVEY_TABLE = "pulse_census_data"
SALES_TABLE = "pulse_redfin_data"
METRICS_TABLE = "pulse_metrics"


class UnknownLayerError(LookupError):
    """Raised when a layer id is not in the catalog."""

    def __init__(self, layer_id: str) -> None:
        super().__init__(f"Unknown layer: {layer_id}")
        self.layer_id = layer_id


@dataclass(frozen=True)
class LayerDefinition:
    """One named, unit-typed statistical quantity."""

    id: str
    label: str
    source_kind: SourceKind
    description: str
    unit: Unit
    table: str
    column: str
    date_column: str

    @property
    def year_keyed(self) -> bool:
        """True when the backing table stores one row per year, not per date."""
        return self.date_column == "year"

    def public_dict(self) -> dict[str, str]:
        """Catalog view without the internal storage mapping."""
        return {
            "id": self.id,
            "label": self.label,
            "source": str(self.source_kind),
            "description": self.description,
            "unit": str(self.unit),
        }


@dataclass(frozen=True)
class Category:
    """An ordered group of layers."""

    id: str
    label: str
    layers: tuple[LayerDefinition, ...]


def _index(layer_id: str, label: str, unit: Unit, column: str, description: str) -> LayerDefinition:
    return LayerDefinition(
        layer_id, label, SourceKind.EXTERNAL_INDEX, description, unit, INDEX_TABLE, column, "date"
    )


def _survey(
    layer_id: str, label: str, unit: Unit, column: str, description: str
) -> LayerDefinition:
    return LayerDefinition(
        layer_id, label, SourceKind.EXTERNAL_SURVEY, description, unit, SURVEY_TABLE, column, "year"
    )


def _sales(layer_id: str, label: str, unit: Unit, column: str, description: str) -> LayerDefinition:
    return LayerDefinition(
        layer_id,
        label,
        SourceKind.EXTERNAL_SALE_RECORD,
        description,
        unit,
        SALES_TABLE,
        column,
        "period_start",
    )


def _derived(
    layer_id: str, label: str, unit: Unit, column: str, description: str
) -> LayerDefinition:
    return LayerDefinition(
        layer_id, label, SourceKind.DERIVED, description, unit, METRICS_TABLE, column, "date"
    )


_CATEGORIES: tuple[Category, ...] = (
    Category(
        "popular",
        "Popular Data",
        (
            _index(
                "home_value",
                "Home Value",
                Unit.CURRENCY,
                "home_value",
                "Typical home value for middle-tier homes in the area.",
            ),
            _index(
                "home_value_growth_yoy",
                "Home Value Growth (YoY)",
                Unit.PERCENT,
                "home_value_growth_yoy",
                "Year-over-year percentage change in typical home value.",
            ),
            _sales(
                "for_sale_inventory",
                "For Sale Inventory",
                Unit.COUNT,
                "inventory",
                "Number of active listings on the market in a given month.",
            ),
            _derived(
                "home_price_forecast",
                "Home Price Forecast",
                Unit.PERCENT,
                "price_forecast",
                "Projected home value change over the next 12 months based on trend analysis.",
            ),
            _index(
                "home_value_growth_5yr",
                "Home Value Growth (5-Year)",
                Unit.PERCENT,
                "home_value_growth_5yr",
                "Cumulative home value percentage change over the last five years.",
            ),
            _index(
                "home_value_growth_mom",
                "Home Value Growth (MoM)",
                Unit.PERCENT,
                "home_value_growth_mom",
                "Month-over-month percentage change in typical home value.",
            ),
            _derived(
                "overvalued_pct",
                "Overvalued %",
                Unit.PERCENT,
                "overvalued_pct",
                "How far the value-to-income ratio sits above its long-term average.",
            ),
            _sales(
                "days_on_market",
                "Days on Market",
                Unit.DAYS,
                "median_dom",
                "Median number of days homes stay on the market before going under contract.",
            ),
            _sales(
                "home_sales",
                "Home Sales",
                Unit.COUNT,
                "homes_sold",
                "Number of homes that closed during the period.",
            ),
            _derived(
                "cap_rate",
                "Cap Rate",
                Unit.PERCENT,
                "cap_rate",
                "Net operating income divided by property value. Higher is better for investors.",
            ),
            _derived(
                "long_term_growth_score",
                "Long-Term Growth Score",
                Unit.SCORE,
                "growth_score",
                "Composite 0-100 score of long-term growth potential.",
            ),
        ),
    ),
    Category(
        "home_price_affordability",
        "Home Price & Affordability",
        (
            _index(
                "home_value_detail",
                "Home Value",
                Unit.CURRENCY,
                "home_value",
                "Home value index for all home types.",
            ),
            _index(
                "single_family_value",
                "Single Family Value",
                Unit.CURRENCY,
                "home_value_sf",
                "Typical value of single-family homes.",
            ),
            _index(
                "single_family_growth_yoy",
                "Single Family Value Growth (YoY)",
                Unit.PERCENT,
                "sf_growth_yoy",
                "Year-over-year change in single-family home values.",
            ),
            _index(
                "condo_value",
                "Condo Value",
                Unit.CURRENCY,
                "home_value_condo",
                "Typical value of condominiums.",
            ),
            _index(
                "condo_growth_yoy",
                "Condo Value Growth (YoY)",
                Unit.PERCENT,
                "condo_growth_yoy",
                "Year-over-year change in condo values.",
            ),
            _derived(
                "value_income_ratio",
                "Value / Income Ratio",
                Unit.RATIO,
                "value_income_ratio",
                "Median home value divided by median household income.",
            ),
            _derived(
                "mortgage_payment",
                "Mortgage Payment",
                Unit.CURRENCY,
                "mortgage_payment",
                "Estimated monthly payment on a 30-year fixed loan with 20% down.",
            ),
            _derived(
                "mtg_pct_income",
                "Mtg Payment as % of Income",
                Unit.PERCENT,
                "mtg_pct_income",
                "Monthly mortgage payment as a share of monthly median household income.",
            ),
            _derived(
                "salary_to_afford",
                "Salary to Afford a House",
                Unit.CURRENCY,
                "salary_to_afford",
                "Annual salary needed so mortgage payments stay under 28% of gross income.",
            ),
            _derived(
                "property_tax_annual",
                "Property Tax Annual",
                Unit.CURRENCY,
                "property_tax_annual",
                "Estimated annual property tax bill at the local effective rate.",
            ),
            _derived(
                "property_tax_rate",
                "Property Tax Rate",
                Unit.PERCENT,
                "property_tax_rate",
                "Effective property tax rate as a percentage of home value.",
            ),
            _derived(
                "insurance_annual",
                "Insurance Premium Annual",
                Unit.CURRENCY,
                "insurance_annual",
                "Estimated annual homeowners insurance premium.",
            ),
            _derived(
                "insurance_pct",
                "Insurance Premium %",
                Unit.PERCENT,
                "insurance_pct",
                "Annual insurance premium as a percentage of home value.",
            ),
            _derived(
                "buy_vs_rent",
                "Buy vs Rent Differential",
                Unit.CURRENCY,
                "buy_vs_rent",
                "Monthly cost of buying minus renting. Positive means buying costs more.",
            ),
            _index(
                "pct_from_2022_peak",
                "% Change from 2022 Peak",
                Unit.PERCENT,
                "pct_from_2022_peak",
                "Current home value compared to the mid-2022 market peak.",
            ),
            _index(
                "pct_crash_2007_12",
                "% Crash from 2007-12",
                Unit.PERCENT,
                "pct_crash_2007_12",
                "Magnitude of the 2007-2012 price decline in this area.",
            ),
        ),
    ),
    Category(
        "market_trends",
        "Market Trends",
        (
            _sales(
                "inventory_trend",
                "For Sale Inventory",
                Unit.COUNT,
                "inventory",
                "Number of active for-sale listings.",
            ),
            _derived(
                "forecast_trend",
                "Home Price Forecast",
                Unit.PERCENT,
                "price_forecast",
                "Projected 12-month home value change.",
            ),
            _sales(
                "dom_trend",
                "Days on Market",
                Unit.DAYS,
                "median_dom",
                "Median days on market for sold listings.",
            ),
            _sales(
                "sales_trend",
                "Home Sales",
                Unit.COUNT,
                "homes_sold",
                "Monthly count of closed home sales.",
            ),
            _derived(
                "cap_rate_trend",
                "Cap Rate",
                Unit.PERCENT,
                "cap_rate",
                "Capitalization rate over time.",
            ),
            _sales(
                "sale_to_list",
                "Sale-to-List Ratio",
                Unit.RATIO,
                "sale_to_list_ratio",
                "Final sale price over original list price. Above 1.0 indicates a seller's market.",
            ),
            _sales(
                "price_drops_pct",
                "Price Drops %",
                Unit.PERCENT,
                "price_drops_pct",
                "Share of listings with at least one price reduction.",
            ),
            _sales(
                "median_sale_price",
                "Median Sale Price",
                Unit.CURRENCY,
                "median_sale_price",
                "Median sale price of closed transactions.",
            ),
        ),
    ),
    Category(
        "demographics",
        "Demographics",
        (
            _survey(
                "population",
                "Population",
                Unit.COUNT,
                "population",
                "Total population from the American Community Survey.",
            ),
            _survey(
                "median_income",
                "Median Household Income",
                Unit.CURRENCY,
                "median_income",
                "Median household income in the area.",
            ),
            _survey(
                "population_growth",
                "Population Growth",
                Unit.PERCENT,
                "population_growth",
                "Year-over-year percentage change in population.",
            ),
            _survey(
                "income_growth",
                "Income Growth",
                Unit.PERCENT,
                "income_growth",
                "Year-over-year percentage change in median household income.",
            ),
            _survey(
                "population_density",
                "Population Density",
                Unit.COUNT,
                "population_density",
                "Population per square mile.",
            ),
            _survey(
                "avg_temperature",
                "Avg Temperature",
                Unit.TEMPERATURE,
                "avg_temperature",
                "Average annual temperature for the area.",
            ),
            _survey(
                "remote_work_pct",
                "Remote Work %",
                Unit.PERCENT,
                "remote_work_pct",
                "Share of workers who work from home.",
            ),
            _survey(
                "college_degree_rate",
                "College Degree Rate",
                Unit.PERCENT,
                "college_degree_rate",
                "Share of adults 25+ with a bachelor's degree or higher.",
            ),
            _survey(
                "homeownership_rate",
                "Homeownership Rate",
                Unit.PERCENT,
                "homeownership_rate",
                "Share of occupied housing units that are owner-occupied.",
            ),
            _survey(
                "homeowners_25_44",
                "Homeowners 25-44 %",
                Unit.PERCENT,
                "homeowners_25_to_44_pct",
                "Share of homeowners aged 25-44.",
            ),
            _survey(
                "homeowners_75_plus",
                "Homeowners 75+ %",
                Unit.PERCENT,
                "homeowners_75_plus_pct",
                "Share of homeowners aged 75 and older.",
            ),
            _survey(
                "mortgaged_home_pct",
                "Mortgaged Home %",
                Unit.PERCENT,
                "mortgaged_home_pct",
                "Share of owner-occupied homes carrying a mortgage.",
            ),
            _survey(
                "median_age",
                "Median Age",
                Unit.COUNT,
                "median_age",
                "Median age of residents.",
            ),
            _survey(
                "poverty_rate",
                "Poverty Rate",
                Unit.PERCENT,
                "poverty_rate",
                "Share of the population living below the poverty line.",
            ),
            _survey(
                "family_households_pct",
                "Family Households %",
                Unit.PERCENT,
                "family_households_pct",
                "Share of households that are family households.",
            ),
            _survey(
                "single_households_pct",
                "Single Households %",
                Unit.PERCENT,
                "single_households_pct",
                "Share of households with a single occupant.",
            ),
            _survey(
                "housing_units",
                "Housing Units",
                Unit.COUNT,
                "housing_units",
                "Total number of housing units.",
            ),
            _survey(
                "housing_unit_growth",
                "Housing Unit Growth Rate",
                Unit.PERCENT,
                "housing_unit_growth",
                "Year-over-year percentage change in total housing units.",
            ),
        ),
    ),
    Category(
        "investor",
        "Investor Metrics",
        (
            _derived(
                "investor_cap_rate",
                "Cap Rate",
                Unit.PERCENT,
                "cap_rate",
                "Annual net operating income as a percentage of property value.",
            ),
            _derived(
                "gross_rent_yield",
                "Gross Rent Yield",
                Unit.PERCENT,
                "gross_rent_yield",
                "Annual gross rent as a percentage of home value.",
            ),
            _sales(
                "investor_home_sales",
                "Home Sales Volume",
                Unit.COUNT,
                "homes_sold",
                "Total closed home sales, a measure of market liquidity.",
            ),
            _index(
                "rent_growth",
                "Rent Growth",
                Unit.PERCENT,
                "rent_growth",
                "Year-over-year percentage change in observed rents.",
            ),
            _survey(
                "vacancy_rate",
                "Vacancy Rate",
                Unit.PERCENT,
                "vacancy_rate",
                "Share of housing units that are vacant.",
            ),
        ),
    ),
    Category(
        "scores",
        "Composite Scores",
        (
            _derived(
                "market_health_score",
                "Market Health Score",
                Unit.SCORE,
                "market_health_score",
                "Composite 0-100 score from days on market, inventory, and sale-to-list ratio.",
            ),
            _derived(
                "investment_score",
                "Investment Score",
                Unit.SCORE,
                "investor_score",
                "Composite 0-100 score from cap rate, appreciation, and rent yield.",
            ),
            _derived(
                "growth_potential_score",
                "Growth Potential Score",
                Unit.SCORE,
                "growth_score",
                "Composite 0-100 score from population growth, income growth, and home values.",
            ),
        ),
    ),
)


def _build_index(categories: tuple[Category, ...]) -> MappingProxyType[str, LayerDefinition]:
    index: dict[str, LayerDefinition] = {}
    for category in categories:
        for layer in category.layers:
            if layer.id in index:
                msg = f"Duplicate layer id in catalog: {layer.id}"
                raise ValueError(msg)
            index[layer.id] = layer
    return MappingProxyType(index)


_LAYERS = _build_index(_CATEGORIES)


def get_categories() -> tuple[Category, ...]:
    """All categories in display order."""
    return _CATEGORIES


def get_layer(layer_id: str) -> LayerDefinition:
    """Look up a layer by id.

    Raises:
        UnknownLayerError: if *layer_id* is not in the catalog.
    """
    try:
        return _LAYERS[layer_id]
    except KeyError:
        raise UnknownLayerError(layer_id) from None


def has_layer(layer_id: str) -> bool:
    return layer_id in _LAYERS


def iter_layers() -> Iterator[LayerDefinition]:
    """Every layer, in catalog order."""
    for category in _CATEGORIES:
        yield from category.layers


def layer_count() -> int:
    return len(_LAYERS)


def _build_canonical(
    index: MappingProxyType[str, LayerDefinition],
) -> MappingProxyType[str, LayerDefinition]:
    first: dict[tuple[str, str], LayerDefinition] = {}
    for layer in index.values():
        first.setdefault((layer.table, layer.column), layer)
    return MappingProxyType(
        {layer_id: first[(layer.table, layer.column)] for layer_id, layer in index.items()}
    )


_CANONICAL = _build_canonical(_LAYERS)


def canonical_layer(layer: LayerDefinition) -> LayerDefinition:
    """The first catalog layer stored in the same table and column as *layer*.

    Layers sharing storage are one real-world quantity shown in several
    categories; anything derived per quantity should key on this one.
    """
    return _CANONICAL.get(layer.id, layer)
