"""SQLAlchemy Core table definitions for the backing market-data store.

One table per source family. Every row is one zone at one period; each
value column is nullable because upstream feeds rarely fill every column.
Column names match the ``column`` of the catalog layers they back.
"""

from __future__ import annotations

from sqlalchemy import (
    Column,
    Date,
    Float,
    Index,
    Integer,
    MetaData,
    Table,
    Text,
)

metadata = MetaData()

zillow_data = Table(
    "pulse_zillow_data",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("zone", Text, nullable=False),
    Column("date", Date, nullable=False),
    Column("home_value", Float),
    Column("home_value_sf", Float),
    Column("home_value_condo", Float),
    Column("rental_value", Float),
    Column("home_value_growth_yoy", Float),
    Column("home_value_growth_5yr", Float),
    Column("home_value_growth_mom", Float),
    Column("sf_growth_yoy", Float),
    Column("condo_growth_yoy", Float),
    Column("pct_from_2022_peak", Float),
    Column("pct_crash_2007_12", Float),
    Column("rent_growth", Float),
    Index("ix_pulse_zillow_data_zone_date", "zone", "date"),
)

census_data = Table(
    "pulse_census_data",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("zone", Text, nullable=False),
    Column("year", Integer, nullable=False),
    Column("population", Float),
    Column("median_income", Float),
    Column("population_growth", Float),
    Column("income_growth", Float),
    Column("population_density", Float),
    Column("avg_temperature", Float),
    Column("remote_work_pct", Float),
    Column("college_degree_rate", Float),
    Column("homeownership_rate", Float),
    Column("homeowners_25_to_44_pct", Float),
    Column("homeowners_75_plus_pct", Float),
    Column("mortgaged_home_pct", Float),
    Column("median_age", Float),
    Column("poverty_rate", Float),
    Column("family_households_pct", Float),
    Column("single_households_pct", Float),
    Column("housing_units", Float),
    Column("housing_unit_growth", Float),
    Column("vacancy_rate", Float),
    Index("ix_pulse_census_data_zone_year", "zone", "year"),
)

redfin_data = Table(
    "pulse_redfin_data",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("zone", Text, nullable=False),
    Column("period_start", Date, nullable=False),
    Column("median_sale_price", Float),
    Column("homes_sold", Float),
    Column("inventory", Float),
    Column("median_dom", Float),
    Column("sale_to_list_ratio", Float),
    Column("price_drops_pct", Float),
    Index("ix_pulse_redfin_data_zone_period", "zone", "period_start"),
)

metrics = Table(
    "pulse_metrics",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("zone", Text, nullable=False),
    Column("date", Date, nullable=False),
    Column("price_forecast", Float),
    Column("overvalued_pct", Float),
    Column("cap_rate", Float),
    Column("value_income_ratio", Float),
    Column("mortgage_payment", Float),
    Column("mtg_pct_income", Float),
    Column("salary_to_afford", Float),
    Column("property_tax_annual", Float),
    Column("property_tax_rate", Float),
    Column("insurance_annual", Float),
    Column("insurance_pct", Float),
    Column("buy_vs_rent", Float),
    Column("gross_rent_yield", Float),
    Column("growth_score", Float),
    Column("market_health_score", Float),
    Column("investor_score", Float),
    Index("ix_pulse_metrics_zone_date", "zone", "date"),
)
