"""Market-data tables: zillow index, census survey, redfin sales, metrics.

Revision ID: 001_pulse_tables
Revises: None
Create Date: 2026-09-14
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision: str = "001_pulse_tables"
down_revision: str | None = None
branch_labels: tuple[str, ...] | None = None
depends_on: tuple[str, ...] | None = None


def _value_columns(*names: str) -> list[sa.Column]:
    return [sa.Column(name, sa.Float) for name in names]


def upgrade() -> None:
    op.create_table(
        "pulse_zillow_data",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("zone", sa.Text, nullable=False),
        sa.Column("date", sa.Date, nullable=False),
        *_value_columns(
            "home_value",
            "home_value_sf",
            "home_value_condo",
            "rental_value",
            "home_value_growth_yoy",
            "home_value_growth_5yr",
            "home_value_growth_mom",
            "sf_growth_yoy",
            "condo_growth_yoy",
            "pct_from_2022_peak",
            "pct_crash_2007_12",
            "rent_growth",
        ),
    )
    op.create_index("ix_pulse_zillow_data_zone_date", "pulse_zillow_data", ["zone", "date"])

    op.create_table(
        "pulse_census_data",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("zone", sa.Text, nullable=False),
        sa.Column("year", sa.Integer, nullable=False),
        *_value_columns(
            "population",
            "median_income",
            "population_growth",
            "income_growth",
            "population_density",
            "avg_temperature",
            "remote_work_pct",
            "college_degree_rate",
            "homeownership_rate",
            "homeowners_25_to_44_pct",
            "homeowners_75_plus_pct",
            "mortgaged_home_pct",
            "median_age",
            "poverty_rate",
            "family_households_pct",
            "single_households_pct",
            "housing_units",
            "housing_unit_growth",
            "vacancy_rate",
        ),
    )
    op.create_index("ix_pulse_census_data_zone_year", "pulse_census_data", ["zone", "year"])

    op.create_table(
        "pulse_redfin_data",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("zone", sa.Text, nullable=False),
        sa.Column("period_start", sa.Date, nullable=False),
        *_value_columns(
            "median_sale_price",
            "homes_sold",
            "inventory",
            "median_dom",
            "sale_to_list_ratio",
            "price_drops_pct",
        ),
    )
    op.create_index(
        "ix_pulse_redfin_data_zone_period", "pulse_redfin_data", ["zone", "period_start"]
    )

    op.create_table(
        "pulse_metrics",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("zone", sa.Text, nullable=False),
        sa.Column("date", sa.Date, nullable=False),
        *_value_columns(
            "price_forecast",
            "overvalued_pct",
            "cap_rate",
            "value_income_ratio",
            "mortgage_payment",
            "mtg_pct_income",
            "salary_to_afford",
            "property_tax_annual",
            "property_tax_rate",
            "insurance_annual",
            "insurance_pct",
            "buy_vs_rent",
            "gross_rent_yield",
            "growth_score",
            "market_health_score",
            "investor_score",
        ),
    )
    op.create_index("ix_pulse_metrics_zone_date", "pulse_metrics", ["zone", "date"])


def downgrade() -> None:
    for table in ("pulse_metrics", "pulse_redfin_data", "pulse_census_data", "pulse_zillow_data"):
        op.drop_table(table)
