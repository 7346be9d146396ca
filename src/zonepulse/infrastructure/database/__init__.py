"""Backing store engine and schema via SQLAlchemy Core."""

from zonepulse.infrastructure.database.engine import create_db_engine, is_sqlite, sqlite_file
from zonepulse.infrastructure.database.schema import (
    census_data,
    metadata,
    metrics,
    redfin_data,
    zillow_data,
)

__all__ = [
    "census_data",
    "create_db_engine",
    "is_sqlite",
    "metadata",
    "metrics",
    "redfin_data",
    "sqlite_file",
    "zillow_data",
]
