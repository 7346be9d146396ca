"""Alembic migration infrastructure for the backing store.

Provides programmatic Alembic configuration; no alembic.ini needed.
The migration scripts live alongside this module.
"""

from __future__ import annotations

from pathlib import Path

from alembic.config import Config


def build_config(db_url: str) -> Config:
    """Build an Alembic Config pointing at our migration scripts."""
    cfg = Config()
    cfg.set_main_option("script_location", str(Path(__file__).parent))
    cfg.set_main_option("sqlalchemy.url", db_url.replace("%", "%%"))
    return cfg


def upgrade_head(db_url: str) -> None:
    """Create or upgrade the backing tables to the current head revision.

    Creates the parent directory of a SQLite file first. Idempotent.
    """
    from alembic import command

    from zonepulse.infrastructure.database.engine import sqlite_file

    path = sqlite_file(db_url)
    if path:
        Path(path).parent.mkdir(parents=True, exist_ok=True)
    command.upgrade(build_config(db_url), "head")


def current_revision(db_url: str) -> str | None:
    """The revision a database is stamped at, or None when unversioned."""
    from alembic.runtime.migration import MigrationContext
    from sqlalchemy import create_engine

    engine = create_engine(db_url)
    try:
        with engine.connect() as conn:
            return MigrationContext.configure(conn).get_current_revision()
    finally:
        engine.dispose()
