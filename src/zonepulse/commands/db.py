"""Command group: backing store schema management."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from zonepulse.commands._base import PulseGroup

if TYPE_CHECKING:
    from zonepulse.commands._context import AppContext

_DB_EXAMPLES = """\
  zonepulse --db sqlite:///pulse.db db init
  zonepulse db status"""


@click.group(cls=PulseGroup, examples=_DB_EXAMPLES)
@click.pass_obj
def db(app: AppContext) -> None:
    """Manage the backing market-data store."""


@db.command(
    examples="""\
  zonepulse --db sqlite:///pulse.db db init
  ZONEPULSE_DATABASE__URL=postgresql://pulse@localhost/pulse zonepulse db init""",
)
@click.pass_obj
def init(app: AppContext) -> None:
    """Create or upgrade the backing tables (idempotent)."""
    from zonepulse.services.database import DatabaseService

    app.emit(DatabaseService(app.store).init())


@db.command(
    examples="""\
  zonepulse db status
  zonepulse --json db status""",
)
@click.pass_obj
def status(app: AppContext) -> None:
    """Show whether a store is configured and its schema revision."""
    from zonepulse.services.database import DatabaseService

    app.emit(DatabaseService(app.store).status())
