"""Read-only repository resolving catalog layers against the backing store.

Both lookups are capability checks: ``None`` means "nothing real here"
(table or column missing, no rows, no store configured) and the caller
synthesizes. Only a store that is configured but failing raises, as
:class:`StoreUnavailableError`.
"""

from __future__ import annotations

import logging
import math
from collections import defaultdict
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Any

from sqlalchemy import Column, MetaData, Table, inspect, select
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import DBAPIError, SQLAlchemyError

from zonepulse.domain.catalog import LayerDefinition
from zonepulse.domain.types import Granularity

logger = logging.getLogger(__name__)


class StoreUnavailableError(RuntimeError):
    """The backing store is configured but cannot be queried."""


@dataclass(frozen=True)
class LatestValue:
    """The most recent real value of a layer for one zone."""

    zone: str
    value: float
    period: str


@dataclass(frozen=True)
class HistoryValue:
    """One real period of a layer history (``YYYY`` or ``YYYY-MM``)."""

    period: str
    value: float


def coerce_number(raw: Any) -> float | None:
    """Finite float from a driver value, or None for NULL and non-numeric."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float, Decimal)):
        value = float(raw)
    elif isinstance(raw, str):
        try:
            value = float(raw.strip())
        except ValueError:
            return None
    else:
        return None
    return value if math.isfinite(value) else None


def period_parts(raw: Any) -> tuple[int, int | None] | None:
    """``(year, month)`` from a date, datetime, ISO string, or bare year."""
    if isinstance(raw, (date, datetime)):
        return raw.year, raw.month
    if isinstance(raw, int) and not isinstance(raw, bool):
        return raw, None
    if isinstance(raw, str):
        text = raw.strip()
        try:
            if len(text) == 4:
                return int(text), None
            return int(text[:4]), int(text[5:7])
        except ValueError:
            return None
    return None


def _period_label(year: int, month: int | None) -> str:
    return f"{year:04d}" if month is None else f"{year:04d}-{month:02d}"


def _failure_reason(exc: SQLAlchemyError) -> str:
    """Driver message for DBAPI errors; pool timeouts and the like speak for themselves."""
    if isinstance(exc, DBAPIError) and exc.orig is not None:
        return str(exc.orig)
    return str(exc)


class LayerRepository:
    """Encapsulates SQL for layer value lookups.

    Tables are reflected on each call, so a store whose schema changes
    (``zonepulse db init`` against a live server) is picked up without a
    restart.
    """

    def __init__(self, engine: Engine | None, *, zone_column: str = "zone") -> None:
        self._engine = engine
        self._zone_column = zone_column

    @property
    def configured(self) -> bool:
        return self._engine is not None

    def _columns(
        self, conn: Connection, layer: LayerDefinition
    ) -> tuple[Column[Any], Column[Any], Column[Any]] | None:
        """Reflect the zone/date/value columns of *layer*, or None if absent."""
        inspector = inspect(conn)
        if not inspector.has_table(layer.table):
            logger.debug("table %s absent for layer %s", layer.table, layer.id)
            return None
        names = {col["name"] for col in inspector.get_columns(layer.table)}
        wanted = (self._zone_column, layer.date_column, layer.column)
        missing = [name for name in wanted if name not in names]
        if missing:
            logger.debug("columns %s absent from %s for layer %s", missing, layer.table, layer.id)
            return None
        table = Table(layer.table, MetaData(), autoload_with=conn)
        return table.c[self._zone_column], table.c[layer.date_column], table.c[layer.column]

    def try_latest(self, layer: LayerDefinition, zones: list[str]) -> list[LatestValue] | None:
        """Most recent non-null value per zone, in *zones* order.

        Returns None when the store has nothing real for *layer* across
        *zones*. Zones without a usable row are simply omitted.

        Raises:
            StoreUnavailableError: the configured store failed.
        """
        if self._engine is None or not zones:
            return None
        try:
            with self._engine.connect() as conn:
                cols = self._columns(conn, layer)
                if cols is None:
                    return None
                zone_col, date_col, value_col = cols
                stmt = (
                    select(zone_col, date_col, value_col)
                    .where(zone_col.in_(zones), value_col.is_not(None))
                    .order_by(zone_col, date_col.desc())
                )
                rows = conn.execute(stmt).fetchall()
        except SQLAlchemyError as exc:
            raise StoreUnavailableError(_failure_reason(exc)) from exc

        latest: dict[str, LatestValue] = {}
        for zone, raw_period, raw_value in rows:
            key = str(zone)
            if key in latest:
                continue
            value = coerce_number(raw_value)
            parts = period_parts(raw_period)
            if value is None or parts is None:
                continue
            latest[key] = LatestValue(key, value, _period_label(*parts))

        if not latest:
            logger.debug("no real rows for layer %s", layer.id)
            return None
        return [latest[z] for z in zones if z in latest]

    def try_history(
        self, layer: LayerDefinition, zone: str, granularity: Granularity
    ) -> list[HistoryValue] | None:
        """Real history for one zone, ascending, one value per period.

        Several rows in one period are averaged. Yearly requests over
        date-keyed tables average each year; monthly requests over
        year-keyed tables have no real answer and return None.

        Raises:
            StoreUnavailableError: the configured store failed.
        """
        if self._engine is None:
            return None
        if granularity is Granularity.MONTHLY and layer.year_keyed:
            return None
        try:
            with self._engine.connect() as conn:
                cols = self._columns(conn, layer)
                if cols is None:
                    return None
                zone_col, date_col, value_col = cols
                stmt = (
                    select(date_col, value_col)
                    .where(zone_col == zone, value_col.is_not(None))
                    .order_by(date_col)
                )
                rows = conn.execute(stmt).fetchall()
        except SQLAlchemyError as exc:
            raise StoreUnavailableError(_failure_reason(exc)) from exc

        buckets: dict[tuple[int, int | None], list[float]] = defaultdict(list)
        for raw_period, raw_value in rows:
            value = coerce_number(raw_value)
            parts = period_parts(raw_period)
            if value is None or parts is None:
                continue
            year, month = parts
            if granularity is Granularity.YEARLY:
                month = None
            elif month is None:
                continue
            buckets[(year, month)].append(value)

        if not buckets:
            return None
        return [
            HistoryValue(_period_label(year, month), sum(vals) / len(vals))
            for (year, month), vals in sorted(buckets.items(), key=lambda item: item[0])
        ]
