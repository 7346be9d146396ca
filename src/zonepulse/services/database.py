"""DatabaseService: schema lifecycle of the optional backing store.

The request path only ever reads; this service is the one place that
writes DDL, by running the Alembic migrations up to head.
"""

from __future__ import annotations

import logging

from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError

from zonepulse.infrastructure.database.migrations import current_revision, upgrade_head
from zonepulse.infrastructure.database.schema import metadata
from zonepulse.services.base import BaseService
from zonepulse.services.result import ErrorCode, ServiceResult
from zonepulse.services.telemetry import traced

logger = logging.getLogger(__name__)


def display_url(url: str) -> str:
    """*url* with any password masked."""
    return make_url(url).render_as_string(hide_password=True)


class DatabaseService(BaseService):
    """Create and inspect the backing tables."""

    @traced
    def init(self) -> ServiceResult:
        """Create or upgrade the backing tables to the head revision."""
        op = "db_init"
        url = self.settings.database.url
        if not url:
            return ServiceResult.failure(
                op,
                ErrorCode.NO_STORE,
                "No database url configured (use --db or [database] url)",
            )
        try:
            upgrade_head(url)
            revision = current_revision(url)
        except SQLAlchemyError as exc:
            logger.exception("migration failed for %s", display_url(url))
            return ServiceResult.failure(
                op, ErrorCode.STORE_UNAVAILABLE, f"Migration failed: {exc.__class__.__name__}"
            )
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "url": display_url(url),
                "revision": revision,
                "tables": sorted(metadata.tables),
            },
        )

    @traced
    def status(self) -> ServiceResult:
        """Report whether a store is configured, present, and its revision."""
        op = "db_status"
        url = self.settings.database.url
        data: dict[str, object] = {
            "configured": bool(url),
            "available": self._store.available,
            "url": display_url(url) if url else None,
            "revision": None,
        }
        if self._store.available and url:
            try:
                data["revision"] = current_revision(url)
            except SQLAlchemyError:
                logger.exception("could not read revision from %s", display_url(url))
                return ServiceResult.failure(
                    op, ErrorCode.STORE_UNAVAILABLE, "Market data store is unavailable"
                )
        return ServiceResult(ok=True, op=op, data=data)
