"""MarketStore: the single infrastructure dependency injected into services.

Owns the (optional) SQLAlchemy engine and the layer repository built on it.
A store with no URL, or whose SQLite file does not exist, is *absent*:
every lookup reports "nothing real" and the engine runs fully synthetic.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from zonepulse.infrastructure.database.engine import create_db_engine, sqlite_file
from zonepulse.infrastructure.repositories.layers import LayerRepository

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

    from zonepulse.config.settings import PulseSettings

logger = logging.getLogger(__name__)


class MarketStore:
    """Repository access for one settings object.

    Constructed once per CLI invocation or per server process and shared
    by every service. Holds no cached values.
    """

    def __init__(self, settings: PulseSettings) -> None:
        self._settings = settings
        self._engine: Engine | None = self._open(settings)
        self._layers = LayerRepository(self._engine, zone_column=settings.database.zone_column)

    @staticmethod
    def _open(settings: PulseSettings) -> Engine | None:
        url = settings.database.url
        if not url:
            logger.debug("no database url configured; store absent")
            return None
        path = sqlite_file(url)
        if path and not Path(path).is_file():
            logger.debug("sqlite file %s missing; store absent", path)
            return None
        return create_db_engine(
            url, timeout_seconds=settings.database.timeout_seconds, read_only=True
        )

    @property
    def settings(self) -> PulseSettings:
        return self._settings

    @property
    def available(self) -> bool:
        """True when a backing store is configured and present."""
        return self._engine is not None

    @property
    def engine(self) -> Engine | None:
        return self._engine

    @property
    def layers(self) -> LayerRepository:
        return self._layers

    def close(self) -> None:
        """Dispose of pooled connections. Safe to call twice."""
        if self._engine is not None:
            self._engine.dispose()
