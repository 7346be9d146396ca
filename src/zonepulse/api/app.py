"""FastAPI application factory."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from zonepulse import __version__
from zonepulse.api.routes import router
from zonepulse.config.settings import PulseSettings
from zonepulse.infrastructure.store import MarketStore

logger = logging.getLogger(__name__)


def create_app(settings: PulseSettings | None = None) -> FastAPI:
    """Build the API app around one shared :class:`MarketStore`.

    The store is opened here, not per request, and disposed on shutdown.
    Routes are mounted under ``server.prefix``.
    """
    settings = settings or PulseSettings.from_cli()
    store = MarketStore(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info("store %s", "configured" if store.available else "absent")
        yield
        store.close()

    app = FastAPI(title="zonepulse", version=__version__, lifespan=lifespan)
    app.state.settings = settings
    app.state.store = store
    app.include_router(router, prefix=settings.server.prefix)
    return app
