"""Database engine setup for the backing market-data store.

Any SQLAlchemy URL works. SQLite is what tests and local runs use; a
networked store (PostgreSQL, MySQL) gets a driver-level connect timeout and
a bounded pool wait so a dead store fails fast instead of hanging requests.

SQLAlchemy Core (not ORM) is used: every request is a handful of
read-only SELECTs with no identity to track.
"""

from __future__ import annotations

import math
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url

_CONNECT_TIMEOUT_ARG = {
    "postgresql": "connect_timeout",
    "mysql": "connect_timeout",
    "mariadb": "connect_timeout",
}


def is_sqlite(url: str) -> bool:
    return make_url(url).get_backend_name() == "sqlite"


def sqlite_file(url: str) -> str | None:
    """Database file path of a file-backed SQLite *url*, else None."""
    parsed = make_url(url)
    if parsed.get_backend_name() != "sqlite":
        return None
    if parsed.database in (None, "", ":memory:"):
        return None
    return parsed.database


def create_db_engine(url: str, *, timeout_seconds: float = 5.0, read_only: bool = False) -> Engine:
    """Create an engine whose connects and pool checkouts are time-bounded.

    With *read_only*, SQLite connections are switched to ``query_only`` so
    nothing on the request path can write.
    """
    backend = make_url(url).get_backend_name()
    kwargs: dict[str, Any] = {}

    if backend == "sqlite":
        connect_args: dict[str, Any] = {"timeout": timeout_seconds}
    else:
        connect_args = {}
        arg = _CONNECT_TIMEOUT_ARG.get(backend)
        if arg:
            connect_args[arg] = max(1, math.ceil(timeout_seconds))
        kwargs["pool_timeout"] = timeout_seconds
        kwargs["pool_pre_ping"] = True

    engine = create_engine(url, echo=False, connect_args=connect_args, **kwargs)

    if backend == "sqlite" and read_only:

        @event.listens_for(engine, "connect")
        def _set_sqlite_pragma(dbapi_conn: Any, _: Any) -> None:
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA query_only=ON")
            cursor.close()

    return engine
