"""structlog configuration for zonepulse.

Everything goes to stderr through one stdlib handler whose formatter is a
structlog ``ProcessorFormatter``: colored console lines by default, JSON
lines with ``--log-json``. uvicorn, SQLAlchemy and Alembic log through the
stdlib and are rendered by the same formatter, so ``zonepulse serve``
produces a single stream in a single format.
"""

from __future__ import annotations

import logging
import sys

import structlog

# Library loggers pinned to WARNING regardless of --verbose.
QUIET_LOGGERS = ("sqlalchemy", "alembic", "uvicorn.access")


def _pre_chain() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _stderr_handler(log_json: bool) -> logging.Handler:
    renderer: structlog.types.Processor
    if log_json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_pre_chain(),
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )
    return handler


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """Route structlog and stdlib logging to stderr.

    Safe to call repeatedly: the root handler is replaced, not stacked.

    Args:
        verbose: ``zonepulse`` loggers emit DEBUG (otherwise WARNING and up).
            uvicorn's server log is raised to INFO alongside.
        log_json: Render JSON lines instead of console output.
    """
    structlog.configure(
        processors=[*_pre_chain(), structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(_stderr_handler(log_json))
    root.setLevel(logging.WARNING)

    logging.getLogger("zonepulse").setLevel(logging.DEBUG if verbose else logging.WARNING)
    logging.getLogger("uvicorn.error").setLevel(logging.INFO if verbose else logging.WARNING)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
