"""serve: run the HTTP API with uvicorn."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from zonepulse.commands._base import PulseCommand

if TYPE_CHECKING:
    from zonepulse.commands._context import AppContext


@click.command(
    cls=PulseCommand,
    examples="""\
  # Serve on the configured address (default 127.0.0.1:8000)
  zonepulse serve

  # Public bind on a custom port, JSON logs
  zonepulse --log-json serve --host 0.0.0.0 --port 9000""",
)
@click.option("--host", default=None, help="Bind address (default from [server] host).")
@click.option("--port", default=None, type=int, help="Listen port (default from [server] port).")
@click.pass_obj
def serve(app: AppContext, host: str | None, port: int | None) -> None:
    """Start the HTTP API."""
    import uvicorn

    from zonepulse.api.app import create_app

    server = app.settings.server
    uvicorn.run(
        create_app(app.settings),
        host=host or server.host,
        port=port or server.port,
        log_config=None,
    )
