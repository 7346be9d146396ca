"""AppContext: shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. Provides lazy store initialization and centralized
result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from zonepulse.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from zonepulse.config.settings import PulseSettings
    from zonepulse.infrastructure.store import MarketStore
    from zonepulse.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The store is opened on first use so ``--help`` and ``--version`` never
    touch the database.
    """

    def __init__(self, settings: PulseSettings) -> None:
        self.settings = settings
        self._store: MarketStore | None = None

        from zonepulse.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        if settings.verbose:
            from zonepulse.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def store(self) -> MarketStore:
        """The market store (created lazily on first access)."""
        if self._store is None:
            from zonepulse.infrastructure.store import MarketStore

            self._store = MarketStore(self.settings)
        return self._store

    def close(self) -> None:
        if self._store is not None:
            self._store.close()
            self._store = None

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings go to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
