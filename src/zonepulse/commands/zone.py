"""Command group: per-zone summary and composite scores."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from zonepulse.commands._base import PulseGroup

if TYPE_CHECKING:
    from zonepulse.commands._context import AppContext

_ZONE_EXAMPLES = """\
  zonepulse zone summary 78704
  zonepulse zone scores 78746
  zonepulse --json zone scores 78660"""


@click.group(cls=PulseGroup, examples=_ZONE_EXAMPLES)
@click.pass_obj
def zone(app: AppContext) -> None:
    """Inspect a single zone."""


@zone.command(
    examples="""\
  zonepulse zone summary 78704
  zonepulse -v zone summary 78704""",
)
@click.argument("zone_key")
@click.pass_obj
def summary(app: AppContext, zone_key: str) -> None:
    """Every layer for ZONE_KEY, with forecast, best months and scores."""
    from zonepulse.services.layers import LayerService

    app.emit(LayerService(app.store).zone_summary(zone_key))


@zone.command(
    examples="""\
  zonepulse zone scores 78746
  zonepulse --json zone scores 76574""",
)
@click.argument("zone_key")
@click.pass_obj
def scores(app: AppContext, zone_key: str) -> None:
    """Investor, growth and market-health scores for ZONE_KEY."""
    from zonepulse.services.layers import LayerService

    app.emit(LayerService(app.store).zone_scores(zone_key))
