"""Command group: layer catalog, choropleth values, and histories."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from zonepulse.commands._base import PulseGroup, complete_layer_id, complete_region

if TYPE_CHECKING:
    from zonepulse.commands._context import AppContext

_LAYERS_EXAMPLES = """\
  zonepulse layers list
  zonepulse layers show home_value --region travis
  zonepulse layers history home_value --zone 78704 --period monthly"""


@click.group(cls=PulseGroup, examples=_LAYERS_EXAMPLES)
@click.pass_obj
def layers(app: AppContext) -> None:
    """Browse layers and their values."""


@layers.command(
    "list",
    examples="""\
  zonepulse layers list
  zonepulse -q layers list
  zonepulse --json layers list""",
)
@click.pass_obj
def list_cmd(app: AppContext) -> None:
    """List every layer by category."""
    from zonepulse.services.layers import LayerService

    app.emit(LayerService(app.store).list_layers())


@layers.command(
    examples="""\
  zonepulse layers show home_value
  zonepulse layers show median_income --region "round rock"
  zonepulse --json layers show cap_rate --region williamson""",
)
@click.argument("layer_id", shell_complete=complete_layer_id)
@click.option(
    "--region",
    default=None,
    shell_complete=complete_region,
    help="Metro, county, or city (default from config).",
)
@click.pass_obj
def show(app: AppContext, layer_id: str, region: str | None) -> None:
    """Show current values of LAYER_ID for every zone in a region."""
    from zonepulse.services.layers import LayerService

    app.emit(LayerService(app.store).layer_data(layer_id, region=region))


@layers.command(
    examples="""\
  zonepulse layers history home_value --zone 78704
  zonepulse layers history days_on_market --zone 78660 --period monthly""",
)
@click.argument("layer_id", shell_complete=complete_layer_id)
@click.option("--zone", "zone_key", required=True, help="Zone key (postal code).")
@click.option(
    "--period",
    type=click.Choice(["yearly", "monthly"], case_sensitive=False),
    default="yearly",
    show_default=True,
    help="Point spacing.",
)
@click.pass_obj
def history(app: AppContext, layer_id: str, zone_key: str, period: str) -> None:
    """Show the history of LAYER_ID for one zone."""
    from zonepulse.services.layers import LayerService

    app.emit(LayerService(app.store).timeseries(layer_id, zone_key, period=period))
