"""Command group: CSV export."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from zonepulse.commands._base import PulseGroup, complete_layer_id, complete_region

if TYPE_CHECKING:
    from zonepulse.commands._context import AppContext

_EXPORT_EXAMPLES = """\
  zonepulse export csv home_value --zone 78704
  zonepulse export csv median_income --region travis --output income.csv"""


@click.group(cls=PulseGroup, examples=_EXPORT_EXAMPLES)
@click.pass_obj
def export(app: AppContext) -> None:
    """Export layer data."""


@export.command(
    examples="""\
  zonepulse export csv home_value --zone 78704
  zonepulse export csv home_value --region austin-metro --output /tmp/
  zonepulse -q export csv cap_rate --output cap_rate.csv""",
)
@click.argument("layer_id", shell_complete=complete_layer_id)
@click.option("--zone", "zone_key", default=None, help="Export this zone's monthly history.")
@click.option(
    "--region",
    default=None,
    shell_complete=complete_region,
    help="Export a snapshot of every zone in a region.",
)
@click.option(
    "--output",
    type=click.Path(path_type=Path),
    default=None,
    help="File or directory to write. Prints to stdout when omitted.",
)
@click.pass_obj
def csv(
    app: AppContext,
    layer_id: str,
    zone_key: str | None,
    region: str | None,
    output: Path | None,
) -> None:
    """Export LAYER_ID as CSV (zone history, or region snapshot)."""
    from zonepulse.services.export import ExportService

    result = ExportService(app.store).export_csv(layer_id, zone=zone_key, region=region)
    if result.ok and output is not None:
        target = output / result.data["filename"] if output.is_dir() else output
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(result.data["content"], encoding="utf-8")
        data = {k: v for k, v in result.data.items() if k != "content"}
        result = result.model_copy(update={"data": {**data, "path": str(target)}})
    app.emit(result)
