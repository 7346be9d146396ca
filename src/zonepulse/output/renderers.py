"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from zonepulse.domain.formatting import format_label
from zonepulse.output.console import create_console, get_output, score_style, style_for_source

if TYPE_CHECKING:
    from rich.console import Console

    from zonepulse.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal, which is
    the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode.

    Tabular results become tab-separated rows with no header; everything
    else collapses to the status line.
    """
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    d = result.data
    if result.op == "list_layers":
        return "\n".join(
            layer["id"] for category in d.get("categories", []) for layer in category["layers"]
        )
    if result.op == "layer_data":
        return "\n".join(f"{p['zone']}\t{p['value']}" for p in d.get("data", []))
    if result.op == "timeseries":
        return "\n".join(f"{p['date']}\t{p['value']}" for p in d.get("data", []))
    if result.op == "export_csv" and "path" in d:
        return str(d["path"])
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    label = Text("OK", style="pulse.ok")
    op = Text(f"  {result.op}", style="pulse.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="pulse.key")
    if key == "zone" or key.endswith("_id"):
        v = Text(str(value), style="pulse.id")
    else:
        v = Text(str(value))
    console.print(k, v, end="")
    console.print()


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print meta block including telemetry span tree (verbose only)."""
    if not result.meta:
        return

    console.print()
    console.print(Text("  meta:", style="dim"))

    for k, v in result.meta.items():
        if k == "telemetry":
            _render_telemetry_tree(console, v, indent=4)
        else:
            console.print(f"    {k}: {v}")


def _render_telemetry_tree(
    console: Console,
    span_data: dict[str, Any],
    indent: int = 4,
) -> None:
    """Render a hierarchical span tree with color-coded timing."""
    prefix = " " * indent
    name = span_data.get("name", "?")
    duration = span_data.get("duration_ms", 0.0)

    if duration > 1000:
        style = "bold red"
    elif duration > 100:
        style = "yellow"
    else:
        style = "dim"

    line = f"{prefix}[{style}]{duration:>8.2f}ms[/{style}]  {name}"
    annotations = span_data.get("annotations") or {}
    if annotations:
        line += "  (" + ", ".join(f"{k}={v}" for k, v in annotations.items()) + ")"
    console.print(line)

    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="pulse.error")
    op = Text(f"  {result.op}", style="pulse.op")
    code = Text(f" [{err.code}]" if err else "", style="dim")
    console.print(label, op, code, Text(" — "), msg)

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Catalog renderers ─────────────────────────────────────────────────


def _render_catalog(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render list_layers as one table per category."""
    for category in result.data.get("categories", []):
        table = Table(
            title=category["label"],
            title_justify="left",
            show_header=True,
            pad_edge=False,
            expand=False,
        )
        table.add_column("ID", style="pulse.id", no_wrap=True)
        table.add_column("Label")
        table.add_column("Unit")
        table.add_column("Source")
        if verbose:
            table.add_column("Description", style="dim")
        for layer in category["layers"]:
            source = str(layer["source"])
            row: list[Any] = [
                layer["id"],
                layer["label"],
                layer["unit"],
                Text(source, style=style_for_source(source)),
            ]
            if verbose:
                row.append(layer["description"])
            table.add_row(*row)
        console.print(table)
    console.print(f"\n{result.data.get('count', 0)} layers")


# ── Layer data renderers ──────────────────────────────────────────────


def _render_layer_data(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render choropleth values as a zone/value table with summary stats."""
    d = result.data
    meta = d.get("meta", {})
    unit = meta.get("unit", "count")

    table = Table(
        title=f"{d.get('layer_id')} · {d.get('region')}",
        title_justify="left",
        show_header=True,
        pad_edge=False,
        expand=False,
    )
    table.add_column("Zone", style="pulse.zone", no_wrap=True)
    table.add_column("Value", style="pulse.value", justify="right")
    if verbose:
        table.add_column("Raw", style="dim", justify="right")
    for point in d.get("data", []):
        row = [point["zone"], point["formatted_label"]]
        if verbose:
            row.append(str(point["value"]))
        table.add_row(*row)
    console.print(table)

    stats = "  ".join(
        f"{key} {format_label(meta.get(key), unit)}" for key in ("min", "median", "max")
    )
    console.print(f"\n{meta.get('count', 0)} zones  {stats}  ({meta.get('resolved_from', '?')})")
    if verbose:
        _render_meta(console, result)


def _render_timeseries(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    unit = d.get("meta", {}).get("unit", "count")
    table = Table(
        title=f"{d.get('layer_id')} · {d.get('zone')} · {d.get('period')}",
        title_justify="left",
        show_header=True,
        pad_edge=False,
        expand=False,
    )
    table.add_column("Period", no_wrap=True)
    table.add_column("Value", style="pulse.value", justify="right")
    for point in d.get("data", []):
        table.add_row(point["date"], format_label(point["value"], unit))
    console.print(table)
    if verbose:
        _render_meta(console, result)


# ── Zone renderers ────────────────────────────────────────────────────


def _score_text(score: int) -> Text:
    return Text(str(score), style=score_style(score))


def _render_zone_summary(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    forecast = d.get("forecast", {})
    direction = forecast.get("direction", "up")
    arrow = "▲" if direction == "up" else "▼"
    scores = d.get("scores", {})

    where = ", ".join(str(p) for p in (d.get("city"), d.get("county"), d.get("state")) if p)
    lines = [
        f"{where}  ({d.get('metro')} metro)",
        f"data date: {d.get('data_date')}",
        f"forecast: [pulse.{direction}]{arrow} {format_label(forecast.get('value'), 'percent')}"
        f"[/pulse.{direction}]",
        f"best month to buy: {d.get('best_month_buy')}",
        f"best month to sell: {d.get('best_month_sell')}",
        "scores: "
        + "  ".join(f"{name.replace('_', ' ')} {value}" for name, value in scores.items()),
    ]
    console.print(Panel("\n".join(lines), title=str(d.get("zone")), expand=False))

    if verbose:
        table = Table(show_header=True, pad_edge=False, expand=False)
        table.add_column("Layer", style="pulse.id", no_wrap=True)
        table.add_column("Value", style="pulse.value", justify="right")
        for layer_id, metric in d.get("metrics", {}).items():
            table.add_row(layer_id, metric["formatted_label"])
        console.print(table)
        _render_meta(console, result)


def _render_zone_scores(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    _status_line(console, result)
    _field(console, "zone", d.get("zone"))

    table = Table(show_header=True, pad_edge=False, expand=False)
    table.add_column("Family")
    table.add_column("Component")
    table.add_column("Raw", justify="right")
    table.add_column("Score", justify="right")
    table.add_column("Weight", justify="right")

    totals = {
        "investor": d.get("investor_score"),
        "growth": d.get("growth_score"),
        "market_health": d.get("market_health_score"),
    }
    for family, components in d.get("breakdown", {}).items():
        total = totals.get(family)
        first = True
        for name, comp in components.items():
            raw = comp.get("raw_value")
            table.add_row(
                Text(f"{family} ({total})", style=score_style(total or 0)) if first else "",
                name,
                "—" if raw is None else f"{raw:g}",
                f"{comp['normalized_score']:.1f}",
                f"{comp['weight']:.2f}",
            )
            first = False
    console.print(table)
    if verbose:
        _render_meta(console, result)


# ── Export / admin renderers ──────────────────────────────────────────


def _render_export(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    _status_line(console, result)
    for key in ("filename", "path", "rows", "media_type"):
        if key in d:
            _field(console, key, d[key])
    if "path" not in d:
        console.print()
        console.print(d.get("content", ""), markup=False, end="")
    if verbose:
        _render_meta(console, result)


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "list_layers": _render_catalog,
    "layer_data": _render_layer_data,
    "timeseries": _render_timeseries,
    "zone_summary": _render_zone_summary,
    "zone_scores": _render_zone_scores,
    "export_csv": _render_export,
}
