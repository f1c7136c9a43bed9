"""
Thermalnet CLI.

Command-line interface for inspecting hourly geothermal network vs.
air-source heat pump comparison data.
"""

from __future__ import annotations

import json
import math
from itertools import islice
from pathlib import Path
from typing import Any, Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .core.config import settings
from .core.models import HourSnapshot, MissingFieldPolicy
from .ingest.csv_loader import DataLoadError
from .network.borefields import (
    NetworkEconomics,
    calculate_all_borefields,
    display_name,
    project_borefield_expansion,
)
from .roi.assets import filter_assets, sort_assets, summarize_assets, get_asset_valuation
from .simulation.store import HourlyDataStore
from .utils.logging_config import ensure_logging
from .utils.validation import ValidationError

app = typer.Typer(
    name="thermalnet",
    help="Thermal network analysis - geothermal network vs. air-source heat pumps",
    add_completion=False,
)
console = Console()


def fmt(value: Any, digits: int = 1) -> str:
    """Format a number for tables; inf/nan from degenerate hours show as N/A."""
    if value is None:
        return "-"
    if isinstance(value, float) and not math.isfinite(value):
        return "N/A"
    if isinstance(value, (int, float)):
        return f"{value:,.{digits}f}"
    return str(value)


def _json_default(value: Any) -> Any:
    return str(value)


def print_json(payload: Any) -> None:
    # inf/nan are emitted as Infinity/NaN
    typer.echo(json.dumps(payload, indent=2, default=_json_default))


def _load_store(source: Optional[str], strict: bool) -> HourlyDataStore:
    policy = MissingFieldPolicy.FAIL if strict else None
    store = HourlyDataStore(source=source, policy=policy)
    try:
        store.load_sync()
    except DataLoadError as e:
        console.print(f"[red]✗[/red] {e}")
        raise typer.Exit(1)
    return store


def _get_hour(store: HourlyDataStore, hour: int) -> HourSnapshot:
    snapshot = store.get_hourly_data(hour)
    if snapshot is None:
        hours = store.hours
        console.print(
            f"[red]✗[/red] Hour {hour} not found (dataset covers {hours[0]}..{hours[-1]})"
        )
        raise typer.Exit(1)
    return snapshot


@app.callback()
def main(
    log_level: str = typer.Option(settings.log_level, "--log-level", help="Logging level"),
    log_file: Optional[Path] = typer.Option(
        settings.log_file, "--log-file", help="Also write JSON-line logs to this file"
    ),
):
    """Thermalnet - hourly thermal network metrics."""
    ensure_logging(log_level, log_file)


@app.command()
def hour(
    source: Optional[str] = typer.Argument(None, help="CSV path or URL (default: settings)"),
    hour_number: int = typer.Option(settings.default_hour, "--hour", help="Hour to show"),
    strict: bool = typer.Option(False, "--strict", help="Fail on missing or non-numeric fields"),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a table"),
):
    """
    Show system-wide metrics for one hour.
    """
    store = _load_store(source, strict)
    snapshot = _get_hour(store, hour_number)
    metrics = snapshot.system_metrics

    if as_json:
        print_json({"hour": snapshot.hour, "outdoorTemp": snapshot.outdoor_temp.to_dict(),
                    "systemMetrics": metrics.to_dict()})
        return

    console.print(Panel.fit(
        f"[bold blue]Hour {snapshot.hour}[/bold blue]  "
        f"Outdoor {fmt(snapshot.outdoor_temp.celsius)} °C / {fmt(snapshot.outdoor_temp.fahrenheit)} °F"
    ))

    table = Table(title="System Metrics")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")

    table.add_row("Geo electric (W)", fmt(metrics.total_geo_electric, 0))
    table.add_row("Air electric (W)", fmt(metrics.total_air_electric, 0))
    table.add_row("Total load |W|", fmt(metrics.total_load, 0))
    table.add_row("Heating load (W)", fmt(metrics.heating_load, 0))
    table.add_row("Cooling load (W)", fmt(metrics.cooling_load, 0))
    table.add_row("Net building load (W)", fmt(metrics.total_building_load, 0))
    table.add_row("Avg geo COP", fmt(metrics.avg_geo_cop, 2))
    table.add_row("Avg air COP", fmt(metrics.avg_air_cop, 2))
    table.add_row("Efficiency gain (%)", fmt(metrics.system_efficiency_gain))
    table.add_row("Energy savings (W)", fmt(metrics.total_energy_savings, 0))
    table.add_row("Peak demand reduction (W)", fmt(metrics.peak_demand_reduction, 0))

    console.print(table)


@app.command()
def buildings(
    source: Optional[str] = typer.Argument(None, help="CSV path or URL (default: settings)"),
    hour_number: int = typer.Option(settings.default_hour, "--hour", help="Hour to show"),
    strict: bool = typer.Option(False, "--strict", help="Fail on missing or non-numeric fields"),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a table"),
):
    """
    Show per-building metrics for one hour.
    """
    store = _load_store(source, strict)
    _get_hour(store, hour_number)

    session = store.session(hour_number)
    summaries = session.get_building_network_data()

    if as_json:
        print_json([s.to_dict() for s in summaries])
        return

    table = Table(title=f"Buildings - hour {hour_number}")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Type")
    table.add_column("Inlet °C", justify="right")
    table.add_column("|Load| W", justify="right")
    table.add_column("Geo COP", justify="right")
    table.add_column("Air COP", justify="right")
    table.add_column("Gain %", justify="right")
    table.add_column("Savings W", justify="right")

    for s in summaries:
        table.add_row(
            s.id,
            display_name(s.id),
            "[red]heat sink[/red]" if s.type.value == "heat_sink" else "[blue]heat source[/blue]",
            fmt(s.temperature),
            fmt(s.load, 0),
            fmt(s.geo_efficiency, 2),
            fmt(s.air_efficiency, 2),
            fmt(s.efficiency_gain),
            fmt(s.energy_savings, 0),
        )

    console.print(table)


@app.command()
def timeseries(
    source: Optional[str] = typer.Argument(None, help="CSV path or URL (default: settings)"),
    limit: Optional[int] = typer.Option(None, "--limit", "-n", help="Only show the first N hours"),
    strict: bool = typer.Option(False, "--strict", help="Fail on missing or non-numeric fields"),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a table"),
):
    """
    Show the hourly time series of system totals.
    """
    store = _load_store(source, strict)
    series = store.get_time_series_data()
    points = list(islice(series, limit)) if limit is not None else list(series)

    if as_json:
        print_json([p.to_dict() for p in points])
        return

    table = Table(title=f"Time series ({len(points)} of {len(series)} hours)")
    table.add_column("Hour", justify="right", style="cyan")
    table.add_column("Outdoor °C", justify="right")
    table.add_column("Geo W", justify="right")
    table.add_column("Air W", justify="right")
    table.add_column("Savings W", justify="right")
    table.add_column("Geo COP", justify="right")
    table.add_column("Air COP", justify="right")

    for p in points:
        table.add_row(
            str(p.hour),
            fmt(p.outdoor_temp_c),
            fmt(p.geo_total, 0),
            fmt(p.air_total, 0),
            fmt(p.savings, 0),
            fmt(p.geo_cop, 2),
            fmt(p.air_cop, 2),
        )

    console.print(table)


@app.command()
def assets(
    sort_by: str = typer.Option("network_value", "--sort-by", help="Sort key"),
    asset_type: str = typer.Option("all", "--type", help="Filter by asset type"),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a table"),
):
    """
    Show the borefield asset valuation catalogue.
    """
    try:
        records = sort_assets(filter_assets(get_asset_valuation(), asset_type), by=sort_by)
    except ValidationError as e:
        console.print(f"[red]✗[/red] {e}")
        for suggestion in e.suggestions:
            console.print(f"  {suggestion}")
        raise typer.Exit(1)

    summary = summarize_assets(records)

    if as_json:
        print_json({"assets": [a.to_dict() for a in records], "summary": summary.to_dict()})
        return

    table = Table(title="Borefield Assets")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Capacity kW", justify="right")
    table.add_column("Util %", justify="right")
    table.add_column("COP", justify="right")
    table.add_column("Annual $", justify="right")
    table.add_column("Network $", justify="right", style="green")
    table.add_column("Payback yrs", justify="right")

    for a in records:
        table.add_row(
            a.id,
            a.name,
            fmt(a.capacity / 1000, 0),
            fmt(a.utilization, 0),
            fmt(a.efficiency),
            fmt(a.annual_savings, 0),
            fmt(a.network_value, 0),
            fmt(a.payback_period),
        )

    console.print(table)
    console.print(
        f"Total network value: [green]${fmt(summary.total_network_value, 0)}[/green]  "
        f"Avg COP: {fmt(summary.avg_efficiency, 2)}  "
        f"Avg utilization: {fmt(summary.avg_utilization)}%"
    )


@app.command()
def borefields(
    source: Optional[str] = typer.Argument(None, help="CSV path or URL (default: settings)"),
    hour_number: int = typer.Option(settings.default_hour, "--hour", help="Hour to show"),
    strict: bool = typer.Option(False, "--strict", help="Fail on missing or non-numeric fields"),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a table"),
):
    """
    Show borefield load, utilization and expansion headroom for one hour.
    """
    store = _load_store(source, strict)
    snapshot = _get_hour(store, hour_number)
    gain = snapshot.system_metrics.system_efficiency_gain

    economics = NetworkEconomics.from_settings(store.config)
    rows = [
        (load, project_borefield_expansion(load, gain, economics))
        for load in calculate_all_borefields(snapshot, store.config)
    ]

    if as_json:
        print_json([{"load": load.to_dict(), "expansion": exp.to_dict()} for load, exp in rows])
        return

    table = Table(title=f"Borefields - hour {hour_number}")
    table.add_column("Borefield", style="cyan")
    table.add_column("Buildings", justify="right")
    table.add_column("Load kW", justify="right")
    table.add_column("Capacity %", justify="right")
    table.add_column("Room to max kW", justify="right")
    table.add_column("+Buildings", justify="right")
    table.add_column("Asset value $", justify="right", style="green")

    for load, exp in rows:
        table.add_row(
            load.borefield_id,
            str(load.buildings_count),
            fmt(load.current_load_kw),
            fmt(load.capacity_percent),
            fmt(exp.available_to_max_operating_kw),
            fmt(exp.additional_buildings, 0),
            fmt(exp.current_asset_value, 0),
        )

    console.print(table)


if __name__ == "__main__":
    app()
