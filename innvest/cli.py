"""InnVest CLI.

Commands:
- init: Initialize database schema
- seed-time: Populate the calendar (dim_time) dimension
- reports: List available analytics reports
- report: Run one analytics report and print or export it
"""

from __future__ import annotations

import asyncio
from dataclasses import asdict, fields
from decimal import Decimal
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.table import Table

from innvest.analytics import (
    REPORTS,
    PerformanceAnalyticsEngine,
    ReportExecutionError,
    ReportInputError,
    UnknownReportError,
    get_report,
)
from innvest.config import get_config
from innvest.core.logging import configure_logging
from innvest.db.connection import close_db, get_session, init_db
from innvest.db.time_dimension import seed_time_dimension
from innvest.reporting.export import export_csv, export_excel

app = typer.Typer(
    name="innvest",
    help="InnVest - hotel investment performance analytics",
    no_args_is_help=True,
)

console = Console()


@app.callback()
def main() -> None:
    configure_logging()


@app.command()
def init(
    drop: bool = typer.Option(False, "--drop", help="Drop existing tables"),
):
    """Initialize database schema."""
    config = get_config()
    console.print(f"[bold]Initializing database:[/bold] {config.db.url}")

    async def _init():
        try:
            await init_db(drop=drop)
        finally:
            await close_db()

    asyncio.run(_init())
    console.print("[bold green]✓[/bold green] Database initialized")


@app.command(name="seed-time")
def seed_time(
    start_year: int = typer.Argument(..., help="First calendar year"),
    end_year: int = typer.Argument(..., help="Last calendar year (inclusive)"),
):
    """Populate dim_time with one row per calendar date."""
    if end_year < start_year:
        console.print("[red]✗[/red] END_YEAR must not be before START_YEAR")
        raise typer.Exit(code=2)

    async def _seed() -> int:
        try:
            async with get_session() as session:
                inserted = await seed_time_dimension(session, start_year, end_year)
                await session.commit()
                return inserted
        finally:
            await close_db()

    inserted = asyncio.run(_seed())
    console.print(f"[bold green]✓[/bold green] {inserted} calendar rows added ({start_year}-{end_year})")


@app.command(name="reports")
def list_reports():
    """List available analytics reports."""
    table = Table(title="Reports")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Parameters")
    table.add_column("Description")

    for spec in REPORTS.values():
        params = ", ".join(
            name if field.is_required() else f"[{name}]"
            for name, field in spec.params_model.model_fields.items()
        )
        table.add_row(spec.name, params, spec.description)

    console.print(table)


def _format_cell(value: Any) -> str:
    if isinstance(value, Decimal):
        return f"{value:,.4f}"
    return str(value)


def _collect_params(name: str, candidates: dict[str, Any]) -> dict[str, Any]:
    """Keep the options the report accepts; unset options stay unset."""
    accepted = get_report(name).params_model.model_fields
    return {k: v for k, v in candidates.items() if k in accepted and v is not None}


@app.command()
def report(
    name: str = typer.Argument(..., help="Report name (see `innvest reports`)"),
    year: int | None = typer.Option(None, "--year", help="Calendar year"),
    hotel_type: str | None = typer.Option(None, "--hotel-type", help="Hotel type filter"),
    property_name: str | None = typer.Option(None, "--property", help="Property name filter"),
    quarter: int | None = typer.Option(None, "--quarter", help="Quarter 1-4 (default: all)"),
    market_name: str | None = typer.Option(None, "--market", help="Market name filter"),
    start_year: int | None = typer.Option(None, "--start-year", help="First year of a range"),
    end_year: int | None = typer.Option(None, "--end-year", help="Last year of a range"),
    top_n: int | None = typer.Option(None, "--top", help="Keep the top N ranked markets"),
    output: Path | None = typer.Option(None, "--out", "-o", help="Export to .csv or .xlsx"),
):
    """Run an analytics report."""
    config = get_config()
    if top_n is None:
        top_n = config.analytics.default_top_n

    try:
        spec = get_report(name)
        params = _collect_params(
            name,
            {
                "year": year,
                "hotel_type": hotel_type,
                "property_name": property_name,
                "quarter": quarter,
                "market_name": market_name,
                "start_year": start_year,
                "end_year": end_year,
                "top_n": top_n,
            },
        )
    except UnknownReportError:
        console.print(f"[red]✗[/red] Unknown report: {name}")
        raise typer.Exit(code=2) from None

    async def _report() -> list:
        try:
            async with get_session() as session:
                engine = PerformanceAnalyticsEngine(
                    session, slow_report_ms=config.analytics.slow_report_ms
                )
                return await engine.run(name, **params)
        finally:
            await close_db()

    try:
        rows = asyncio.run(_report())
    except ReportInputError as e:
        console.print(f"[red]✗[/red] {e}")
        raise typer.Exit(code=2) from None
    except ReportExecutionError as e:
        console.print(f"[bold red]✗ Report failed:[/bold red] {e}")
        raise typer.Exit(code=1) from None

    if output is not None:
        suffix = output.suffix.lower()
        if suffix == ".xlsx":
            output.write_bytes(export_excel(rows, spec.row_type, sheet_name=name).getvalue())
        elif suffix == ".csv":
            output.write_text(export_csv(rows, spec.row_type))
        else:
            console.print(f"[red]✗[/red] Unsupported export format: {output.suffix}")
            raise typer.Exit(code=2)
        console.print(f"[bold green]✓[/bold green] {len(rows)} rows written to {output}")
        return

    if not rows:
        console.print("[yellow]No rows for these parameters[/yellow]")
        return

    table = Table(title=spec.description)
    columns = [f.name for f in fields(spec.row_type)]
    for column in columns:
        table.add_column(column, justify="left" if column.endswith("name") else "right")
    for row in rows:
        values = asdict(row)
        table.add_row(*(_format_cell(values[c]) for c in columns))
    console.print(table)


if __name__ == "__main__":
    app()
