"""Analyze and totals commands for viewing year-over-year changes."""

import json
import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from yoy.config import load_settings
from yoy.domain.aggregate import aggregate, year_span
from yoy.domain.analysis import AnalysisResult, CategoryOrder, analyze_transactions
from yoy.domain.errors import YoyError
from yoy.domain.models import ChangeRecord, Direction
from yoy.domain.report import format_percent, result_to_dict, summarize
from yoy.logging_setup import get_logger
from yoy.sources import load_transactions

console = Console()
logger = get_logger(__name__)

DIRECTION_STYLES = {
    Direction.GAINER: "green",
    Direction.LOSER: "red",
    Direction.FLAT: "dim",
}


def format_change_with_color(change: ChangeRecord, decimals: int) -> str:
    """Format percent change with color based on direction.

    Args:
        change: Change record.
        decimals: Digits after the decimal point.

    Returns:
        Colored string for display.
    """
    style = DIRECTION_STYLES[change.direction]
    return f"[{style}]{format_percent(change.percent_change, decimals)}[/{style}]"


def render_result(result: AnalysisResult, decimals: int) -> None:
    """Render analysis result as tables.

    Args:
        result: Analysis result.
        decimals: Digits for percentages.
    """
    if result.changes:
        table = Table(title="Year-over-year changes")
        table.add_column("Category", style="magenta")
        table.add_column("From", style="cyan", justify="right")
        table.add_column("To", style="cyan", justify="right")
        table.add_column("Change", justify="right")
        table.add_column("Direction", justify="center")

        for change in result.changes:
            style = DIRECTION_STYLES[change.direction]
            table.add_row(
                change.category,
                str(change.year_from),
                str(change.year_to),
                format_change_with_color(change, decimals),
                f"[{style}]{change.direction.value}[/{style}]",
            )

        console.print(table)
    else:
        console.print("[dim]No year pairs to compare[/dim]")

    for failure in result.failures:
        console.print(
            f"[yellow]⚠ {failure.category} {failure.year_from} → {failure.year_to}: "
            f"{failure.error.message}[/yellow]"
        )

    summary = summarize(result)
    console.print(
        f"\n[bold]Gainers:[/bold] {summary.gainers}  "
        f"[bold]Losers:[/bold] {summary.losers}  "
        f"[bold]Flat:[/bold] {summary.flat}  "
        f"[bold]Undefined:[/bold] {summary.failures}"
    )
    if summary.biggest_gainer:
        g = summary.biggest_gainer
        console.print(
            f"[green]Biggest gainer:[/green] {g.category} {g.year_from} → {g.year_to} "
            f"({format_percent(g.percent_change, decimals)})"
        )
    if summary.biggest_loser:
        lo = summary.biggest_loser
        console.print(
            f"[red]Biggest loser:[/red] {lo.category} {lo.year_from} → {lo.year_to} "
            f"({format_percent(lo.percent_change, decimals)})"
        )


def analyze_command(
    source: str,
    order: CategoryOrder | None = None,
    decimals: int | None = None,
    as_json: bool = False,
    strict: bool = False,
    shards: int = 1,
) -> None:
    """Analyze year-over-year changes for a transaction file."""
    try:
        settings = load_settings()
        order = order or settings.order
        decimals = settings.decimals if decimals is None else decimals

        transactions = load_transactions(Path(source).expanduser())
        result = analyze_transactions(transactions, order, require_data=strict, shards=shards)

    except YoyError as e:
        console.print(f"[red]{e.message}[/red]", style="bold")
        sys.exit(1)
    except ValueError as e:
        console.print(f"[red]{e}[/red]", style="bold")
        sys.exit(1)

    if as_json:
        typer.echo(json.dumps(result_to_dict(result, decimals), indent=2))
    else:
        render_result(result, decimals)

    if strict and not result.ok:
        logger.debug("Strict mode: %d undefined pairs", len(result.failures))
        sys.exit(1)


def totals_command(source: str) -> None:
    """Show summed values per category and year for a transaction file."""
    try:
        transactions = load_transactions(Path(source).expanduser())
        totals = aggregate(transactions)
    except YoyError as e:
        console.print(f"[red]{e.message}[/red]", style="bold")
        sys.exit(1)

    span = year_span(totals)
    if span is None:
        console.print("[yellow]No transactions found[/yellow]")
        return

    table = Table(title=f"Yearly totals {span[0]}–{span[1]} ({len(transactions)} transactions)")
    table.add_column("Category", style="magenta")
    table.add_column("Year", style="cyan", justify="right")
    table.add_column("Total", justify="right")

    for category, by_year in totals.items():
        for year in sorted(by_year):
            table.add_row(category, str(year), f"{by_year[year]:,}")

    console.print(table)
