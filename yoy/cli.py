"""CLI entry point for yoy."""

import typer

from yoy.commands.admin import init_command
from yoy.commands.analyze import analyze_command, totals_command
from yoy.commands.generate import generate_command
from yoy.domain.analysis import CategoryOrder
from yoy.logging_setup import configure_logging

app = typer.Typer(
    name="yoy",
    help="Year-over-year gainers and losers by category",
    add_completion=False,
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Year-over-year gainers and losers by category."""
    configure_logging("DEBUG" if verbose else None)


@app.command(name="init")
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing config"),
) -> None:
    """Initialize yoy configuration."""
    init_command(force)


@app.command()
def analyze(
    source: str,
    order: CategoryOrder = typer.Option(None, "--order", help="Category order (overrides config)"),
    decimals: int = typer.Option(None, "--decimals", min=0, help="Digits shown for percentages (overrides config)"),
    as_json: bool = typer.Option(False, "--json", help="Print results as JSON"),
    strict: bool = typer.Option(False, "--strict", help="Exit with an error on empty input or undefined changes"),
    shards: int = typer.Option(1, "--shards", min=1, help="Aggregate in this many partitions"),
) -> None:
    """Show year-over-year gainers and losers from a CSV or JSON file."""
    analyze_command(source, order, decimals, as_json, strict, shards)


@app.command()
def totals(source: str) -> None:
    """Show summed values per category and year."""
    totals_command(source)


@app.command()
def generate(
    output: str,
    rows: int = typer.Option(None, "--rows", "-n", min=0, help="Number of transactions (overrides config)"),
    start_year: int = typer.Option(None, "--start-year", help="First year of random dates (overrides config)"),
    end_year: int = typer.Option(None, "--end-year", help="Last year of random dates (overrides config)"),
    seed: int = typer.Option(None, "--seed", help="Random seed for reproducible output"),
) -> None:
    """Write random sample transactions to a CSV or JSON file."""
    generate_command(output, rows, start_year, end_year, seed)


if __name__ == "__main__":
    app()
