"""Generate command for writing random sample transactions."""

import random
import sys
from pathlib import Path

from rich.console import Console

from yoy.config import load_settings
from yoy.domain.errors import YoyError
from yoy.domain.generate import generate_transactions
from yoy.sources import write_transactions

console = Console()


def generate_command(
    output: str,
    rows: int | None = None,
    start_year: int | None = None,
    end_year: int | None = None,
    seed: int | None = None,
) -> None:
    """Write random transactions to a CSV or JSON file."""
    try:
        settings = load_settings()
        output_path = Path(output).expanduser()
        rng = random.Random(seed)

        transactions = generate_transactions(
            settings.rows if rows is None else rows,
            rng,
            categories=settings.categories,
            start_year=settings.start_year if start_year is None else start_year,
            end_year=settings.end_year if end_year is None else end_year,
        )

        console.print(f"[cyan]Generating transactions into {output_path}...[/cyan]")
        written = write_transactions(output_path, transactions)

    except YoyError as e:
        console.print(f"[red]{e.message}[/red]", style="bold")
        sys.exit(1)
    except ValueError as e:
        console.print(f"[red]{e}[/red]", style="bold")
        sys.exit(1)

    console.print(f"[green]✓[/green] Wrote {written:,} transactions to {output_path}")
