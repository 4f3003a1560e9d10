"""Pure functions for grouping transactions by category and calendar year.

This module contains the functional core for aggregation:
- No I/O operations
- No shared state; every call returns a fresh mapping
- Input transactions are never mutated

Totals are Decimal sums computed without rounding, so the result does not
depend on input order and partitioned aggregation matches sequential
aggregation exactly.
"""

from collections.abc import Iterable
from decimal import Decimal

from yoy.dates import parse_year
from yoy.domain.models import Transaction, Year, YearlyTotals, add_exact
from yoy.logging_setup import get_logger

logger = get_logger(__name__)


def aggregate(transactions: Iterable[Transaction]) -> YearlyTotals:
    """Sum transaction values by category and year.

    Categories appear in the order they are first seen in the input.

    Args:
        transactions: Transactions in any order.

    Returns:
        Mapping of category -> year -> summed value.

    Raises:
        InvalidDateError: If a transaction date cannot be parsed.
    """
    totals: YearlyTotals = {}
    count = 0

    for txn in transactions:
        year = parse_year(txn.date)
        years = totals.setdefault(txn.category, {})
        years[year] = add_exact(years.get(year, Decimal(0)), txn.value)
        count += 1

    logger.debug("Aggregated %d transactions into %d categories", count, len(totals))
    return totals


def merge_totals(*partials: YearlyTotals) -> YearlyTotals:
    """Merge partial totals by addition.

    Args:
        *partials: Yearly totals to combine. Not mutated.

    Returns:
        New mapping with summed values.
    """
    merged: YearlyTotals = {}
    for partial in partials:
        for category, years in partial.items():
            target = merged.setdefault(category, {})
            for year, value in years.items():
                target[year] = add_exact(target.get(year, Decimal(0)), value)
    return merged


def aggregate_partitioned(transactions: Iterable[Transaction], shards: int) -> YearlyTotals:
    """Aggregate in contiguous partitions, then merge the partial sums.

    Args:
        transactions: Transactions in any order.
        shards: Number of partitions (at least 1).

    Returns:
        Same mapping as ``aggregate`` would return.

    Raises:
        ValueError: If shards is less than 1.
        InvalidDateError: If a transaction date cannot be parsed.
    """
    if shards < 1:
        raise ValueError(f"shards must be at least 1, got {shards}")

    records = list(transactions)
    size = max(1, -(-len(records) // shards))
    partials = [aggregate(records[start : start + size]) for start in range(0, len(records), size)]

    logger.debug("Merging %d partial aggregates", len(partials))
    return merge_totals(*partials)


def year_span(totals: YearlyTotals) -> tuple[Year, Year] | None:
    """Get the earliest and latest year present in the totals.

    Args:
        totals: Yearly totals.

    Returns:
        Tuple of (first_year, last_year), or None if there are no totals.
    """
    years = [year for by_year in totals.values() for year in by_year]
    if not years:
        return None
    return min(years), max(years)
