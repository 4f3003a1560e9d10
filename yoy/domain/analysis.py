"""Pure functions for year-over-year change analysis.

This module contains the functional core for comparisons:
- No I/O operations
- No side effects
- Undefined changes are reported as failures, never as NaN or Infinity

Percent changes are computed in Decimal and exposed as float.
"""

import math
from collections.abc import Iterable
from dataclasses import dataclass, field
from decimal import MAX_EMAX, MIN_EMIN, Context, Decimal, localcontext
from enum import Enum

from yoy.domain.aggregate import aggregate, aggregate_partitioned
from yoy.domain.errors import ChangeOutOfRangeError, DivisionByZeroError, EmptyInputError, UndefinedChangeError
from yoy.domain.models import EXACT_CONTEXT, Category, ChangeRecord, Direction, Transaction, Year, YearlyTotals
from yoy.logging_setup import get_logger

logger = get_logger(__name__)

# Ratios keep the default precision but may span any exponent, so they never overflow
RATIO_CONTEXT = Context(prec=28, Emax=MAX_EMAX, Emin=MIN_EMIN)


class CategoryOrder(str, Enum):
    """Order in which categories appear in the analysis output."""

    FIRST_SEEN = "first-seen"
    ALPHA = "alpha"


@dataclass(frozen=True)
class PairFailure:
    """A year pair whose change could not be computed."""

    category: Category
    year_from: Year
    year_to: Year
    error: UndefinedChangeError


@dataclass(frozen=True)
class AnalysisResult:
    """Immutable analysis output: computed changes plus per-pair failures."""

    changes: list[ChangeRecord] = field(default_factory=list)
    failures: list[PairFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """True when every pair produced a change."""
        return not self.failures

    def raise_for_failures(self) -> None:
        """Raise the first failure's error, if any."""
        if self.failures:
            raise self.failures[0].error


def percent_change(old: Decimal, new: Decimal) -> float:
    """Calculate percentage change from old to new.

    Args:
        old: Earlier total.
        new: Later total.

    Returns:
        (new - old) / old * 100.

    Raises:
        DivisionByZeroError: If old is zero.
        ChangeOutOfRangeError: If the change is too large or too small for a float.
    """
    if old == 0:
        raise DivisionByZeroError(
            "Earlier total is zero, percentage change is undefined",
            details={"old": old, "new": new},
        )

    with localcontext(RATIO_CONTEXT):
        ratio = EXACT_CONTEXT.subtract(new, old) / old * 100

    percent = float(ratio)
    if not math.isfinite(percent) or (percent == 0 and ratio != 0):
        raise ChangeOutOfRangeError(
            f"Percentage change {ratio:.3E} is outside the representable range",
            details={"old": old, "new": new},
        )
    return percent


def classify(percent: float) -> Direction:
    """Classify a percentage change.

    Args:
        percent: Percentage change.

    Returns:
        GAINER if positive, LOSER if negative, FLAT if exactly zero.
    """
    if percent > 0:
        return Direction.GAINER
    if percent < 0:
        return Direction.LOSER
    return Direction.FLAT


def compute_change(category: Category, year_from: Year, year_to: Year, totals: YearlyTotals) -> ChangeRecord:
    """Compute the change for one category between two years.

    Args:
        category: Category name.
        year_from: Earlier year.
        year_to: Later year.
        totals: Yearly totals containing both years for the category.

    Returns:
        ChangeRecord for the pair.

    Raises:
        DivisionByZeroError: If the earlier total is zero.
        ChangeOutOfRangeError: If the change does not fit in a float.
    """
    by_year = totals[category]
    try:
        percent = percent_change(by_year[year_from], by_year[year_to])
    except UndefinedChangeError as e:
        e.details.update({"category": category, "year_from": year_from, "year_to": year_to})
        raise

    return ChangeRecord(
        category=category,
        year_from=year_from,
        year_to=year_to,
        percent_change=percent,
        direction=classify(percent),
    )


def ordered_categories(totals: YearlyTotals, order: CategoryOrder | str = CategoryOrder.FIRST_SEEN) -> list[Category]:
    """List categories in output order.

    Args:
        totals: Yearly totals.
        order: "first-seen" keeps mapping insertion order, "alpha" sorts by name.

    Returns:
        Ordered category names.

    Raises:
        ValueError: If order is unknown.
    """
    if CategoryOrder(order) is CategoryOrder.ALPHA:
        return sorted(totals)
    return list(totals)


def analyze(totals: YearlyTotals, order: CategoryOrder | str = CategoryOrder.FIRST_SEEN) -> AnalysisResult:
    """Compute year-over-year changes for every category.

    Years are compared in ascending numeric order, each with the next year
    that has data. A zero earlier total, or a change too extreme for a float,
    is recorded as a failure for that pair and does not stop the remaining
    pairs.

    Args:
        totals: Yearly totals.
        order: Category order, see ``ordered_categories``.

    Returns:
        AnalysisResult with changes and failures.
    """
    changes: list[ChangeRecord] = []
    failures: list[PairFailure] = []

    for category in ordered_categories(totals, order):
        years = sorted(totals[category])
        for year_from, year_to in zip(years, years[1:]):
            try:
                changes.append(compute_change(category, year_from, year_to, totals))
            except UndefinedChangeError as e:
                logger.warning("%s %d -> %d: %s", category, year_from, year_to, e.message)
                failures.append(PairFailure(category, year_from, year_to, e))

    return AnalysisResult(changes=changes, failures=failures)


def analyze_transactions(
    transactions: Iterable[Transaction],
    order: CategoryOrder | str = CategoryOrder.FIRST_SEEN,
    require_data: bool = False,
    shards: int = 1,
) -> AnalysisResult:
    """Aggregate transactions and analyze the totals.

    Args:
        transactions: Transactions in any order.
        order: Category order, see ``ordered_categories``.
        require_data: Raise instead of returning an empty result for no input.
        shards: Aggregate in this many partitions when greater than 1.

    Returns:
        AnalysisResult with changes and failures.

    Raises:
        EmptyInputError: If require_data is set and there are no transactions.
        InvalidDateError: If a transaction date cannot be parsed.
    """
    records = list(transactions)
    if not records and require_data:
        raise EmptyInputError("No transactions to analyze")

    totals = aggregate_partitioned(records, shards) if shards > 1 else aggregate(records)
    return analyze(totals, order)
