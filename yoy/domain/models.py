"""Domain type definitions for yoy.

These NewTypes provide semantic clarity and help with type checking:
- Category: Label partitioning transactions into independent groups
- Year: Calendar year derived from a transaction date
- YearlyTotals: Summed values per category and year
"""

import math
import numbers
from dataclasses import dataclass
from datetime import date as Date
from decimal import MAX_EMAX, MAX_PREC, MIN_EMIN, Context, Decimal, Inexact, InvalidOperation
from enum import Enum
from typing import Any, NewType

from yoy.domain.errors import InvalidTransactionError

Category = NewType("Category", str)

Year = NewType("Year", int)

# Values are Decimal so that sums are exact and independent of input order
YearlyTotals = dict[Category, dict[Year, Decimal]]

# Additions never round, so a sum does not depend on the order of its terms
EXACT_CONTEXT = Context(prec=MAX_PREC, Emax=MAX_EMAX, Emin=MIN_EMIN, traps=[Inexact, InvalidOperation])


class Direction(str, Enum):
    """Classification of a year-over-year change."""

    GAINER = "gainer"
    LOSER = "loser"
    FLAT = "flat"


def to_decimal(value: Any) -> Decimal:
    """Convert a numeric value to a finite Decimal.

    Floats go through their shortest repr so 0.1 becomes Decimal("0.1").

    Args:
        value: int, float, Decimal or numeric string.

    Returns:
        Decimal equal to the value.

    Raises:
        InvalidTransactionError: If the value is not numeric or not finite.
    """
    if isinstance(value, bool):
        raise InvalidTransactionError(f"Value must be a number, got {value!r}")

    try:
        if isinstance(value, Decimal):
            result = value
        elif isinstance(value, numbers.Integral):
            result = Decimal(int(value))
        elif isinstance(value, numbers.Real):
            as_float = float(value)
            if not math.isfinite(as_float):
                raise InvalidTransactionError(f"Value must be finite, got {value!r}")
            result = Decimal(repr(as_float))
        elif isinstance(value, str):
            result = Decimal(value.strip())
        else:
            raise InvalidTransactionError(f"Value must be a number, got {value!r}")
    except InvalidOperation as e:
        raise InvalidTransactionError(f"Value must be a number, got {value!r}") from e

    if not result.is_finite() or not math.isfinite(float(result)):
        raise InvalidTransactionError(f"Value must be finite, got {value!r}")
    return result


def add_exact(left: Decimal, right: Decimal) -> Decimal:
    """Add two Decimals without rounding.

    Raises:
        InvalidTransactionError: If the sum cannot be represented exactly.
    """
    try:
        return EXACT_CONTEXT.add(left, right)
    except Inexact as e:
        raise InvalidTransactionError(f"Sum of {left} and {right} cannot be represented exactly") from e


@dataclass(frozen=True)
class Transaction:
    """Immutable transaction record.

    The date is kept as supplied and only parsed during aggregation.
    """

    category: Category
    date: str | Date
    value: Decimal

    def __post_init__(self) -> None:
        if not isinstance(self.category, str) or not self.category.strip():
            raise InvalidTransactionError(
                f"Category must be a non-empty string, got {self.category!r}",
                details={"date": self.date},
            )
        object.__setattr__(self, "category", Category(self.category.strip()))
        object.__setattr__(self, "value", to_decimal(self.value))


@dataclass(frozen=True)
class ChangeRecord:
    """Immutable year-over-year change for one category."""

    category: Category
    year_from: Year
    year_to: Year
    percent_change: float
    direction: Direction
