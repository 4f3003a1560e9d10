"""Random sample transaction generation.

Randomness comes from a caller-supplied ``random.Random`` so output is
reproducible for a given seed.
"""

import random
from collections.abc import Iterator, Sequence
from datetime import date

from yoy.domain.models import Category, Transaction

DEFAULT_CATEGORIES: tuple[str, ...] = ("Revenue", "Balances", "Outstanding", "Limits")

MIN_VALUE = 100_000
MAX_VALUE = 5_100_000  # exclusive


def random_date(rng: random.Random, start_year: int, end_year: int) -> str:
    """Pick a uniformly random day between Jan 1 of start_year and Dec 31 of end_year.

    Returns:
        ISO date string (YYYY-MM-DD).

    Raises:
        ValueError: If start_year is after end_year.
    """
    if start_year > end_year:
        raise ValueError(f"start_year {start_year} is after end_year {end_year}")
    first = date(start_year, 1, 1).toordinal()
    last = date(end_year, 12, 31).toordinal()
    return date.fromordinal(rng.randint(first, last)).isoformat()


def random_transaction(
    rng: random.Random,
    categories: Sequence[str] = DEFAULT_CATEGORIES,
    start_year: int = 2010,
    end_year: int = 2024,
) -> Transaction:
    """Generate one random transaction."""
    return Transaction(
        category=Category(rng.choice(categories)),
        date=random_date(rng, start_year, end_year),
        value=rng.randrange(MIN_VALUE, MAX_VALUE),
    )


def generate_transactions(
    count: int,
    rng: random.Random,
    categories: Sequence[str] = DEFAULT_CATEGORIES,
    start_year: int = 2010,
    end_year: int = 2024,
) -> Iterator[Transaction]:
    """Generate random transactions lazily.

    Args:
        count: Number of transactions.
        rng: Random source.
        categories: Categories to choose from.
        start_year: First year of the date range.
        end_year: Last year of the date range.

    Returns:
        Lazy iterator of transactions.

    Raises:
        ValueError: If count is negative, categories is empty or the year
            range is reversed.
    """
    if count < 0:
        raise ValueError(f"count must not be negative, got {count}")
    if not categories:
        raise ValueError("At least one category is required")
    if start_year > end_year:
        raise ValueError(f"start_year {start_year} is after end_year {end_year}")

    return (random_transaction(rng, categories, start_year, end_year) for _ in range(count))
