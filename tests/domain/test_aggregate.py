"""Tests for yoy.domain.aggregate pure functions."""

import itertools
import random
from decimal import Decimal

import pytest

from yoy.domain.aggregate import aggregate, aggregate_partitioned, merge_totals, year_span
from yoy.domain.errors import InvalidDateError
from yoy.domain.models import Category, Transaction, Year


def txn(category: str, date: str, value: int | str) -> Transaction:
    return Transaction(Category(category), date, Decimal(value))


SAMPLE = [
    txn("Revenue", "2023-01-01", 1_000_000),
    txn("Revenue", "2024-01-01", 1_300_000),
    txn("Balances", "2023-01-01", 500_000),
    txn("Balances", "2024-01-01", 515_000),
    txn("Outstanding", "2023-01-01", 700_000),
    txn("Outstanding", "2024-01-01", 660_000),
    txn("Limits", "2023-01-01", 800_000),
    txn("Limits", "2024-01-01", 825_000),
]


class TestAggregate:
    """Tests for aggregate."""

    def test_sums_values_per_category_and_year(self) -> None:
        """Should sum [100, 200, -50] to 250."""
        totals = aggregate(
            [
                txn("Revenue", "2023-02-01", 100),
                txn("Revenue", "2023-05-01", 200),
                txn("Revenue", "2023-12-31", -50),
            ]
        )
        assert totals == {"Revenue": {2023: Decimal(250)}}

    def test_groups_by_calendar_year(self) -> None:
        """Should separate Dec 31 and Jan 1 of the next year."""
        totals = aggregate([txn("Revenue", "2023-12-31", 1), txn("Revenue", "2024-01-01", 2)])
        assert totals["Revenue"] == {2023: Decimal(1), 2024: Decimal(2)}

    def test_sample_data(self) -> None:
        """Should produce one bucket per category and year."""
        totals = aggregate(SAMPLE)
        assert list(totals) == ["Revenue", "Balances", "Outstanding", "Limits"]
        assert totals["Outstanding"] == {2023: Decimal(700_000), 2024: Decimal(660_000)}

    def test_empty_input(self) -> None:
        """Should return an empty mapping."""
        assert aggregate([]) == {}

    def test_accepts_iterators(self) -> None:
        """Should consume a one-shot iterator."""
        assert aggregate(iter(SAMPLE)) == aggregate(SAMPLE)

    def test_invalid_date_propagates(self) -> None:
        """Should raise InvalidDateError for an unparseable date."""
        with pytest.raises(InvalidDateError):
            aggregate([txn("Revenue", "2023-01-01", 1), txn("Revenue", "31/12/2023", 1)])

    def test_does_not_mutate_input(self) -> None:
        """Should leave the input list unchanged."""
        records = list(SAMPLE)
        aggregate(records)
        assert records == SAMPLE

    def test_order_independent(self) -> None:
        """Should produce identical totals for every permutation."""
        records = [
            txn("Revenue", "2023-03-01", "0.1"),
            txn("Revenue", "2023-04-01", "0.2"),
            txn("Revenue", "2023-05-01", "0.3"),
            txn("Costs", "2024-01-01", "-7.5"),
        ]
        expected = aggregate(records)
        for permutation in itertools.permutations(records):
            assert aggregate(permutation) == expected
        assert expected["Revenue"][Year(2023)] == Decimal("0.6")

    def test_order_independent_past_default_precision(self) -> None:
        """Should not round sums wider than 28 significant digits."""
        for values in ((Decimal("1E+30"), Decimal(1), Decimal("-1E+30")), (1e30, 1.0, -1e30)):
            records = [Transaction(Category("Wide"), "2023-01-01", v) for v in values]  # type: ignore[arg-type]
            results = {aggregate(p)["Wide"][Year(2023)] for p in itertools.permutations(records)}
            assert results == {Decimal(1)}

    def test_whitespace_variants_share_a_bucket(self) -> None:
        """Should group categories after trimming surrounding whitespace."""
        totals = aggregate([txn("Revenue ", "2023-01-01", 1), txn(" Revenue", "2023-06-01", 2)])
        assert totals == {"Revenue": {2023: Decimal(3)}}

    def test_returns_fresh_mapping(self) -> None:
        """Should not share state between calls."""
        first = aggregate(SAMPLE)
        first["Revenue"][Year(2023)] = Decimal(0)
        assert aggregate(SAMPLE)["Revenue"][Year(2023)] == Decimal(1_000_000)


class TestMergeTotals:
    """Tests for merge_totals."""

    def test_adds_overlapping_buckets(self) -> None:
        """Should add values for the same category and year."""
        a = {Category("Revenue"): {Year(2023): Decimal(1)}}
        b = {Category("Revenue"): {Year(2023): Decimal(2), Year(2024): Decimal(5)}}
        assert merge_totals(a, b) == {"Revenue": {2023: Decimal(3), 2024: Decimal(5)}}

    def test_does_not_mutate_partials(self) -> None:
        """Should leave partial totals unchanged."""
        a = {Category("Revenue"): {Year(2023): Decimal(1)}}
        merge_totals(a, a)
        assert a == {"Revenue": {2023: Decimal(1)}}

    def test_no_partials(self) -> None:
        """Should return an empty mapping."""
        assert merge_totals() == {}


class TestAggregatePartitioned:
    """Tests for aggregate_partitioned."""

    def test_matches_sequential(self) -> None:
        """Should match sequential aggregation for any shard count."""
        rng = random.Random(7)
        records = [
            txn(rng.choice(["A", "B", "C"]), f"{rng.randint(2010, 2024)}-06-15", f"{rng.uniform(-1e6, 1e6):.2f}")
            for _ in range(500)
        ]
        expected = aggregate(records)
        for shards in (1, 2, 3, 7, 500, 1000):
            assert aggregate_partitioned(records, shards) == expected

    def test_matches_sequential_past_default_precision(self) -> None:
        """Should stay exact when partial sums exceed 28 significant digits."""
        records = [
            txn("Wide", "2023-01-01", "1E+30"),
            txn("Wide", "2023-02-01", "1"),
            txn("Wide", "2023-03-01", "-1E+30"),
            txn("Wide", "2023-04-01", "0.000000000000000000001"),
        ]
        expected = aggregate(records)
        assert expected["Wide"][Year(2023)] == Decimal("1.000000000000000000001")
        for shards in (2, 3, 4):
            assert aggregate_partitioned(records, shards) == expected
        assert aggregate_partitioned(list(reversed(records)), 2) == expected

    def test_preserves_first_seen_order(self) -> None:
        """Should keep category order of sequential aggregation."""
        assert list(aggregate_partitioned(SAMPLE, 3)) == list(aggregate(SAMPLE))

    def test_empty_input(self) -> None:
        """Should return an empty mapping."""
        assert aggregate_partitioned([], 4) == {}

    def test_rejects_zero_shards(self) -> None:
        """Should raise ValueError for shards < 1."""
        with pytest.raises(ValueError):
            aggregate_partitioned(SAMPLE, 0)


class TestYearSpan:
    """Tests for year_span."""

    def test_span(self) -> None:
        """Should return the earliest and latest years."""
        totals = aggregate([txn("A", "2015-01-01", 1), txn("B", "2011-01-01", 1), txn("A", "2020-01-01", 1)])
        assert year_span(totals) == (2011, 2020)

    def test_empty(self) -> None:
        """Should return None without data."""
        assert year_span({}) is None
