"""Tests for yoy.domain.report pure functions."""

from decimal import Decimal

from yoy.domain.analysis import AnalysisResult, analyze
from yoy.domain.models import Category, ChangeRecord, Direction, Year
from yoy.domain.report import (
    change_to_dict,
    format_percent,
    rank_changes,
    result_to_dict,
    split_gainers_and_losers,
    summarize,
)


def change(category: str, percent: float, direction: Direction) -> ChangeRecord:
    return ChangeRecord(Category(category), Year(2023), Year(2024), percent, direction)


CHANGES = [
    change("Revenue", 30.0, Direction.GAINER),
    change("Outstanding", -5.714285714285714, Direction.LOSER),
    change("Balances", 3.0, Direction.GAINER),
    change("Limits", 0.0, Direction.FLAT),
    change("Fees", -50.0, Direction.LOSER),
]


class TestFormatPercent:
    """Tests for format_percent."""

    def test_two_decimals(self) -> None:
        """Should format with two decimals and a percent sign."""
        assert format_percent(30.0) == "30.00%"
        assert format_percent(-5.714285714285714) == "-5.71%"

    def test_custom_decimals(self) -> None:
        """Should honor the requested precision."""
        assert format_percent(3.0, 0) == "3%"
        assert format_percent(-5.714285714285714, 4) == "-5.7143%"


class TestSplitGainersAndLosers:
    """Tests for split_gainers_and_losers."""

    def test_split_keeps_order(self) -> None:
        """Should split by direction in input order."""
        gainers, losers, flat = split_gainers_and_losers(CHANGES)

        assert [c.category for c in gainers] == ["Revenue", "Balances"]
        assert [c.category for c in losers] == ["Outstanding", "Fees"]
        assert [c.category for c in flat] == ["Limits"]

    def test_empty(self) -> None:
        """Should return three empty lists."""
        assert split_gainers_and_losers([]) == ([], [], [])


class TestRankChanges:
    """Tests for rank_changes."""

    def test_ranks_by_magnitude(self) -> None:
        """Should put largest gains and deepest losses first."""
        gainers, losers = rank_changes(CHANGES)

        assert [c.category for c in gainers] == ["Revenue", "Balances"]
        assert [c.category for c in losers] == ["Fees", "Outstanding"]

    def test_limit(self) -> None:
        """Should truncate each list."""
        gainers, losers = rank_changes(CHANGES, limit=1)
        assert len(gainers) == 1
        assert len(losers) == 1


class TestSummarize:
    """Tests for summarize."""

    def test_counts_and_extremes(self) -> None:
        """Should count directions and pick the biggest movers."""
        summary = summarize(AnalysisResult(changes=CHANGES))

        assert (summary.gainers, summary.losers, summary.flat, summary.failures) == (2, 2, 1, 0)
        assert summary.biggest_gainer is not None
        assert summary.biggest_gainer.category == "Revenue"
        assert summary.biggest_loser is not None
        assert summary.biggest_loser.category == "Fees"

    def test_empty(self) -> None:
        """Should handle no changes."""
        summary = summarize(AnalysisResult())
        assert summary.biggest_gainer is None
        assert summary.biggest_loser is None

    def test_counts_failures(self) -> None:
        """Should count undefined pairs."""
        result = analyze({Category("Fees"): {Year(2022): Decimal(0), Year(2023): Decimal(5)}})
        assert summarize(result).failures == 1


class TestSerialization:
    """Tests for change_to_dict and result_to_dict."""

    def test_change_to_dict(self) -> None:
        """Should keep the numeric value and add a display string."""
        data = change_to_dict(CHANGES[0])

        assert data == {
            "category": "Revenue",
            "year_from": 2023,
            "year_to": 2024,
            "percent_change": 30.0,
            "percentage": "30.00%",
            "direction": "gainer",
        }

    def test_result_to_dict_includes_failures(self) -> None:
        """Should describe undefined pairs."""
        result = analyze({Category("Fees"): {Year(2022): Decimal(0), Year(2023): Decimal(5)}})
        data = result_to_dict(result)

        assert data["changes"] == []
        assert data["failures"][0]["category"] == "Fees"
        assert data["failures"][0]["year_from"] == 2022
        assert "zero" in data["failures"][0]["error"]
