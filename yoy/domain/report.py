"""Pure functions for presenting analysis results.

Display strings are always derived from the numeric percent change, which
stays the source of truth.
"""

from dataclasses import dataclass
from typing import Any

from yoy.domain.analysis import AnalysisResult
from yoy.domain.models import ChangeRecord, Direction


@dataclass(frozen=True)
class AnalysisSummary:
    """Immutable counts and extremes of an analysis."""

    gainers: int
    losers: int
    flat: int
    failures: int
    biggest_gainer: ChangeRecord | None = None
    biggest_loser: ChangeRecord | None = None


def format_percent(percent: float, decimals: int = 2) -> str:
    """Format a percent change for display.

    Args:
        percent: Percentage change.
        decimals: Digits after the decimal point.

    Returns:
        Formatted string (e.g., "30.00%" or "-5.71%").
    """
    return f"{percent:.{decimals}f}%"


def split_gainers_and_losers(
    changes: list[ChangeRecord],
) -> tuple[list[ChangeRecord], list[ChangeRecord], list[ChangeRecord]]:
    """Split changes by direction, keeping their order.

    Args:
        changes: Change records.

    Returns:
        Tuple of (gainers, losers, flat).
    """
    gainers = [c for c in changes if c.direction is Direction.GAINER]
    losers = [c for c in changes if c.direction is Direction.LOSER]
    flat = [c for c in changes if c.direction is Direction.FLAT]
    return gainers, losers, flat


def rank_changes(
    changes: list[ChangeRecord],
    limit: int | None = None,
) -> tuple[list[ChangeRecord], list[ChangeRecord]]:
    """Rank gainers and losers by magnitude.

    Args:
        changes: Change records.
        limit: Maximum entries per list, or None for all.

    Returns:
        Tuple of (gainers largest first, losers most negative first).
    """
    gainers, losers, _ = split_gainers_and_losers(changes)
    top_gainers = sorted(gainers, key=lambda c: c.percent_change, reverse=True)
    top_losers = sorted(losers, key=lambda c: c.percent_change)
    if limit is not None:
        return top_gainers[:limit], top_losers[:limit]
    return top_gainers, top_losers


def summarize(result: AnalysisResult) -> AnalysisSummary:
    """Summarize an analysis result.

    Args:
        result: Analysis result.

    Returns:
        AnalysisSummary with counts and the largest movements.
    """
    gainers, losers, flat = split_gainers_and_losers(result.changes)
    top_gainers, top_losers = rank_changes(result.changes, limit=1)

    return AnalysisSummary(
        gainers=len(gainers),
        losers=len(losers),
        flat=len(flat),
        failures=len(result.failures),
        biggest_gainer=top_gainers[0] if top_gainers else None,
        biggest_loser=top_losers[0] if top_losers else None,
    )


def change_to_dict(change: ChangeRecord, decimals: int = 2) -> dict[str, Any]:
    """Convert a change record to a JSON-ready dictionary.

    Args:
        change: Change record.
        decimals: Digits for the display percentage.

    Returns:
        Dictionary with numeric and display values.
    """
    return {
        "category": change.category,
        "year_from": change.year_from,
        "year_to": change.year_to,
        "percent_change": change.percent_change,
        "percentage": format_percent(change.percent_change, decimals),
        "direction": change.direction.value,
    }


def result_to_dict(result: AnalysisResult, decimals: int = 2) -> dict[str, Any]:
    """Convert an analysis result to a JSON-ready dictionary.

    Args:
        result: Analysis result.
        decimals: Digits for the display percentages.

    Returns:
        Dictionary with "changes" and "failures" lists.
    """
    return {
        "changes": [change_to_dict(c, decimals) for c in result.changes],
        "failures": [
            {
                "category": f.category,
                "year_from": f.year_from,
                "year_to": f.year_to,
                "error": f.error.message,
            }
            for f in result.failures
        ],
    }
