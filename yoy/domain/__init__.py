"""Domain models and types for yoy.

This package contains the functional core:
- Pure functions with no side effects
- No I/O operations
- Easy to test
- Aggregation and comparison separated from file handling and display
"""

from yoy.domain.models import Category, ChangeRecord, Direction, Transaction, Year, YearlyTotals

__all__ = ["Category", "ChangeRecord", "Direction", "Transaction", "Year", "YearlyTotals"]
