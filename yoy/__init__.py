"""yoy - year-over-year gainers and losers by category."""

__version__ = "0.1.0"
