"""Exception hierarchy for yoy.

Every error raised on purpose by the package derives from ``YoyError`` so
that the CLI can report it uniformly. Errors that describe a bad value also
derive from the matching builtin so callers can catch them either way.
"""

from typing import Any


class YoyError(Exception):
    """Base exception for all yoy errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """Initialize exception.

        Args:
            message: Error message.
            details: Additional error details.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InvalidDateError(YoyError, ValueError):
    """Raised when a transaction date cannot be parsed to a calendar year."""


class InvalidTransactionError(YoyError, ValueError):
    """Raised when a transaction has an empty category or an unusable value."""


class UndefinedChangeError(YoyError, ArithmeticError):
    """Raised when a year-over-year change cannot be expressed as a number."""


class DivisionByZeroError(UndefinedChangeError, ZeroDivisionError):
    """Raised when the earlier-year total of a comparison is zero."""


class ChangeOutOfRangeError(UndefinedChangeError, OverflowError):
    """Raised when a percent change does not fit in a float."""


class EmptyInputError(YoyError):
    """Raised when data was required but no transactions were supplied."""


class SourceError(YoyError):
    """Raised when a transaction file cannot be read or interpreted."""


class ConfigurationError(YoyError):
    """Raised when the configuration file is invalid."""
