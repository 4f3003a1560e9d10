"""Date utilities for yoy.

Pure functions for turning transaction dates into calendar years. Parsing is
strict and locale independent: strings must be ISO dates (YYYY-MM-DD),
optionally followed by an ISO time part which is ignored.
"""

import re
from datetime import date, datetime

from yoy.domain.errors import InvalidDateError
from yoy.domain.models import Year

DATE_FORMAT = "%Y-%m-%d"

# strptime alone also accepts unpadded fields such as 2023-1-1
_ISO_DAY = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)


def parse_date(raw: str | date) -> date:
    """Parse a transaction date.

    Args:
        raw: ISO date string (YYYY-MM-DD or YYYY-MM-DDTHH:MM:SS...) or a date.

    Returns:
        Calendar date.

    Raises:
        InvalidDateError: If the value is not a valid calendar date.
    """
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    if not isinstance(raw, str):
        raise InvalidDateError(f"Date must be a string or date, got {raw!r}", details={"date": raw})

    text = raw.strip()
    # Time component, if any, does not affect the calendar day
    day_part, sep, _ = text.partition("T")
    if not sep:
        day_part, _, _ = text.partition(" ")

    if not _ISO_DAY.fullmatch(day_part):
        raise InvalidDateError(f"Could not parse date '{raw}': expected YYYY-MM-DD", details={"date": raw})

    try:
        return datetime.strptime(day_part, DATE_FORMAT).date()
    except ValueError as e:
        raise InvalidDateError(f"Could not parse date '{raw}': expected YYYY-MM-DD", details={"date": raw}) from e


def parse_year(raw: str | date) -> Year:
    """Extract the calendar year from a transaction date.

    Args:
        raw: ISO date string or date.

    Returns:
        Calendar year.

    Raises:
        InvalidDateError: If the value is not a valid calendar date.
    """
    return Year(parse_date(raw).year)
