"""Date parsing utilities."""

import re
from datetime import date
from typing import Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

# Two-digit years up to and including this value belong to the 2000s.
TWO_DIGIT_YEAR_PIVOT = 50

_FULL_YEAR_RE = re.compile(r"(\d{2})\.(\d{2})\.(\d{4})")
_SHORT_YEAR_RE = re.compile(r"(\d{2})\.(\d{2})\.(\d{2})")


def parse_statement_date(date_str: str) -> str:
    """Normalize a statement date to an ISO date string.

    Supported formats:
    - "DD.MM.YYYY" -> "YYYY-MM-DD"
    - "DD.MM.YY"   -> "20YY-MM-DD" when YY <= 50, otherwise "19YY-MM-DD"

    Anything else is returned unchanged, so callers can detect a non-date by
    comparing the result with the input.

    Args:
        date_str: Date string as printed on the statement

    Returns:
        ISO date string, or the input unchanged
    """
    value = date_str.strip()

    match = _FULL_YEAR_RE.fullmatch(value)
    if match:
        day, month, year = match.groups()
        return f"{year}-{month}-{day}"

    match = _SHORT_YEAR_RE.fullmatch(value)
    if match:
        day, month, year = match.groups()
        century = "19" if int(year) > TWO_DIGIT_YEAR_PIVOT else "20"
        return f"{century}{year}-{month}-{day}"

    return date_str


def to_date(iso_str: str) -> Optional[date]:
    """Convert a stored ISO date string to a date.

    Returns None when the string is not a valid calendar date (for instance a
    passthrough value kept from a malformed statement line).
    """
    try:
        return date_parser.isoparse(iso_str).date()
    except (ValueError, TypeError, OverflowError):
        return None


def period_range(year: int, month: Optional[int] = None) -> tuple[str, str]:
    """ISO bounds of a calendar year or month, start inclusive and end exclusive.

    Examples:
        period_range(2024) -> ("2024-01-01", "2025-01-01")
        period_range(2024, 12) -> ("2024-12-01", "2025-01-01")
    """
    if month is None:
        start = date(year, 1, 1)
        end = start + relativedelta(years=1)
    else:
        start = date(year, month, 1)
        end = start + relativedelta(months=1)
    return start.isoformat(), end.isoformat()
