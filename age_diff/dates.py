"""Canonical ``YYYY-MM-DD`` formatting, parsing and calendar checks.

All functions work on local calendar fields only.  No time-zone conversion
happens anywhere in this module.
"""

import calendar
import datetime
import re

DATE_PATTERN: re.Pattern[str] = re.compile(r"([0-9]{4})-([0-9]{2})-([0-9]{2})")


class InvalidDateFormatError(ValueError):
    """Raised when text does not have the exact ``YYYY-MM-DD`` shape."""


def local_now() -> datetime.datetime:
    """Local wall-clock "now", truncated to whole seconds."""
    return datetime.datetime.now().replace(microsecond=0)


def format_date(instant: datetime.date) -> str:
    """Format the calendar fields of a date or datetime as ``YYYY-MM-DD``."""
    return f"{instant.year:04d}-{instant.month:02d}-{instant.day:02d}"


def parse_date(text: str) -> datetime.date:
    """Parse a ``YYYY-MM-DD`` string into a ``datetime.date``.

    Args:
        text: Exactly four digits, a hyphen, two digits, a hyphen, two digits.

    Returns:
        The parsed date.

    Raises:
        InvalidDateFormatError: If the text does not have the expected shape.
        ValueError: If the shape is right but the date does not exist on the
            calendar (e.g. ``2000-02-30``).
    """
    match = DATE_PATTERN.fullmatch(text) if isinstance(text, str) else None
    if match is None:
        raise InvalidDateFormatError("Date must be in YYYY-MM-DD format.")

    year, month, day = (int(part) for part in match.groups())
    if not validate_calendar_date(year, month, day):
        raise ValueError("Date does not exist on the calendar.")
    return datetime.date(year, month, day)


def validate_calendar_date(year: int, month: int, day: int) -> bool:
    """Return True iff ``(year, month, day)`` round-trips through a real date.

    Catches Feb 30, month 13, Apr 31 and Feb 29 outside leap years.
    """
    try:
        candidate = datetime.date(year, month, day)
    except ValueError:
        return False
    return (candidate.year, candidate.month, candidate.day) == (year, month, day)


def days_in_month(year: int, month: int) -> int:
    """Number of days in ``month`` of ``year`` (month is 1-12)."""
    return calendar.monthrange(year, month)[1]


def previous_month(year: int, month: int) -> tuple[int, int]:
    """The ``(year, month)`` immediately before the given month."""
    if month == 1:
        return year - 1, 12
    return year, month - 1
