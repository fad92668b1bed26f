"""age_diff: calendar-accurate age breakdown and next-birthday countdown.

Public API
----------
compute_age_breakdown
    Pure function mapping (birth, reference) to an ``AgeResult``.
format_date / parse_date / validate_calendar_date
    Canonical ``YYYY-MM-DD`` helpers.

Example
-------
>>> import datetime
>>> from age_diff import compute_age_breakdown
>>> result = compute_age_breakdown(
...     datetime.datetime(2000, 1, 1), datetime.datetime(2026, 6, 15, 10, 30, 45)
... )
>>> result.since_birth.components.years
26
"""

from age_diff.dates import format_date, parse_date, validate_calendar_date
from age_diff.engine import compute_age_breakdown
from age_diff.models import AgeResult, BirthdayResult, UpcomingBirthdayResult

__all__: list[str] = [
    "AgeResult",
    "BirthdayResult",
    "UpcomingBirthdayResult",
    "compute_age_breakdown",
    "format_date",
    "parse_date",
    "validate_calendar_date",
]
