"""Boundary validation of a user-supplied birthday.

Checks run in a fixed order: missing, malformed, calendar-invalid, in the
future.  Only input that passes all four reaches the engine.
"""

import datetime
import logging

from age_diff.dates import DATE_PATTERN, validate_calendar_date
from age_diff.errors import (
    BirthdayCalendarInvalidError,
    BirthdayInFutureError,
    BirthdayMalformedError,
    BirthdayMissingError,
)

logger: logging.Logger = logging.getLogger(__name__)

_MAX_DATE_LEN = 10


def parse_birthday(raw: str | None, now: datetime.datetime) -> datetime.datetime:
    """Validate ``raw`` and return the birth instant at local midnight.

    Args:
        raw: The birthday text as received from the caller, or None.
        now: The reference instant the birthday must not be after.

    Returns:
        Midnight of the birth date as a naive local datetime.

    Raises:
        BirthdayMissingError: ``raw`` is None or empty.
        BirthdayMalformedError: ``raw`` is not exactly ``YYYY-MM-DD``.
        BirthdayCalendarInvalidError: The date does not exist (e.g. Feb 30).
        BirthdayInFutureError: The birth instant is after ``now``.
    """
    if not raw:
        raise BirthdayMissingError()
    if not isinstance(raw, str) or len(raw) > _MAX_DATE_LEN:
        raise BirthdayMalformedError()

    # log the input length, not the raw value
    logger.debug("parse_birthday called with %d-char input", len(raw))

    match = DATE_PATTERN.fullmatch(raw)
    if match is None:
        raise BirthdayMalformedError()

    year, month, day = (int(part) for part in match.groups())
    if not validate_calendar_date(year, month, day):
        raise BirthdayCalendarInvalidError()

    birth = datetime.datetime(year, month, day)
    if birth > now:
        raise BirthdayInFutureError()
    return birth
