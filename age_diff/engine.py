"""Calendar arithmetic for the age breakdown.

``compute_age_breakdown`` is a pure function of two naive local datetimes.
It has no I/O and no shared state, so it is safe to call from any thread.

Two kinds of numbers are produced for each direction:

* components: a borrow-normalised calendar breakdown
  (``26 years, 5 months, 14 days, ...``);
* totals: the whole duration re-expressed independently in each unit and
  truncated, so the units overlap and are not summable.
"""

import datetime
import logging

from age_diff.dates import days_in_month, format_date, previous_month
from age_diff.models import (
    AgeResult,
    BirthdayResult,
    CountdownComponents,
    CountdownTotals,
    SinceBirth,
    SinceBirthComponents,
    SinceBirthTotals,
    UntilNextBirthday,
    UpcomingBirthdayResult,
)

logger: logging.Logger = logging.getLogger(__name__)

SECOND = datetime.timedelta(seconds=1)
MINUTE = datetime.timedelta(minutes=1)
HOUR = datetime.timedelta(hours=1)
DAY = datetime.timedelta(days=1)


def since_birth_components(
    birth: datetime.datetime, reference: datetime.datetime
) -> SinceBirthComponents:
    """Field-wise subtraction followed by a right-to-left borrow cascade.

    A negative day field borrows the length of the month preceding the
    *reference* month.  When one borrow is not enough (birth on the 31st,
    reference early in March) the borrow walks further back a month at a time.
    """
    years = reference.year - birth.year
    months = reference.month - birth.month
    days = reference.day - birth.day
    hours = reference.hour - birth.hour
    minutes = reference.minute - birth.minute
    seconds = reference.second - birth.second

    if seconds < 0:
        seconds += 60
        minutes -= 1
    if minutes < 0:
        minutes += 60
        hours -= 1
    if hours < 0:
        hours += 24
        days -= 1

    borrow_year, borrow_month = reference.year, reference.month
    while days < 0:
        borrow_year, borrow_month = previous_month(borrow_year, borrow_month)
        days += days_in_month(borrow_year, borrow_month)
        months -= 1

    if months < 0:
        months += 12
        years -= 1

    return SinceBirthComponents(
        years=years,
        months=months,
        days=days,
        hours=hours,
        minutes=minutes,
        seconds=seconds,
    )


def total_months_between(birth: datetime.datetime, reference: datetime.datetime) -> int:
    """Full calendar months elapsed, minus one while the day-of-month is not yet reached."""
    months = (reference.year - birth.year) * 12 + (reference.month - birth.month)
    if reference.day < birth.day:
        months -= 1
    return months


def since_birth_totals(
    birth: datetime.datetime,
    reference: datetime.datetime,
    components: SinceBirthComponents,
) -> SinceBirthTotals:
    diff = reference - birth
    return SinceBirthTotals(
        years=components.years,
        months=total_months_between(birth, reference),
        days=diff // DAY,
        hours=diff // HOUR,
        minutes=diff // MINUTE,
        seconds=diff // SECOND,
    )


def is_birthday(birth: datetime.date, reference: datetime.date) -> bool:
    """Month and day match.  Time of day is irrelevant."""
    return (reference.month, reference.day) == (birth.month, birth.day)


def _birthday_in_year(birth: datetime.date, year: int) -> datetime.datetime:
    # 29 February in a common year overflows to 1 March.
    if birth.month == 2 and birth.day == 29 and days_in_month(year, 2) == 28:
        return datetime.datetime(year, 3, 1)
    return datetime.datetime(year, birth.month, birth.day)


def next_birthday(birth: datetime.date, reference: datetime.datetime) -> datetime.datetime:
    """Midnight of the next birthday strictly after ``reference``."""
    candidate = _birthday_in_year(birth, reference.year)
    if candidate <= reference:
        candidate = _birthday_in_year(birth, reference.year + 1)
    return candidate


def countdown_components(
    reference: datetime.datetime, target: datetime.datetime
) -> CountdownComponents:
    """Forward countdown from ``reference`` to midnight of ``target``.

    Uses the same borrow cascade as the since-birth breakdown, with the day
    borrow taken from the length of the reference's own month and no years
    field: a negative month count simply wraps by 12.
    """
    months = target.month - reference.month
    days = target.day - reference.day
    hours = -reference.hour
    minutes = -reference.minute
    seconds = -reference.second

    if seconds < 0:
        seconds += 60
        minutes -= 1
    if minutes < 0:
        minutes += 60
        hours -= 1
    if hours < 0:
        hours += 24
        days -= 1
    if days < 0:
        days += days_in_month(reference.year, reference.month)
        months -= 1
    if months < 0:
        months += 12
    elif months == 0 and target.year > reference.year and target.month == reference.month:
        # 29 February overflowed onto this same date one year ahead.
        months = 12

    return CountdownComponents(
        months=months,
        days=days,
        hours=hours,
        minutes=minutes,
        seconds=seconds,
    )


def countdown_totals(
    reference: datetime.datetime,
    target: datetime.datetime,
    components: CountdownComponents,
) -> CountdownTotals:
    diff = target - reference
    return CountdownTotals(
        months=components.months,
        days=diff // DAY,
        hours=diff // HOUR,
        minutes=diff // MINUTE,
        seconds=diff // SECOND,
    )


def format_timestamp(reference: datetime.datetime) -> str:
    """ISO-8601 timestamp of a local instant, including the host's UTC offset."""
    return reference.astimezone().isoformat(timespec="seconds")


def compute_age_breakdown(
    birth: datetime.datetime, reference: datetime.datetime
) -> AgeResult:
    """Compute the full age breakdown of ``birth`` as seen at ``reference``.

    Args:
        birth: Birth instant (local wall-clock, usually midnight of the birth date).
        reference: The "now" instant.  Must not be before ``birth``.

    Returns:
        A ``BirthdayResult`` when month and day match, otherwise an
        ``UpcomingBirthdayResult`` carrying the countdown to the next birthday.

    Raises:
        ValueError: If ``reference`` is before ``birth``.
    """
    if reference < birth:
        raise ValueError("reference must not be before birth.")

    components = since_birth_components(birth, reference)
    since = SinceBirth(
        components=components,
        totals=since_birth_totals(birth, reference, components),
    )
    common = {
        "birthday": format_date(birth),
        "calculated_at": format_timestamp(reference),
        "since_birth": since,
    }

    if is_birthday(birth, reference):
        logger.debug("Reference falls on the birthday; turning %d", components.years)
        return BirthdayResult(turning_age=components.years, **common)

    target = next_birthday(birth, reference)
    countdown = countdown_components(reference, target)
    return UpcomingBirthdayResult(
        until_next_birthday=UntilNextBirthday(
            components=countdown,
            totals=countdown_totals(reference, target, countdown),
        ),
        next_birthday_date=format_date(target),
        **common,
    )
