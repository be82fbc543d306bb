"""Calendar day and time-of-day normalization.

A calendar day is a plain ``datetime.date``: it carries no time or timezone,
so it cannot drift across midnight when converted. Times of day are integer
minutes since local midnight, with 1440 ("24:00") allowed as an end bound.
"""
import calendar
import re
from datetime import date, datetime, timedelta
from typing import Iterator, List, Union

from venue_booking.core.exceptions import InvalidDateFormat, InvalidTimeRange

MINUTES_PER_DAY = 24 * 60

# Sunday-first weekday names; index 0 is Sunday everywhere in the engine
WEEKDAY_NAMES = (
    "sunday",
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
)

_DATE_RE = re.compile(
    r"^(\d{4})-(\d{2})-(\d{2})"
    r"(?:[T ]\d{2}:\d{2}(?::\d{2}(?:\.\d+)?)?(?:Z|[+-]\d{2}:?\d{2})?)?$"
)
_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})$")


def parse_local_date(value: Union[str, date]) -> date:
    """
    Parse a ``YYYY-MM-DD`` string into a calendar day.

    A trailing ISO time part (``2025-06-10T00:00:00Z``) is ignored; the literal
    date digits are kept and never shifted through UTC conversion. ``date``
    and ``datetime`` inputs are accepted and reduced to their own date. Any
    other trailing text makes the value invalid.

    Raises:
        InvalidDateFormat: if the value is not a valid calendar date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise InvalidDateFormat(f"Invalid date: {value!r}. Expected YYYY-MM-DD")

    match = _DATE_RE.match(value.strip())
    if not match:
        raise InvalidDateFormat(f"Invalid date format: {value!r}. Expected YYYY-MM-DD")

    year, month, day = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError as e:
        raise InvalidDateFormat(f"Invalid date {value!r}: {e}") from None


def format_local_date(day: date) -> str:
    """Format a calendar day as ``YYYY-MM-DD``."""
    return f"{day.year:04d}-{day.month:02d}-{day.day:02d}"


def weekday_index(day: date) -> int:
    """Weekday of a calendar day with 0 = Sunday ... 6 = Saturday."""
    return (day.weekday() + 1) % 7


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every day from ``start`` to ``end``, both inclusive."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def month_bounds(year: int, month: int) -> tuple:
    """First and last calendar day of a month."""
    if not 1 <= month <= 12:
        raise InvalidDateFormat(f"Invalid month: {month}")
    try:
        last_day = calendar.monthrange(year, month)[1]
        return date(year, month, 1), date(year, month, last_day)
    except ValueError as e:
        raise InvalidDateFormat(f"Invalid year {year}: {e}") from None


def month_days(year: int, month: int) -> List[date]:
    """Every day belonging to the calendar month, first and last included."""
    first, last = month_bounds(year, month)
    return list(iter_days(first, last))


def parse_time_of_day(value: str, allow_end_of_day: bool = True) -> int:
    """
    Parse ``HH:MM`` into minutes since midnight.

    ``24:00`` is accepted as the end-of-day bound when ``allow_end_of_day``.

    Raises:
        InvalidTimeRange: on malformed or out-of-range values
    """
    match = _TIME_RE.match(value.strip()) if isinstance(value, str) else None
    if not match:
        raise InvalidTimeRange(f"Invalid time {value!r}. Expected HH:MM")

    hours, minutes = int(match.group(1)), int(match.group(2))
    total = hours * 60 + minutes
    if minutes >= 60 or total > MINUTES_PER_DAY:
        raise InvalidTimeRange(f"Invalid time {value!r}")
    if total == MINUTES_PER_DAY and not allow_end_of_day:
        raise InvalidTimeRange(f"Invalid time {value!r}: 24:00 only allowed as an end time")
    return total


def format_minutes(minutes: int) -> str:
    """Format minutes since midnight as ``HH:MM`` (1440 -> ``24:00``)."""
    return f"{minutes // 60:02d}:{minutes % 60:02d}"
