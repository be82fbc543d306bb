"""Injectable clocks.

Every "what time is it" question in the engine goes through a clock object so
past-date checks, default ranges and the completion sweep can be tested with a
frozen instant.
"""
from datetime import date, datetime, time, timedelta
from typing import Optional

import pytz

from venue_booking.core.config import settings


def venue_timezone(name: Optional[str]):
    """Resolve a venue timezone name, falling back to the configured default."""
    return pytz.timezone(name or settings.DEFAULT_TIMEZONE)


def local_instant(day: date, minute: int, tz_name: Optional[str] = None) -> datetime:
    """
    Aware instant of ``minute`` past local midnight on ``day``.

    The wall-clock time is localized, not offset from midnight, so days with
    a DST transition still map 10:00 to 10:00. Minute 1440 is the next midnight.
    """
    day = day + timedelta(days=minute // (24 * 60))
    minute = minute % (24 * 60)
    wall = datetime.combine(day, time(minute // 60, minute % 60))
    return venue_timezone(tz_name).localize(wall)


class SystemClock:
    """Clock backed by the real system time."""

    def now(self, tz_name: Optional[str] = None) -> datetime:
        """Current instant, expressed in the given timezone."""
        return datetime.now(pytz.UTC).astimezone(venue_timezone(tz_name))

    def today(self, tz_name: Optional[str] = None) -> date:
        """Calendar day of the current instant in the given timezone."""
        return self.now(tz_name).date()


class FixedClock(SystemClock):
    """Clock frozen at a given instant. Naive instants are taken as UTC."""

    def __init__(self, instant: datetime):
        if instant.tzinfo is None:
            instant = pytz.UTC.localize(instant)
        self.instant = instant

    def now(self, tz_name: Optional[str] = None) -> datetime:
        return self.instant.astimezone(venue_timezone(tz_name))


system_clock = SystemClock()
