"""Per-weekday operating hours lookup."""
import logging
from typing import Any, Dict, NamedTuple, Optional

from venue_booking.core.exceptions import InvalidTimeRange
from venue_booking.services.calendar_days import (
    MINUTES_PER_DAY,
    WEEKDAY_NAMES,
    format_minutes,
    parse_time_of_day,
)

logger = logging.getLogger(__name__)


class DayHours(NamedTuple):
    """Operating window of one weekday, in minutes since midnight."""

    open: int
    close: int
    closed: bool

    @property
    def open_time(self) -> Optional[str]:
        return None if self.closed else format_minutes(self.open)

    @property
    def close_time(self) -> Optional[str]:
        return None if self.closed else format_minutes(self.close)


CLOSED = DayHours(open=0, close=0, closed=True)


def parse_day_hours(entry: Optional[Dict[str, Any]]) -> DayHours:
    """
    Parse one operating-hours entry.

    Accepted shapes: ``{"open": "08:00", "close": "20:00"}``,
    ``{"closed": true}`` and ``{"is_24_hours": true}``.

    Raises:
        InvalidTimeRange: if the times are malformed or ``open >= close``
    """
    if entry is not None and not isinstance(entry, dict):
        raise InvalidTimeRange(f"Operating hours entry must be an object, got {entry!r}")
    if not entry or entry.get("closed"):
        return CLOSED
    if entry.get("is_24_hours"):
        return DayHours(open=0, close=MINUTES_PER_DAY, closed=False)

    open_raw, close_raw = entry.get("open"), entry.get("close")
    if open_raw is None or close_raw is None:
        raise InvalidTimeRange(f"Operating hours need both open and close: {entry!r}")

    open_minute = parse_time_of_day(open_raw, allow_end_of_day=False)
    close_minute = parse_time_of_day(close_raw)
    if open_minute >= close_minute:
        raise InvalidTimeRange(f"Opening time {open_raw} must be before closing time {close_raw}")
    return DayHours(open=open_minute, close=close_minute, closed=False)


def get_hours(operating_hours: Optional[Dict[str, Any]], weekday: int) -> DayHours:
    """
    Look up the operating window for a weekday (0 = Sunday).

    Missing configuration means closed. A broken entry is logged and also
    treated as closed so one bad weekday never fails a whole calendar read.
    """
    if not 0 <= weekday <= 6:
        raise ValueError(f"Weekday index must be 0-6, got {weekday}")

    day_name = WEEKDAY_NAMES[weekday]
    entry = (operating_hours or {}).get(day_name)
    try:
        return parse_day_hours(entry)
    except InvalidTimeRange as e:
        logger.error(f"Invalid operating hours for {day_name}: {e}")
        return CLOSED
