"""Availability service composing hours, blocks and bookings into a calendar."""
import logging
from datetime import date, timedelta
from typing import Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from venue_booking.core.clock import SystemClock, system_clock
from venue_booking.core.config import settings
from venue_booking.core.exceptions import InvalidDateRange, InvalidTimeRange
from venue_booking.models.booking import Booking
from venue_booking.models.venue import Venue
from venue_booking.schemas.availability import (
    BookedRange,
    DayAvailability,
    TimeRange,
)
from venue_booking.services import blocked_dates, ledger
from venue_booking.services.calendar_days import (
    format_local_date,
    format_minutes,
    iter_days,
    month_bounds,
    parse_local_date,
    parse_time_of_day,
    weekday_index,
)
from venue_booking.services.intervals import Interval, compute_free_intervals, overlaps
from venue_booking.services.operating_hours import get_hours
from venue_booking.services.slots import count_slots, discretize
from venue_booking.services.venues import get_venue

logger = logging.getLogger(__name__)


class AvailabilityService:
    """Service computing bookable slots on read. Nothing here writes."""

    def __init__(self, clock: SystemClock = system_clock, slot_width: Optional[int] = None):
        self.clock = clock
        self.slot_width = slot_width or settings.SLOT_WIDTH_MINUTES

    def build_day(
        self,
        venue: Venue,
        day: date,
        is_blocked: bool,
        bookings: List[Booking],
    ) -> DayAvailability:
        """
        Resolve one day from data that is already in memory.

        Args:
            venue: Venue with operating hours and minimum duration
            day: Calendar day
            is_blocked: Whether the host blocked this day
            bookings: Active bookings of the venue on this day

        Returns:
            DayAvailability for the day
        """
        date_key = format_local_date(day)

        if is_blocked:
            return DayAvailability(date=date_key, status="blocked")

        hours = get_hours(venue.operating_hours, weekday_index(day))
        if hours.closed:
            return DayAvailability(date=date_key, status="closed")

        booked = [Interval(b.start_minute, b.end_minute) for b in bookings]
        free = compute_free_intervals(
            hours.open,
            hours.close,
            booked,
            min_duration=(venue.min_booking_hours or 0) * 60,
        )
        slots = discretize(free, self.slot_width)

        if not bookings:
            status = "available" if slots else "closed"
        elif slots:
            status = "partially-booked"
        else:
            status = "fully-booked"

        return DayAvailability(
            date=date_key,
            status=status,
            open_time=hours.open_time,
            close_time=hours.close_time,
            slots=[
                TimeRange(start_time=format_minutes(s.start), end_time=format_minutes(s.end))
                for s in slots
            ],
            booked_ranges=[
                BookedRange(
                    start_time=format_minutes(b.start_minute),
                    end_time=format_minutes(b.end_minute),
                    status=b.status,
                )
                for b in sorted(bookings, key=lambda b: b.start_minute)
            ],
            slot_count=count_slots(free, self.slot_width),
        )

    async def get_range_availability(
        self,
        db: AsyncSession,
        venue_id: int,
        start_date,
        end_date,
    ) -> Dict[str, DayAvailability]:
        """
        Get availability for every day in ``[start_date, end_date]``.

        Bookings and blocked dates for the whole range are fetched in two
        queries and indexed by day; each day then resolves in memory.

        Args:
            db: Database session
            venue_id: Venue ID
            start_date: First day (string or date)
            end_date: Last day, inclusive

        Returns:
            Mapping of ``YYYY-MM-DD`` to DayAvailability, in date order
        """
        start = parse_local_date(start_date)
        end = parse_local_date(end_date)
        if end < start:
            raise InvalidDateRange("end_date must be on or after start_date")
        if (end - start).days + 1 > settings.MAX_RANGE_DAYS:
            raise InvalidDateRange(
                f"Range covers more than {settings.MAX_RANGE_DAYS} days"
            )

        venue = await get_venue(db, venue_id)
        bookings_by_day = await ledger.active_bookings_in_range(db, venue_id, start, end)
        blocked = await blocked_dates.blocked_days_in_range(db, venue_id, start, end)

        logger.debug(
            f"Computing availability for venue {venue_id} "
            f"from {format_local_date(start)} to {format_local_date(end)}"
        )

        return {
            format_local_date(day): self.build_day(
                venue, day, day in blocked, bookings_by_day.get(day, [])
            )
            for day in iter_days(start, end)
        }

    async def get_day_availability(
        self, db: AsyncSession, venue_id: int, day
    ) -> DayAvailability:
        """Get availability for a single day."""
        target = parse_local_date(day)
        days = await self.get_range_availability(db, venue_id, target, target)
        return days[format_local_date(target)]

    async def get_month_calendar(
        self, db: AsyncSession, venue_id: int, year: int, month: int
    ) -> Dict[str, DayAvailability]:
        """Get availability for every day of a calendar month."""
        first, last = month_bounds(year, month)
        return await self.get_range_availability(db, venue_id, first, last)

    async def get_upcoming_availability(
        self, db: AsyncSession, venue_id: int, days: Optional[int] = None
    ) -> Dict[str, DayAvailability]:
        """Get availability starting today in the venue's timezone."""
        venue = await get_venue(db, venue_id)
        days = days or settings.DEFAULT_DAYS_AHEAD
        start = self.clock.today(venue.timezone)
        return await self.get_range_availability(
            db, venue_id, start, start + timedelta(days=days - 1)
        )

    async def check_slot_available(
        self,
        db: AsyncSession,
        venue_id: int,
        day,
        start_time: str,
        end_time: str,
    ) -> bool:
        """
        Check whether a range could be booked right now.

        Advisory only: the reservation path re-checks inside its transaction.

        Raises:
            InvalidTimeRange: if the range is malformed or empty
        """
        target = parse_local_date(day)
        start_minute = parse_time_of_day(start_time, allow_end_of_day=False)
        end_minute = parse_time_of_day(end_time)
        if end_minute <= start_minute:
            raise InvalidTimeRange("End time must be after start time")

        venue = await get_venue(db, venue_id)
        return await self._is_range_free(db, venue, target, start_minute, end_minute)

    async def _is_range_free(
        self,
        db: AsyncSession,
        venue: Venue,
        day: date,
        start_minute: int,
        end_minute: int,
    ) -> bool:
        hours = get_hours(venue.operating_hours, weekday_index(day))
        if hours.closed or start_minute < hours.open or end_minute > hours.close:
            return False
        if await blocked_dates.is_blocked(db, venue.id, day):
            return False

        bookings_by_day = await ledger.active_bookings_in_range(db, venue.id, day, day)
        return not any(
            overlaps(start_minute, end_minute, b.start_minute, b.end_minute)
            for b in bookings_by_day.get(day, [])
        )


# Singleton instance
availability_service = AvailabilityService()
