"""Reservation service: the only path that creates bookings."""
import logging
from datetime import date

from sqlalchemy.ext.asyncio import AsyncSession

from venue_booking.core.clock import SystemClock, local_instant, system_clock
from venue_booking.core.database import begin_write
from venue_booking.core.exceptions import (
    BookingEngineError,
    DateBlocked,
    InvalidGuestCount,
    InvalidTimeRange,
    SelfBookingNotAllowed,
    SlotConflict,
)
from venue_booking.models.booking import Booking, BookingStatus
from venue_booking.models.venue import Venue
from venue_booking.services import blocked_dates, ledger
from venue_booking.services.calendar_days import (
    format_local_date,
    format_minutes,
    parse_local_date,
    parse_time_of_day,
    weekday_index,
)
from venue_booking.services.operating_hours import get_hours
from venue_booking.services.venues import get_venue

logger = logging.getLogger(__name__)


class ReservationService:
    """Service committing new bookings under the no-overlap rule."""

    def __init__(self, clock: SystemClock = system_clock):
        self.clock = clock

    async def reserve(
        self,
        db: AsyncSession,
        venue_id: int,
        requester_id: int,
        day,
        start_time: str,
        end_time: str,
        guests: int = 1,
    ) -> Booking:
        """
        Reserve ``[start_time, end_time)`` on ``day`` for a guest.

        Input and venue-rule validation happens first, outside any write.
        The commit path then runs as one transaction: lock the venue row,
        re-read blocks and overlapping active bookings, insert. Whatever an
        earlier availability read said, the in-transaction check decides.

        The session's current transaction is committed before the commit
        path starts, so callers must not leave unrelated pending changes in it.

        Args:
            db: Database session
            venue_id: Venue ID
            requester_id: Guest user ID
            day: Calendar day (string or date)
            start_time: Start, HH:MM
            end_time: End, HH:MM (24:00 allowed)
            guests: Party size

        Returns:
            The created booking

        Raises:
            InvalidDateFormat, InvalidTimeRange, InvalidGuestCount,
            SelfBookingNotAllowed: before any write
            ResourceNotFound: unknown venue
            DateBlocked, SlotConflict: detected inside the transaction
        """
        target = parse_local_date(day)
        start_minute = parse_time_of_day(start_time, allow_end_of_day=False)
        end_minute = parse_time_of_day(end_time)
        if end_minute <= start_minute:
            raise InvalidTimeRange("End time must be after start time")

        venue = await get_venue(db, venue_id)
        self._validate_request(venue, requester_id, target, start_minute, end_minute, guests)

        label = (
            f"venue {venue_id} on {format_local_date(target)} "
            f"{format_minutes(start_minute)}-{format_minutes(end_minute)}"
        )

        try:
            await begin_write(db)
            venue = await get_venue(db, venue_id, lock=True)

            if await blocked_dates.is_blocked(db, venue_id, target):
                raise DateBlocked(f"{format_local_date(target)} is not available for booking")

            conflicts = await ledger.find_conflicts(
                db, venue_id, target, start_minute, end_minute
            )
            if conflicts:
                raise SlotConflict(
                    "This time slot is no longer available. Please choose another time."
                )

            status = BookingStatus.CONFIRMED if venue.instant_booking else BookingStatus.PENDING
            booking = ledger.insert_booking(
                db,
                venue_id=venue_id,
                guest_id=requester_id,
                day=target,
                start_minute=start_minute,
                end_minute=end_minute,
                guests=guests,
                status=status,
                created_at=self.clock.now("UTC"),
            )
            await db.commit()

        except BookingEngineError as e:
            await db.rollback()
            logger.warning(f"Rejected reservation for {label}: {e.message}")
            raise
        except Exception:
            await db.rollback()
            raise

        logger.info(f"Created {booking.status} booking {booking.id} for {label}")
        return booking

    def _validate_request(
        self,
        venue: Venue,
        requester_id: int,
        day: date,
        start_minute: int,
        end_minute: int,
        guests: int,
    ) -> None:
        """Check the request against the venue's rules. No I/O."""
        if venue.owner_id == requester_id:
            raise SelfBookingNotAllowed("You cannot book your own venue")

        hours = get_hours(venue.operating_hours, weekday_index(day))
        if hours.closed:
            raise InvalidTimeRange(f"Venue is closed on {format_local_date(day)}")
        if start_minute < hours.open or end_minute > hours.close:
            raise InvalidTimeRange(
                f"Booking must be within operating hours ({hours.open_time} - {hours.close_time})"
            )

        duration = end_minute - start_minute
        min_minutes = (venue.min_booking_hours or 0) * 60
        if duration < min_minutes:
            raise InvalidTimeRange(f"Minimum booking duration is {venue.min_booking_hours} hours")
        if venue.max_booking_hours and duration > venue.max_booking_hours * 60:
            raise InvalidTimeRange(f"Maximum booking duration is {venue.max_booking_hours} hours")

        if guests < 1:
            raise InvalidGuestCount("At least one guest is required")
        if venue.min_guests and guests < venue.min_guests:
            raise InvalidGuestCount(f"Minimum {venue.min_guests} guests required")
        if venue.max_guests and guests > venue.max_guests:
            raise InvalidGuestCount(f"Maximum {venue.max_guests} guests allowed")

        starts_at = local_instant(day, start_minute, venue.timezone)
        if starts_at <= self.clock.now(venue.timezone):
            raise InvalidTimeRange("Cannot book a time that has already started")


# Singleton instance
reservation_service = ReservationService()
