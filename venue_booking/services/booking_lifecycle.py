"""Booking status transitions after creation.

PENDING/CONFIRMED --cancel--> CANCELLED
PENDING --confirm--> CONFIRMED
CONFIRMED --end time elapsed--> COMPLETED (periodic sweep)
"""
import logging
from datetime import timedelta
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from venue_booking.core.clock import SystemClock, local_instant, system_clock
from venue_booking.core.config import settings
from venue_booking.core.database import begin_write
from venue_booking.core.exceptions import InvalidStatusTransition
from venue_booking.models.booking import Booking, BookingStatus
from venue_booking.services import ledger

logger = logging.getLogger(__name__)


async def _transition(
    db: AsyncSession,
    booking_id: int,
    from_statuses: tuple,
    to_status: str,
    **values,
) -> Booking:
    booking = await ledger.get_booking(db, booking_id)
    if booking.status == to_status:
        return booking

    await begin_write(db)
    changed = await ledger.transition_status(
        db, [booking_id], from_statuses, to_status, **values
    )
    await db.commit()
    await db.refresh(booking)

    # A concurrent writer may have moved it to the same target first
    if not changed and booking.status != to_status:
        raise InvalidStatusTransition(
            f"Booking {booking_id} is {booking.status} and cannot become {to_status}"
        )

    if changed:
        logger.info(f"Booking {booking_id} is now {to_status}")
    return booking


async def cancel_booking(
    db: AsyncSession, booking_id: int, clock: SystemClock = system_clock
) -> Booking:
    """
    Cancel an active booking, freeing its range for new reservations.

    Cancelling an already-cancelled booking returns it unchanged.

    Raises:
        BookingNotFound: unknown booking
        InvalidStatusTransition: the booking is COMPLETED
    """
    return await _transition(
        db,
        booking_id,
        BookingStatus.ACTIVE,
        BookingStatus.CANCELLED,
        cancelled_at=clock.now("UTC"),
    )


async def confirm_booking(db: AsyncSession, booking_id: int) -> Booking:
    """Confirm a PENDING booking (e.g. once payment succeeded)."""
    return await _transition(
        db,
        booking_id,
        (BookingStatus.PENDING,),
        BookingStatus.CONFIRMED,
    )


async def complete_elapsed_bookings(
    db: AsyncSession, clock: SystemClock = system_clock
) -> int:
    """
    Mark CONFIRMED bookings whose end has passed as COMPLETED.

    End instants are evaluated in each venue's own timezone. Safe to run
    repeatedly or concurrently: the conditional UPDATE only touches rows
    that are still CONFIRMED.

    Returns:
        Number of bookings completed by this run
    """
    await begin_write(db)
    now = clock.now("UTC")
    # Venues can be up to 14 hours ahead of UTC
    candidates = await ledger.bookings_with_status(
        db, BookingStatus.CONFIRMED, on_or_before=now.date() + timedelta(days=1)
    )

    elapsed = [
        b.id
        for b in candidates
        if local_instant(b.booking_date, b.end_minute, b.venue.timezone) <= now
    ]
    count = await ledger.transition_status(
        db, elapsed, (BookingStatus.CONFIRMED,), BookingStatus.COMPLETED, completed_at=now
    )
    await db.commit()

    if count:
        logger.info(f"Completed {count} elapsed bookings")
    return count


async def expire_stale_pending(
    db: AsyncSession,
    clock: SystemClock = system_clock,
    hold_minutes: Optional[int] = None,
) -> int:
    """
    Cancel PENDING bookings older than the hold window.

    Disabled when the hold window is 0, which keeps PENDING bookings in the
    ledger until they are confirmed or cancelled.

    Returns:
        Number of bookings cancelled by this run
    """
    hold_minutes = settings.PENDING_HOLD_MINUTES if hold_minutes is None else hold_minutes
    if hold_minutes <= 0:
        return 0

    await begin_write(db)
    now = clock.now("UTC")
    stale = await ledger.bookings_with_status(
        db, BookingStatus.PENDING, created_before=now - timedelta(minutes=hold_minutes)
    )
    count = await ledger.transition_status(
        db,
        [b.id for b in stale],
        (BookingStatus.PENDING,),
        BookingStatus.CANCELLED,
        cancelled_at=now,
    )
    await db.commit()

    if count:
        logger.info(f"Expired {count} pending bookings older than {hold_minutes} minutes")
    return count
