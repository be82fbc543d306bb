"""Booking ledger access.

The ledger of a venue is its set of active (PENDING or CONFIRMED) bookings.
Cancelled and completed bookings stay in the table as history but never take
part in conflict checks.
"""
import logging
from collections import defaultdict
from datetime import date, datetime
from typing import Dict, Iterable, List, Optional

from sqlalchemy import and_, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from venue_booking.core.exceptions import BookingNotFound
from venue_booking.models.booking import Booking, BookingStatus
from venue_booking.models.venue import Venue
from venue_booking.services.calendar_days import parse_local_date

logger = logging.getLogger(__name__)


async def get_booking(db: AsyncSession, booking_id: int) -> Booking:
    """Load a booking by id or raise BookingNotFound."""
    result = await db.execute(select(Booking).where(Booking.id == booking_id))
    booking = result.scalar_one_or_none()

    if not booking:
        raise BookingNotFound(f"Booking {booking_id} not found")
    return booking


async def list_bookings(
    db: AsyncSession,
    venue_id: Optional[int] = None,
    guest_id: Optional[int] = None,
    owner_id: Optional[int] = None,
    statuses: Optional[Iterable[str]] = None,
) -> List[Booking]:
    """
    List bookings, newest day first.

    Args:
        db: Database session
        venue_id: Only bookings of this venue
        guest_id: Only bookings made by this guest
        owner_id: Only bookings of venues owned by this host
        statuses: Only bookings in one of these statuses; all when omitted

    Returns:
        Matching bookings ordered by day, then start time, descending
    """
    query = select(Booking)
    conditions = []
    if venue_id is not None:
        conditions.append(Booking.venue_id == venue_id)
    if guest_id is not None:
        conditions.append(Booking.guest_id == guest_id)
    if owner_id is not None:
        query = query.join(Venue, Venue.id == Booking.venue_id)
        conditions.append(Venue.owner_id == owner_id)
    if statuses:
        conditions.append(Booking.status.in_(tuple(statuses)))

    if conditions:
        query = query.where(and_(*conditions))
    result = await db.execute(
        query.order_by(Booking.booking_date.desc(), Booking.start_minute.desc())
    )
    return list(result.scalars().all())


async def active_bookings_in_range(
    db: AsyncSession, venue_id: int, start: date, end: date
) -> Dict[date, List[Booking]]:
    """
    Fetch all active bookings of a venue in ``[start, end]`` with one query.

    Returns:
        Bookings grouped by calendar day, each list in start order
    """
    result = await db.execute(
        select(Booking)
        .where(
            and_(
                Booking.venue_id == venue_id,
                Booking.booking_date >= start,
                Booking.booking_date <= end,
                Booking.status.in_(BookingStatus.ACTIVE),
            )
        )
        .order_by(Booking.booking_date, Booking.start_minute)
    )

    by_day: Dict[date, List[Booking]] = defaultdict(list)
    for booking in result.scalars().all():
        by_day[parse_local_date(booking.booking_date)].append(booking)
    return by_day


async def find_conflicts(
    db: AsyncSession,
    venue_id: int,
    day: date,
    start_minute: int,
    end_minute: int,
) -> List[Booking]:
    """Active bookings on the day that overlap ``[start_minute, end_minute)``."""
    result = await db.execute(
        select(Booking).where(
            and_(
                Booking.venue_id == venue_id,
                Booking.booking_date == day,
                Booking.status.in_(BookingStatus.ACTIVE),
                Booking.start_minute < end_minute,
                Booking.end_minute > start_minute,
            )
        )
    )
    return list(result.scalars().all())


def insert_booking(
    db: AsyncSession,
    venue_id: int,
    guest_id: int,
    day: date,
    start_minute: int,
    end_minute: int,
    guests: int,
    status: str,
    created_at: datetime,
) -> Booking:
    """Stage a new booking in the session; the caller commits."""
    booking = Booking(
        venue_id=venue_id,
        guest_id=guest_id,
        booking_date=day,
        start_minute=start_minute,
        end_minute=end_minute,
        guests=guests,
        status=status,
        created_at=created_at,
    )
    db.add(booking)
    return booking


async def transition_status(
    db: AsyncSession,
    booking_ids: Iterable[int],
    from_statuses: Iterable[str],
    to_status: str,
    **values,
) -> int:
    """
    Move bookings to ``to_status`` if they are currently in ``from_statuses``.

    Runs as a single conditional UPDATE, so a concurrent transition of the
    same booking can never apply twice. Does not commit.

    Returns:
        Number of bookings that changed
    """
    ids = list(booking_ids)
    if not ids:
        return 0

    result = await db.execute(
        update(Booking)
        .where(
            and_(
                Booking.id.in_(ids),
                Booking.status.in_(tuple(from_statuses)),
            )
        )
        .values(status=to_status, **values)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount


async def bookings_with_status(
    db: AsyncSession,
    status: str,
    on_or_before: Optional[date] = None,
    created_before: Optional[datetime] = None,
) -> List[Booking]:
    """Bookings in a given status with their venue loaded, for the periodic sweeps."""
    conditions = [Booking.status == status]
    if on_or_before is not None:
        conditions.append(Booking.booking_date <= on_or_before)
    if created_before is not None:
        conditions.append(Booking.created_at < created_before)

    result = await db.execute(
        select(Booking)
        .options(selectinload(Booking.venue))
        .where(and_(*conditions))
    )
    return list(result.scalars().all())
