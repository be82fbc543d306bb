"""Blocked date store.

Host-withdrawn days per venue. Writes are idempotent: blocking twice keeps
one record (updating its reason), unblocking a free day is a no-op.
"""
import logging
from datetime import date
from typing import List, Optional, Set

from sqlalchemy import and_, delete, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from venue_booking.core.database import begin_write
from venue_booking.models.blocked_date import BlockedDate
from venue_booking.schemas.blocked_date import BlockState
from venue_booking.services.calendar_days import format_local_date, parse_local_date
from venue_booking.services.venues import get_venue

logger = logging.getLogger(__name__)

_UPSERT_DIALECTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


async def is_blocked(db: AsyncSession, venue_id: int, day: date) -> bool:
    """Exact-match lookup of a blocked day."""
    result = await db.execute(
        select(BlockedDate.id).where(
            and_(BlockedDate.venue_id == venue_id, BlockedDate.date == day)
        )
    )
    return result.first() is not None


async def blocked_days_in_range(
    db: AsyncSession, venue_id: int, start: date, end: date
) -> Set[date]:
    """All blocked days of a venue within ``[start, end]``, in one query."""
    result = await db.execute(
        select(BlockedDate.date).where(
            and_(
                BlockedDate.venue_id == venue_id,
                BlockedDate.date >= start,
                BlockedDate.date <= end,
            )
        )
    )
    return {parse_local_date(row) for row in result.scalars().all()}


async def list_blocked_dates(
    db: AsyncSession,
    venue_id: int,
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> List[BlockedDate]:
    """Blocked date records of a venue, optionally bounded, in date order."""
    conditions = [BlockedDate.venue_id == venue_id]
    if start is not None:
        conditions.append(BlockedDate.date >= start)
    if end is not None:
        conditions.append(BlockedDate.date <= end)

    result = await db.execute(
        select(BlockedDate).where(and_(*conditions)).order_by(BlockedDate.date)
    )
    return list(result.scalars().all())


async def _upsert_block(
    db: AsyncSession, venue_id: int, day: date, reason: Optional[str]
) -> None:
    dialect = db.get_bind().dialect.name
    insert = _UPSERT_DIALECTS.get(dialect)

    if insert is not None:
        statement = insert(BlockedDate).values(venue_id=venue_id, date=day, reason=reason)
        statement = statement.on_conflict_do_update(
            index_elements=[BlockedDate.venue_id, BlockedDate.date],
            set_={"reason": statement.excluded.reason},
        )
        await db.execute(statement)
        return

    # Generic fallback for backends without ON CONFLICT
    result = await db.execute(
        select(BlockedDate).where(
            and_(BlockedDate.venue_id == venue_id, BlockedDate.date == day)
        ).with_for_update()
    )
    record = result.scalar_one_or_none()
    if record:
        record.reason = reason
    else:
        db.add(BlockedDate(venue_id=venue_id, date=day, reason=reason))


async def block(
    db: AsyncSession, venue_id: int, day: date, reason: Optional[str] = None
) -> BlockState:
    """
    Block a day. Re-blocking updates the reason without duplicating.

    The venue row is locked like a reservation, so a block and a booking for
    the same day can never both commit.
    """
    try:
        await begin_write(db)
        await get_venue(db, venue_id, lock=True)
        await _upsert_block(db, venue_id, day, reason)
        await db.commit()
    except Exception:
        await db.rollback()
        raise

    logger.info(f"Blocked {format_local_date(day)} for venue {venue_id}")
    return BlockState(venue_id=venue_id, date=format_local_date(day), blocked=True, reason=reason)


async def unblock(db: AsyncSession, venue_id: int, day: date) -> BlockState:
    """Unblock a day. Unblocking a day that is not blocked succeeds silently."""
    try:
        await begin_write(db)
        await get_venue(db, venue_id)
        result = await db.execute(
            delete(BlockedDate).where(
                and_(BlockedDate.venue_id == venue_id, BlockedDate.date == day)
            )
        )
        await db.commit()
    except Exception:
        await db.rollback()
        raise

    if result.rowcount:
        logger.info(f"Unblocked {format_local_date(day)} for venue {venue_id}")
    else:
        logger.debug(f"{format_local_date(day)} was not blocked for venue {venue_id}")
    return BlockState(venue_id=venue_id, date=format_local_date(day), blocked=False)


async def toggle_block(
    db: AsyncSession, venue_id: int, day: date, reason: Optional[str] = None
) -> BlockState:
    """Flip the block state of a day; an absent record becomes blocked."""
    try:
        await begin_write(db)
        await get_venue(db, venue_id, lock=True)
        result = await db.execute(
            delete(BlockedDate).where(
                and_(BlockedDate.venue_id == venue_id, BlockedDate.date == day)
            )
        )
        blocked = not result.rowcount
        if blocked:
            await _upsert_block(db, venue_id, day, reason)
        await db.commit()
    except Exception:
        await db.rollback()
        raise

    if not blocked:
        logger.info(f"Toggled {format_local_date(day)} to unblocked for venue {venue_id}")
        return BlockState(venue_id=venue_id, date=format_local_date(day), blocked=False)

    logger.info(f"Toggled {format_local_date(day)} to blocked for venue {venue_id}")
    return BlockState(venue_id=venue_id, date=format_local_date(day), blocked=True, reason=reason)
