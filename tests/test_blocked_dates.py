"""Tests for the blocked date store."""
import asyncio
from datetime import date

import pytest
from sqlalchemy import func, select

from venue_booking.core.exceptions import DateBlocked, ResourceNotFound
from venue_booking.models.blocked_date import BlockedDate
from venue_booking.models.booking import Booking
from venue_booking.services import blocked_dates
from venue_booking.services.reservation_service import ReservationService

from tests.conftest import BOOKING_DAY, GUEST_ID, make_venue


async def count_records(db, venue_id) -> int:
    result = await db.execute(
        select(func.count(BlockedDate.id)).where(BlockedDate.venue_id == venue_id)
    )
    return result.scalar_one()


@pytest.mark.asyncio
async def test_block_then_lookup(db):
    venue = await make_venue(db)

    state = await blocked_dates.block(db, venue.id, BOOKING_DAY, "Maintenance")

    assert state.blocked is True
    assert state.date == "2025-06-10"
    assert state.reason == "Maintenance"
    assert await blocked_dates.is_blocked(db, venue.id, BOOKING_DAY)
    assert not await blocked_dates.is_blocked(db, venue.id, date(2025, 6, 11))


@pytest.mark.asyncio
async def test_block_twice_keeps_one_record(db):
    venue = await make_venue(db)

    await blocked_dates.block(db, venue.id, BOOKING_DAY, "Maintenance")
    await blocked_dates.block(db, venue.id, BOOKING_DAY, "Private event")

    records = await blocked_dates.list_blocked_dates(db, venue.id)
    assert len(records) == 1
    assert records[0].reason == "Private event"


@pytest.mark.asyncio
async def test_unblock_is_idempotent(db):
    venue = await make_venue(db)
    await blocked_dates.block(db, venue.id, BOOKING_DAY)

    first = await blocked_dates.unblock(db, venue.id, BOOKING_DAY)
    second = await blocked_dates.unblock(db, venue.id, BOOKING_DAY)

    assert first.blocked is False
    assert second.blocked is False
    assert not await blocked_dates.is_blocked(db, venue.id, BOOKING_DAY)
    assert await count_records(db, venue.id) == 0


@pytest.mark.asyncio
async def test_toggle_creates_then_removes(db):
    venue = await make_venue(db)

    on = await blocked_dates.toggle_block(db, venue.id, BOOKING_DAY, "Holiday")
    assert on.blocked is True
    assert await blocked_dates.is_blocked(db, venue.id, BOOKING_DAY)

    off = await blocked_dates.toggle_block(db, venue.id, BOOKING_DAY)
    assert off.blocked is False
    assert not await blocked_dates.is_blocked(db, venue.id, BOOKING_DAY)


@pytest.mark.asyncio
async def test_blocks_are_per_venue(db):
    first = await make_venue(db)
    second = await make_venue(db, name="Hilltop Studio")

    await blocked_dates.block(db, first.id, BOOKING_DAY)

    assert await blocked_dates.is_blocked(db, first.id, BOOKING_DAY)
    assert not await blocked_dates.is_blocked(db, second.id, BOOKING_DAY)


@pytest.mark.asyncio
async def test_range_lookup_and_listing(db):
    venue = await make_venue(db)
    for day in (date(2025, 5, 31), date(2025, 6, 1), date(2025, 6, 30), date(2025, 7, 1)):
        await blocked_dates.block(db, venue.id, day)

    in_june = await blocked_dates.blocked_days_in_range(
        db, venue.id, date(2025, 6, 1), date(2025, 6, 30)
    )
    assert in_june == {date(2025, 6, 1), date(2025, 6, 30)}

    listed = await blocked_dates.list_blocked_dates(db, venue.id, start=date(2025, 6, 1))
    assert [record.date for record in listed] == [
        date(2025, 6, 1),
        date(2025, 6, 30),
        date(2025, 7, 1),
    ]


@pytest.mark.asyncio
async def test_unknown_venue(db):
    with pytest.raises(ResourceNotFound):
        await blocked_dates.block(db, 999, BOOKING_DAY)
    with pytest.raises(ResourceNotFound):
        await blocked_dates.toggle_block(db, 999, BOOKING_DAY)


@pytest.mark.asyncio
async def test_block_writes_lock_the_venue_row(db, monkeypatch):
    venue = await make_venue(db)
    locks = []
    load_venue = blocked_dates.get_venue

    async def recording_get_venue(session, venue_id, lock=False):
        locks.append(lock)
        return await load_venue(session, venue_id, lock=lock)

    monkeypatch.setattr(blocked_dates, "get_venue", recording_get_venue)

    await blocked_dates.block(db, venue.id, BOOKING_DAY)
    await blocked_dates.toggle_block(db, venue.id, date(2025, 6, 11))

    assert locks == [True, True]


@pytest.mark.asyncio
async def test_block_racing_a_reservation(session_factory, clock):
    """Either order commits cleanly and the day ends up blocked."""
    async with session_factory() as db:
        venue = await make_venue(db)
    service = ReservationService(clock=clock)

    async def reserve():
        async with session_factory() as session:
            return await service.reserve(session, venue.id, GUEST_ID, BOOKING_DAY, "10:00", "12:00")

    async def block():
        async with session_factory() as session:
            return await blocked_dates.block(session, venue.id, BOOKING_DAY)

    booking, state = await asyncio.gather(reserve(), block(), return_exceptions=True)

    assert state.blocked is True
    assert isinstance(booking, (Booking, DateBlocked))
    async with session_factory() as db:
        assert await blocked_dates.is_blocked(db, venue.id, BOOKING_DAY)
