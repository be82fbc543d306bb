"""Tests for booking ledger listings."""
from datetime import date

import pytest

from venue_booking.models.booking import BookingStatus
from venue_booking.services import ledger

from tests.conftest import GUEST_ID, make_booking, make_venue

OTHER_GUEST_ID = 3
OTHER_OWNER_ID = 5


@pytest.fixture
async def bookings(db):
    """Two venues of different hosts with a mix of bookings."""
    hall = await make_venue(db)
    studio = await make_venue(db, name="Hilltop Studio", owner_id=OTHER_OWNER_ID)

    created = {
        "morning": await make_booking(db, hall, "10:00", "12:00", day=date(2025, 6, 10)),
        "afternoon": await make_booking(db, hall, "14:00", "16:00", day=date(2025, 6, 10)),
        "later": await make_booking(db, hall, "09:00", "11:00", day=date(2025, 6, 12)),
        "cancelled": await make_booking(
            db, hall, "10:00", "12:00", day=date(2025, 6, 11), status=BookingStatus.CANCELLED
        ),
        "studio": await make_booking(
            db, studio, "10:00", "12:00", day=date(2025, 6, 10), guest_id=OTHER_GUEST_ID
        ),
    }
    return hall, studio, created


class TestListBookings:
    """Listing a venue's, a guest's and a host's bookings."""

    @pytest.mark.asyncio
    async def test_venue_bookings_newest_day_first(self, db, bookings):
        hall, _, created = bookings

        result = await ledger.list_bookings(db, venue_id=hall.id)

        assert [b.id for b in result] == [
            created["later"].id,
            created["cancelled"].id,
            created["afternoon"].id,
            created["morning"].id,
        ]

    @pytest.mark.asyncio
    async def test_status_filter(self, db, bookings):
        hall, _, created = bookings

        result = await ledger.list_bookings(
            db, venue_id=hall.id, statuses=[BookingStatus.CANCELLED]
        )

        assert [b.id for b in result] == [created["cancelled"].id]

    @pytest.mark.asyncio
    async def test_guest_bookings_across_venues(self, db, bookings):
        _, _, created = bookings

        mine = await ledger.list_bookings(db, guest_id=GUEST_ID)
        theirs = await ledger.list_bookings(db, guest_id=OTHER_GUEST_ID)

        assert len(mine) == 4
        assert [b.id for b in theirs] == [created["studio"].id]

    @pytest.mark.asyncio
    async def test_host_bookings(self, db, bookings):
        _, studio, created = bookings

        result = await ledger.list_bookings(db, owner_id=OTHER_OWNER_ID)

        assert [b.id for b in result] == [created["studio"].id]
        assert result[0].venue_id == studio.id

    @pytest.mark.asyncio
    async def test_no_match(self, db, bookings):
        assert await ledger.list_bookings(db, guest_id=999) == []
