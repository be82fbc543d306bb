"""Shared test fixtures and helpers."""
import os

# Keep the module-level engine away from a real server during tests
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from datetime import date, datetime
from typing import Optional

import pytest

from venue_booking.core.clock import FixedClock
from venue_booking.core.database import build_engine, build_sessionmaker, init_db
from venue_booking.models import Booking, BookingStatus, Venue
from venue_booking.services.calendar_days import WEEKDAY_NAMES, parse_time_of_day

OPEN_8_TO_20 = {name: {"open": "08:00", "close": "20:00"} for name in WEEKDAY_NAMES}

# A Tuesday
BOOKING_DAY = date(2025, 6, 10)

OWNER_ID = 1
GUEST_ID = 2


@pytest.fixture
async def engine(tmp_path):
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'venue_booking.db'}")
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_sessionmaker(engine)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def clock():
    return FixedClock(datetime(2025, 6, 1, 9, 0))


async def make_venue(db, **overrides) -> Venue:
    """Helper to persist a venue open 08:00-20:00 every day."""
    values = {
        "owner_id": OWNER_ID,
        "name": "Riverside Hall",
        "timezone": "UTC",
        "operating_hours": OPEN_8_TO_20,
        "min_booking_hours": 1,
        "max_booking_hours": 12,
        "instant_booking": True,
    }
    values.update(overrides)
    venue = Venue(**values)
    db.add(venue)
    await db.commit()
    return venue


async def make_booking(
    db,
    venue: Venue,
    start: str,
    end: str,
    day: date = BOOKING_DAY,
    status: str = BookingStatus.CONFIRMED,
    guest_id: int = GUEST_ID,
    created_at: Optional[datetime] = None,
) -> Booking:
    """Helper to insert a booking directly, bypassing the reservation checks."""
    booking = Booking(
        venue_id=venue.id,
        guest_id=guest_id,
        booking_date=day,
        start_minute=parse_time_of_day(start),
        end_minute=parse_time_of_day(end),
        guests=1,
        status=status,
        created_at=created_at or datetime(2025, 6, 1, 8, 0),
    )
    db.add(booking)
    await db.commit()
    return booking
