"""API schemas."""
from venue_booking.schemas.venue import (
    VenueCreate,
    VenueInDB,
)
from venue_booking.schemas.booking import (
    ReserveRequest,
    BookingInDB,
    BookingStatusName,
)
from venue_booking.schemas.availability import (
    TimeRange,
    BookedRange,
    DayAvailability,
    CalendarResponse,
    SlotCheckResponse,
)
from venue_booking.schemas.blocked_date import (
    BlockRequest,
    BlockedDateInDB,
    BlockState,
)

__all__ = [
    "VenueCreate",
    "VenueInDB",
    "ReserveRequest",
    "BookingInDB",
    "BookingStatusName",
    "TimeRange",
    "BookedRange",
    "DayAvailability",
    "CalendarResponse",
    "SlotCheckResponse",
    "BlockRequest",
    "BlockedDateInDB",
    "BlockState",
]
