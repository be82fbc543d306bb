"""Booking engine error taxonomy.

Errors fall into three families so callers can react differently:
``InvalidInput`` (fix the request), ``Unavailable`` (pick another slot and
re-fetch availability) and ``NotFound``. Storage failures are not wrapped and
surface as the driver/SQLAlchemy exception.
"""


class BookingEngineError(Exception):
    """Base class for all engine errors."""

    code = "booking_error"
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInput(BookingEngineError):
    """The request itself is malformed or violates venue rules."""

    code = "invalid_input"
    status_code = 400


class Unavailable(BookingEngineError):
    """The request is well formed but the time is not bookable."""

    code = "unavailable"
    status_code = 409


class NotFound(BookingEngineError):
    code = "not_found"
    status_code = 404


class InvalidDateFormat(InvalidInput):
    code = "invalid_date_format"


class InvalidTimeRange(InvalidInput):
    """End before start, outside operating hours, or wrong duration."""

    code = "invalid_time_range"


class InvalidDateRange(InvalidInput):
    code = "invalid_date_range"


class InvalidGuestCount(InvalidInput):
    code = "invalid_guest_count"


class SelfBookingNotAllowed(InvalidInput):
    code = "self_booking_not_allowed"
    status_code = 403


class InvalidStatusTransition(InvalidInput):
    code = "invalid_status_transition"
    status_code = 409


class SlotConflict(Unavailable):
    """The range overlaps an active booking."""

    code = "slot_conflict"


class DateBlocked(Unavailable):
    """The host has withdrawn the day from booking."""

    code = "date_blocked"


class ResourceNotFound(NotFound):
    code = "venue_not_found"


class BookingNotFound(NotFound):
    code = "booking_not_found"
