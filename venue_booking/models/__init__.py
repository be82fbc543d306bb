"""Database models."""
from venue_booking.models.venue import Venue
from venue_booking.models.booking import Booking, BookingStatus
from venue_booking.models.blocked_date import BlockedDate

__all__ = ["Venue", "Booking", "BookingStatus", "BlockedDate"]
