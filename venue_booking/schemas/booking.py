"""Booking schemas."""
from datetime import date, datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field

from venue_booking.services.calendar_days import format_minutes

BookingStatusName = Literal["PENDING", "CONFIRMED", "CANCELLED", "COMPLETED"]


class ReserveRequest(BaseModel):
    """Schema for a reservation request."""

    requester_id: int
    date: str = Field(..., description="Calendar day, YYYY-MM-DD")
    start_time: str = Field(..., description="HH:MM")
    end_time: str = Field(..., description="HH:MM, 24:00 allowed")
    guests: int = Field(default=1, ge=1)


class BookingInDB(BaseModel):
    """Schema for booking from database."""

    id: int
    venue_id: int
    guest_id: int
    booking_date: date
    start_minute: int
    end_minute: int
    guests: int
    status: str
    created_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

    @computed_field
    @property
    def start_time(self) -> str:
        return format_minutes(self.start_minute)

    @computed_field
    @property
    def end_time(self) -> str:
        return format_minutes(self.end_minute)
