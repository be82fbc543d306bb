"""Availability schemas."""
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel

DayStatus = Literal["available", "partially-booked", "fully-booked", "blocked", "closed"]


class TimeRange(BaseModel):
    """Schema for a time range within one day."""

    start_time: str  # HH:MM
    end_time: str  # HH:MM


class BookedRange(TimeRange):
    """Schema for a range held by an active booking."""

    status: str


class DayAvailability(BaseModel):
    """Schema for the computed availability of one calendar day."""

    date: str  # YYYY-MM-DD
    status: DayStatus
    open_time: Optional[str] = None
    close_time: Optional[str] = None
    slots: List[TimeRange] = []
    booked_ranges: List[BookedRange] = []
    slot_count: int = 0


class CalendarResponse(BaseModel):
    """Schema for a multi-day availability read."""

    venue_id: int
    start_date: str
    end_date: str
    days: Dict[str, DayAvailability]


class SlotCheckResponse(BaseModel):
    """Schema for a single range availability check."""

    venue_id: int
    date: str
    start_time: str
    end_time: str
    available: bool
