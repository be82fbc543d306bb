"""Venue schemas."""
from datetime import datetime
from typing import Any, Dict, Optional

import pytz
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from venue_booking.core.exceptions import InvalidTimeRange
from venue_booking.services.calendar_days import WEEKDAY_NAMES
from venue_booking.services.operating_hours import parse_day_hours


class VenueBase(BaseModel):
    """Base venue schema."""

    name: str
    owner_id: int
    timezone: Optional[str] = "UTC"
    operating_hours: Optional[Dict[str, Any]] = None
    min_booking_hours: int = Field(default=1, ge=1, le=24)
    max_booking_hours: Optional[int] = Field(default=None, ge=1, le=24)
    min_guests: Optional[int] = Field(default=None, ge=1)
    max_guests: Optional[int] = Field(default=None, ge=1)
    instant_booking: bool = True


class VenueCreate(VenueBase):
    """Schema for creating a venue."""

    @field_validator("timezone")
    @classmethod
    def check_timezone(cls, value):
        if value is None:
            return value
        try:
            pytz.timezone(value)
        except pytz.UnknownTimeZoneError:
            raise ValueError(f"Unknown timezone: {value}") from None
        return value

    @field_validator("operating_hours")
    @classmethod
    def check_operating_hours(cls, value):
        if value is None:
            return value
        unknown = set(value) - set(WEEKDAY_NAMES)
        if unknown:
            raise ValueError(f"Unknown weekday(s): {', '.join(sorted(unknown))}")
        for day_name, entry in value.items():
            try:
                parse_day_hours(entry)
            except InvalidTimeRange as e:
                raise ValueError(f"{day_name}: {e.message}") from None
        return value

    @model_validator(mode="after")
    def check_limits(self):
        if self.max_booking_hours is not None and self.max_booking_hours < self.min_booking_hours:
            raise ValueError("max_booking_hours must be >= min_booking_hours")
        if (
            self.min_guests is not None
            and self.max_guests is not None
            and self.max_guests < self.min_guests
        ):
            raise ValueError("max_guests must be >= min_guests")
        return self


class VenueInDB(VenueBase):
    """Schema for venue from database."""

    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
