"""Blocked date schemas."""
from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class BlockRequest(BaseModel):
    """Schema for blocking a date."""

    reason: Optional[str] = Field(default=None, max_length=500)


class BlockedDateInDB(BaseModel):
    """Schema for blocked date from database."""

    id: int
    venue_id: int
    date: date
    reason: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class BlockState(BaseModel):
    """Schema for the block state of a day after a write."""

    venue_id: int
    date: str
    blocked: bool
    reason: Optional[str] = None
