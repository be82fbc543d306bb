"""Venue model."""
from sqlalchemy import Boolean, Column, DateTime, Integer, JSON, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from venue_booking.core.database import Base


class Venue(Base):
    """Represents an hourly-bookable venue owned by a host."""

    __tablename__ = "venues"

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(Integer, nullable=False, index=True)
    name = Column(String, nullable=False)
    timezone = Column(String, nullable=True, default="UTC")
    operating_hours = Column(JSON, nullable=True)  # {"monday": {"open": "08:00", "close": "20:00"}, "sunday": {"closed": true}, ...}
    min_booking_hours = Column(Integer, default=1, nullable=False)
    max_booking_hours = Column(Integer, nullable=True)
    min_guests = Column(Integer, nullable=True)
    max_guests = Column(Integer, nullable=True)
    instant_booking = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    bookings = relationship("Booking", back_populates="venue", cascade="all, delete-orphan")
    blocked_dates = relationship("BlockedDate", back_populates="venue", cascade="all, delete-orphan")
