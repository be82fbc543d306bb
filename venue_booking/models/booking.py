"""Booking model."""
from sqlalchemy import CheckConstraint, Column, Date, DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from venue_booking.core.database import Base


class BookingStatus:
    """Booking lifecycle states."""

    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"
    COMPLETED = "COMPLETED"

    # Only these occupy the ledger for conflict purposes
    ACTIVE = (PENDING, CONFIRMED)


class Booking(Base):
    """A reserved time range on one calendar day of a venue."""

    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    venue_id = Column(Integer, ForeignKey("venues.id", ondelete="CASCADE"), nullable=False, index=True)
    guest_id = Column(Integer, nullable=False, index=True)
    booking_date = Column(Date, nullable=False)  # Local calendar day of the venue
    start_minute = Column(Integer, nullable=False)  # Minutes since local midnight
    end_minute = Column(Integer, nullable=False)
    guests = Column(Integer, default=1, nullable=False)
    status = Column(String, default=BookingStatus.PENDING, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
    cancelled_at = Column(DateTime(timezone=True), nullable=True)
    completed_at = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    venue = relationship("Venue", back_populates="bookings")

    __table_args__ = (
        CheckConstraint("start_minute < end_minute", name="ck_bookings_range_order"),
        Index("ix_bookings_venue_date_status", "venue_id", "booking_date", "status"),
        Index("ix_bookings_status_date", "status", "booking_date"),
    )
