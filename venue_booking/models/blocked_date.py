"""Blocked date model."""
from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from venue_booking.core.database import Base


class BlockedDate(Base):
    """A calendar day the host has withdrawn from booking."""

    __tablename__ = "blocked_dates"

    id = Column(Integer, primary_key=True, index=True)
    venue_id = Column(Integer, ForeignKey("venues.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(Date, nullable=False)
    reason = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    venue = relationship("Venue", back_populates="blocked_dates")

    # One record per venue and day
    __table_args__ = (
        UniqueConstraint("venue_id", "date", name="uq_blocked_dates_venue_date"),
    )
