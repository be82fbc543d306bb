"""Venue endpoints."""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from venue_booking.api.errors import to_http_exception
from venue_booking.core.database import get_db
from venue_booking.core.exceptions import BookingEngineError
from venue_booking.schemas.venue import VenueCreate, VenueInDB
from venue_booking.services import venues

router = APIRouter(prefix="/venues", tags=["venues"])


@router.post("", response_model=VenueInDB, status_code=201)
async def create_venue(
    venue: VenueCreate,
    db: AsyncSession = Depends(get_db),
):
    """
    Create a venue with its weekly operating hours.

    Args:
        venue: Venue data
        db: Database session

    Returns:
        Created venue
    """
    try:
        return await venues.create_venue(db, venue)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to create venue: {str(e)}")


@router.get("/{venue_id}", response_model=VenueInDB)
async def get_venue(
    venue_id: int,
    db: AsyncSession = Depends(get_db),
):
    """Get a venue by ID."""
    try:
        return await venues.get_venue(db, venue_id)
    except BookingEngineError as e:
        raise to_http_exception(e)
