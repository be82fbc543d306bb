"""Booking endpoints."""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from venue_booking.api.errors import to_http_exception
from venue_booking.core.database import get_db
from venue_booking.core.exceptions import BookingEngineError, InvalidInput
from venue_booking.schemas.booking import BookingInDB, BookingStatusName, ReserveRequest
from venue_booking.services import booking_lifecycle, ledger
from venue_booking.services.reservation_service import reservation_service
from venue_booking.services.venues import get_venue

router = APIRouter(tags=["bookings"])


@router.post("/venues/{venue_id}/bookings", response_model=BookingInDB, status_code=201)
async def reserve(
    venue_id: int,
    request: ReserveRequest,
    db: AsyncSession = Depends(get_db),
):
    """
    Reserve a time range on a venue.

    A 409 response means the range was taken or the day blocked in the
    meantime; clients should re-fetch availability instead of retrying.

    Args:
        venue_id: Venue ID
        request: Requester, day, time range and party size
        db: Database session

    Returns:
        Created booking
    """
    try:
        return await reservation_service.reserve(
            db,
            venue_id,
            request.requester_id,
            request.date,
            request.start_time,
            request.end_time,
            request.guests,
        )
    except BookingEngineError as e:
        raise to_http_exception(e)
    except Exception as e:
        raise HTTPException(
            status_code=500,
            detail=f"Failed to create booking: {str(e)}",
        )


@router.get("/venues/{venue_id}/bookings", response_model=List[BookingInDB])
async def list_venue_bookings(
    venue_id: int,
    status: Optional[List[BookingStatusName]] = Query(default=None),
    db: AsyncSession = Depends(get_db),
):
    """
    List the bookings of a venue, newest day first.

    Args:
        venue_id: Venue ID
        status: Only bookings in these statuses (repeatable)
        db: Database session

    Returns:
        Bookings of the venue
    """
    try:
        await get_venue(db, venue_id)
        return await ledger.list_bookings(db, venue_id=venue_id, statuses=status)
    except BookingEngineError as e:
        raise to_http_exception(e)


@router.get("/bookings", response_model=List[BookingInDB])
async def list_bookings(
    guest_id: Optional[int] = Query(default=None, description="Bookings made by this guest"),
    owner_id: Optional[int] = Query(default=None, description="Bookings of this host's venues"),
    status: Optional[List[BookingStatusName]] = Query(default=None),
    db: AsyncSession = Depends(get_db),
):
    """List the bookings of a guest or of a host's venues, newest day first."""
    try:
        if guest_id is None and owner_id is None:
            raise InvalidInput("guest_id or owner_id is required")
        return await ledger.list_bookings(
            db, guest_id=guest_id, owner_id=owner_id, statuses=status
        )
    except BookingEngineError as e:
        raise to_http_exception(e)


@router.get("/bookings/{booking_id}", response_model=BookingInDB)
async def get_booking(
    booking_id: int,
    db: AsyncSession = Depends(get_db),
):
    """Get a booking by ID."""
    try:
        return await ledger.get_booking(db, booking_id)
    except BookingEngineError as e:
        raise to_http_exception(e)


@router.post("/bookings/{booking_id}/cancel", response_model=BookingInDB)
async def cancel_booking(
    booking_id: int,
    db: AsyncSession = Depends(get_db),
):
    """Cancel a booking; its range becomes bookable again."""
    try:
        return await booking_lifecycle.cancel_booking(db, booking_id)
    except BookingEngineError as e:
        raise to_http_exception(e)
    except Exception as e:
        raise HTTPException(
            status_code=500,
            detail=f"Failed to cancel booking: {str(e)}",
        )


@router.post("/bookings/{booking_id}/confirm", response_model=BookingInDB)
async def confirm_booking(
    booking_id: int,
    db: AsyncSession = Depends(get_db),
):
    """Confirm a pending booking."""
    try:
        return await booking_lifecycle.confirm_booking(db, booking_id)
    except BookingEngineError as e:
        raise to_http_exception(e)
    except Exception as e:
        raise HTTPException(
            status_code=500,
            detail=f"Failed to confirm booking: {str(e)}",
        )
