"""Blocked date endpoints."""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from venue_booking.api.errors import to_http_exception
from venue_booking.core.database import get_db
from venue_booking.core.exceptions import BookingEngineError
from venue_booking.schemas.blocked_date import BlockedDateInDB, BlockRequest, BlockState
from venue_booking.services import blocked_dates
from venue_booking.services.calendar_days import parse_local_date
from venue_booking.services.venues import get_venue

router = APIRouter(prefix="/venues/{venue_id}/blocked-dates", tags=["blocked-dates"])


@router.get("", response_model=List[BlockedDateInDB])
async def list_blocked_dates(
    venue_id: int,
    start_date: Optional[str] = Query(default=None, description="YYYY-MM-DD"),
    end_date: Optional[str] = Query(default=None, description="YYYY-MM-DD"),
    db: AsyncSession = Depends(get_db),
):
    """List blocked dates of a venue, optionally within a range."""
    try:
        await get_venue(db, venue_id)
        return await blocked_dates.list_blocked_dates(
            db,
            venue_id,
            parse_local_date(start_date) if start_date else None,
            parse_local_date(end_date) if end_date else None,
        )
    except BookingEngineError as e:
        raise to_http_exception(e)


@router.put("/{date}", response_model=BlockState)
async def block_date(
    venue_id: int,
    date: str,
    request: Optional[BlockRequest] = None,
    db: AsyncSession = Depends(get_db),
):
    """
    Block a date. Idempotent: blocking again only updates the reason.

    Args:
        venue_id: Venue ID
        date: Calendar day, YYYY-MM-DD
        request: Optional reason
        db: Database session
    """
    try:
        reason = request.reason if request else None
        return await blocked_dates.block(db, venue_id, parse_local_date(date), reason)
    except BookingEngineError as e:
        raise to_http_exception(e)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to block date: {str(e)}")


@router.delete("/{date}", response_model=BlockState)
async def unblock_date(
    venue_id: int,
    date: str,
    db: AsyncSession = Depends(get_db),
):
    """Unblock a date. Unblocking a date that is not blocked also succeeds."""
    try:
        return await blocked_dates.unblock(db, venue_id, parse_local_date(date))
    except BookingEngineError as e:
        raise to_http_exception(e)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to unblock date: {str(e)}")


@router.post("/{date}/toggle", response_model=BlockState)
async def toggle_block(
    venue_id: int,
    date: str,
    request: Optional[BlockRequest] = None,
    db: AsyncSession = Depends(get_db),
):
    """Flip the block state of a date."""
    try:
        return await blocked_dates.toggle_block(
            db, venue_id, parse_local_date(date), request.reason if request else None
        )
    except BookingEngineError as e:
        raise to_http_exception(e)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to toggle date: {str(e)}")
