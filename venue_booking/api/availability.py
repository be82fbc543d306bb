"""Availability endpoints."""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from venue_booking.api.errors import to_http_exception
from venue_booking.core.database import get_db
from venue_booking.core.exceptions import BookingEngineError
from venue_booking.schemas.availability import (
    CalendarResponse,
    DayAvailability,
    SlotCheckResponse,
)
from venue_booking.services.availability_service import availability_service
from venue_booking.services.calendar_days import (
    format_local_date,
    format_minutes,
    parse_local_date,
    parse_time_of_day,
)

router = APIRouter(prefix="/venues/{venue_id}/availability", tags=["availability"])


def _calendar(venue_id: int, days: dict) -> CalendarResponse:
    keys = list(days)
    return CalendarResponse(
        venue_id=venue_id,
        start_date=keys[0],
        end_date=keys[-1],
        days=days,
    )


@router.get("/day", response_model=DayAvailability)
async def get_day_availability(
    venue_id: int,
    date: str = Query(..., description="Calendar day, YYYY-MM-DD"),
    db: AsyncSession = Depends(get_db),
):
    """
    Get bookable slots for one day.

    Args:
        venue_id: Venue ID
        date: Calendar day
        db: Database session

    Returns:
        Day availability with status, slots and booked ranges
    """
    try:
        return await availability_service.get_day_availability(db, venue_id, date)
    except BookingEngineError as e:
        raise to_http_exception(e)
    except Exception as e:
        raise HTTPException(
            status_code=500,
            detail=f"Failed to get availability: {str(e)}",
        )


@router.get("/range", response_model=CalendarResponse)
async def get_range_availability(
    venue_id: int,
    start_date: str = Query(..., description="First day, YYYY-MM-DD"),
    end_date: str = Query(..., description="Last day (inclusive), YYYY-MM-DD"),
    db: AsyncSession = Depends(get_db),
):
    """
    Get availability for every day of a date range.

    Returns the whole range or an error, never a partial calendar.
    """
    try:
        days = await availability_service.get_range_availability(
            db, venue_id, start_date, end_date
        )
        return _calendar(venue_id, days)
    except BookingEngineError as e:
        raise to_http_exception(e)
    except Exception as e:
        raise HTTPException(
            status_code=500,
            detail=f"Failed to get availability: {str(e)}",
        )


@router.get("/month", response_model=CalendarResponse)
async def get_month_calendar(
    venue_id: int,
    year: int = Query(..., ge=1, le=9999),
    month: int = Query(..., ge=1, le=12),
    db: AsyncSession = Depends(get_db),
):
    """Get availability for every day of a calendar month."""
    try:
        days = await availability_service.get_month_calendar(db, venue_id, year, month)
        return _calendar(venue_id, days)
    except BookingEngineError as e:
        raise to_http_exception(e)
    except Exception as e:
        raise HTTPException(
            status_code=500,
            detail=f"Failed to get calendar: {str(e)}",
        )


@router.get("/upcoming", response_model=CalendarResponse)
async def get_upcoming_availability(
    venue_id: int,
    days: Optional[int] = Query(default=None, ge=1, le=366, description="Number of days from today"),
    db: AsyncSession = Depends(get_db),
):
    """Get availability from today (venue timezone) for the next N days."""
    try:
        result = await availability_service.get_upcoming_availability(db, venue_id, days)
        return _calendar(venue_id, result)
    except BookingEngineError as e:
        raise to_http_exception(e)
    except Exception as e:
        raise HTTPException(
            status_code=500,
            detail=f"Failed to get availability: {str(e)}",
        )


@router.get("/check", response_model=SlotCheckResponse)
async def check_slot_available(
    venue_id: int,
    date: str = Query(..., description="Calendar day, YYYY-MM-DD"),
    start_time: str = Query(..., description="HH:MM"),
    end_time: str = Query(..., description="HH:MM"),
    db: AsyncSession = Depends(get_db),
):
    """
    Check whether a single range is currently free.

    The answer is advisory; reserving re-checks atomically.
    """
    try:
        available = await availability_service.check_slot_available(
            db, venue_id, date, start_time, end_time
        )
        return SlotCheckResponse(
            venue_id=venue_id,
            date=format_local_date(parse_local_date(date)),
            start_time=format_minutes(parse_time_of_day(start_time)),
            end_time=format_minutes(parse_time_of_day(end_time)),
            available=available,
        )
    except BookingEngineError as e:
        raise to_http_exception(e)
    except Exception as e:
        raise HTTPException(
            status_code=500,
            detail=f"Failed to check availability: {str(e)}",
        )
