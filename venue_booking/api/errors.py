"""Translation of engine errors into HTTP errors."""
from fastapi import HTTPException

from venue_booking.core.exceptions import BookingEngineError


def to_http_exception(error: BookingEngineError) -> HTTPException:
    """Map an engine error onto an HTTPException with a machine-readable code."""
    return HTTPException(
        status_code=error.status_code,
        detail={"code": error.code, "message": error.message},
    )
