"""Main FastAPI application."""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from venue_booking.api import availability, blocked_dates, bookings, venues
from venue_booking.core.config import settings
from venue_booking.core.database import init_db
from venue_booking.services.scheduler import booking_sweep_scheduler

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    # Startup
    logger.info("Starting venue booking service")
    logger.info(f"Debug mode: {settings.DEBUG}")

    await init_db()
    await booking_sweep_scheduler.start()

    yield

    # Shutdown
    logger.info("Shutting down venue booking service")
    await booking_sweep_scheduler.stop()


# Create FastAPI app
app = FastAPI(
    title="Venue Booking",
    description="Availability calendar and conflict-free reservations for hourly venues",
    version="1.0.0",
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, specify exact origins
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(venues.router)
app.include_router(availability.router)
app.include_router(bookings.router)
app.include_router(blocked_dates.router)


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "scheduler_running": booking_sweep_scheduler.running,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "venue_booking.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.DEBUG,
    )
