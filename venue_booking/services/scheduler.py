"""Background scheduler for booking lifecycle sweeps."""
import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from venue_booking.core.clock import SystemClock, system_clock
from venue_booking.core.config import settings
from venue_booking.core.database import AsyncSessionLocal
from venue_booking.services.booking_lifecycle import (
    complete_elapsed_bookings,
    expire_stale_pending,
)

logger = logging.getLogger(__name__)


class BookingSweepScheduler:
    """Runs the completion and stale-hold sweeps on a timer.

    Both sweeps are idempotent, so an occasional overlapping run from a
    second worker only repeats work that is already done.
    """

    def __init__(self, session_factory=AsyncSessionLocal, clock: SystemClock = system_clock):
        """Initialize the scheduler."""
        self.scheduler = AsyncIOScheduler()
        self.session_factory = session_factory
        self.clock = clock
        self.running = False

    async def start(self):
        """Start the scheduler."""
        if self.running:
            logger.warning("Scheduler is already running")
            return

        logger.info("Starting booking sweep scheduler")

        self.scheduler.add_job(
            self.run_sweeps,
            IntervalTrigger(minutes=settings.COMPLETION_SWEEP_MINUTES),
            id="booking_sweep_job",
            name="Complete elapsed and expire stale bookings",
            replace_existing=True,
            max_instances=1,
        )

        self.scheduler.start()
        self.running = True
        logger.info(
            f"Booking sweep scheduler started (every {settings.COMPLETION_SWEEP_MINUTES} minutes)"
        )

    async def stop(self):
        """Stop the scheduler."""
        if not self.running:
            return

        logger.info("Stopping booking sweep scheduler")
        self.scheduler.shutdown(wait=False)
        self.running = False
        logger.info("Booking sweep scheduler stopped")

    async def run_sweeps(self) -> dict:
        """
        Run one pass of every sweep.

        A failing sweep is logged and does not prevent the other from running;
        the next tick retries it.

        Returns:
            Number of bookings changed per sweep
        """
        logger.debug("Running booking sweeps")
        results = {"completed": 0, "expired": 0}

        async with self.session_factory() as db:
            try:
                results["completed"] = await complete_elapsed_bookings(db, self.clock)
            except Exception as e:
                await db.rollback()
                logger.error(f"Completion sweep failed: {e}", exc_info=True)

            try:
                results["expired"] = await expire_stale_pending(db, self.clock)
            except Exception as e:
                await db.rollback()
                logger.error(f"Stale hold sweep failed: {e}", exc_info=True)

        return results


# Singleton instance
booking_sweep_scheduler = BookingSweepScheduler()
