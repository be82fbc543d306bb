"""Venue lookup and creation."""
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from venue_booking.core.exceptions import ResourceNotFound
from venue_booking.models.venue import Venue
from venue_booking.schemas.venue import VenueCreate

logger = logging.getLogger(__name__)


async def get_venue(db: AsyncSession, venue_id: int, lock: bool = False) -> Venue:
    """
    Load a venue by id.

    Args:
        db: Database session
        venue_id: Venue ID
        lock: Take a row lock (SELECT ... FOR UPDATE) for the current transaction

    Raises:
        ResourceNotFound: if no such venue exists
    """
    query = select(Venue).where(Venue.id == venue_id)
    if lock:
        # Reload the row even if the session already holds it
        query = query.with_for_update().execution_options(populate_existing=True)
    result = await db.execute(query)
    venue = result.scalar_one_or_none()

    if not venue:
        raise ResourceNotFound(f"Venue {venue_id} not found")
    return venue


async def create_venue(db: AsyncSession, data: VenueCreate) -> Venue:
    """Persist a new venue."""
    venue = Venue(**data.model_dump())
    db.add(venue)
    await db.commit()
    await db.refresh(venue)

    logger.info(f"Created venue {venue.name} ({venue.id}) for owner {venue.owner_id}")
    return venue
