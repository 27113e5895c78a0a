"""
Venue service handling listing and admin CRUD.

Public reads only ever see active venues. Deletion is soft (is_active=False)
and can be undone with restore.
"""

from typing import Optional

from sqlalchemy import select, func, or_
from sqlalchemy.ext.asyncio import AsyncSession
from fastapi import HTTPException, status

from venue_platform.models.venue import VENUE_TYPES, Venue
from venue_platform.schemas.venue import VenueCreate, VenueUpdate
from venue_platform.core.logging import get_logger

logger = get_logger(__name__)


async def list_venues(
    db: AsyncSession,
    page: int = 1,
    limit: int = 10,
    venue_type: Optional[str] = None,
    search: Optional[str] = None,
    min_capacity: Optional[int] = None,
    max_capacity: Optional[int] = None,
) -> tuple[list[Venue], int]:
    """List active venues, newest first. Uses ix_venues_is_active."""
    query = select(Venue).where(Venue.is_active.is_(True))

    if venue_type:
        query = query.where(Venue.venue_type == venue_type)
    if search:
        pattern = f"%{search}%"
        query = query.where(
            or_(
                Venue.name.ilike(pattern),
                Venue.description.ilike(pattern),
                Venue.location.ilike(pattern),
            )
        )
    if min_capacity is not None:
        query = query.where(Venue.capacity >= min_capacity)
    if max_capacity is not None:
        query = query.where(Venue.capacity <= max_capacity)

    total = (await db.execute(select(func.count()).select_from(query.subquery()))).scalar()

    result = await db.execute(
        query.order_by(Venue.created_at.desc(), Venue.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
    )
    return list(result.scalars().all()), total


async def get_venue(db: AsyncSession, venue_id: int, include_inactive: bool = False) -> Venue:
    venue = await db.get(Venue, venue_id)
    if venue is None or (not venue.is_active and not include_inactive):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Venue not found",
        )
    return venue


async def create_venue(db: AsyncSession, data: VenueCreate) -> Venue:
    venue = Venue(**data.model_dump())
    db.add(venue)
    await db.flush()
    await db.refresh(venue)

    logger.info("venue_created", venue_id=venue.id, name=venue.name, venue_type=venue.venue_type)
    return venue


async def update_venue(db: AsyncSession, venue_id: int, data: VenueUpdate) -> Venue:
    venue = await get_venue(db, venue_id, include_inactive=True)
    for field, value in data.model_dump().items():
        setattr(venue, field, value)

    await db.flush()
    await db.refresh(venue)
    logger.info("venue_updated", venue_id=venue.id)
    return venue


async def set_venue_active(db: AsyncSession, venue_id: int, active: bool) -> Venue:
    """Soft delete (active=False) or restore (active=True)."""
    venue = await get_venue(db, venue_id, include_inactive=True)
    venue.is_active = active

    await db.flush()
    await db.refresh(venue)
    logger.info("venue_restored" if active else "venue_deactivated", venue_id=venue.id)
    return venue


async def venue_stats(db: AsyncSession) -> dict:
    rows = await db.execute(
        select(Venue.venue_type, Venue.is_active, func.count()).group_by(Venue.venue_type, Venue.is_active)
    )

    total = active = 0
    by_type = dict.fromkeys(VENUE_TYPES, 0)
    for venue_type, is_active, count in rows.all():
        total += count
        if is_active:
            active += count
            by_type[venue_type] = by_type.get(venue_type, 0) + count

    return {
        "total_venues": total,
        "active_venues": active,
        "inactive_venues": total - active,
        "sports_venues": by_type["sports"],
        "entertainment_venues": by_type["entertainment"],
        "both_venues": by_type["both"],
    }
