"""
Venue endpoints with Redis caching on the public list.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from venue_platform.api.deps import require_admin
from venue_platform.core.logging import get_logger
from venue_platform.db.session import get_db
from venue_platform.models.user import User
from venue_platform.schemas.common import MessageResponse, PaginationMeta
from venue_platform.schemas.venue import (
    VenueCreate,
    VenueListResponse,
    VenueResponse,
    VenueStats,
    VenueType,
    VenueUpdate,
)
from venue_platform.services import venue_service
from venue_platform.services.cache_service import (
    get_cached_venues,
    invalidate_venue_cache,
    make_venue_list_key,
    set_cached_venues,
)

logger = get_logger(__name__)
router = APIRouter(prefix="/venues", tags=["Venues"])


@router.get("/", response_model=VenueListResponse)
async def list_venues(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    venue_type: Optional[VenueType] = None,
    search: Optional[str] = None,
    min_capacity: Optional[int] = Query(None, ge=1),
    max_capacity: Optional[int] = Query(None, ge=1),
    db: AsyncSession = Depends(get_db),
):
    """
    List active venues. Results are cached in Redis for REDIS_CACHE_TTL
    seconds and invalidated on any admin write.
    """
    key = make_venue_list_key(page, limit, venue_type, search, min_capacity, max_capacity)
    cached = await get_cached_venues(key)
    if cached:
        logger.info("venues_list_cache_hit", page=page)
        cached["cached"] = True
        return VenueListResponse(**cached)

    venues, total = await venue_service.list_venues(
        db, page, limit, venue_type, search, min_capacity, max_capacity
    )
    response = VenueListResponse(
        venues=[VenueResponse.model_validate(v) for v in venues],
        pagination=PaginationMeta.build(page, limit, total),
    )
    await set_cached_venues(key, response.model_dump(mode="json"))
    return response


@router.get("/stats/overview", response_model=VenueStats)
async def venue_stats(
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return await venue_service.venue_stats(db)


@router.get("/{venue_id}", response_model=VenueResponse)
async def get_venue(venue_id: int, db: AsyncSession = Depends(get_db)):
    return await venue_service.get_venue(db, venue_id)


@router.post("/", response_model=VenueResponse, status_code=status.HTTP_201_CREATED)
async def create_venue(
    data: VenueCreate,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    venue = await venue_service.create_venue(db, data)
    await db.commit()
    await invalidate_venue_cache()
    return venue


@router.put("/{venue_id}", response_model=VenueResponse)
async def update_venue(
    venue_id: int,
    data: VenueUpdate,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    venue = await venue_service.update_venue(db, venue_id, data)
    await db.commit()
    await invalidate_venue_cache()
    return venue


@router.delete("/{venue_id}", response_model=MessageResponse)
async def delete_venue(
    venue_id: int,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    await venue_service.set_venue_active(db, venue_id, False)
    await db.commit()
    await invalidate_venue_cache()
    return MessageResponse(message="Venue deleted successfully")


@router.put("/{venue_id}/restore", response_model=VenueResponse)
async def restore_venue(
    venue_id: int,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    venue = await venue_service.set_venue_active(db, venue_id, True)
    await db.commit()
    await invalidate_venue_cache()
    return venue
