"""
Review endpoints.

/my/reviews and /admin/all are declared before /{entity_type}/{entity_id}
so the two-segment paths don't get captured by it.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from venue_platform.api.deps import get_current_user, require_admin
from venue_platform.db.session import get_db
from venue_platform.models.user import User
from venue_platform.schemas.common import MessageResponse, PaginationMeta
from venue_platform.schemas.review import (
    EntityReviewsResponse,
    EntityType,
    ReviewCreate,
    ReviewListResponse,
    ReviewResponse,
    ReviewUpdate,
)
from venue_platform.services import review_service

router = APIRouter(prefix="/reviews", tags=["Reviews"])


def _listing(reviews, page: int, limit: int, total: int) -> ReviewListResponse:
    return ReviewListResponse(
        reviews=[ReviewResponse.model_validate(r) for r in reviews],
        pagination=PaginationMeta.build(page, limit, total),
    )


@router.get("/my/reviews", response_model=ReviewListResponse)
async def my_reviews(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    reviews, total = await review_service.list_user_reviews(db, user, page, limit)
    return _listing(reviews, page, limit, total)


@router.get("/admin/all", response_model=ReviewListResponse)
async def all_reviews(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    entity_type: Optional[EntityType] = None,
    rating: Optional[int] = Query(None, ge=1, le=5),
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    reviews, total = await review_service.list_all_reviews(db, page, limit, entity_type, rating)
    return _listing(reviews, page, limit, total)


@router.get("/{entity_type}/{entity_id}", response_model=EntityReviewsResponse)
async def entity_reviews(
    entity_type: EntityType,
    entity_id: int,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
):
    """Reviews for one venue, blog or partner, with rating statistics."""
    reviews, total, stats = await review_service.list_entity_reviews(db, entity_type, entity_id, page, limit)
    return EntityReviewsResponse(
        reviews=[ReviewResponse.model_validate(r) for r in reviews],
        stats=stats,
        pagination=PaginationMeta.build(page, limit, total),
    )


@router.post("/", response_model=ReviewResponse, status_code=status.HTTP_201_CREATED)
async def create_review(
    data: ReviewCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await review_service.create_review(db, user, data)


@router.put("/{review_id}", response_model=ReviewResponse)
async def update_review(
    review_id: int,
    data: ReviewUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await review_service.update_review(db, user, review_id, data)


@router.delete("/{review_id}", response_model=MessageResponse)
async def delete_review(
    review_id: int,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await review_service.delete_review(db, user, review_id)
    return MessageResponse(message="Review deleted successfully")
