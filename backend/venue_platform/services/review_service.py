"""
Review service.

A review targets a venue, blog or partner. Each user may review a given
target once; the unique constraint on the table backs that up.
"""

from typing import Optional

from fastapi import HTTPException, status
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from venue_platform.api.deps import ensure_owner_or_admin
from venue_platform.core.logging import get_logger
from venue_platform.models.blog import Blog
from venue_platform.models.partner import Partner
from venue_platform.models.review import Review
from venue_platform.models.user import User
from venue_platform.models.venue import Venue
from venue_platform.schemas.review import ReviewCreate, ReviewUpdate

logger = get_logger(__name__)

REVIEW_TARGETS = {"venue": Venue, "blog": Blog, "partner": Partner}


def _already_reviewed(entity_type: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail=f"You have already reviewed this {entity_type}",
    )


async def _paginate(db: AsyncSession, query, page: int, limit: int) -> tuple[list[Review], int]:
    total = (await db.execute(select(func.count()).select_from(query.subquery()))).scalar()
    result = await db.execute(
        query.order_by(Review.created_at.desc(), Review.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
    )
    return list(result.scalars().all()), total


async def rating_stats(db: AsyncSession, entity_type: str, entity_id: int) -> Optional[dict]:
    """Average (1 decimal) and 1-5 distribution, or None when unreviewed."""
    rows = await db.execute(
        select(Review.rating, func.count())
        .where(Review.entity_type == entity_type, Review.entity_id == entity_id)
        .group_by(Review.rating)
    )
    counts = {rating: count for rating, count in rows.all()}
    total = sum(counts.values())
    if not total:
        return None

    average = sum(rating * count for rating, count in counts.items()) / total
    return {
        "average_rating": round(average, 1),
        "total_reviews": total,
        "rating_distribution": [{"rating": r, "count": counts.get(r, 0)} for r in range(1, 6)],
    }


async def list_entity_reviews(
    db: AsyncSession,
    entity_type: str,
    entity_id: int,
    page: int = 1,
    limit: int = 10,
) -> tuple[list[Review], int, Optional[dict]]:
    query = select(Review).where(Review.entity_type == entity_type, Review.entity_id == entity_id)
    reviews, total = await _paginate(db, query, page, limit)
    stats = await rating_stats(db, entity_type, entity_id)
    return reviews, total, stats


async def list_user_reviews(db: AsyncSession, user: User, page: int = 1, limit: int = 10):
    return await _paginate(db, select(Review).where(Review.user_id == user.id), page, limit)


async def list_all_reviews(
    db: AsyncSession,
    page: int = 1,
    limit: int = 20,
    entity_type: Optional[str] = None,
    rating: Optional[int] = None,
):
    query = select(Review)
    if entity_type in REVIEW_TARGETS:
        query = query.where(Review.entity_type == entity_type)
    if rating is not None:
        query = query.where(Review.rating == rating)
    return await _paginate(db, query, page, limit)


async def create_review(db: AsyncSession, user: User, data: ReviewCreate) -> Review:
    target = await db.get(REVIEW_TARGETS[data.entity_type], data.entity_id)
    if target is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{data.entity_type.capitalize()} not found",
        )

    existing = await db.execute(
        select(Review.id).where(
            Review.user_id == user.id,
            Review.entity_type == data.entity_type,
            Review.entity_id == data.entity_id,
        )
    )
    if existing.scalar_one_or_none() is not None:
        raise _already_reviewed(data.entity_type)

    review = Review(
        user_id=user.id,
        user_name=user.full_name,
        entity_type=data.entity_type,
        entity_id=data.entity_id,
        rating=data.rating,
        comment=data.comment,
    )
    db.add(review)
    try:
        await db.flush()
    except IntegrityError as exc:
        await db.rollback()
        raise _already_reviewed(data.entity_type) from exc
    await db.refresh(review)

    logger.info(
        "review_created",
        review_id=review.id,
        user_id=user.id,
        entity_type=review.entity_type,
        entity_id=review.entity_id,
        rating=review.rating,
    )
    return review


async def _get_or_404(db: AsyncSession, review_id: int) -> Review:
    review = await db.get(Review, review_id)
    if review is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Review not found")
    return review


async def update_review(db: AsyncSession, user: User, review_id: int, data: ReviewUpdate) -> Review:
    """Only the author may edit a review, admins included."""
    review = await _get_or_404(db, review_id)
    if review.user_id != user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized to update this review",
        )

    review.rating = data.rating
    review.comment = data.comment
    await db.flush()
    await db.refresh(review)
    logger.info("review_updated", review_id=review.id, user_id=user.id)
    return review


async def delete_review(db: AsyncSession, user: User, review_id: int) -> None:
    review = await _get_or_404(db, review_id)
    ensure_owner_or_admin(user, review.user_id, "delete this review")

    await db.delete(review)
    await db.flush()
    logger.info("review_deleted", review_id=review_id, user_id=user.id)
