"""
Admin dashboard aggregates across every resource.
"""

from collections import Counter
from datetime import datetime, timedelta, timezone

from sqlalchemy import func, select, text
from sqlalchemy.ext.asyncio import AsyncSession

from venue_platform.core.logging import get_logger
from venue_platform.models import Appointment, Blog, Contact, Partner, Review, User, Venue
from venue_platform.models.appointment import PENDING
from venue_platform.services.trends import monthly_counts

logger = get_logger(__name__)


async def _count(db: AsyncSession, model, *criteria) -> int:
    return (await db.execute(select(func.count()).select_from(model).where(*criteria))).scalar()


async def dashboard_stats(db: AsyncSession) -> dict:
    return {
        "total_users": await _count(db, User),
        "active_users": await _count(db, User, User.is_active.is_(True)),
        "total_venues": await _count(db, Venue, Venue.is_active.is_(True)),
        "total_blogs": await _count(db, Blog, Blog.is_published.is_(True)),
        "total_partners": await _count(db, Partner, Partner.is_active.is_(True)),
        "total_reviews": await _count(db, Review),
        "pending_contacts": await _count(db, Contact, Contact.is_resolved.is_(False)),
        "pending_appointments": await _count(db, Appointment, Appointment.status == PENDING),
    }


async def dashboard_analytics(db: AsyncSession, months: int = 12) -> dict:
    now = datetime.now(timezone.utc)
    since = now - timedelta(days=30 * months)

    user_created = await db.execute(select(User.created_at).where(User.created_at >= since))
    blog_created = await db.execute(
        select(Blog.created_at).where(Blog.is_published.is_(True), Blog.created_at >= since)
    )

    appointment_rows = await db.execute(
        select(Appointment.created_at, Appointment.status).where(Appointment.created_at >= since)
    )
    by_month_status = Counter(
        (created.year, created.month, appt_status) for created, appt_status in appointment_rows.all()
    )

    review_rows = await db.execute(
        select(Review.entity_type, func.count(), func.avg(Review.rating)).group_by(Review.entity_type)
    )

    venue_count = func.count(Appointment.id).label("count")
    top_venues = await db.execute(
        select(Appointment.venue_id, func.max(Appointment.venue_name), venue_count)
        .group_by(Appointment.venue_id)
        .order_by(venue_count.desc())
        .limit(10)
    )

    author_count = func.count(Blog.id).label("count")
    top_authors = await db.execute(
        select(Blog.author_id, func.max(Blog.author_name), author_count)
        .where(Blog.is_published.is_(True))
        .group_by(Blog.author_id)
        .order_by(author_count.desc())
        .limit(10)
    )

    return {
        "user_registration_trends": monthly_counts(user_created.scalars().all(), months, now),
        "blog_publishing_trends": monthly_counts(blog_created.scalars().all(), months, now),
        "appointment_trends": [
            {"year": year, "month": month, "status": appt_status, "count": count}
            for (year, month, appt_status), count in sorted(by_month_status.items())
        ],
        "review_analytics": [
            {"entity_type": entity_type, "count": count, "average_rating": round(float(avg or 0), 1)}
            for entity_type, count, avg in review_rows.all()
        ],
        "top_venues_by_appointments": [
            {"venue_id": venue_id, "venue_name": venue_name, "count": count}
            for venue_id, venue_name, count in top_venues.all()
        ],
        "top_blog_authors": [
            {"author_id": author_id, "author_name": author_name, "count": count}
            for author_id, author_name, count in top_authors.all()
        ],
    }


async def recent_activities(db: AsyncSession, per_resource: int = 5) -> dict:
    async def latest(model, *criteria):
        result = await db.execute(
            select(model).where(*criteria).order_by(model.created_at.desc(), model.id.desc()).limit(per_resource)
        )
        return list(result.scalars().all())

    return {
        "recent_users": await latest(User),
        "recent_blogs": await latest(Blog, Blog.is_published.is_(True)),
        "recent_appointments": await latest(Appointment),
        "recent_contacts": await latest(Contact),
        "recent_reviews": await latest(Review),
    }


async def database_status(db: AsyncSession) -> dict:
    try:
        await db.execute(text("SELECT 1"))
    except Exception as e:
        logger.error("database_health_check_failed", error=str(e))
        return {"status": "disconnected", "error": str(e)}
    return {"status": "connected"}
