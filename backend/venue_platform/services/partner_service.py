"""
Partner service. Admin-managed records, soft deleted through is_active.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import HTTPException, status
from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from venue_platform.core.logging import get_logger
from venue_platform.models.partner import Partner
from venue_platform.schemas.partner import PartnerCreate, PartnerUpdate

logger = get_logger(__name__)


def _duplicate_email() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail="Partner with this email already exists",
    )


async def list_partners(
    db: AsyncSession,
    page: int = 1,
    limit: int = 10,
    partnership_type: Optional[str] = None,
    search: Optional[str] = None,
) -> tuple[list[Partner], int]:
    query = select(Partner).where(Partner.is_active.is_(True))

    if partnership_type:
        query = query.where(Partner.partnership_type.ilike(f"%{partnership_type}%"))
    if search:
        pattern = f"%{search}%"
        query = query.where(
            or_(
                Partner.company_name.ilike(pattern),
                Partner.contact_person.ilike(pattern),
                Partner.description.ilike(pattern),
            )
        )

    total = (await db.execute(select(func.count()).select_from(query.subquery()))).scalar()
    result = await db.execute(
        query.order_by(Partner.created_at.desc(), Partner.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
    )
    return list(result.scalars().all()), total


async def get_partner(db: AsyncSession, partner_id: int, include_inactive: bool = False) -> Partner:
    partner = await db.get(Partner, partner_id)
    if partner is None or (not partner.is_active and not include_inactive):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Partner not found")
    return partner


async def partnership_types(db: AsyncSession) -> list[str]:
    result = await db.execute(
        select(Partner.partnership_type)
        .where(Partner.is_active.is_(True))
        .distinct()
        .order_by(Partner.partnership_type)
    )
    return list(result.scalars().all())


async def _email_taken(db: AsyncSession, email: str, exclude_id: Optional[int] = None) -> bool:
    query = select(Partner.id).where(Partner.email == email)
    if exclude_id is not None:
        query = query.where(Partner.id != exclude_id)
    return (await db.execute(query.limit(1))).scalar_one_or_none() is not None


async def create_partner(db: AsyncSession, data: PartnerCreate) -> Partner:
    if await _email_taken(db, data.email):
        raise _duplicate_email()

    partner = Partner(**data.model_dump())
    db.add(partner)
    try:
        await db.flush()
    except IntegrityError as exc:
        await db.rollback()
        raise _duplicate_email() from exc
    await db.refresh(partner)

    logger.info("partner_created", partner_id=partner.id, company=partner.company_name)
    return partner


async def update_partner(db: AsyncSession, partner_id: int, data: PartnerUpdate) -> Partner:
    partner = await get_partner(db, partner_id, include_inactive=True)
    if await _email_taken(db, data.email, exclude_id=partner.id):
        raise _duplicate_email()

    for field, value in data.model_dump().items():
        setattr(partner, field, value)

    await db.flush()
    await db.refresh(partner)
    logger.info("partner_updated", partner_id=partner.id)
    return partner


async def set_partner_active(db: AsyncSession, partner_id: int, active: bool) -> Partner:
    partner = await get_partner(db, partner_id, include_inactive=True)
    partner.is_active = active

    await db.flush()
    await db.refresh(partner)
    logger.info("partner_restored" if active else "partner_deactivated", partner_id=partner.id)
    return partner


async def partner_stats(db: AsyncSession) -> dict:
    since = datetime.now(timezone.utc) - timedelta(days=30)

    total = (await db.execute(select(func.count()).select_from(Partner))).scalar()
    active = (
        await db.execute(select(func.count()).select_from(Partner).where(Partner.is_active.is_(True)))
    ).scalar()
    recent = (
        await db.execute(select(func.count()).select_from(Partner).where(Partner.created_at >= since))
    ).scalar()

    count_col = func.count(Partner.id).label("count")
    type_rows = await db.execute(
        select(Partner.partnership_type, count_col)
        .where(Partner.is_active.is_(True))
        .group_by(Partner.partnership_type)
        .order_by(count_col.desc())
    )

    return {
        "total_partners": total,
        "active_partners": active,
        "inactive_partners": total - active,
        "recent_partners_30_days": recent,
        "partnership_type_distribution": [
            {"partnership_type": partnership_type, "count": count}
            for partnership_type, count in type_rows.all()
        ],
    }
