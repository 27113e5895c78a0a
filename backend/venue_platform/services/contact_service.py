"""
Contact message service: public submission, admin triage.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import HTTPException, status
from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from venue_platform.core.logging import get_logger
from venue_platform.models.contact import Contact
from venue_platform.schemas.contact import ContactCreate
from venue_platform.services.trends import monthly_counts

logger = get_logger(__name__)


async def create_contact(db: AsyncSession, data: ContactCreate) -> Contact:
    contact = Contact(**data.model_dump())
    db.add(contact)
    await db.flush()
    await db.refresh(contact)

    logger.info("contact_received", contact_id=contact.id, subject=contact.subject)
    return contact


async def list_contacts(
    db: AsyncSession,
    page: int = 1,
    limit: int = 10,
    is_resolved: Optional[bool] = None,
    search: Optional[str] = None,
) -> tuple[list[Contact], int]:
    query = select(Contact)
    if is_resolved is not None:
        query = query.where(Contact.is_resolved == is_resolved)
    if search:
        pattern = f"%{search}%"
        query = query.where(
            or_(
                Contact.name.ilike(pattern),
                Contact.email.ilike(pattern),
                Contact.subject.ilike(pattern),
                Contact.message.ilike(pattern),
            )
        )

    total = (await db.execute(select(func.count()).select_from(query.subquery()))).scalar()
    result = await db.execute(
        query.order_by(Contact.created_at.desc(), Contact.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
    )
    return list(result.scalars().all()), total


async def get_contact(db: AsyncSession, contact_id: int) -> Contact:
    contact = await db.get(Contact, contact_id)
    if contact is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Contact not found")
    return contact


async def set_resolved(db: AsyncSession, contact_id: int, resolved: bool) -> Contact:
    contact = await get_contact(db, contact_id)
    if contact.is_resolved == resolved:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Contact is already resolved" if resolved else "Contact is not resolved",
        )

    contact.is_resolved = resolved
    contact.resolved_at = datetime.now(timezone.utc) if resolved else None
    await db.flush()
    await db.refresh(contact)

    logger.info("contact_resolved" if resolved else "contact_reopened", contact_id=contact.id)
    return contact


async def delete_contact(db: AsyncSession, contact_id: int) -> None:
    contact = await get_contact(db, contact_id)
    await db.delete(contact)
    await db.flush()
    logger.info("contact_deleted", contact_id=contact_id)


async def contact_stats(db: AsyncSession) -> dict:
    now = datetime.now(timezone.utc)

    total = (await db.execute(select(func.count()).select_from(Contact))).scalar()
    resolved = (
        await db.execute(select(func.count()).select_from(Contact).where(Contact.is_resolved.is_(True)))
    ).scalar()
    recent = (
        await db.execute(
            select(func.count()).select_from(Contact).where(Contact.created_at >= now - timedelta(days=30))
        )
    ).scalar()

    created = await db.execute(
        select(Contact.created_at).where(Contact.created_at >= now - timedelta(days=180))
    )

    return {
        "total_contacts": total,
        "resolved_contacts": resolved,
        "pending_contacts": total - resolved,
        "recent_contacts_30_days": recent,
        "monthly_trends": monthly_counts(created.scalars().all(), months=6, now=now),
    }
