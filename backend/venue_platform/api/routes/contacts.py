"""
Contact endpoints: anyone may write in, admins triage.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from venue_platform.api.deps import require_admin
from venue_platform.db.session import get_db
from venue_platform.models.user import User
from venue_platform.schemas.common import MessageResponse, PaginationMeta
from venue_platform.schemas.contact import ContactCreate, ContactListResponse, ContactResponse, ContactStats
from venue_platform.services import contact_service

router = APIRouter(prefix="/contacts", tags=["Contacts"])


@router.post("/", response_model=ContactResponse, status_code=status.HTTP_201_CREATED)
async def create_contact(data: ContactCreate, db: AsyncSession = Depends(get_db)):
    return await contact_service.create_contact(db, data)


@router.get("/", response_model=ContactListResponse)
async def list_contacts(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    is_resolved: Optional[bool] = None,
    search: Optional[str] = None,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    contacts, total = await contact_service.list_contacts(db, page, limit, is_resolved, search)
    return ContactListResponse(
        contacts=[ContactResponse.model_validate(c) for c in contacts],
        pagination=PaginationMeta.build(page, limit, total),
    )


@router.get("/stats/overview", response_model=ContactStats)
async def contact_stats(
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return await contact_service.contact_stats(db)


@router.get("/{contact_id}", response_model=ContactResponse)
async def get_contact(
    contact_id: int,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return await contact_service.get_contact(db, contact_id)


@router.put("/{contact_id}/resolve", response_model=ContactResponse)
async def resolve_contact(
    contact_id: int,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return await contact_service.set_resolved(db, contact_id, True)


@router.put("/{contact_id}/unresolve", response_model=ContactResponse)
async def unresolve_contact(
    contact_id: int,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return await contact_service.set_resolved(db, contact_id, False)


@router.delete("/{contact_id}", response_model=MessageResponse)
async def delete_contact(
    contact_id: int,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    await contact_service.delete_contact(db, contact_id)
    return MessageResponse(message="Contact deleted successfully")
