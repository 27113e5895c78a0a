"""
Partner endpoints. Public reads, admin writes.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from venue_platform.api.deps import require_admin
from venue_platform.db.session import get_db
from venue_platform.models.user import User
from venue_platform.schemas.common import MessageResponse, PaginationMeta
from venue_platform.schemas.partner import (
    PartnerCreate,
    PartnerListResponse,
    PartnerResponse,
    PartnerStats,
    PartnerUpdate,
)
from venue_platform.services import partner_service

router = APIRouter(prefix="/partners", tags=["Partners"])


@router.get("/", response_model=PartnerListResponse)
async def list_partners(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    partnership_type: Optional[str] = None,
    search: Optional[str] = None,
    db: AsyncSession = Depends(get_db),
):
    partners, total = await partner_service.list_partners(db, page, limit, partnership_type, search)
    return PartnerListResponse(
        partners=[PartnerResponse.model_validate(p) for p in partners],
        pagination=PaginationMeta.build(page, limit, total),
    )


@router.get("/types/list", response_model=list[str])
async def partnership_types(db: AsyncSession = Depends(get_db)):
    return await partner_service.partnership_types(db)


@router.get("/stats/overview", response_model=PartnerStats)
async def partner_stats(
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return await partner_service.partner_stats(db)


@router.get("/{partner_id}", response_model=PartnerResponse)
async def get_partner(partner_id: int, db: AsyncSession = Depends(get_db)):
    return await partner_service.get_partner(db, partner_id)


@router.post("/", response_model=PartnerResponse, status_code=status.HTTP_201_CREATED)
async def create_partner(
    data: PartnerCreate,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return await partner_service.create_partner(db, data)


@router.put("/{partner_id}", response_model=PartnerResponse)
async def update_partner(
    partner_id: int,
    data: PartnerUpdate,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return await partner_service.update_partner(db, partner_id, data)


@router.delete("/{partner_id}", response_model=MessageResponse)
async def delete_partner(
    partner_id: int,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    await partner_service.set_partner_active(db, partner_id, False)
    return MessageResponse(message="Partner deleted successfully")


@router.put("/{partner_id}/restore", response_model=PartnerResponse)
async def restore_partner(
    partner_id: int,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return await partner_service.set_partner_active(db, partner_id, True)
