"""
Admin user management endpoints.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from venue_platform.api.deps import require_admin
from venue_platform.db.session import get_db
from venue_platform.models.user import User
from venue_platform.schemas.common import MessageResponse, PaginationMeta
from venue_platform.schemas.user import (
    ActiveStatusResponse,
    AdminUserUpdate,
    UserListResponse,
    UserResponse,
    UserStats,
)
from venue_platform.services import user_service

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("/", response_model=UserListResponse)
async def list_users(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    role: Optional[str] = None,
    is_active: Optional[bool] = None,
    search: Optional[str] = None,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    users, total = await user_service.list_users(db, page, limit, role, is_active, search)
    return UserListResponse(
        users=[UserResponse.model_validate(u) for u in users],
        pagination=PaginationMeta.build(page, limit, total),
    )


@router.get("/stats/overview", response_model=UserStats)
async def user_stats(
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return await user_service.user_stats(db)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: int,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return await user_service.get_user(db, user_id)


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: int,
    data: AdminUserUpdate,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return await user_service.update_user(db, admin, user_id, data)


@router.put("/{user_id}/toggle-active", response_model=ActiveStatusResponse)
async def toggle_active(
    user_id: int,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    user = await user_service.toggle_active(db, admin, user_id)
    return ActiveStatusResponse(
        is_active=user.is_active,
        message=f"User {'activated' if user.is_active else 'deactivated'} successfully",
    )


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: int,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    await user_service.delete_user(db, admin, user_id)
    return MessageResponse(message="User deleted successfully")
