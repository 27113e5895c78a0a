"""
Admin user management.

Admins can't deactivate, toggle or delete their own account.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import HTTPException, status
from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from venue_platform.core.logging import get_logger
from venue_platform.models.user import User
from venue_platform.schemas.user import AdminUserUpdate

logger = get_logger(__name__)


async def list_users(
    db: AsyncSession,
    page: int = 1,
    limit: int = 10,
    role: Optional[str] = None,
    is_active: Optional[bool] = None,
    search: Optional[str] = None,
) -> tuple[list[User], int]:
    query = select(User)

    if role in ("user", "admin"):
        query = query.where(User.role == role)
    if is_active is not None:
        query = query.where(User.is_active == is_active)
    if search:
        pattern = f"%{search}%"
        query = query.where(or_(User.full_name.ilike(pattern), User.email.ilike(pattern)))

    total = (await db.execute(select(func.count()).select_from(query.subquery()))).scalar()
    result = await db.execute(
        query.order_by(User.created_at.desc(), User.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
    )
    return list(result.scalars().all()), total


async def get_user(db: AsyncSession, user_id: int) -> User:
    user = await db.get(User, user_id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )
    return user


def _refuse_self(actor: User, target: User, detail: str) -> None:
    if actor.id == target.id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


async def update_user(db: AsyncSession, actor: User, user_id: int, data: AdminUserUpdate) -> User:
    user = await get_user(db, user_id)
    if data.is_active is False:
        _refuse_self(actor, user, "You cannot deactivate your own account")

    if data.full_name is not None:
        user.full_name = data.full_name
    if data.role is not None:
        user.role = data.role
    if data.is_active is not None:
        user.is_active = data.is_active

    await db.flush()
    await db.refresh(user)
    logger.info("user_updated", user_id=user.id, by_admin=actor.id)
    return user


async def toggle_active(db: AsyncSession, actor: User, user_id: int) -> User:
    user = await get_user(db, user_id)
    _refuse_self(actor, user, "You cannot change your own active status")

    user.is_active = not user.is_active
    await db.flush()
    await db.refresh(user)
    logger.info("user_active_toggled", user_id=user.id, is_active=user.is_active, by_admin=actor.id)
    return user


async def delete_user(db: AsyncSession, actor: User, user_id: int) -> None:
    user = await get_user(db, user_id)
    _refuse_self(actor, user, "You cannot delete your own account")

    await db.delete(user)
    await db.flush()
    logger.info("user_deleted", user_id=user_id, by_admin=actor.id)


async def user_stats(db: AsyncSession) -> dict:
    since = datetime.now(timezone.utc) - timedelta(days=30)

    async def count(*criteria) -> int:
        return (await db.execute(select(func.count()).select_from(User).where(*criteria))).scalar()

    total = await count()
    active = await count(User.is_active.is_(True))
    admins = await count(User.role == "admin")
    recent = await count(User.created_at >= since)

    return {
        "total_users": total,
        "active_users": active,
        "inactive_users": total - active,
        "admin_users": admins,
        "regular_users": total - admins,
        "recent_users_30_days": recent,
    }
