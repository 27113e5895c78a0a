"""
Authorization guard.

Three ways to resolve the caller from a bearer token:
  - get_current_user: mandatory, 401 when the token or account is unusable
  - get_optional_user: attaches the user when possible, anonymous otherwise
  - require_admin: mandatory resolution plus role == "admin", else 403

ensure_owner_or_admin is the single ownership rule shared by appointments,
blogs and reviews.
"""

from typing import Optional

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from venue_platform.core.logging import bind_user, get_logger
from venue_platform.core.security import TokenSigner, get_token_signer
from venue_platform.db.session import get_db
from venue_platform.models.user import User

logger = get_logger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def _resolve_user(db: AsyncSession, signer: TokenSigner, token: str) -> User:
    try:
        payload = signer.decode(token)
        user_id = int(payload["sub"])
    except (jwt.PyJWTError, KeyError, ValueError) as exc:
        logger.info("auth_token_rejected", reason=type(exc).__name__)
        raise _unauthorized("Invalid authentication credentials") from exc

    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()
    if user is None:
        raise _unauthorized("User not found")
    if not user.is_active:
        raise _unauthorized("Account is deactivated")

    bind_user(user.id, user.role)
    return user


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
    signer: TokenSigner = Depends(get_token_signer),
) -> User:
    if credentials is None or not credentials.credentials:
        raise _unauthorized("Access denied. No token provided")
    return await _resolve_user(db, signer, credentials.credentials)


async def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
    signer: TokenSigner = Depends(get_token_signer),
) -> Optional[User]:
    if credentials is None or not credentials.credentials:
        return None
    try:
        return await _resolve_user(db, signer, credentials.credentials)
    except HTTPException:
        return None


async def require_admin(user: User = Depends(get_current_user)) -> User:
    if not user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return user


def is_owner_or_admin(user: User, owner_id: int) -> bool:
    return user.is_admin or user.id == owner_id


def ensure_owner_or_admin(user: User, owner_id: int, action: str) -> None:
    """Raise 403 unless `user` owns the record or is an admin."""
    if not is_owner_or_admin(user, owner_id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Not authorized to {action}",
        )
