"""
Authentication service handling registration, login, profile and password changes.
"""

from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from fastapi import HTTPException, status

from venue_platform.models.user import User
from venue_platform.schemas.user import UserCreate, UserLogin, ProfileUpdate, PasswordChange
from venue_platform.core.security import TokenSigner, hash_password, verify_password
from venue_platform.core.logging import get_logger

logger = get_logger(__name__)


async def register_user(db: AsyncSession, user_data: UserCreate) -> User:
    """
    Register a new user with hashed password.
    Raises 409 if the email already exists.
    """
    result = await db.execute(select(User).where(User.email == user_data.email))
    if result.scalar_one_or_none():
        logger.warning("registration_failed", reason="email_exists", email=user_data.email)
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Email already registered",
        )

    user = User(
        email=user_data.email,
        full_name=user_data.full_name,
        role="user",
        hashed_password=hash_password(user_data.password),
    )
    db.add(user)
    try:
        await db.flush()
    except IntegrityError as exc:
        # Lost a race with a concurrent registration for the same email
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Email already registered",
        ) from exc
    await db.refresh(user)

    logger.info("user_registered", user_id=user.id, email=user.email, role=user.role)
    return user


async def authenticate_user(db: AsyncSession, login_data: UserLogin) -> User:
    """
    Check credentials and stamp last_login.
    Raises 401 if credentials are invalid or the account is deactivated.
    """
    result = await db.execute(select(User).where(User.email == login_data.email))
    user = result.scalar_one_or_none()

    if not user or not verify_password(login_data.password, user.hashed_password):
        logger.warning("login_failed", email=login_data.email)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not user.is_active:
        logger.warning("login_failed", email=login_data.email, reason="deactivated")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Account is deactivated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user.last_login = datetime.now(timezone.utc)
    await db.flush()
    await db.refresh(user)

    logger.info("user_logged_in", user_id=user.id)
    return user


def issue_token(signer: TokenSigner, user: User) -> str:
    return signer.create_access_token(subject=str(user.id))


async def update_profile(db: AsyncSession, user: User, data: ProfileUpdate) -> User:
    if data.full_name:
        user.full_name = data.full_name
    await db.flush()
    await db.refresh(user)
    return user


async def change_password(db: AsyncSession, user: User, data: PasswordChange) -> None:
    if not verify_password(data.current_password, user.hashed_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Current password is incorrect",
        )

    user.hashed_password = hash_password(data.new_password)
    await db.flush()
    logger.info("password_changed", user_id=user.id)
