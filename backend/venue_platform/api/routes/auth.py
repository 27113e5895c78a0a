"""
Authentication endpoints: register, login, profile and password.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from venue_platform.api.deps import get_current_user
from venue_platform.core.security import TokenSigner, get_token_signer
from venue_platform.db.session import get_db
from venue_platform.models.user import User
from venue_platform.schemas.common import MessageResponse
from venue_platform.schemas.user import (
    AuthResponse,
    PasswordChange,
    ProfileUpdate,
    UserCreate,
    UserLogin,
    UserResponse,
)
from venue_platform.services import auth_service

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    user_data: UserCreate,
    db: AsyncSession = Depends(get_db),
    signer: TokenSigner = Depends(get_token_signer),
):
    """Register a new account and receive a token for it."""
    user = await auth_service.register_user(db, user_data)
    return AuthResponse(
        access_token=auth_service.issue_token(signer, user),
        user=UserResponse.model_validate(user),
    )


@router.post("/login", response_model=AuthResponse)
async def login(
    login_data: UserLogin,
    db: AsyncSession = Depends(get_db),
    signer: TokenSigner = Depends(get_token_signer),
):
    """Authenticate and receive a JWT access token."""
    user = await auth_service.authenticate_user(db, login_data)
    return AuthResponse(
        access_token=auth_service.issue_token(signer, user),
        user=UserResponse.model_validate(user),
    )


@router.get("/me", response_model=UserResponse)
async def me(user: User = Depends(get_current_user)):
    return user


@router.put("/me", response_model=UserResponse)
async def update_me(
    data: ProfileUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await auth_service.update_profile(db, user, data)


@router.put("/change-password", response_model=MessageResponse)
async def change_password(
    data: PasswordChange,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await auth_service.change_password(db, user, data)
    return MessageResponse(message="Password changed successfully")
