"""Auth (register, login, password change) business logic."""

import logging

from fastapi import HTTPException, status
from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from nikah_api.core import hash_password, verify_password, create_access_token, utcnow
from nikah_api.core.constants import USER_ROLE
from nikah_api.db.models import User
from nikah_api.schemas.auth import (
    RegisterRequest,
    LoginRequest,
    TokenResponse,
    ChangePasswordRequest,
    MessageResponse,
)

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def _token_for(user: User) -> TokenResponse:
    return TokenResponse(access_token=create_access_token(subject=str(user.id), role=user.role), role=user.role)


async def register(db: AsyncSession, body: RegisterRequest) -> TokenResponse:
    """Create a USER account with email + password."""
    email = normalize_email(body.email)
    existing = await db.execute(select(User.id).where(func.lower(User.email) == email))
    if existing.scalar_one_or_none():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already registered")

    phone = (body.phone or "").strip() or None
    user = User(
        name=body.name.strip(),
        email=email,
        hashed_password=hash_password(body.password),
        phone=phone,
        role=USER_ROLE,
    )
    db.add(user)
    try:
        await db.flush()
    except IntegrityError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already registered")
    logger.info("Registered user %s", user.id)
    return _token_for(user)


async def login(db: AsyncSession, body: LoginRequest) -> TokenResponse:
    """Authenticate and return a token. Raises HTTPException if invalid credentials."""
    email = normalize_email(body.email)
    result = await db.execute(select(User).where(func.lower(User.email) == email))
    user = result.scalar_one_or_none()
    if not user or not verify_password(body.password, user.hashed_password):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid email or password")
    if user.status != "ACTIVE":
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Account is not active")
    user.last_login_at = utcnow()
    return _token_for(user)


async def change_password(db: AsyncSession, user: User, body: ChangePasswordRequest) -> MessageResponse:
    if not verify_password(body.current_password, user.hashed_password):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Current password is incorrect")
    if body.current_password == body.new_password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="New password must be different from current password",
        )
    user.hashed_password = hash_password(body.new_password)
    await db.flush()
    logger.info("Password changed for user %s", user.id)
    return MessageResponse(message="Password changed successfully")


class AuthService:
    """Facade for auth operations."""

    @staticmethod
    async def register(db: AsyncSession, body: RegisterRequest) -> TokenResponse:
        return await register(db, body)

    @staticmethod
    async def login(db: AsyncSession, body: LoginRequest) -> TokenResponse:
        return await login(db, body)

    @staticmethod
    async def change_password(db: AsyncSession, user: User, body: ChangePasswordRequest) -> MessageResponse:
        return await change_password(db, user, body)


auth_service = AuthService()
