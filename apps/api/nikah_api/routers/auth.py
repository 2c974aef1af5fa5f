from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from nikah_api.core import get_settings, limiter
from nikah_api.db.models import User
from nikah_api.dependencies import get_db, get_current_user
from nikah_api.schemas.auth import (
    RegisterRequest,
    LoginRequest,
    TokenResponse,
    AccountResponse,
    AccountUpdate,
    AccountUpdateResult,
    ChangePasswordRequest,
    MessageResponse,
    PhoneVerificationStatus,
    PhoneVerificationRequested,
    VerifyOtpRequest,
)
from nikah_api.services.auth import auth_service
from nikah_api.services.account import account_service

router = APIRouter(prefix="/api/auth", tags=["auth"])
_settings = get_settings()


@router.post("/register", response_model=TokenResponse, status_code=201)
@limiter.limit(_settings.auth_register_rate_limit)
async def register(
    request: Request,
    body: RegisterRequest,
    db: AsyncSession = Depends(get_db),
):
    return await auth_service.register(db, body)


@router.post("/login", response_model=TokenResponse)
@limiter.limit(_settings.auth_login_rate_limit)
async def login(
    request: Request,
    body: LoginRequest,
    db: AsyncSession = Depends(get_db),
):
    return await auth_service.login(db, body)


@router.get("/account", response_model=AccountResponse)
async def get_account(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await account_service.get_account(db, current_user)


@router.patch("/account", response_model=AccountUpdateResult)
async def update_account(
    body: AccountUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await account_service.update_account(db, current_user, body)


@router.post("/change-password", response_model=MessageResponse)
@limiter.limit(_settings.auth_password_rate_limit)
async def change_password(
    request: Request,
    body: ChangePasswordRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await auth_service.change_password(db, current_user, body)


@router.get("/phone-verification", response_model=PhoneVerificationStatus)
async def get_phone_verification(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await account_service.get_phone_verification(db, current_user)


@router.post("/phone-verification", response_model=PhoneVerificationRequested)
async def request_phone_verification(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await account_service.request_phone_verification(db, current_user)


@router.put("/phone-verification", response_model=MessageResponse)
async def verify_phone(
    body: VerifyOtpRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await account_service.verify_phone(db, current_user, body)
