"""Account settings and self-service phone verification."""

import logging
import math
import re
import secrets
from datetime import datetime, timedelta

from fastapi import HTTPException, status
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from nikah_api.core import get_settings, utcnow, as_utc
from nikah_api.db.models import User, PhoneVerification
from nikah_api.schemas.auth import (
    AccountResponse,
    AccountUpdate,
    AccountUpdateResult,
    PendingVerification,
    PhoneVerificationStatus,
    PhoneVerificationRequested,
    VerifyOtpRequest,
    MessageResponse,
)
from nikah_api.services.notifications import notify_phone_verification_request, notify_phone_update

logger = logging.getLogger(__name__)

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_OTP_RE = re.compile(r"^\d{6}$")
_DAY_SECONDS = 24 * 60 * 60


def generate_otp() -> str:
    return str(100000 + secrets.randbelow(900000))


def phone_cooldown(user: User) -> tuple[int, datetime | None]:
    """Whole days left before the phone number may change again, and when the wait ends."""
    changed_at = as_utc(user.phone_changed_at)
    if changed_at is None:
        return 0, None
    ends_at = changed_at + timedelta(days=get_settings().phone_change_cooldown_days)
    remaining = (ends_at - utcnow()).total_seconds()
    if remaining <= 0:
        return 0, None
    return math.ceil(remaining / _DAY_SECONDS), ends_at


def account_response(user: User) -> AccountResponse:
    days, ends_at = phone_cooldown(user)
    account = AccountResponse.model_validate(user)
    account.phone_cooldown_days = days
    account.phone_cooldown_ends_at = ends_at
    return account


async def latest_pending(db: AsyncSession, user_id: str) -> PhoneVerification | None:
    """Newest unverified, unexpired request for ``user_id``."""
    result = await db.execute(
        select(PhoneVerification)
        .where(
            PhoneVerification.user_id == user_id,
            PhoneVerification.verified.is_(False),
            PhoneVerification.expires_at > utcnow(),
        )
        .order_by(PhoneVerification.requested_at.desc())
        .limit(1)
    )
    return result.scalar_one_or_none()


async def get_account(db: AsyncSession, user: User) -> AccountResponse:
    return account_response(user)


async def update_account(db: AsyncSession, user: User, body: AccountUpdate) -> AccountUpdateResult:
    """Name and email are required; a phone change resets verification and starts the cooldown."""
    name = (body.name or "").strip()
    if not name:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Name is required")
    email = (body.email or "").strip().lower()
    if not email or not _EMAIL_RE.match(email):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Valid email is required")

    if email != user.email:
        taken = await db.execute(select(User.id).where(func.lower(User.email) == email, User.id != user.id))
        if taken.scalar_one_or_none():
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email address is already in use")

    new_phone = (body.phone or "").strip() or None
    old_phone = user.phone
    phone_changed = new_phone != old_phone
    if phone_changed:
        days, _ = phone_cooldown(user)
        if days:
            raise HTTPException(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                detail=f"You can change your phone number again in {days} day{'s' if days != 1 else ''}",
            )
        if new_phone:
            taken = await db.execute(select(User.id).where(User.phone == new_phone, User.id != user.id))
            if taken.scalar_one_or_none():
                raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Phone number is already in use")

    user.name = name
    if email != user.email:
        user.email = email
        user.email_verified = False
    if phone_changed:
        user.phone = new_phone
        user.phone_verified = False
        user.phone_changed_at = utcnow()
    await db.flush()

    if phone_changed:
        logger.info("User %s changed phone number", user.id)
        await notify_phone_update(user, old_phone, new_phone)
        message = "Account updated successfully. Phone verification required."
    else:
        message = "Account updated successfully"
    return AccountUpdateResult(message=message, user=account_response(user), phone_changed=phone_changed)


async def get_phone_verification(db: AsyncSession, user: User) -> PhoneVerificationStatus:
    pending = await latest_pending(db, user.id)
    return PhoneVerificationStatus(
        phone=user.phone,
        phone_verified=user.phone_verified,
        pending_verification=PendingVerification.model_validate(pending) if pending else None,
    )


async def request_phone_verification(db: AsyncSession, user: User) -> PhoneVerificationRequested:
    """Create a 6-digit code and hand it to the admins, who call the user."""
    if not user.phone:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Please add a phone number first")
    if user.phone_verified:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Phone number is already verified")

    settings = get_settings()
    now = utcnow()
    window = timedelta(minutes=settings.phone_otp_request_cooldown_minutes)
    pending = await latest_pending(db, user.id)
    if pending and as_utc(pending.requested_at) > now - window:
        wait = math.ceil((as_utc(pending.requested_at) + window - now).total_seconds() / 60)
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=f"Please wait {wait} minutes before requesting again",
        )

    otp = generate_otp()
    verification = PhoneVerification(
        user_id=user.id,
        phone=user.phone,
        otp=otp,
        requested_at=now,
        expires_at=now + timedelta(hours=settings.phone_otp_expire_hours),
    )
    db.add(verification)
    await db.flush()
    await notify_phone_verification_request(user, user.phone, otp)
    return PhoneVerificationRequested(
        message="Verification request submitted. Our team will contact you within 24 hours.",
        verification=PendingVerification.model_validate(verification),
    )


async def verify_phone(db: AsyncSession, user: User, body: VerifyOtpRequest) -> MessageResponse:
    otp = (body.otp or "").strip()
    if not _OTP_RE.match(otp):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Please enter a valid 6-digit code")

    verification = await latest_pending(db, user.id)
    if not verification:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No pending verification found. Please request a new code.",
        )
    max_attempts = get_settings().phone_otp_max_attempts
    if verification.attempts >= max_attempts:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Too many failed attempts. Please request a new code.",
        )
    if not secrets.compare_digest(verification.otp, otp):
        verification.attempts += 1
        remaining = max_attempts - verification.attempts
        # get_db rolls back on HTTPException; the attempt must survive it
        await db.commit()
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid code. {remaining} attempts remaining.",
        )

    now = utcnow()
    verification.verified = True
    verification.verified_at = now
    user.phone_verified = True
    await db.flush()
    logger.info("User %s verified phone via code", user.id)
    return MessageResponse(message="Phone number verified successfully!")


class AccountService:
    """Facade for account settings and phone verification."""

    @staticmethod
    async def get_account(db: AsyncSession, user: User) -> AccountResponse:
        return await get_account(db, user)

    @staticmethod
    async def update_account(db: AsyncSession, user: User, body: AccountUpdate) -> AccountUpdateResult:
        return await update_account(db, user, body)

    @staticmethod
    async def get_phone_verification(db: AsyncSession, user: User) -> PhoneVerificationStatus:
        return await get_phone_verification(db, user)

    @staticmethod
    async def request_phone_verification(db: AsyncSession, user: User) -> PhoneVerificationRequested:
        return await request_phone_verification(db, user)

    @staticmethod
    async def verify_phone(db: AsyncSession, user: User, body: VerifyOtpRequest) -> MessageResponse:
        return await verify_phone(db, user, body)


account_service = AccountService()
