"""Admin phone verification queue: list requests/users, verify or reject, send reminders."""

import logging
import math

from fastapi import HTTPException, status
from sqlalchemy import select, func, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from nikah_api.core import utcnow
from nikah_api.core.constants import USER_ROLE
from nikah_api.db.models import User, PhoneVerification
from nikah_api.schemas.auth import (
    VerificationUser,
    PendingVerification,
    PendingVerificationRow,
    UserVerificationRow,
    VerificationPage,
    VerificationPagination,
    AdminVerifyRequest,
    ReminderRequest,
    ReminderResult,
    MessageResponse,
    PendingCount,
)
from nikah_api.services.account import latest_pending
from nikah_api.services.notifications import send_verification_reminder

logger = logging.getLogger(__name__)

VERIFICATION_TABS = ("pending", "unverified", "all")


def _user_search(search: str):
    pattern = f"%{search}%"
    return or_(User.name.ilike(pattern), User.email.ilike(pattern), User.phone.contains(search))


def _pagination(page: int, limit: int, total: int) -> VerificationPagination:
    return VerificationPagination(page=page, limit=limit, total=total, total_pages=math.ceil(total / limit))


async def _pending_tab(db: AsyncSession, page: int, limit: int, search: str) -> VerificationPage:
    conditions = [PhoneVerification.verified.is_(False), PhoneVerification.expires_at > utcnow()]
    if search:
        pattern = f"%{search}%"
        conditions.append(
            or_(
                PhoneVerification.user.has(or_(User.name.ilike(pattern), User.email.ilike(pattern))),
                PhoneVerification.phone.contains(search),
            )
        )
    stmt = (
        select(PhoneVerification)
        .where(*conditions)
        .options(selectinload(PhoneVerification.user))
        .order_by(PhoneVerification.requested_at.desc())
        .offset((page - 1) * limit)
        .limit(limit)
    )
    rows = (await db.execute(stmt)).scalars().all()
    total = (await db.execute(select(func.count()).select_from(PhoneVerification).where(*conditions))).scalar() or 0
    data = [
        PendingVerificationRow(
            id=v.id,
            phone=v.phone,
            otp=v.otp,
            attempts=v.attempts,
            expires_at=v.expires_at,
            requested_at=v.requested_at,
            user=VerificationUser.model_validate(v.user),
        )
        for v in rows
    ]
    return VerificationPage(data=data, pagination=_pagination(page, limit, total))


async def _users_tab(db: AsyncSession, page: int, limit: int, search: str, unverified_only: bool) -> VerificationPage:
    conditions = [User.role == USER_ROLE, User.phone.is_not(None)]
    if unverified_only:
        conditions.append(User.phone_verified.is_(False))
    if search:
        conditions.append(_user_search(search))
    stmt = (
        select(User)
        .where(*conditions)
        .order_by(User.created_at.desc())
        .offset((page - 1) * limit)
        .limit(limit)
    )
    users = (await db.execute(stmt)).scalars().all()
    total = (await db.execute(select(func.count()).select_from(User).where(*conditions))).scalar() or 0

    data = []
    for user in users:
        row = UserVerificationRow.model_validate(user)
        if unverified_only:
            pending = await latest_pending(db, user.id)
            row.pending_verification = PendingVerification.model_validate(pending) if pending else None
        data.append(row)
    return VerificationPage(data=data, pagination=_pagination(page, limit, total))


async def list_verifications(
    db: AsyncSession, tab: str = "pending", page: int = 1, limit: int = 20, search: str = ""
) -> VerificationPage:
    """pending: open requests; unverified: users with an unverified phone; all: every user with a phone."""
    search = (search or "").strip()
    if tab == "pending":
        return await _pending_tab(db, page, limit, search)
    if tab == "unverified":
        return await _users_tab(db, page, limit, search, unverified_only=True)
    return await _users_tab(db, page, limit, search, unverified_only=False)


async def pending_count(db: AsyncSession) -> PendingCount:
    count = (
        await db.execute(
            select(func.count())
            .select_from(PhoneVerification)
            .where(PhoneVerification.verified.is_(False), PhoneVerification.expires_at > utcnow())
        )
    ).scalar() or 0
    return PendingCount(count=count)


async def admin_verify(db: AsyncSession, admin: User, body: AdminVerifyRequest) -> MessageResponse:
    if body.action == "verify":
        if body.verification_id:
            result = await db.execute(
                select(PhoneVerification)
                .where(PhoneVerification.id == body.verification_id)
                .options(selectinload(PhoneVerification.user))
            )
            verification = result.scalar_one_or_none()
            if not verification:
                raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Verification request not found")
            verification.verified = True
            verification.verified_at = utcnow()
            verification.verified_by = admin.id
            user = verification.user
        elif body.user_id:
            user = (await db.execute(select(User).where(User.id == body.user_id))).scalar_one_or_none()
            if not user:
                raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
        else:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail="verificationId or userId required"
            )
        user.phone_verified = True
        await db.flush()
        logger.info("Phone verified for user %s by admin %s", user.id, admin.id)
        return MessageResponse(message=f"Phone number verified for {user.name or user.email}")

    if body.action == "reject":
        if not body.verification_id:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="verificationId required")
        result = await db.execute(select(PhoneVerification).where(PhoneVerification.id == body.verification_id))
        verification = result.scalar_one_or_none()
        if not verification:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Verification request not found")
        verification.expires_at = utcnow()
        await db.flush()
        logger.info("Verification %s rejected by admin %s", verification.id, admin.id)
        return MessageResponse(message="Verification request rejected")

    raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid action")


async def send_reminders(db: AsyncSession, body: ReminderRequest) -> ReminderResult:
    if body.action != "send_reminder":
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid action")
    if not body.user_ids:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="userIds array required")

    result = await db.execute(
        select(User).where(
            User.id.in_(body.user_ids),
            User.phone.is_not(None),
            User.phone_verified.is_(False),
        )
    )
    users = result.scalars().all()
    if not users:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No eligible users found")

    sent = failed = 0
    for user in users:
        if await send_verification_reminder(user):
            sent += 1
        else:
            failed += 1
    message = f"Reminder sent to {sent} user(s)"
    if failed:
        message += f", {failed} failed"
    return ReminderResult(message=message, sent=sent, failed=failed)


class VerificationService:
    """Facade for the admin verification queue."""

    @staticmethod
    async def list_verifications(
        db: AsyncSession, tab: str = "pending", page: int = 1, limit: int = 20, search: str = ""
    ) -> VerificationPage:
        return await list_verifications(db, tab, page, limit, search)

    @staticmethod
    async def pending_count(db: AsyncSession) -> PendingCount:
        return await pending_count(db)

    @staticmethod
    async def admin_verify(db: AsyncSession, admin: User, body: AdminVerifyRequest) -> MessageResponse:
        return await admin_verify(db, admin, body)

    @staticmethod
    async def send_reminders(db: AsyncSession, body: ReminderRequest) -> ReminderResult:
        return await send_reminders(db, body)


verification_service = VerificationService()
