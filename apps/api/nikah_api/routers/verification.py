from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from nikah_api.core.constants import ADMIN_ROLES
from nikah_api.db.models import User
from nikah_api.dependencies import get_db, require_roles
from nikah_api.schemas.auth import (
    VerificationPage,
    PendingCount,
    AdminVerifyRequest,
    MessageResponse,
    ReminderRequest,
    ReminderResult,
)
from nikah_api.services.verification import verification_service

router = APIRouter(prefix="/api/admin/users/verification", tags=["admin-verification"])

require_admin = require_roles(*ADMIN_ROLES)


@router.get("", response_model=VerificationPage)
async def list_verifications(
    tab: str = Query("pending"),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    search: str = Query(""),
    _admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return await verification_service.list_verifications(db, tab, page, limit, search)


@router.get("/pending-count", response_model=PendingCount)
async def pending_count(
    _admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return await verification_service.pending_count(db)


@router.put("", response_model=MessageResponse)
async def admin_verify(
    body: AdminVerifyRequest,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return await verification_service.admin_verify(db, admin, body)


@router.post("", response_model=ReminderResult)
async def send_reminders(
    body: ReminderRequest,
    _admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return await verification_service.send_reminders(db, body)
