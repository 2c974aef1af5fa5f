from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from nikah_api.core.constants import MODERATOR_ROLES, PHOTO_DELETE_ROLES
from nikah_api.db.models import User
from nikah_api.dependencies import get_db, require_roles
from nikah_api.schemas.moderation import (
    ProfileListResponse,
    ProfileReviewEnvelope,
    ModerateRequest,
    PhotoModerateRequest,
    ModerationResult,
    AdminProfileEdit,
    AdminProfileEditResult,
)
from nikah_api.services.moderation import moderation_service

router = APIRouter(prefix="/api/admin/profiles", tags=["admin-profiles"])

require_moderator = require_roles(*MODERATOR_ROLES)


@router.get("", response_model=ProfileListResponse)
async def list_profiles(
    status_filter: str | None = Query(None, alias="status"),
    sort: str = Query("oldest"),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    _moderator: User = Depends(require_moderator),
    db: AsyncSession = Depends(get_db),
):
    return await moderation_service.list_profiles(db, status_filter, sort, page, limit)


@router.get("/{profile_id}", response_model=ProfileReviewEnvelope)
async def get_profile(
    profile_id: str,
    _moderator: User = Depends(require_moderator),
    db: AsyncSession = Depends(get_db),
):
    return ProfileReviewEnvelope(profile=await moderation_service.get_review(db, profile_id))


@router.post("/{profile_id}/moderate", response_model=ModerationResult)
async def moderate_profile(
    profile_id: str,
    body: ModerateRequest,
    moderator: User = Depends(require_moderator),
    db: AsyncSession = Depends(get_db),
):
    return await moderation_service.moderate_profile(db, moderator, profile_id, body)


@router.patch("/{profile_id}/photos/{photo_id}", response_model=ModerationResult)
async def moderate_photo(
    profile_id: str,
    photo_id: str,
    body: PhotoModerateRequest,
    moderator: User = Depends(require_moderator),
    db: AsyncSession = Depends(get_db),
):
    return await moderation_service.moderate_photo(db, moderator, profile_id, photo_id, body)


@router.delete("/{profile_id}/photos/{photo_id}", response_model=ModerationResult)
async def delete_photo(
    profile_id: str,
    photo_id: str,
    moderator: User = Depends(require_roles(*PHOTO_DELETE_ROLES)),
    db: AsyncSession = Depends(get_db),
):
    return await moderation_service.delete_photo(db, moderator, profile_id, photo_id)


@router.patch("/{profile_id}/edit", response_model=AdminProfileEditResult)
async def edit_profile(
    profile_id: str,
    body: AdminProfileEdit,
    moderator: User = Depends(require_moderator),
    db: AsyncSession = Depends(get_db),
):
    profile = await moderation_service.edit_profile(db, moderator, profile_id, body)
    return AdminProfileEditResult(message="Profile updated successfully", profile=profile)
