from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from nikah_api.db.models import User
from nikah_api.dependencies import get_current_user, get_db
from nikah_api.schemas.profile import ProfileCreate, ProfilePatch, ProfileEnvelope, ProfileSaveResponse
from nikah_api.services.profile import profile_service

router = APIRouter(prefix="/api/profile", tags=["profile"])


@router.get("", response_model=ProfileEnvelope)
async def get_profile(
    profile_id: str | None = Query(None, alias="id"),
    include_completed: bool = Query(False, alias="includeCompleted"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    profile = await profile_service.get_profile(db, current_user, profile_id, include_completed)
    return ProfileEnvelope(profile=profile)


@router.post("", response_model=ProfileSaveResponse)
async def create_profile(
    body: ProfileCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await profile_service.create_profile(db, current_user, body)


@router.patch("", response_model=ProfileSaveResponse)
async def update_profile(
    body: ProfilePatch,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await profile_service.update_profile(db, current_user, body)
