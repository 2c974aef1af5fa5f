"""Profile creation wizard: create on step 1, patch snapshots on later steps."""

import logging

from fastapi import HTTPException, status
from pydantic.alias_generators import to_camel
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from nikah_api.db.models import Profile, FieldSuggestion, User
from nikah_api.profile_fields import (
    COMPLETION_FIELDS,
    INITIAL_COMPLETION,
    STEP_REQUIRED_FIELDS,
    completion_percent,
    missing_fields,
)
from nikah_api.schemas.profile import (
    ProfileCreate,
    ProfilePatch,
    ProfileResponse,
    ProfileSaveResponse,
)

logger = logging.getLogger(__name__)

# Numeric/boolean columns: a cleared value resets to the column's neutral value.
_RESET_VALUES = {
    "number_of_children": 0,
    "number_of_brothers": 0,
    "number_of_sisters": 0,
    "married_brothers": 0,
    "married_sisters": 0,
    "has_disability": False,
    "origin_audience": "SAME_ORIGIN",
}


def profile_values(profile: Profile) -> dict:
    """Completion-relevant values keyed by wire (camelCase) name."""
    snake = {to_camel(name): name for name in Profile.__table__.columns.keys()}
    return {name: getattr(profile, snake[name]) for name in COMPLETION_FIELDS}


def apply_fields(profile: Profile, fields: dict) -> list[str]:
    """Copy snake_case ``fields`` onto ``profile``; blanks become NULL. Returns changed names."""
    changed = []
    for name, value in fields.items():
        if isinstance(value, str):
            value = value.strip() or None
        if value is None and name in _RESET_VALUES:
            value = _RESET_VALUES[name]
        setattr(profile, name, value)
        changed.append(name)
    return changed


async def _suggest_mother_tongue(db: AsyncSession, user_id: str, value: str | None) -> None:
    """Queue a free-text mother tongue for admins, once per user and value."""
    value = (value or "").strip()
    if not value:
        return
    existing = await db.execute(
        select(FieldSuggestion.id).where(
            FieldSuggestion.user_id == user_id,
            FieldSuggestion.field_type == "MOTHER_TONGUE",
            FieldSuggestion.suggested_value == value,
        )
    )
    if existing.scalar_one_or_none():
        return
    db.add(
        FieldSuggestion(
            user_id=user_id,
            field_type="MOTHER_TONGUE",
            suggested_value=value,
            suggested_label=value,
            status="PENDING",
        )
    )


async def _get_owned_profile(db: AsyncSession, user: User, profile_id: str) -> Profile:
    result = await db.execute(select(Profile).where(Profile.id == profile_id, Profile.user_id == user.id))
    profile = result.scalar_one_or_none()
    if not profile:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Profile not found")
    return profile


async def get_profile(
    db: AsyncSession, user: User, profile_id: str | None = None, include_completed: bool = False
) -> ProfileResponse | None:
    """One owned profile by id, else the most recently updated draft (or any, with include_completed)."""
    if profile_id:
        return ProfileResponse.model_validate(await _get_owned_profile(db, user, profile_id))
    stmt = select(Profile).where(Profile.user_id == user.id)
    if not include_completed:
        stmt = stmt.where(Profile.profile_completion < 100)
    result = await db.execute(stmt.order_by(Profile.updated_at.desc()).limit(1))
    profile = result.scalar_one_or_none()
    return ProfileResponse.model_validate(profile) if profile else None


async def create_profile(db: AsyncSession, user: User, body: ProfileCreate) -> ProfileSaveResponse:
    data = body.model_dump(exclude_unset=True)
    missing = missing_fields(1, {to_camel(k): v for k, v in data.items()})
    if missing:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Missing required fields: {', '.join(STEP_REQUIRED_FIELDS[1])}",
        )
    profile = Profile(user_id=user.id)
    apply_fields(profile, data)
    profile.profile_completion = INITIAL_COMPLETION
    db.add(profile)
    await db.flush()
    logger.info("User %s created profile %s", user.id, profile.id)
    return ProfileSaveResponse(
        profile_id=profile.id,
        profile_completion=profile.profile_completion,
        message="Profile created! Continue to add more details.",
    )


async def update_profile(db: AsyncSession, user: User, body: ProfilePatch) -> ProfileSaveResponse:
    """Apply a wizard snapshot and recompute completion."""
    if not body.profile_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Profile ID is required")
    profile = await _get_owned_profile(db, user, body.profile_id)
    data = body.model_dump(exclude_unset=True, exclude={"profile_id", "step"})
    apply_fields(profile, data)
    if "other_mother_tongue" in data:
        await _suggest_mother_tongue(db, user.id, data["other_mother_tongue"])

    previous = profile.profile_completion
    profile.profile_completion = completion_percent(profile_values(profile))
    await db.flush()
    if profile.profile_completion == 100 and previous < 100:
        logger.info("Profile %s reached 100%% completion", profile.id)
    return ProfileSaveResponse(
        profile_id=profile.id,
        profile_completion=profile.profile_completion,
        message="Profile updated successfully!",
    )


class ProfileService:
    """Facade for profile wizard operations."""

    @staticmethod
    async def get_profile(
        db: AsyncSession, user: User, profile_id: str | None = None, include_completed: bool = False
    ) -> ProfileResponse | None:
        return await get_profile(db, user, profile_id, include_completed)

    @staticmethod
    async def create_profile(db: AsyncSession, user: User, body: ProfileCreate) -> ProfileSaveResponse:
        return await create_profile(db, user, body)

    @staticmethod
    async def update_profile(db: AsyncSession, user: User, body: ProfilePatch) -> ProfileSaveResponse:
        return await update_profile(db, user, body)


profile_service = ProfileService()
