"""Admin profile moderation: list, review, approve/reject/ban, photo moderation, remap edits."""

import logging
import math

from fastapi import HTTPException, status
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from nikah_api.core.constants import utcnow
from nikah_api.db.models import Profile, Photo, Height, User
from nikah_api.schemas.moderation import (
    RefItem,
    PhotoItem,
    AccountSummary,
    ProfileReview,
    ProfileListItem,
    ProfileListResponse,
    Pagination,
    StatusCounts,
    ModerateRequest,
    PhotoModerateRequest,
    PhotoStatusItem,
    ModerationResult,
    AdminProfileEdit,
)
from nikah_api.schemas.profile import ProfileResponse
from nikah_api.services.profile import apply_fields

logger = logging.getLogger(__name__)

MODERATION_STATUSES = (Profile.PENDING, Profile.APPROVED, Profile.REJECTED, Profile.BANNED)
PROFILE_SORTS = {
    "oldest": Profile.created_at.asc(),
    "newest": Profile.created_at.desc(),
    "completeness": Profile.profile_completion.desc(),
}
PHOTO_ACTIONS = {
    "approve": (Photo.APPROVED, "Photo approved successfully"),
    "reject": (Photo.REJECTED, "Photo rejected"),
    "pending": (Photo.PENDING, "Photo set to pending"),
}

_REF_ATTRS = (
    "origin",
    "ethnicity",
    "caste",
    "country_of_origin",
    "country_living_in",
    "state_province",
    "city",
    "sect",
    "maslak",
    "height",
    "education_level",
    "education_field",
    "income_range",
    "mother_tongue",
)


def _ref(row) -> RefItem | None:
    if row is None:
        return None
    if isinstance(row, Height):
        return RefItem(id=row.id, label=f"{row.label_imperial} ({row.label_metric})")
    label = getattr(row, "label", None) or getattr(row, "name", None) or ""
    return RefItem(id=row.id, label=label)


def build_review(profile: Profile) -> ProfileReview:
    base = ProfileResponse.model_validate(profile).model_dump()
    return ProfileReview(
        **base,
        **{attr: _ref(getattr(profile, attr)) for attr in _REF_ATTRS},
        moderated_at=profile.moderated_at,
        moderated_by=profile.moderated_by,
        banned_at=profile.banned_at,
        ban_reason=profile.ban_reason,
        is_verified=profile.is_verified,
        photos=[PhotoItem.model_validate(p) for p in profile.photos],
        user=AccountSummary.model_validate(profile.user),
    )


async def _load_profile(db: AsyncSession, profile_id: str) -> Profile:
    stmt = (
        select(Profile)
        .where(Profile.id == profile_id)
        .options(
            *(selectinload(getattr(Profile, attr)) for attr in _REF_ATTRS),
            selectinload(Profile.photos),
            selectinload(Profile.user),
        )
        .execution_options(populate_existing=True)
    )
    profile = (await db.execute(stmt)).scalar_one_or_none()
    if not profile:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Profile not found")
    return profile


async def _get_photo(db: AsyncSession, profile_id: str, photo_id: str) -> Photo:
    result = await db.execute(select(Photo).where(Photo.id == photo_id, Photo.profile_id == profile_id))
    photo = result.scalar_one_or_none()
    if not photo:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Photo not found")
    return photo


async def list_profiles(
    db: AsyncSession,
    status_filter: str | None = None,
    sort: str = "oldest",
    page: int = 1,
    limit: int = 20,
) -> ProfileListResponse:
    if status_filter and status_filter not in MODERATION_STATUSES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"status must be one of: {', '.join(MODERATION_STATUSES)}",
        )
    order = PROFILE_SORTS.get(sort, PROFILE_SORTS["oldest"])

    stmt = select(Profile)
    count_stmt = select(func.count()).select_from(Profile)
    if status_filter:
        stmt = stmt.where(Profile.moderation_status == status_filter)
        count_stmt = count_stmt.where(Profile.moderation_status == status_filter)
    stmt = (
        stmt.order_by(order)
        .offset((page - 1) * limit)
        .limit(limit)
        .options(
            selectinload(Profile.user),
            selectinload(Profile.photos),
            selectinload(Profile.country_living_in),
            selectinload(Profile.city),
            selectinload(Profile.origin),
        )
    )
    profiles = (await db.execute(stmt)).scalars().all()
    total = (await db.execute(count_stmt)).scalar() or 0

    by_status = dict(
        (await db.execute(select(Profile.moderation_status, func.count()).group_by(Profile.moderation_status))).all()
    )
    items = [
        ProfileListItem(
            id=p.id,
            profile_for=p.profile_for,
            gender=p.gender,
            date_of_birth=p.date_of_birth,
            moderation_status=p.moderation_status,
            profile_completion=p.profile_completion,
            created_at=p.created_at,
            country_living_in=_ref(p.country_living_in),
            city=_ref(p.city),
            origin=_ref(p.origin),
            photos=[PhotoItem.model_validate(ph) for ph in p.photos],
            user=AccountSummary.model_validate(p.user),
        )
        for p in profiles
    ]
    return ProfileListResponse(
        profiles=items,
        pagination=Pagination(
            page=page, limit=limit, total_count=total, total_pages=math.ceil(total / limit) if limit else 0
        ),
        counts=StatusCounts(
            pending=by_status.get(Profile.PENDING, 0),
            approved=by_status.get(Profile.APPROVED, 0),
            rejected=by_status.get(Profile.REJECTED, 0),
            banned=by_status.get(Profile.BANNED, 0),
        ),
    )


async def get_review(db: AsyncSession, profile_id: str) -> ProfileReview:
    return build_review(await _load_profile(db, profile_id))


async def moderate_profile(
    db: AsyncSession, moderator: User, profile_id: str, body: ModerateRequest
) -> ModerationResult:
    """approve -> APPROVED + published; reject -> REJECTED + feedback; ban -> BANNED + deactivated."""
    result = await db.execute(select(Profile).where(Profile.id == profile_id))
    profile = result.scalar_one_or_none()
    if not profile:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Profile not found")

    now = utcnow()
    feedback = (body.feedback or "").strip() or None
    if body.action == "approve":
        profile.moderation_status = Profile.APPROVED
        profile.moderated_at = now
        profile.moderated_by = moderator.id
        profile.rejection_reason = None
        profile.is_published = True
        profile.is_verified = True
        message = "Profile approved successfully"
    elif body.action == "reject":
        profile.moderation_status = Profile.REJECTED
        profile.moderated_at = now
        profile.moderated_by = moderator.id
        profile.rejection_reason = feedback
        profile.is_published = False
        message = "Profile rejected with feedback"
    elif body.action == "ban":
        profile.moderation_status = Profile.BANNED
        profile.banned_at = now
        profile.banned_by = moderator.id
        profile.ban_reason = feedback
        profile.is_published = False
        profile.is_active = False
        message = "Profile banned successfully"
    else:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid action")

    await db.flush()
    logger.info("Profile %s: %s by %s", profile_id, body.action, moderator.id)
    return ModerationResult(message=message)


async def moderate_photo(
    db: AsyncSession, moderator: User, profile_id: str, photo_id: str, body: PhotoModerateRequest
) -> ModerationResult:
    photo = await _get_photo(db, profile_id, photo_id)
    if body.action not in PHOTO_ACTIONS:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid action")
    new_status, message = PHOTO_ACTIONS[body.action]
    photo.status = new_status
    photo.moderated_at = utcnow()
    photo.moderated_by = moderator.id
    photo.rejection_reason = (body.reason or None) if body.action == "reject" else None
    await db.flush()
    return ModerationResult(message=message, photo=PhotoStatusItem(id=photo.id, status=new_status))


async def delete_photo(db: AsyncSession, moderator: User, profile_id: str, photo_id: str) -> ModerationResult:
    photo = await _get_photo(db, profile_id, photo_id)
    await db.delete(photo)
    await db.flush()
    logger.info("Photo %s deleted by admin %s from profile %s", photo_id, moderator.id, profile_id)
    return ModerationResult(message="Photo deleted successfully")


async def edit_profile(
    db: AsyncSession, moderator: User, profile_id: str, body: AdminProfileEdit
) -> ProfileReview:
    """Only location, origin, education and language fields; omitted fields stay as they are."""
    result = await db.execute(select(Profile).where(Profile.id == profile_id))
    profile = result.scalar_one_or_none()
    if not profile:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Profile not found")
    changed = apply_fields(profile, body.model_dump(exclude_unset=True))
    await db.flush()
    logger.info(
        "Profile %s edited by admin %s (%s). Updated fields: %s",
        profile_id,
        moderator.id,
        moderator.email,
        ", ".join(changed),
    )
    return build_review(await _load_profile(db, profile_id))


class ModerationService:
    """Facade for moderation operations."""

    @staticmethod
    async def list_profiles(
        db: AsyncSession, status_filter: str | None = None, sort: str = "oldest", page: int = 1, limit: int = 20
    ) -> ProfileListResponse:
        return await list_profiles(db, status_filter, sort, page, limit)

    @staticmethod
    async def get_review(db: AsyncSession, profile_id: str) -> ProfileReview:
        return await get_review(db, profile_id)

    @staticmethod
    async def moderate_profile(
        db: AsyncSession, moderator: User, profile_id: str, body: ModerateRequest
    ) -> ModerationResult:
        return await moderate_profile(db, moderator, profile_id, body)

    @staticmethod
    async def moderate_photo(
        db: AsyncSession, moderator: User, profile_id: str, photo_id: str, body: PhotoModerateRequest
    ) -> ModerationResult:
        return await moderate_photo(db, moderator, profile_id, photo_id, body)

    @staticmethod
    async def delete_photo(db: AsyncSession, moderator: User, profile_id: str, photo_id: str) -> ModerationResult:
        return await delete_photo(db, moderator, profile_id, photo_id)

    @staticmethod
    async def edit_profile(
        db: AsyncSession, moderator: User, profile_id: str, body: AdminProfileEdit
    ) -> ProfileReview:
        return await edit_profile(db, moderator, profile_id, body)


moderation_service = ModerationService()
