"""Admin review of free-text values users typed when the taxonomy lacked an option."""

import logging
import re

from fastapi import HTTPException, status
from sqlalchemy import select, func, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from nikah_api.core.constants import utcnow
from nikah_api.db.models import FieldSuggestion, Language, User
from nikah_api.schemas.suggestions import (
    SuggestionItem,
    SuggestionCounts,
    SuggestionListResponse,
    SuggestionReviewRequest,
    SuggestionReviewResult,
)
from nikah_api.schemas.taxonomy import LanguageResponse
from nikah_api.services.taxonomy import slugify

logger = logging.getLogger(__name__)

SUGGESTION_STATUSES = (
    FieldSuggestion.PENDING,
    FieldSuggestion.APPROVED,
    FieldSuggestion.REJECTED,
    FieldSuggestion.DUPLICATE,
    FieldSuggestion.MERGED,
)
REVIEW_STATUSES = SUGGESTION_STATUSES[1:]


def language_code(value: str) -> str | None:
    """'Brahui (Balochistan)' -> 'brahuibalo'; None when no latin letters remain."""
    return re.sub(r"[^a-z]+", "", value.lower())[:10] or None


def language_slug(value: str) -> str:
    """'Brahui (Balochistan)' -> 'brahui_balochistan'; non-latin names keep their script."""
    return re.sub(r"[^a-z0-9]+", "_", value.lower()).strip("_") or slugify(value)


def _load(*criteria):
    return (
        select(FieldSuggestion)
        .where(*criteria)
        .options(selectinload(FieldSuggestion.user), selectinload(FieldSuggestion.reviewed_by))
        .execution_options(populate_existing=True)
    )


async def _get(db: AsyncSession, suggestion_id: str) -> FieldSuggestion:
    suggestion = (await db.execute(_load(FieldSuggestion.id == suggestion_id))).scalar_one_or_none()
    if not suggestion:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Suggestion not found")
    return suggestion


async def list_suggestions(
    db: AsyncSession, status_filter: str | None = None, field_type: str | None = None
) -> SuggestionListResponse:
    if status_filter and status_filter not in SUGGESTION_STATUSES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"status must be one of: {', '.join(SUGGESTION_STATUSES)}",
        )
    criteria = []
    if status_filter:
        criteria.append(FieldSuggestion.status == status_filter)
    if field_type:
        criteria.append(FieldSuggestion.field_type == field_type)

    rows = (await db.execute(_load(*criteria).order_by(FieldSuggestion.created_at.desc()))).scalars().all()
    by_status = dict(
        (await db.execute(select(FieldSuggestion.status, func.count()).group_by(FieldSuggestion.status))).all()
    )
    return SuggestionListResponse(
        suggestions=[SuggestionItem.model_validate(s) for s in rows],
        counts=SuggestionCounts(
            pending=by_status.get(FieldSuggestion.PENDING, 0),
            approved=by_status.get(FieldSuggestion.APPROVED, 0),
            rejected=by_status.get(FieldSuggestion.REJECTED, 0),
            total=len(rows),
        ),
    )


async def get_suggestion(db: AsyncSession, suggestion_id: str) -> SuggestionItem:
    return SuggestionItem.model_validate(await _get(db, suggestion_id))


async def _create_language(db: AsyncSession, suggestion: FieldSuggestion) -> Language:
    value = suggestion.suggested_value.strip()
    code = language_code(value)
    slug = language_slug(value)

    clash = [Language.slug == slug, func.lower(Language.label) == value.lower()]
    if code:
        clash.append(Language.code == code)
    existing = (await db.execute(select(Language.id).where(or_(*clash)).limit(1))).scalar_one_or_none()
    if existing:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="A language with this name/code already exists"
        )

    max_sort = (await db.execute(select(func.max(Language.sort_order)))).scalar()
    language = Language(
        code=code,
        slug=slug,
        label=suggestion.suggested_label or value,
        sort_order=(max_sort if max_sort is not None else -1) + 1,
        is_active=True,
        is_global=False,
    )
    db.add(language)
    await db.flush()
    logger.info("Language %s created from suggestion %s", slug, suggestion.id)
    return language


async def review_suggestion(
    db: AsyncSession, reviewer: User, suggestion_id: str, body: SuggestionReviewRequest
) -> SuggestionReviewResult:
    """Set the outcome; an approved MOTHER_TONGUE suggestion can also become a Language row."""
    if body.status not in REVIEW_STATUSES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid status. Must be APPROVED, REJECTED, DUPLICATE, or MERGED",
        )
    suggestion = await _get(db, suggestion_id)

    created = None
    if body.status == FieldSuggestion.APPROVED and suggestion.field_type == "MOTHER_TONGUE" and body.create_language:
        created = await _create_language(db, suggestion)

    suggestion.status = body.status
    suggestion.reviewed_by_id = reviewer.id
    suggestion.review_note = (body.review_note or "").strip() or None
    suggestion.reviewed_at = utcnow()
    await db.flush()
    logger.info("Suggestion %s marked %s by %s", suggestion_id, body.status, reviewer.id)

    return SuggestionReviewResult(
        suggestion=SuggestionItem.model_validate(await _get(db, suggestion_id)),
        created_language=LanguageResponse.model_validate(created) if created else None,
    )


async def delete_suggestion(db: AsyncSession, suggestion_id: str) -> None:
    suggestion = await _get(db, suggestion_id)
    await db.delete(suggestion)
    await db.flush()
    logger.info("Suggestion %s deleted", suggestion_id)


class SuggestionService:
    """Facade for suggestion review operations."""

    @staticmethod
    async def list_suggestions(
        db: AsyncSession, status_filter: str | None = None, field_type: str | None = None
    ) -> SuggestionListResponse:
        return await list_suggestions(db, status_filter, field_type)

    @staticmethod
    async def get_suggestion(db: AsyncSession, suggestion_id: str) -> SuggestionItem:
        return await get_suggestion(db, suggestion_id)

    @staticmethod
    async def review_suggestion(
        db: AsyncSession, reviewer: User, suggestion_id: str, body: SuggestionReviewRequest
    ) -> SuggestionReviewResult:
        return await review_suggestion(db, reviewer, suggestion_id, body)

    @staticmethod
    async def delete_suggestion(db: AsyncSession, suggestion_id: str) -> None:
        await delete_suggestion(db, suggestion_id)


suggestion_service = SuggestionService()
