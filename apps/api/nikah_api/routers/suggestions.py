from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from nikah_api.core.constants import TAXONOMY_ROLES
from nikah_api.db.models import User
from nikah_api.dependencies import get_db, require_roles
from nikah_api.schemas.base import SuccessResponse
from nikah_api.schemas.suggestions import (
    SuggestionListResponse,
    SuggestionEnvelope,
    SuggestionReviewRequest,
    SuggestionReviewResult,
)
from nikah_api.services.suggestions import suggestion_service

router = APIRouter(prefix="/api/admin/suggestions", tags=["admin-suggestions"])

# approving can add taxonomy rows, so review is limited to taxonomy editors
require_reviewer = require_roles(*TAXONOMY_ROLES)


@router.get("", response_model=SuggestionListResponse)
async def list_suggestions(
    status_filter: str | None = Query(None, alias="status"),
    field_type: str | None = Query(None, alias="fieldType"),
    _reviewer: User = Depends(require_reviewer),
    db: AsyncSession = Depends(get_db),
):
    return await suggestion_service.list_suggestions(db, status_filter, field_type)


@router.get("/{suggestion_id}", response_model=SuggestionEnvelope)
async def get_suggestion(
    suggestion_id: str,
    _reviewer: User = Depends(require_reviewer),
    db: AsyncSession = Depends(get_db),
):
    return SuggestionEnvelope(suggestion=await suggestion_service.get_suggestion(db, suggestion_id))


@router.patch("/{suggestion_id}", response_model=SuggestionReviewResult)
async def review_suggestion(
    suggestion_id: str,
    body: SuggestionReviewRequest,
    reviewer: User = Depends(require_reviewer),
    db: AsyncSession = Depends(get_db),
):
    return await suggestion_service.review_suggestion(db, reviewer, suggestion_id, body)


@router.delete("/{suggestion_id}", response_model=SuccessResponse)
async def delete_suggestion(
    suggestion_id: str,
    _reviewer: User = Depends(require_reviewer),
    db: AsyncSession = Depends(get_db),
):
    await suggestion_service.delete_suggestion(db, suggestion_id)
    return SuccessResponse()
