from datetime import datetime

from pydantic import Field

from nikah_api.schemas.base import ApiModel
from nikah_api.schemas.taxonomy import LanguageResponse


class SuggestionUser(ApiModel):
    id: str
    name: str | None = None
    email: str


class SuggestionReviewer(ApiModel):
    id: str
    name: str | None = None


class SuggestionItem(ApiModel):
    id: str
    user_id: str
    field_type: str
    suggested_value: str
    suggested_label: str | None = None
    status: str
    review_note: str | None = None
    reviewed_at: datetime | None = None
    created_at: datetime | None = None
    user: SuggestionUser | None = None
    reviewed_by: SuggestionReviewer | None = None


class SuggestionCounts(ApiModel):
    pending: int = 0
    approved: int = 0
    rejected: int = 0
    total: int = 0


class SuggestionListResponse(ApiModel):
    suggestions: list[SuggestionItem]
    counts: SuggestionCounts


class SuggestionEnvelope(ApiModel):
    suggestion: SuggestionItem


class SuggestionReviewRequest(ApiModel):
    """``createLanguage`` only applies when approving a MOTHER_TONGUE suggestion."""

    status: str
    review_note: str | None = Field(None, max_length=2000)
    create_language: bool = False


class SuggestionReviewResult(ApiModel):
    suggestion: SuggestionItem
    created_language: LanguageResponse | None = None
