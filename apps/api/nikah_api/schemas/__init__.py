"""Pydantic request/response schemas (camelCase on the wire)."""

from nikah_api.schemas.base import ApiModel, SuccessResponse
from nikah_api.schemas.auth import (
    RegisterRequest,
    LoginRequest,
    TokenResponse,
    AccountResponse,
    AccountUpdate,
    AccountUpdateResult,
    ChangePasswordRequest,
    MessageResponse,
    PhoneVerificationStatus,
    PhoneVerificationRequested,
    VerifyOtpRequest,
    VerificationPage,
    AdminVerifyRequest,
    ReminderRequest,
    ReminderResult,
    PendingCount,
)
from nikah_api.schemas.profile import (
    ProfileFields,
    ProfileCreate,
    ProfilePatch,
    ProfileSaveResponse,
    ProfileResponse,
    ProfileEnvelope,
)
from nikah_api.schemas.moderation import (
    ProfileReview,
    ProfileReviewEnvelope,
    ProfileListResponse,
    ModerateRequest,
    PhotoModerateRequest,
    ModerationResult,
    AdminProfileEdit,
    AdminProfileEditResult,
)
from nikah_api.schemas.lookup import LookupOption, LookupResponse
from nikah_api.schemas.taxonomy import TaxonomyItem, ReorderRequest, CountryLanguagesResponse, CountryLanguageCreate
from nikah_api.schemas.suggestions import (
    SuggestionItem,
    SuggestionListResponse,
    SuggestionEnvelope,
    SuggestionReviewRequest,
    SuggestionReviewResult,
)

__all__ = [
    "ApiModel",
    "SuccessResponse",
    "RegisterRequest",
    "LoginRequest",
    "TokenResponse",
    "AccountResponse",
    "AccountUpdate",
    "AccountUpdateResult",
    "ChangePasswordRequest",
    "MessageResponse",
    "PhoneVerificationStatus",
    "PhoneVerificationRequested",
    "VerifyOtpRequest",
    "VerificationPage",
    "AdminVerifyRequest",
    "ReminderRequest",
    "ReminderResult",
    "PendingCount",
    "ProfileFields",
    "ProfileCreate",
    "ProfilePatch",
    "ProfileSaveResponse",
    "ProfileResponse",
    "ProfileEnvelope",
    "ProfileReview",
    "ProfileReviewEnvelope",
    "ProfileListResponse",
    "ModerateRequest",
    "PhotoModerateRequest",
    "ModerationResult",
    "AdminProfileEdit",
    "AdminProfileEditResult",
    "LookupOption",
    "LookupResponse",
    "TaxonomyItem",
    "ReorderRequest",
    "CountryLanguagesResponse",
    "CountryLanguageCreate",
    "SuggestionItem",
    "SuggestionListResponse",
    "SuggestionEnvelope",
    "SuggestionReviewRequest",
    "SuggestionReviewResult",
]
