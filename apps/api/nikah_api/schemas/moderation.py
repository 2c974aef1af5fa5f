from datetime import date, datetime

from pydantic import Field

from nikah_api.schemas.base import ApiModel
from nikah_api.schemas.profile import ProfileResponse


class RefItem(ApiModel):
    """A referenced taxonomy row, reduced to id + display label."""

    id: str
    label: str


class PhotoItem(ApiModel):
    id: str
    url: str
    thumbnail_url: str | None = None
    is_primary: bool = False
    sort_order: int = 0
    status: str
    rejection_reason: str | None = None
    moderated_at: datetime | None = None


class AccountSummary(ApiModel):
    id: str
    name: str | None = None
    email: str
    phone: str | None = None
    phone_verified: bool = False
    email_verified: bool = False
    role: str
    status: str
    created_at: datetime | None = None


class ProfileReview(ProfileResponse):
    moderated_at: datetime | None = None
    moderated_by: str | None = None
    banned_at: datetime | None = None
    ban_reason: str | None = None
    is_verified: bool = False

    origin: RefItem | None = None
    ethnicity: RefItem | None = None
    caste: RefItem | None = None
    country_of_origin: RefItem | None = None
    country_living_in: RefItem | None = None
    state_province: RefItem | None = None
    city: RefItem | None = None
    sect: RefItem | None = None
    maslak: RefItem | None = None
    height: RefItem | None = None
    education_level: RefItem | None = None
    education_field: RefItem | None = None
    income_range: RefItem | None = None
    mother_tongue: RefItem | None = None

    photos: list[PhotoItem] = []
    user: AccountSummary


class ProfileReviewEnvelope(ApiModel):
    profile: ProfileReview


class ProfileListItem(ApiModel):
    id: str
    profile_for: str | None = None
    gender: str | None = None
    date_of_birth: date | None = None
    moderation_status: str
    profile_completion: int = 0
    created_at: datetime | None = None
    country_living_in: RefItem | None = None
    city: RefItem | None = None
    origin: RefItem | None = None
    photos: list[PhotoItem] = []
    user: AccountSummary


class Pagination(ApiModel):
    page: int
    limit: int
    total_count: int
    total_pages: int


class StatusCounts(ApiModel):
    pending: int = 0
    approved: int = 0
    rejected: int = 0
    banned: int = 0


class ProfileListResponse(ApiModel):
    profiles: list[ProfileListItem]
    pagination: Pagination
    counts: StatusCounts


class ModerateRequest(ApiModel):
    action: str
    feedback: str | None = Field(None, max_length=2000)


class PhotoModerateRequest(ApiModel):
    action: str
    reason: str | None = Field(None, max_length=1000)


class PhotoStatusItem(ApiModel):
    id: str
    status: str


class ModerationResult(ApiModel):
    success: bool = True
    message: str
    photo: PhotoStatusItem | None = None


class AdminProfileEdit(ApiModel):
    """Remap suggested free-text values onto taxonomy rows."""

    country_of_origin_id: str | None = None
    country_living_in_id: str | None = None
    state_province_id: str | None = None
    city_id: str | None = None
    visa_status: str | None = None
    suggested_location: str | None = None
    origin_id: str | None = None
    ethnicity_id: str | None = None
    caste_id: str | None = None
    custom_caste: str | None = None
    education_level_id: str | None = None
    education_field_id: str | None = None
    education_details: str | None = None
    mother_tongue_id: str | None = None
    other_mother_tongue: str | None = None


class AdminProfileEditResult(ApiModel):
    success: bool = True
    message: str
    profile: ProfileReview
