from datetime import date, datetime

from pydantic import Field, field_validator

from nikah_api.schemas.base import ApiModel


class ProfileFields(ApiModel):
    """Every wizard field; all optional so PATCH can carry a partial snapshot."""

    # Step 1
    profile_for: str | None = None
    gender: str | None = None
    date_of_birth: date | None = None
    marital_status: str | None = None
    number_of_children: int | None = Field(None, ge=0, le=20)
    children_living_with: str | None = None
    # Step 2
    origin_id: str | None = None
    ethnicity_id: str | None = None
    caste_id: str | None = None
    custom_caste: str | None = None
    # Step 3
    country_of_origin_id: str | None = None
    country_living_in_id: str | None = None
    state_province_id: str | None = None
    city_id: str | None = None
    visa_status: str | None = None
    suggested_location: str | None = None
    # Step 4
    sect_id: str | None = None
    maslak_id: str | None = None
    religious_belonging: str | None = None
    social_status: str | None = None
    number_of_brothers: int | None = Field(None, ge=0, le=30)
    number_of_sisters: int | None = Field(None, ge=0, le=30)
    married_brothers: int | None = Field(None, ge=0, le=30)
    married_sisters: int | None = Field(None, ge=0, le=30)
    father_occupation: str | None = None
    property_ownership: str | None = None
    # Step 5
    height_id: str | None = None
    complexion: str | None = None
    has_disability: bool | None = None
    disability_details: str | None = None
    # Step 6
    education_level_id: str | None = None
    education_field_id: str | None = None
    education_details: str | None = None
    occupation_type: str | None = None
    occupation_details: str | None = None
    income_range_id: str | None = None
    mother_tongue_id: str | None = None
    other_mother_tongue: str | None = None
    # Step 7
    bio: str | None = Field(None, max_length=5000)
    origin_audience: str | None = None

    @field_validator(
        "date_of_birth",
        "number_of_children",
        "number_of_brothers",
        "number_of_sisters",
        "married_brothers",
        "married_sisters",
        "has_disability",
        mode="before",
    )
    @classmethod
    def blank_to_none(cls, value):
        return None if value == "" else value


class ProfileCreate(ProfileFields):
    pass


class ProfilePatch(ProfileFields):
    profile_id: str | None = None
    step: int | None = Field(None, ge=1, le=7)


class ProfileSaveResponse(ApiModel):
    success: bool = True
    profile_id: str
    profile_completion: int
    message: str


class ProfileResponse(ProfileFields):
    id: str
    user_id: str
    profile_completion: int = 0
    moderation_status: str
    rejection_reason: str | None = None
    is_published: bool = False
    is_active: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ProfileEnvelope(ApiModel):
    profile: ProfileResponse | None = None
