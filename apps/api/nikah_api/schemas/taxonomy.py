"""Request/response schemas for the global-settings taxonomy screens."""

from datetime import datetime
from typing import Annotated

from pydantic import Field

from nikah_api.schemas.base import ApiModel

Label = Annotated[str, Field(min_length=1, max_length=255)]
Slug = Annotated[str, Field(min_length=1, max_length=100)]


class TaxonomyItem(ApiModel):
    id: str
    sort_order: int = 0
    is_active: bool = True
    profile_count: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None


# -- education ---------------------------------------------------------------


class EducationLevelResponse(TaxonomyItem):
    slug: str
    label: str
    level: int = 1
    years_of_education: int = 0
    tags: list[str] | None = None


class EducationLevelCreate(ApiModel):
    slug: Slug
    label: Label
    level: int = Field(1, ge=1, le=20)
    years_of_education: int = Field(0, ge=0, le=30)
    tags: list[str] = []
    sort_order: int | None = None
    is_active: bool = True


class EducationLevelUpdate(ApiModel):
    slug: str | None = Field(None, min_length=1, max_length=100)
    label: str | None = Field(None, min_length=1, max_length=255)
    level: int | None = Field(None, ge=1, le=20)
    years_of_education: int | None = Field(None, ge=0, le=30)
    tags: list[str] | None = None
    sort_order: int | None = None
    is_active: bool | None = None


class EducationFieldResponse(TaxonomyItem):
    slug: str
    label: str
    category: str | None = None


class EducationFieldCreate(ApiModel):
    slug: Slug
    label: Label
    category: str | None = None
    sort_order: int | None = None
    is_active: bool = True


class EducationFieldUpdate(ApiModel):
    slug: str | None = Field(None, min_length=1, max_length=100)
    label: str | None = Field(None, min_length=1, max_length=255)
    category: str | None = None
    sort_order: int | None = None
    is_active: bool | None = None


# -- languages ---------------------------------------------------------------


class LanguageResponse(TaxonomyItem):
    code: str | None = None
    slug: str
    label: str
    label_native: str | None = None
    is_global: bool = False
    is_system: bool = False
    country_count: int = 0


class LanguageCreate(ApiModel):
    code: str | None = None
    slug: Slug
    label: Label
    label_native: str | None = None
    is_global: bool = False
    sort_order: int | None = None
    is_active: bool = True


class LanguageUpdate(ApiModel):
    code: str | None = None
    slug: str | None = Field(None, min_length=1, max_length=100)
    label: str | None = Field(None, min_length=1, max_length=255)
    label_native: str | None = None
    is_global: bool | None = None
    sort_order: int | None = None
    is_active: bool | None = None


class LanguageCountryItem(ApiModel):
    id: str
    code: str
    name: str
    language_count: int = 0


class CountryLanguageItem(ApiModel):
    id: str
    code: str | None = None
    slug: str
    label: str
    label_native: str | None = None
    is_active: bool = True
    sort_order: int = 0
    is_primary: bool = False
    association_id: str


class AvailableLanguage(ApiModel):
    id: str
    code: str | None = None
    label: str
    label_native: str | None = None


class CountryRef(ApiModel):
    id: str
    code: str
    name: str


class CountryLanguagesResponse(ApiModel):
    country: CountryRef
    languages: list[CountryLanguageItem]
    available_languages: list[AvailableLanguage]


class CountryLanguageCreate(ApiModel):
    language_id: str = Field(min_length=1)
    is_primary: bool = False


# -- locations ---------------------------------------------------------------


class CountryResponse(TaxonomyItem):
    code: str
    name: str
    name_native: str | None = None
    phone_code: str | None = None
    currency: str | None = None
    state_count: int = 0
    city_count: int = 0


class CountryCreate(ApiModel):
    code: str = Field(min_length=2, max_length=10)
    name: Label
    name_native: str | None = None
    phone_code: str | None = None
    currency: str | None = None
    sort_order: int | None = None
    is_active: bool = True


class CountryUpdate(ApiModel):
    code: str | None = Field(None, min_length=2, max_length=10)
    name: str | None = Field(None, min_length=1, max_length=255)
    name_native: str | None = None
    phone_code: str | None = None
    currency: str | None = None
    sort_order: int | None = None
    is_active: bool | None = None


class StateResponse(TaxonomyItem):
    country_id: str
    code: str | None = None
    name: str
    name_native: str | None = None
    city_count: int = 0


class StateCreate(ApiModel):
    country_id: str = Field(min_length=1)
    code: str | None = None
    name: Label
    name_native: str | None = None
    sort_order: int | None = None
    is_active: bool = True


class StateUpdate(ApiModel):
    code: str | None = None
    name: str | None = Field(None, min_length=1, max_length=255)
    name_native: str | None = None
    sort_order: int | None = None
    is_active: bool | None = None


class CityResponse(TaxonomyItem):
    state_province_id: str
    name: str
    name_native: str | None = None
    is_popular: bool = False


class CityCreate(ApiModel):
    state_province_id: str = Field(min_length=1)
    name: Label
    name_native: str | None = None
    sort_order: int | None = None
    is_popular: bool = False
    is_active: bool = True


class CityUpdate(ApiModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    name_native: str | None = None
    sort_order: int | None = None
    is_popular: bool | None = None
    is_active: bool | None = None


# -- origins -----------------------------------------------------------------


class OriginResponse(TaxonomyItem):
    slug: str
    label: str
    label_native: str | None = None
    emoji: str | None = None
    description: str | None = None
    level1_label: str = "Ethnicity"
    level1_label_plural: str = "Ethnicities"
    level2_label: str = "Caste"
    level2_label_plural: str = "Castes"
    level2_enabled: bool = True
    ethnicity_count: int = 0
    caste_count: int = 0


class OriginCreate(ApiModel):
    slug: Slug
    label: Label
    label_native: str | None = None
    emoji: str | None = None
    description: str | None = None
    sort_order: int | None = None
    is_active: bool = True
    level1_label: str = "Ethnicity"
    level1_label_plural: str = "Ethnicities"
    level2_label: str = "Caste"
    level2_label_plural: str = "Castes"
    level2_enabled: bool = True


class OriginUpdate(ApiModel):
    slug: str | None = Field(None, min_length=1, max_length=100)
    label: str | None = Field(None, min_length=1, max_length=255)
    label_native: str | None = None
    emoji: str | None = None
    description: str | None = None
    sort_order: int | None = None
    is_active: bool | None = None
    level1_label: str | None = None
    level1_label_plural: str | None = None
    level2_label: str | None = None
    level2_label_plural: str | None = None
    level2_enabled: bool | None = None


class EthnicityResponse(TaxonomyItem):
    origin_id: str
    slug: str
    label: str
    label_native: str | None = None
    caste_count: int = 0


class EthnicityCreate(ApiModel):
    origin_id: str = Field(min_length=1)
    slug: Slug
    label: Label
    label_native: str | None = None
    sort_order: int | None = None
    is_active: bool = True


class EthnicityUpdate(ApiModel):
    slug: str | None = Field(None, min_length=1, max_length=100)
    label: str | None = Field(None, min_length=1, max_length=255)
    label_native: str | None = None
    sort_order: int | None = None
    is_active: bool | None = None


class CasteResponse(TaxonomyItem):
    ethnicity_id: str
    slug: str
    label: str
    label_native: str | None = None
    is_popular: bool = False


class CasteCreate(ApiModel):
    ethnicity_id: str = Field(min_length=1)
    slug: Slug
    label: Label
    label_native: str | None = None
    sort_order: int | None = None
    is_popular: bool = False
    is_active: bool = True


class CasteUpdate(ApiModel):
    slug: str | None = Field(None, min_length=1, max_length=100)
    label: str | None = Field(None, min_length=1, max_length=255)
    label_native: str | None = None
    sort_order: int | None = None
    is_popular: bool | None = None
    is_active: bool | None = None


# -- sects -------------------------------------------------------------------


class SectResponse(TaxonomyItem):
    slug: str
    label: str
    label_native: str | None = None
    description: str | None = None
    maslak_count: int = 0


class SectCreate(ApiModel):
    slug: Slug
    label: Label
    label_native: str | None = None
    description: str | None = None
    sort_order: int | None = None
    is_active: bool = True


class SectUpdate(ApiModel):
    slug: str | None = Field(None, min_length=1, max_length=100)
    label: str | None = Field(None, min_length=1, max_length=255)
    label_native: str | None = None
    description: str | None = None
    sort_order: int | None = None
    is_active: bool | None = None


class MaslakResponse(TaxonomyItem):
    sect_id: str
    slug: str
    label: str
    label_native: str | None = None
    description: str | None = None


class MaslakCreate(ApiModel):
    sect_id: str = Field(min_length=1)
    slug: Slug
    label: Label
    label_native: str | None = None
    description: str | None = None
    sort_order: int | None = None
    is_active: bool = True


class MaslakUpdate(ApiModel):
    slug: str | None = Field(None, min_length=1, max_length=100)
    label: str | None = Field(None, min_length=1, max_length=255)
    label_native: str | None = None
    description: str | None = None
    sort_order: int | None = None
    is_active: bool | None = None


# -- reorder -----------------------------------------------------------------


class ReorderRequest(ApiModel):
    type: str | None = None
    ordered_ids: list[str] = Field(min_length=1)
    country_id: str | None = None
