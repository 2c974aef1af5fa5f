from nikah_api.schemas.base import ApiModel


class LookupOption(ApiModel):
    """One dropdown option; only the keys relevant to the table are set."""

    id: str
    name: str | None = None
    display: str | None = None
    code: str | None = None
    name_native: str | None = None
    is_other: bool | None = None
    origin_id: str | None = None
    ethnicity_id: str | None = None
    country_id: str | None = None
    state_province_id: str | None = None
    sect_id: str | None = None
    currency: str | None = None
    period: str | None = None
    level1_label: str | None = None
    level1_label_plural: str | None = None
    level2_label: str | None = None
    level2_label_plural: str | None = None
    level2_enabled: bool | None = None


class LookupResponse(ApiModel):
    data: list[LookupOption]
