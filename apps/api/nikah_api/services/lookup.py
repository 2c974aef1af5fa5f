"""Public dropdown data for the profile wizard (active rows only, sortOrder)."""

from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from nikah_api.core.constants import SYSTEM_LANGUAGE_SLUGS
from nikah_api.db.models import (
    Origin,
    Ethnicity,
    Caste,
    Country,
    StateProvince,
    City,
    Sect,
    Maslak,
    Height,
    EducationLevel,
    EducationField,
    IncomeRange,
    Language,
    CountryLanguage,
)
from nikah_api.schemas.lookup import LookupOption

LOOKUP_TABLES = (
    "origin",
    "ethnicity",
    "caste",
    "country",
    "stateProvince",
    "city",
    "sect",
    "maslak",
    "height",
    "educationLevel",
    "educationField",
    "incomeRange",
    "language",
)


async def _active(db: AsyncSession, model, *where):
    stmt = select(model).where(model.is_active.is_(True), *where).order_by(model.sort_order)
    return (await db.execute(stmt)).scalars().all()


def _language_option(language: Language) -> LookupOption:
    return LookupOption(
        id=language.id,
        name=language.label,
        name_native=language.label_native,
        is_other=language.slug in SYSTEM_LANGUAGE_SLUGS,
    )


async def _languages(db: AsyncSession, country_id: str | None) -> list[LookupOption]:
    """Country languages first (association order), then global ones not already listed."""
    if not country_id:
        return [_language_option(lang) for lang in await _active(db, Language)]
    result = await db.execute(
        select(Language)
        .join(CountryLanguage, CountryLanguage.language_id == Language.id)
        .where(CountryLanguage.country_id == country_id, Language.is_active.is_(True))
        .order_by(CountryLanguage.sort_order)
    )
    languages = list(result.scalars().all())
    seen = {lang.id for lang in languages}
    for lang in await _active(db, Language, Language.is_global.is_(True)):
        if lang.id not in seen:
            languages.append(lang)
    return [_language_option(lang) for lang in languages]


async def _income_ranges(db: AsyncSession, country_id: str | None) -> list[LookupOption]:
    """Country-specific ranges, falling back to the global (country-less) ones."""
    rows = []
    if country_id:
        rows = await _active(db, IncomeRange, IncomeRange.country_id == country_id)
    if not rows:
        rows = await _active(db, IncomeRange, IncomeRange.country_id.is_(None))
    return [LookupOption(id=r.id, display=r.label, currency=r.currency, period=r.period) for r in rows]


async def get_lookup(db: AsyncSession, table: str | None, parent_id: str | None = None) -> list[LookupOption]:
    if table not in LOOKUP_TABLES:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid table name")

    def scoped(column):
        return (column == parent_id,) if parent_id else ()

    if table == "origin":
        return [
            LookupOption(
                id=o.id,
                name=o.label,
                level1_label=o.level1_label,
                level1_label_plural=o.level1_label_plural,
                level2_label=o.level2_label,
                level2_label_plural=o.level2_label_plural,
                level2_enabled=o.level2_enabled,
            )
            for o in await _active(db, Origin)
        ]
    if table == "ethnicity":
        rows = await _active(db, Ethnicity, *scoped(Ethnicity.origin_id))
        return [LookupOption(id=r.id, name=r.label, origin_id=r.origin_id) for r in rows]
    if table == "caste":
        rows = await _active(db, Caste, *scoped(Caste.ethnicity_id))
        return [LookupOption(id=r.id, name=r.label, ethnicity_id=r.ethnicity_id) for r in rows]
    if table == "country":
        return [LookupOption(id=r.id, name=r.name, code=r.code) for r in await _active(db, Country)]
    if table == "stateProvince":
        rows = await _active(db, StateProvince, *scoped(StateProvince.country_id))
        return [LookupOption(id=r.id, name=r.name, country_id=r.country_id) for r in rows]
    if table == "city":
        rows = await _active(db, City, *scoped(City.state_province_id))
        return [LookupOption(id=r.id, name=r.name, state_province_id=r.state_province_id) for r in rows]
    if table == "sect":
        return [LookupOption(id=r.id, name=r.label) for r in await _active(db, Sect)]
    if table == "maslak":
        rows = await _active(db, Maslak, *scoped(Maslak.sect_id))
        return [LookupOption(id=r.id, name=r.label, sect_id=r.sect_id) for r in rows]
    if table == "height":
        return [
            LookupOption(id=r.id, display=f"{r.label_imperial} ({r.label_metric})")
            for r in await _active(db, Height)
        ]
    if table == "educationLevel":
        return [LookupOption(id=r.id, name=r.label) for r in await _active(db, EducationLevel)]
    if table == "educationField":
        return [LookupOption(id=r.id, name=r.label) for r in await _active(db, EducationField)]
    if table == "incomeRange":
        return await _income_ranges(db, parent_id)
    return await _languages(db, parent_id)


class LookupService:
    """Facade for lookup operations."""

    @staticmethod
    async def get_lookup(db: AsyncSession, table: str | None, parent_id: str | None = None) -> list[LookupOption]:
        return await get_lookup(db, table, parent_id)


lookup_service = LookupService()
