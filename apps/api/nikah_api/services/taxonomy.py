"""Global-settings taxonomy: CRUD, counts, cascade delete and reorder for every hierarchy kind.

Each kind (education level, country, caste, ...) is described once by a
``TaxonomyKind``; the functions below work on any of them.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Callable

from fastapi import HTTPException, status
from sqlalchemy import select, func, or_
from sqlalchemy.ext.asyncio import AsyncSession

from nikah_api.core.constants import SYSTEM_LANGUAGE_SLUGS
from nikah_api.db.models import (
    EducationLevel,
    EducationField,
    Language,
    CountryLanguage,
    Country,
    StateProvince,
    City,
    Origin,
    Ethnicity,
    Caste,
    Sect,
    Maslak,
    Profile,
)
from nikah_api.schemas.base import ApiModel
from nikah_api.schemas.taxonomy import (
    EducationLevelResponse,
    EducationLevelCreate,
    EducationLevelUpdate,
    EducationFieldResponse,
    EducationFieldCreate,
    EducationFieldUpdate,
    LanguageResponse,
    LanguageCreate,
    LanguageUpdate,
    LanguageCountryItem,
    CountryLanguageItem,
    AvailableLanguage,
    CountryRef,
    CountryLanguagesResponse,
    CountryLanguageCreate,
    CountryResponse,
    CountryCreate,
    CountryUpdate,
    StateResponse,
    StateCreate,
    StateUpdate,
    CityResponse,
    CityCreate,
    CityUpdate,
    OriginResponse,
    OriginCreate,
    OriginUpdate,
    EthnicityResponse,
    EthnicityCreate,
    EthnicityUpdate,
    CasteResponse,
    CasteCreate,
    CasteUpdate,
    SectResponse,
    SectCreate,
    SectUpdate,
    MaslakResponse,
    MaslakCreate,
    MaslakUpdate,
    ReorderRequest,
)

logger = logging.getLogger(__name__)


def slugify(value: str) -> str:
    """'Master Degree ' -> 'master_degree'."""
    return re.sub(r"\s+", "_", value.strip().lower())


def _upper(value: str) -> str:
    return value.strip().upper()


def _strip(value: str) -> str:
    return value.strip()


def _grouped_count(column, ids: list[str], join: tuple | None = None):
    """SELECT column, count(*) ... WHERE column IN ids GROUP BY column."""
    stmt = select(column, func.count())
    if join is not None:
        stmt = stmt.join(*join)
    return stmt.where(column.in_(ids)).group_by(column)


@dataclass(frozen=True)
class TaxonomyKind:
    key: str  # JSON key for a single item
    plural: str  # JSON key for lists
    display: str
    model: type
    response: type[ApiModel]
    create: type[ApiModel]
    update: type[ApiModel]
    label_field: str = "label"
    unique_field: str = "slug"
    normalize: Callable[[str], str] = slugify
    parent_field: str | None = None
    parent_model: type | None = None
    parent_display: str | None = None
    parent_query: str | None = None
    counts: dict[str, Callable[[list[str]], Any]] = field(default_factory=dict)
    profile_columns: tuple = ()
    blank_defaults: dict[str, Any] = field(default_factory=dict)
    system_slugs: frozenset = frozenset()

    @property
    def parent_column(self):
        return getattr(self.model, self.parent_field) if self.parent_field else None

    @property
    def order_by(self) -> tuple:
        return (self.model.sort_order, getattr(self.model, self.label_field))

    def count_queries(self) -> dict[str, Callable[[list[str]], Any]]:
        queries = dict(self.counts)
        if self.profile_columns:
            primary = self.profile_columns[0]
            queries["profile_count"] = lambda ids: _grouped_count(primary, ids)
        return queries


EDUCATION_LEVEL = TaxonomyKind(
    key="level",
    plural="levels",
    display="Education level",
    model=EducationLevel,
    response=EducationLevelResponse,
    create=EducationLevelCreate,
    update=EducationLevelUpdate,
    profile_columns=(Profile.education_level_id,),
)

EDUCATION_FIELD = TaxonomyKind(
    key="field",
    plural="fields",
    display="Education field",
    model=EducationField,
    response=EducationFieldResponse,
    create=EducationFieldCreate,
    update=EducationFieldUpdate,
    profile_columns=(Profile.education_field_id,),
)

LANGUAGE = TaxonomyKind(
    key="language",
    plural="languages",
    display="Language",
    model=Language,
    response=LanguageResponse,
    create=LanguageCreate,
    update=LanguageUpdate,
    counts={"country_count": lambda ids: _grouped_count(CountryLanguage.language_id, ids)},
    profile_columns=(Profile.mother_tongue_id,),
    system_slugs=SYSTEM_LANGUAGE_SLUGS,
)

COUNTRY = TaxonomyKind(
    key="country",
    plural="countries",
    display="Country",
    model=Country,
    response=CountryResponse,
    create=CountryCreate,
    update=CountryUpdate,
    label_field="name",
    unique_field="code",
    normalize=_upper,
    counts={
        "state_count": lambda ids: _grouped_count(StateProvince.country_id, ids),
        "city_count": lambda ids: _grouped_count(
            StateProvince.country_id, ids, join=(City, City.state_province_id == StateProvince.id)
        ),
    },
    profile_columns=(Profile.country_living_in_id, Profile.country_of_origin_id),
)

STATE = TaxonomyKind(
    key="state",
    plural="states",
    display="State",
    model=StateProvince,
    response=StateResponse,
    create=StateCreate,
    update=StateUpdate,
    label_field="name",
    unique_field="name",
    normalize=_strip,
    parent_field="country_id",
    parent_model=Country,
    parent_display="Country",
    parent_query="countryId",
    counts={"city_count": lambda ids: _grouped_count(City.state_province_id, ids)},
    profile_columns=(Profile.state_province_id,),
)

CITY = TaxonomyKind(
    key="city",
    plural="cities",
    display="City",
    model=City,
    response=CityResponse,
    create=CityCreate,
    update=CityUpdate,
    label_field="name",
    unique_field="name",
    normalize=_strip,
    parent_field="state_province_id",
    parent_model=StateProvince,
    parent_display="State",
    parent_query="stateId",
    profile_columns=(Profile.city_id,),
)

ORIGIN = TaxonomyKind(
    key="origin",
    plural="origins",
    display="Origin",
    model=Origin,
    response=OriginResponse,
    create=OriginCreate,
    update=OriginUpdate,
    counts={
        "ethnicity_count": lambda ids: _grouped_count(Ethnicity.origin_id, ids),
        "caste_count": lambda ids: _grouped_count(
            Ethnicity.origin_id, ids, join=(Caste, Caste.ethnicity_id == Ethnicity.id)
        ),
    },
    profile_columns=(Profile.origin_id,),
    blank_defaults={
        "level1_label": "Ethnicity",
        "level1_label_plural": "Ethnicities",
        "level2_label": "Caste",
        "level2_label_plural": "Castes",
    },
)

ETHNICITY = TaxonomyKind(
    key="ethnicity",
    plural="ethnicities",
    display="Ethnicity",
    model=Ethnicity,
    response=EthnicityResponse,
    create=EthnicityCreate,
    update=EthnicityUpdate,
    parent_field="origin_id",
    parent_model=Origin,
    parent_display="Origin",
    parent_query="originId",
    counts={"caste_count": lambda ids: _grouped_count(Caste.ethnicity_id, ids)},
    profile_columns=(Profile.ethnicity_id,),
)

CASTE = TaxonomyKind(
    key="caste",
    plural="castes",
    display="Caste",
    model=Caste,
    response=CasteResponse,
    create=CasteCreate,
    update=CasteUpdate,
    parent_field="ethnicity_id",
    parent_model=Ethnicity,
    parent_display="Ethnicity",
    parent_query="ethnicityId",
    profile_columns=(Profile.caste_id,),
)

SECT = TaxonomyKind(
    key="sect",
    plural="sects",
    display="Sect",
    model=Sect,
    response=SectResponse,
    create=SectCreate,
    update=SectUpdate,
    counts={"maslak_count": lambda ids: _grouped_count(Maslak.sect_id, ids)},
    profile_columns=(Profile.sect_id,),
)

MASLAK = TaxonomyKind(
    key="maslak",
    plural="maslaks",
    display="Maslak",
    model=Maslak,
    response=MaslakResponse,
    create=MaslakCreate,
    update=MaslakUpdate,
    parent_field="sect_id",
    parent_model=Sect,
    parent_display="Sect",
    parent_query="sectId",
    profile_columns=(Profile.maslak_id,),
)

# Reorder ``type`` values accepted by each domain's reorder endpoint.
REORDER_TYPES: dict[str, dict[str, TaxonomyKind]] = {
    "education": {"levels": EDUCATION_LEVEL, "fields": EDUCATION_FIELD},
    "locations": {"countries": COUNTRY, "states": STATE, "cities": CITY},
    "origins": {"origins": ORIGIN, "ethnicities": ETHNICITY, "castes": CASTE},
    "sects": {"sects": SECT, "maslaks": MASLAK},
}


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------


async def _get_or_404(db: AsyncSession, kind: TaxonomyKind, item_id: str):
    row = await db.get(kind.model, item_id)
    if row is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{kind.display} not found")
    return row


async def _serialize(db: AsyncSession, kind: TaxonomyKind, rows: list) -> list[ApiModel]:
    ids = [row.id for row in rows]
    counts: dict[str, dict[str, int]] = {}
    for name, build in kind.count_queries().items():
        counts[name] = dict((await db.execute(build(ids))).all()) if ids else {}
    return [
        kind.response.model_validate(row).model_copy(
            update={name: values.get(row.id, 0) for name, values in counts.items()}
        )
        for row in rows
    ]


async def _ensure_unique(
    db: AsyncSession,
    kind: TaxonomyKind,
    value: str,
    parent_id: str | None,
    exclude_id: str | None = None,
) -> None:
    column = getattr(kind.model, kind.unique_field)
    stmt = select(kind.model.id).where(column == value)
    if kind.parent_field:
        stmt = stmt.where(kind.parent_column == parent_id)
    if exclude_id:
        stmt = stmt.where(kind.model.id != exclude_id)
    existing = (await db.execute(stmt.limit(1))).scalar_one_or_none()
    if existing:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"{kind.display} with this {kind.unique_field} already exists",
        )


async def _next_sort_order(db: AsyncSession, kind: TaxonomyKind, parent_id: str | None) -> int:
    stmt = select(func.max(kind.model.sort_order))
    if kind.parent_field:
        stmt = stmt.where(kind.parent_column == parent_id)
    current = (await db.execute(stmt)).scalar()
    return 0 if current is None else current + 1


async def _profile_references(db: AsyncSession, kind: TaxonomyKind, item_id: str) -> int:
    if not kind.profile_columns:
        return 0
    stmt = select(func.count()).select_from(Profile).where(
        or_(*(column == item_id for column in kind.profile_columns))
    )
    return (await db.execute(stmt)).scalar() or 0


def _bad_request(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


# -----------------------------------------------------------------------------
# CRUD
# -----------------------------------------------------------------------------


async def list_items(db: AsyncSession, kind: TaxonomyKind, parent_id: str | None = None) -> list[ApiModel]:
    """Items of one kind, ordered by sortOrder; child kinds require their parent id."""
    stmt = select(kind.model)
    if kind.parent_field:
        if not parent_id:
            raise _bad_request(f"{kind.parent_query} is required")
        stmt = stmt.where(kind.parent_column == parent_id)
    rows = (await db.execute(stmt.order_by(*kind.order_by))).scalars().all()
    return await _serialize(db, kind, list(rows))


async def get_item(db: AsyncSession, kind: TaxonomyKind, item_id: str) -> ApiModel:
    row = await _get_or_404(db, kind, item_id)
    return (await _serialize(db, kind, [row]))[0]


async def create_item(db: AsyncSession, kind: TaxonomyKind, body: ApiModel) -> ApiModel:
    data = body.model_dump()
    table = kind.model.__table__
    for name, value in list(data.items()):
        if value == "" and table.c[name].nullable:
            data[name] = None
    for name, default in kind.blank_defaults.items():
        if not data.get(name):
            data[name] = default

    parent_id = None
    if kind.parent_field:
        parent_id = data[kind.parent_field]
        if await db.get(kind.parent_model, parent_id) is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail=f"{kind.parent_display} not found"
            )

    data[kind.unique_field] = kind.normalize(data[kind.unique_field])
    await _ensure_unique(db, kind, data[kind.unique_field], parent_id)
    if data.get("sort_order") is None:
        data["sort_order"] = await _next_sort_order(db, kind, parent_id)

    row = kind.model(**data)
    db.add(row)
    await db.flush()
    await db.refresh(row)
    logger.info("Created %s %s", kind.key, row.id)
    return (await _serialize(db, kind, [row]))[0]


async def update_item(db: AsyncSession, kind: TaxonomyKind, item_id: str, body: ApiModel) -> ApiModel:
    """Apply the fields present in ``body``; omitted fields stay untouched."""
    row = await _get_or_404(db, kind, item_id)
    table = kind.model.__table__
    for name, value in body.model_dump(exclude_unset=True).items():
        column = table.c[name]
        if value == "" and column.nullable:
            value = None
        if value is None and not column.nullable:
            continue
        if name in kind.blank_defaults and not value:
            continue
        if name == kind.unique_field:
            value = kind.normalize(value)
            if value != getattr(row, name):
                parent_id = getattr(row, kind.parent_field) if kind.parent_field else None
                await _ensure_unique(db, kind, value, parent_id, exclude_id=row.id)
        setattr(row, name, value)
    await db.flush()
    await db.refresh(row)
    return (await _serialize(db, kind, [row]))[0]


async def delete_item(db: AsyncSession, kind: TaxonomyKind, item_id: str) -> None:
    """Delete a node and, through ORM cascades, all its descendants."""
    row = await _get_or_404(db, kind, item_id)
    if getattr(row, "is_system", False) or getattr(row, "slug", None) in kind.system_slugs:
        raise _bad_request(f"Cannot delete a system {kind.display.lower()}")
    if await _profile_references(db, kind, row.id):
        raise _bad_request(
            f"Cannot delete {kind.display.lower()} that is in use by profiles. "
            "Consider deactivating it instead."
        )
    await db.delete(row)
    await db.flush()
    logger.info("Deleted %s %s", kind.key, item_id)


# -----------------------------------------------------------------------------
# Reorder
# -----------------------------------------------------------------------------


async def reorder_items(db: AsyncSession, kind: TaxonomyKind, ordered_ids: list[str]) -> None:
    """Write sort_order = index for every sibling of one parent scope.

    The list must name every sibling exactly once, so the scope ends up
    numbered 0..n-1.
    """
    if len(set(ordered_ids)) != len(ordered_ids):
        raise _bad_request("orderedIds contains duplicates")
    rows = (await db.execute(select(kind.model).where(kind.model.id.in_(ordered_ids)))).scalars().all()
    if len(rows) != len(ordered_ids):
        raise _bad_request(f"orderedIds contains an unknown {kind.display.lower()}")

    scope_stmt = select(func.count()).select_from(kind.model)
    if kind.parent_field:
        parents = {getattr(row, kind.parent_field) for row in rows}
        if len(parents) > 1:
            raise _bad_request("orderedIds must belong to a single parent")
        scope_stmt = scope_stmt.where(kind.parent_column == parents.pop())
    if (await db.execute(scope_stmt)).scalar() != len(ordered_ids):
        raise _bad_request("orderedIds must list every item in the scope")

    by_id = {row.id: row for row in rows}
    for index, item_id in enumerate(ordered_ids):
        by_id[item_id].sort_order = index
    await db.flush()
    logger.info("Reordered %d %s", len(ordered_ids), kind.plural)


async def reorder_domain(db: AsyncSession, domain: str, body: ReorderRequest) -> None:
    types = REORDER_TYPES[domain]
    kind = types.get(body.type or "")
    if kind is None:
        raise _bad_request(f"Type must be one of: {', '.join(types)}")
    await reorder_items(db, kind, body.ordered_ids)


async def reorder_languages(db: AsyncSession, body: ReorderRequest) -> None:
    """Global language order, or one country's order when countryId is given."""
    if not body.country_id:
        await reorder_items(db, LANGUAGE, body.ordered_ids)
        return
    if len(set(body.ordered_ids)) != len(body.ordered_ids):
        raise _bad_request("orderedIds contains duplicates")
    await _get_or_404(db, COUNTRY, body.country_id)
    links = (
        await db.execute(select(CountryLanguage).where(CountryLanguage.country_id == body.country_id))
    ).scalars().all()
    by_language = {link.language_id: link for link in links}
    if set(body.ordered_ids) != set(by_language):
        raise _bad_request("orderedIds must list every language of the country")
    for index, language_id in enumerate(body.ordered_ids):
        by_language[language_id].sort_order = index
    await db.flush()


# -----------------------------------------------------------------------------
# Country <-> language associations
# -----------------------------------------------------------------------------


async def list_language_countries(db: AsyncSession) -> list[LanguageCountryItem]:
    countries = (
        await db.execute(select(Country).where(Country.is_active.is_(True)).order_by(Country.sort_order))
    ).scalars().all()
    ids = [c.id for c in countries]
    counts = dict((await db.execute(_grouped_count(CountryLanguage.country_id, ids))).all()) if ids else {}
    return [
        LanguageCountryItem(id=c.id, code=c.code, name=c.name, language_count=counts.get(c.id, 0))
        for c in countries
    ]


async def get_country_languages(db: AsyncSession, country_id: str) -> CountryLanguagesResponse:
    country = await _get_or_404(db, COUNTRY, country_id)
    result = await db.execute(
        select(CountryLanguage, Language)
        .join(Language, Language.id == CountryLanguage.language_id)
        .where(CountryLanguage.country_id == country_id)
        .order_by(CountryLanguage.sort_order)
    )
    languages = []
    associated_ids = []
    for link, language in result.all():
        associated_ids.append(language.id)
        languages.append(
            CountryLanguageItem(
                id=language.id,
                code=language.code,
                slug=language.slug,
                label=language.label,
                label_native=language.label_native,
                is_active=language.is_active,
                sort_order=link.sort_order,
                is_primary=link.is_primary,
                association_id=link.id,
            )
        )

    stmt = select(Language).where(
        Language.is_active.is_(True),
        Language.is_system.is_(False),
        Language.slug.notin_(sorted(SYSTEM_LANGUAGE_SLUGS)),
    )
    if associated_ids:
        stmt = stmt.where(Language.id.notin_(associated_ids))
    available = (await db.execute(stmt.order_by(Language.label))).scalars().all()

    return CountryLanguagesResponse(
        country=CountryRef.model_validate(country),
        languages=languages,
        available_languages=[AvailableLanguage.model_validate(lang) for lang in available],
    )


async def add_country_language(
    db: AsyncSession, country_id: str, body: CountryLanguageCreate
) -> CountryLanguageItem:
    await _get_or_404(db, COUNTRY, country_id)
    language = await _get_or_404(db, LANGUAGE, body.language_id)
    existing = await db.execute(
        select(CountryLanguage.id).where(
            CountryLanguage.country_id == country_id,
            CountryLanguage.language_id == body.language_id,
        )
    )
    if existing.scalar_one_or_none():
        raise _bad_request("This language is already associated with this country")

    current = (
        await db.execute(
            select(func.max(CountryLanguage.sort_order)).where(CountryLanguage.country_id == country_id)
        )
    ).scalar()
    link = CountryLanguage(
        country_id=country_id,
        language_id=language.id,
        sort_order=0 if current is None else current + 1,
        is_primary=body.is_primary,
    )
    db.add(link)
    await db.flush()
    return CountryLanguageItem(
        id=language.id,
        code=language.code,
        slug=language.slug,
        label=language.label,
        label_native=language.label_native,
        is_active=language.is_active,
        sort_order=link.sort_order,
        is_primary=link.is_primary,
        association_id=link.id,
    )


async def remove_country_language(db: AsyncSession, country_id: str, language_id: str | None) -> None:
    if not language_id:
        raise _bad_request("Language ID is required")
    result = await db.execute(
        select(CountryLanguage).where(
            CountryLanguage.country_id == country_id,
            CountryLanguage.language_id == language_id,
        )
    )
    link = result.scalar_one_or_none()
    if link is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="This language is not associated with this country",
        )
    await db.delete(link)
    await db.flush()


class TaxonomyService:
    """Facade for taxonomy operations."""

    @staticmethod
    async def list_items(db: AsyncSession, kind: TaxonomyKind, parent_id: str | None = None) -> list[ApiModel]:
        return await list_items(db, kind, parent_id)

    @staticmethod
    async def get_item(db: AsyncSession, kind: TaxonomyKind, item_id: str) -> ApiModel:
        return await get_item(db, kind, item_id)

    @staticmethod
    async def create_item(db: AsyncSession, kind: TaxonomyKind, body: ApiModel) -> ApiModel:
        return await create_item(db, kind, body)

    @staticmethod
    async def update_item(db: AsyncSession, kind: TaxonomyKind, item_id: str, body: ApiModel) -> ApiModel:
        return await update_item(db, kind, item_id, body)

    @staticmethod
    async def delete_item(db: AsyncSession, kind: TaxonomyKind, item_id: str) -> None:
        await delete_item(db, kind, item_id)

    @staticmethod
    async def reorder(db: AsyncSession, domain: str, body: ReorderRequest) -> None:
        if domain == "languages":
            await reorder_languages(db, body)
        else:
            await reorder_domain(db, domain, body)

    @staticmethod
    async def list_language_countries(db: AsyncSession) -> list[LanguageCountryItem]:
        return await list_language_countries(db)

    @staticmethod
    async def get_country_languages(db: AsyncSession, country_id: str) -> CountryLanguagesResponse:
        return await get_country_languages(db, country_id)

    @staticmethod
    async def add_country_language(
        db: AsyncSession, country_id: str, body: CountryLanguageCreate
    ) -> CountryLanguageItem:
        return await add_country_language(db, country_id, body)

    @staticmethod
    async def remove_country_language(db: AsyncSession, country_id: str, language_id: str | None) -> None:
        await remove_country_language(db, country_id, language_id)


taxonomy_service = TaxonomyService()
