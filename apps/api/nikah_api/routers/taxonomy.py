from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from nikah_api.core.constants import TAXONOMY_ROLES
from nikah_api.db.models import User
from nikah_api.dependencies import get_db, require_roles
from nikah_api.schemas.base import SuccessResponse
from nikah_api.schemas.taxonomy import ReorderRequest, CountryLanguageCreate, CountryLanguagesResponse
from nikah_api.services.taxonomy import (
    taxonomy_service,
    TaxonomyKind,
    EDUCATION_LEVEL,
    EDUCATION_FIELD,
    LANGUAGE,
    COUNTRY,
    STATE,
    CITY,
    ORIGIN,
    ETHNICITY,
    CASTE,
    SECT,
    MASLAK,
)

router = APIRouter(prefix="/api/admin/global-settings", tags=["global-settings"])

require_taxonomy_admin = require_roles(*TAXONOMY_ROLES)


# Country <-> language associations. Registered before the language item
# routes so "countries" is not taken for a language id.


@router.get("/languages/countries")
async def list_language_countries(
    _admin: User = Depends(require_taxonomy_admin),
    db: AsyncSession = Depends(get_db),
):
    return {"countries": await taxonomy_service.list_language_countries(db)}


@router.get("/languages/countries/{country_id}", response_model=CountryLanguagesResponse)
async def get_country_languages(
    country_id: str,
    _admin: User = Depends(require_taxonomy_admin),
    db: AsyncSession = Depends(get_db),
):
    return await taxonomy_service.get_country_languages(db, country_id)


@router.post("/languages/countries/{country_id}", status_code=status.HTTP_201_CREATED)
async def add_country_language(
    country_id: str,
    body: CountryLanguageCreate,
    _admin: User = Depends(require_taxonomy_admin),
    db: AsyncSession = Depends(get_db),
):
    return {"association": await taxonomy_service.add_country_language(db, country_id, body)}


@router.delete("/languages/countries/{country_id}", response_model=SuccessResponse)
async def remove_country_language(
    country_id: str,
    language_id: str | None = Query(None, alias="languageId"),
    _admin: User = Depends(require_taxonomy_admin),
    db: AsyncSession = Depends(get_db),
):
    await taxonomy_service.remove_country_language(db, country_id, language_id)
    return SuccessResponse()


def _register_reorder(domain: str) -> None:
    @router.post(f"/{domain}/reorder", response_model=SuccessResponse, name=f"reorder_{domain}")
    async def reorder(
        body: ReorderRequest,
        _admin: User = Depends(require_taxonomy_admin),
        db: AsyncSession = Depends(get_db),
    ):
        await taxonomy_service.reorder(db, domain, body)
        return SuccessResponse()


def _register_kind(path: str, kind: TaxonomyKind) -> None:
    """list / create / get / update / delete for one kind under ``path``."""

    @router.get(path, name=f"list_{kind.plural}")
    async def list_items(
        parent_id: str | None = Query(
            None,
            alias=kind.parent_query or "parentId",
            include_in_schema=kind.parent_query is not None,
        ),
        _admin: User = Depends(require_taxonomy_admin),
        db: AsyncSession = Depends(get_db),
    ):
        return {kind.plural: await taxonomy_service.list_items(db, kind, parent_id)}

    @router.post(path, status_code=status.HTTP_201_CREATED, name=f"create_{kind.key}")
    async def create_item(
        body: kind.create,
        _admin: User = Depends(require_taxonomy_admin),
        db: AsyncSession = Depends(get_db),
    ):
        return {kind.key: await taxonomy_service.create_item(db, kind, body)}

    @router.get(f"{path}/{{item_id}}", name=f"get_{kind.key}")
    async def get_item(
        item_id: str,
        _admin: User = Depends(require_taxonomy_admin),
        db: AsyncSession = Depends(get_db),
    ):
        return {kind.key: await taxonomy_service.get_item(db, kind, item_id)}

    @router.patch(f"{path}/{{item_id}}", name=f"update_{kind.key}")
    async def update_item(
        item_id: str,
        body: kind.update,
        _admin: User = Depends(require_taxonomy_admin),
        db: AsyncSession = Depends(get_db),
    ):
        return {kind.key: await taxonomy_service.update_item(db, kind, item_id, body)}

    @router.delete(f"{path}/{{item_id}}", response_model=SuccessResponse, name=f"delete_{kind.key}")
    async def delete_item(
        item_id: str,
        _admin: User = Depends(require_taxonomy_admin),
        db: AsyncSession = Depends(get_db),
    ):
        await taxonomy_service.delete_item(db, kind, item_id)
        return SuccessResponse()


for _domain in ("education", "languages", "locations", "origins", "sects"):
    _register_reorder(_domain)

# Child paths first: "/origins/ethnicities" must not match "/origins/{item_id}".
for _path, _kind in (
    ("/education/levels", EDUCATION_LEVEL),
    ("/education/fields", EDUCATION_FIELD),
    ("/languages", LANGUAGE),
    ("/locations/countries", COUNTRY),
    ("/locations/states", STATE),
    ("/locations/cities", CITY),
    ("/origins/ethnicities", ETHNICITY),
    ("/origins/castes", CASTE),
    ("/origins", ORIGIN),
    ("/sects/maslaks", MASLAK),
    ("/sects", SECT),
):
    _register_kind(_path, _kind)
