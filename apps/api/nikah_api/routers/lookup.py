from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from nikah_api.dependencies import get_db
from nikah_api.schemas.lookup import LookupResponse
from nikah_api.services.lookup import lookup_service

router = APIRouter(prefix="/api/lookup", tags=["lookup"])


@router.get("", response_model=LookupResponse, response_model_exclude_none=True)
async def get_lookup(
    table: str | None = Query(None),
    parent_id: str | None = Query(None, alias="parentId"),
    db: AsyncSession = Depends(get_db),
):
    return LookupResponse(data=await lookup_service.get_lookup(db, table, parent_id))
