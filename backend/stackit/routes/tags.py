"""Tag listing for the tag picker of the ask-question form."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from stackit.database import get_db_session
from stackit.schemas.tag import TagListResponse
from stackit.services.tag_service import tag_service

router = APIRouter(prefix="/api/tags", tags=["Tags"])


@router.get("", response_model=TagListResponse, summary="Most used tags, optionally filtered by prefix")
async def list_tags(
    search: str | None = Query(default=None, max_length=50, description="Tag name prefix"),
    limit: int = Query(default=50, ge=1, le=200),
    db: AsyncSession = Depends(get_db_session),
) -> TagListResponse:
    return await tag_service.list_tags(db, search=search, limit=limit)
