"""Tag endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..db.session import get_session
from ..schemas import tags as schemas
from ..services import tags as tags_service

router = APIRouter()


@router.get("", response_model=list[schemas.TagResponse])
async def list_tags(session: AsyncSession = Depends(get_session)) -> list[schemas.TagResponse]:
    return await tags_service.list_tags(session)


@router.post("", response_model=schemas.TagResponse, status_code=status.HTTP_201_CREATED)
async def create_tag(
    payload: schemas.TagCreateRequest,
    session: AsyncSession = Depends(get_session),
) -> schemas.TagResponse:
    """Create a uniquely named tag."""

    return await tags_service.create_tag(payload, session)
