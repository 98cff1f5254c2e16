"""Business logic for tags."""
from __future__ import annotations

import logging

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.tag import Tag
from ..repositories import tags as tags_repo
from ..schemas import tags as schemas
from .validation import FieldRule, ensure_valid

logger = logging.getLogger(__name__)

TAG_RULES = (FieldRule("name", required=True),)


async def list_tags(session: AsyncSession) -> list[schemas.TagResponse]:
    try:
        tags = await tags_repo.list_tags(session)
    except SQLAlchemyError as exc:
        logger.exception("Failed to list tags: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error in fetching tags."
        ) from exc
    return [to_response(tag) for tag in tags]


async def create_tag(payload: schemas.TagCreateRequest, session: AsyncSession) -> schemas.TagResponse:
    """Store a tag, mapping a duplicate name to 409."""

    ensure_valid(payload.model_dump(by_alias=True), TAG_RULES)

    try:
        async with session.begin():
            tag = await tags_repo.create_tag(session, name=payload.name)
    except IntegrityError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Tag with name '{payload.name}' already exists.",
        ) from exc
    except SQLAlchemyError as exc:
        logger.exception("Failed to create tag: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error in adding tag."
        ) from exc

    logger.info("Created tag %s (%s)", tag.id, tag.name)
    return to_response(tag)


def to_response(tag: Tag) -> schemas.TagResponse:
    return schemas.TagResponse(id=tag.id, name=tag.name, created_at=tag.created_at)
