"""Business logic for comments on leads."""
from __future__ import annotations

import logging

from fastapi import HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.comment import Comment
from ..repositories import agents as agents_repo
from ..repositories import comments as comments_repo
from ..repositories import leads as leads_repo
from ..schemas import comments as schemas
from .leads import INVALID_LEAD_ID
from .validation import FieldRule, ensure_object_id, ensure_valid

logger = logging.getLogger(__name__)

UNKNOWN_AUTHOR = "Unknown"

COMMENT_RULES = (
    FieldRule("commentText", required=True),
    FieldRule("author", required=True, object_id=True),
)


async def list_comments(lead_id: str, session: AsyncSession) -> list[schemas.CommentResponse]:
    """Return comments for an existing lead, newest first."""

    ensure_object_id(lead_id, INVALID_LEAD_ID)

    try:
        if not await leads_repo.exists(session, lead_id):
            raise _lead_not_found(lead_id)
        comments = await comments_repo.list_for_lead(session, lead_id)
    except SQLAlchemyError as exc:
        logger.exception("Failed to list comments for lead %s: %s", lead_id, exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error in fetching comments."
        ) from exc
    return [to_response(comment) for comment in comments]


async def add_comment(
    lead_id: str,
    payload: schemas.CommentCreateRequest,
    session: AsyncSession,
) -> schemas.CommentResponse:
    """Attach a comment written by an existing agent to an existing lead."""

    ensure_object_id(lead_id, INVALID_LEAD_ID)
    ensure_valid(payload.model_dump(by_alias=True), COMMENT_RULES)

    try:
        async with session.begin():
            if not await leads_repo.exists(session, lead_id):
                raise _lead_not_found(lead_id)
            if await agents_repo.get_by_id(session, payload.author) is None:
                raise HTTPException(
                    status_code=status.HTTP_404_NOT_FOUND,
                    detail=f"Sales agent with ID '{payload.author}' not found.",
                )
            comment = await comments_repo.create_comment(
                session,
                lead_id=lead_id,
                comment_text=payload.comment_text,
                author_id=payload.author,
            )
    except SQLAlchemyError as exc:
        logger.exception("Failed to add comment to lead %s: %s", lead_id, exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error in adding comment."
        ) from exc

    logger.info("Added comment %s to lead %s", comment.id, lead_id)
    return to_response(comment)


def to_response(comment: Comment) -> schemas.CommentResponse:
    author = comment.author.name if comment.author is not None else UNKNOWN_AUTHOR
    return schemas.CommentResponse(
        id=comment.id,
        comment_text=comment.comment_text,
        author=author,
        created_at=comment.created_at,
    )


def _lead_not_found(lead_id: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Lead with ID '{lead_id}' not found.")
