"""Comment repository helpers."""
from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ..models.comment import Comment


async def list_for_lead(session: AsyncSession, lead_id: str) -> list[Comment]:
    """Return comments on a lead, newest first, with authors loaded."""

    stmt = (
        select(Comment)
        .options(selectinload(Comment.author))
        .where(Comment.lead_id == lead_id)
        .order_by(Comment.created_at.desc())
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def create_comment(
    session: AsyncSession,
    *,
    lead_id: str,
    comment_text: str,
    author_id: str,
) -> Comment:
    """Persist a comment and return it with the author loaded."""

    comment = Comment(lead_id=lead_id, comment_text=comment_text, author_id=author_id)
    session.add(comment)
    await session.flush()
    await session.refresh(comment, attribute_names=["author"])
    return comment


async def delete_for_lead(session: AsyncSession, lead_id: str) -> int:
    """Delete every comment on a lead and return how many were removed."""

    stmt = delete(Comment).where(Comment.lead_id == lead_id)
    result = await session.execute(stmt)
    return result.rowcount
