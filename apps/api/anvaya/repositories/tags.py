"""Tag repository helpers."""
from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.tag import Tag


async def list_tags(session: AsyncSession) -> list[Tag]:
    stmt = select(Tag).order_by(Tag.name.asc())
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def create_tag(session: AsyncSession, *, name: str) -> Tag:
    """Persist a tag; raises ``IntegrityError`` when the name is taken."""

    tag = Tag(name=name)
    session.add(tag)
    await session.flush()
    return tag
