"""Sales agent repository helpers."""
from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.agent import SalesAgent


async def list_agents(session: AsyncSession) -> list[SalesAgent]:
    """Return every sales agent, oldest first."""

    stmt = select(SalesAgent).order_by(SalesAgent.created_at.asc())
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def get_by_id(session: AsyncSession, agent_id: str) -> SalesAgent | None:
    """Return a sales agent by identifier."""

    return await session.get(SalesAgent, agent_id)


async def create_agent(session: AsyncSession, *, name: str, email: str) -> SalesAgent:
    """Persist a new sales agent."""

    agent = SalesAgent(name=name, email=email)
    session.add(agent)
    await session.flush()
    return agent
