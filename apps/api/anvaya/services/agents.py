"""Business logic for sales agents."""
from __future__ import annotations

import logging

from fastapi import HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.agent import SalesAgent
from ..repositories import agents as agents_repo
from ..schemas import agents as schemas
from .validation import FieldRule, ensure_valid

logger = logging.getLogger(__name__)

AGENT_RULES = (
    FieldRule("name", required=True),
    FieldRule("email", required=True, email=True),
)


async def list_agents(session: AsyncSession) -> list[schemas.AgentResponse]:
    """Return every agent."""

    try:
        agents = await agents_repo.list_agents(session)
    except SQLAlchemyError as exc:
        logger.exception("Failed to list agents: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error in fetching agents."
        ) from exc
    return [to_response(agent) for agent in agents]


async def create_agent(payload: schemas.AgentCreateRequest, session: AsyncSession) -> schemas.AgentResponse:
    """Validate and store a new agent."""

    ensure_valid(payload.model_dump(by_alias=True), AGENT_RULES)

    try:
        async with session.begin():
            agent = await agents_repo.create_agent(session, name=payload.name, email=payload.email)
    except SQLAlchemyError as exc:
        logger.exception("Failed to create agent: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error in adding new agent."
        ) from exc

    logger.info("Created sales agent %s", agent.id)
    return to_response(agent)


def to_response(agent: SalesAgent) -> schemas.AgentResponse:
    return schemas.AgentResponse(
        id=agent.id,
        name=agent.name,
        email=agent.email,
        created_at=agent.created_at,
    )
