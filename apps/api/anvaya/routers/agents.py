"""Sales agent endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..db.session import get_session
from ..schemas import agents as schemas
from ..services import agents as agents_service

router = APIRouter()


@router.get("", response_model=list[schemas.AgentResponse])
async def list_agents(session: AsyncSession = Depends(get_session)) -> list[schemas.AgentResponse]:
    """Return all sales agents."""

    return await agents_service.list_agents(session)


@router.post("", response_model=schemas.AgentResponse, status_code=status.HTTP_201_CREATED)
async def create_agent(
    payload: schemas.AgentCreateRequest,
    session: AsyncSession = Depends(get_session),
) -> schemas.AgentResponse:
    """Register a new sales agent."""

    return await agents_service.create_agent(payload, session)
