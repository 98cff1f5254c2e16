"""Aggregate lead reports."""
from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..db.session import get_session
from ..schemas import reports as schemas
from ..services import reports as reports_service

router = APIRouter()


@router.get("/last-week", response_model=list[schemas.ClosedLeadItem])
async def closed_last_week(session: AsyncSession = Depends(get_session)) -> list[schemas.ClosedLeadItem]:
    """Return leads closed in the trailing seven days."""

    return await reports_service.closed_last_week(session)


@router.get("/pipeline", response_model=schemas.PipelineSummary)
async def pipeline(session: AsyncSession = Depends(get_session)) -> schemas.PipelineSummary:
    """Return open pipeline counts by status."""

    return await reports_service.pipeline_summary(session)


@router.get("/closed-by-agent", response_model=list[schemas.AgentClosedCount])
async def closed_by_agent(session: AsyncSession = Depends(get_session)) -> list[schemas.AgentClosedCount]:
    return await reports_service.closed_by_agent(session)


@router.get("/status-distribution", response_model=dict[str, int])
async def status_distribution(session: AsyncSession = Depends(get_session)) -> dict[str, int]:
    return await reports_service.status_distribution(session)
