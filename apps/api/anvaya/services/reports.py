"""Read-only lead reports aggregated in memory."""
from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable
from datetime import datetime, timedelta, timezone

from fastapi import HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.lead import LeadStatus
from ..repositories import leads as leads_repo
from ..schemas import reports as schemas

logger = logging.getLogger(__name__)

REPORT_WINDOW = timedelta(days=7)
UNKNOWN_AGENT = "Unknown"


async def closed_last_week(
    session: AsyncSession,
    *,
    now: datetime | None = None,
) -> list[schemas.ClosedLeadItem]:
    """Leads closed within the trailing seven days, most recent first."""

    since = (now or datetime.now(timezone.utc)) - REPORT_WINDOW
    try:
        leads = await leads_repo.list_closed_since(session, since=since)
    except SQLAlchemyError as exc:
        raise _report_failure("last week's closed leads", exc) from exc

    return [
        schemas.ClosedLeadItem(
            id=lead.id,
            name=lead.name,
            sales_agent=lead.sales_agent.name if lead.sales_agent is not None else UNKNOWN_AGENT,
            closed_at=lead.closed_at,
        )
        for lead in leads
    ]


async def pipeline_summary(session: AsyncSession) -> schemas.PipelineSummary:
    """Count open leads overall and per status."""

    try:
        statuses = await leads_repo.list_statuses(session, open_only=True)
    except SQLAlchemyError as exc:
        raise _report_failure("pipeline data", exc) from exc

    by_status = count_statuses(statuses)
    return schemas.PipelineSummary(total_leads_in_pipeline=len(statuses), by_status=by_status)


async def closed_by_agent(session: AsyncSession) -> list[schemas.AgentClosedCount]:
    """Closed lead counts per agent; leads without a resolvable agent are skipped."""

    try:
        leads = await leads_repo.list_closed(session)
    except SQLAlchemyError as exc:
        raise _report_failure("closed leads by agent", exc) from exc

    grouped: dict[str, schemas.AgentClosedCount] = {}
    for lead in leads:
        agent = lead.sales_agent
        if agent is None:
            continue
        entry = grouped.get(agent.id)
        if entry is None:
            entry = schemas.AgentClosedCount(agent_id=agent.id, agent_name=agent.name, closed_count=0)
            grouped[agent.id] = entry
        entry.closed_count += 1
    return list(grouped.values())


async def status_distribution(session: AsyncSession) -> dict[str, int]:
    """Count every lead by status."""

    try:
        statuses = await leads_repo.list_statuses(session)
    except SQLAlchemyError as exc:
        raise _report_failure("status distribution", exc) from exc
    return count_statuses(statuses)


def count_statuses(statuses: Iterable[LeadStatus | str]) -> dict[str, int]:
    """Map each status present to its count, in first-seen order."""

    counts = Counter(item.value if isinstance(item, LeadStatus) else str(item) for item in statuses)
    return dict(counts)


def _report_failure(label: str, exc: Exception) -> HTTPException:
    logger.exception("Failed to build report (%s): %s", label, exc)
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=f"Error in fetching {label}.")
