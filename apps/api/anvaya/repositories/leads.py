"""Lead repository helpers."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from sqlalchemy import Select, delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ..models.lead import Lead, LeadPriority, LeadSource, LeadStatus


@dataclass(slots=True)
class LeadFilters:
    """Conjunctive filters for lead listing; empty fields are ignored."""

    sales_agent_id: str | None = None
    status: LeadStatus | None = None
    source: LeadSource | None = None
    tags: list[str] = field(default_factory=list)


def _with_agent() -> Select[tuple[Lead]]:
    return select(Lead).options(selectinload(Lead.sales_agent))


async def list_leads(session: AsyncSession, *, filters: LeadFilters) -> list[Lead]:
    """Return leads matching the filters, newest first, with agents loaded."""

    stmt = _with_agent()
    if filters.sales_agent_id:
        stmt = stmt.where(Lead.sales_agent_id == filters.sales_agent_id)
    if filters.status is not None:
        stmt = stmt.where(Lead.status == filters.status)
    if filters.source is not None:
        stmt = stmt.where(Lead.source == filters.source)
    if filters.tags:
        stmt = stmt.where(Lead.tags.overlap(filters.tags))

    stmt = stmt.order_by(Lead.created_at.desc())
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def get_by_id(session: AsyncSession, lead_id: str) -> Lead | None:
    """Return a lead by identifier with its agent loaded."""

    stmt = _with_agent().where(Lead.id == lead_id)
    result = await session.execute(stmt)
    return result.scalar_one_or_none()


async def exists(session: AsyncSession, lead_id: str) -> bool:
    """Return True if a lead with the identifier is stored."""

    stmt = select(Lead.id).where(Lead.id == lead_id)
    result = await session.execute(stmt)
    return result.scalar_one_or_none() is not None


async def create_lead(
    session: AsyncSession,
    *,
    name: str,
    source: LeadSource,
    sales_agent_id: str,
    status: LeadStatus,
    tags: list[str],
    time_to_close: int,
    priority: LeadPriority,
    closed_at: datetime | None = None,
) -> Lead:
    """Persist a new lead and return it with the agent loaded."""

    lead = Lead(
        name=name,
        source=source,
        sales_agent_id=sales_agent_id,
        status=status,
        tags=tags,
        time_to_close=time_to_close,
        priority=priority,
        closed_at=closed_at,
    )
    session.add(lead)
    await session.flush()
    await session.refresh(lead, attribute_names=["sales_agent"])
    return lead


async def replace_lead(
    session: AsyncSession,
    lead: Lead,
    *,
    name: str,
    source: LeadSource,
    sales_agent_id: str,
    status: LeadStatus,
    tags: list[str],
    time_to_close: int,
    priority: LeadPriority,
    closed_at: datetime | None = None,
) -> Lead:
    """Overwrite every editable field of a lead.

    ``closed_at`` is only written when provided so an earlier close time survives
    a save with another status.
    """

    lead.name = name
    lead.source = source
    lead.sales_agent_id = sales_agent_id
    lead.status = status
    lead.tags = tags
    lead.time_to_close = time_to_close
    lead.priority = priority
    if closed_at is not None:
        lead.closed_at = closed_at
    session.add(lead)
    await session.flush()
    await session.refresh(lead, attribute_names=["sales_agent", "updated_at"])
    return lead


async def delete_lead(session: AsyncSession, lead_id: str) -> bool:
    """Delete a lead; return False when nothing matched."""

    stmt = delete(Lead).where(Lead.id == lead_id)
    result = await session.execute(stmt)
    return result.rowcount > 0


async def list_closed_since(session: AsyncSession, *, since: datetime) -> list[Lead]:
    """Return closed leads whose close time is at or after ``since``."""

    stmt = (
        _with_agent()
        .where(Lead.status == LeadStatus.CLOSED, Lead.closed_at >= since)
        .order_by(Lead.closed_at.desc())
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def list_closed(session: AsyncSession) -> list[Lead]:
    """Return all closed leads with agents loaded."""

    stmt = _with_agent().where(Lead.status == LeadStatus.CLOSED)
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def list_statuses(session: AsyncSession, *, open_only: bool = False) -> list[LeadStatus]:
    """Return the status of every lead, optionally skipping closed ones."""

    stmt = select(Lead.status)
    if open_only:
        stmt = stmt.where(Lead.status != LeadStatus.CLOSED)
    result = await session.execute(stmt)
    return list(result.scalars().all())
