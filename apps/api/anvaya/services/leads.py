"""Business logic for leads: filtering, validation and close-time stamping."""
from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import HTTPException, status
from sqlalchemy.exc import DataError, IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.lead import Lead, LeadPriority, LeadSource, LeadStatus
from ..repositories import agents as agents_repo
from ..repositories import comments as comments_repo
from ..repositories import leads as leads_repo
from ..schemas import base as base_schemas
from ..schemas import leads as schemas
from .validation import FieldRule, collect_violations, ensure_object_id, ensure_valid, is_blank, reject

logger = logging.getLogger(__name__)

STATUS_CHOICES = tuple(item.value for item in LeadStatus)
SOURCE_CHOICES = tuple(item.value for item in LeadSource)
PRIORITY_CHOICES = tuple(item.value for item in LeadPriority)

INVALID_LEAD_ID = "Invalid lead ID."
UPDATE_FIELDS_REQUIRED = "All fields are required when updating a lead."

LEAD_FILTER_RULES = (
    FieldRule("salesAgent", object_id=True),
    FieldRule("status", choices=STATUS_CHOICES),
    FieldRule("source", choices=SOURCE_CHOICES),
)

LEAD_CREATE_RULES = (
    FieldRule("name", required=True),
    FieldRule("source", required=True, choices=SOURCE_CHOICES),
    FieldRule("salesAgent", required=True, object_id=True),
    FieldRule("status", choices=STATUS_CHOICES),
    FieldRule("timeToClose", required=True, min_value=1),
    FieldRule("priority", choices=PRIORITY_CHOICES),
)

LEAD_UPDATE_RULES = (
    FieldRule("name", required=True),
    FieldRule("source", required=True, choices=SOURCE_CHOICES),
    FieldRule("salesAgent", required=True, object_id=True),
    FieldRule("status", required=True, choices=STATUS_CHOICES),
    FieldRule("timeToClose", required=True, min_value=1),
    FieldRule("priority", required=True, choices=PRIORITY_CHOICES),
)


async def list_leads(
    session: AsyncSession,
    *,
    sales_agent: str | None = None,
    status_filter: str | None = None,
    source: str | None = None,
    tags: list[str] | None = None,
) -> list[schemas.LeadSummary]:
    """Return leads matching every supplied filter, newest first."""

    ensure_valid(
        {"salesAgent": sales_agent, "status": status_filter, "source": source},
        LEAD_FILTER_RULES,
    )

    filters = leads_repo.LeadFilters(
        sales_agent_id=sales_agent or None,
        status=LeadStatus(status_filter) if status_filter else None,
        source=LeadSource(source) if source else None,
        tags=[tag for tag in (tags or []) if tag],
    )

    try:
        leads = await leads_repo.list_leads(session, filters=filters)
    except SQLAlchemyError as exc:
        logger.exception("Failed to list leads: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error in fetching leads."
        ) from exc
    return [to_summary(lead) for lead in leads]


async def get_lead(lead_id: str, session: AsyncSession) -> schemas.LeadDetail:
    """Return one lead including its close time."""

    ensure_object_id(lead_id, INVALID_LEAD_ID)

    try:
        lead = await leads_repo.get_by_id(session, lead_id)
    except SQLAlchemyError as exc:
        logger.exception("Failed to fetch lead %s: %s", lead_id, exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error in fetching lead."
        ) from exc

    if lead is None:
        raise _lead_not_found(lead_id)
    return to_detail(lead)


async def create_lead(payload: schemas.LeadWriteRequest, session: AsyncSession) -> schemas.LeadDetail:
    """Validate and store a new lead, applying field defaults."""

    ensure_valid(payload.model_dump(by_alias=True), LEAD_CREATE_RULES)

    lead_status = LeadStatus(payload.status) if payload.status else LeadStatus.NEW
    closed_at = _utcnow() if lead_status is LeadStatus.CLOSED else None

    try:
        async with session.begin():
            await _ensure_agent(session, payload.sales_agent)
            lead = await leads_repo.create_lead(
                session,
                name=payload.name,
                source=LeadSource(payload.source),
                sales_agent_id=payload.sales_agent,
                status=lead_status,
                tags=list(payload.tags or []),
                time_to_close=payload.time_to_close,
                priority=LeadPriority(payload.priority) if payload.priority else LeadPriority.MEDIUM,
                closed_at=closed_at,
            )
    except (IntegrityError, DataError) as exc:
        raise reject(f"Invalid input: {exc.orig or exc}") from exc
    except SQLAlchemyError as exc:
        logger.exception("Failed to create lead: %s", exc)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Error in adding new lead.") from exc

    logger.info("Created lead %s for agent %s", lead.id, lead.sales_agent_id)
    return to_detail(lead)


async def update_lead(
    lead_id: str,
    payload: schemas.LeadWriteRequest,
    session: AsyncSession,
) -> schemas.LeadDetail:
    """Replace every field of a lead.

    A save with status ``Closed`` always stamps ``closed_at`` with the current
    time, even if the lead was already closed. Other statuses leave an existing
    close time in place.
    """

    ensure_object_id(lead_id, INVALID_LEAD_ID)

    data = payload.model_dump(by_alias=True)
    violations = collect_violations(data, LEAD_UPDATE_RULES)
    if violations:
        missing = any(rule.required and is_blank(data.get(rule.name)) for rule in LEAD_UPDATE_RULES)
        raise reject(UPDATE_FIELDS_REQUIRED if missing else violations[0].message, violations)

    lead_status = LeadStatus(payload.status)
    closed_at = _utcnow() if lead_status is LeadStatus.CLOSED else None

    try:
        async with session.begin():
            await _ensure_agent(session, payload.sales_agent)
            lead = await leads_repo.get_by_id(session, lead_id)
            if lead is None:
                raise _lead_not_found(lead_id)
            lead = await leads_repo.replace_lead(
                session,
                lead,
                name=payload.name,
                source=LeadSource(payload.source),
                sales_agent_id=payload.sales_agent,
                status=lead_status,
                tags=list(payload.tags or []),
                time_to_close=payload.time_to_close,
                priority=LeadPriority(payload.priority),
                closed_at=closed_at,
            )
    except (IntegrityError, DataError) as exc:
        raise reject(f"Invalid input: {exc.orig or exc}") from exc
    except SQLAlchemyError as exc:
        logger.exception("Failed to update lead %s: %s", lead_id, exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error in updating lead."
        ) from exc

    logger.info("Updated lead %s (status=%s)", lead.id, lead_status.value)
    return to_detail(lead)


async def delete_lead(lead_id: str, session: AsyncSession) -> base_schemas.MessageResponse:
    """Delete a lead together with its comments in one transaction."""

    ensure_object_id(lead_id, INVALID_LEAD_ID)

    try:
        async with session.begin():
            if not await leads_repo.exists(session, lead_id):
                raise _lead_not_found(lead_id)
            removed = await comments_repo.delete_for_lead(session, lead_id)
            await leads_repo.delete_lead(session, lead_id)
    except SQLAlchemyError as exc:
        logger.exception("Failed to delete lead %s: %s", lead_id, exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error in deleting lead."
        ) from exc

    logger.info("Deleted lead %s and %d comment(s)", lead_id, removed)
    return base_schemas.MessageResponse(message="Lead deleted successfully.")


def to_summary(lead: Lead) -> schemas.LeadSummary:
    return schemas.LeadSummary(**_lead_fields(lead))


def to_detail(lead: Lead) -> schemas.LeadDetail:
    return schemas.LeadDetail(**_lead_fields(lead), closed_at=lead.closed_at)


def _lead_fields(lead: Lead) -> dict[str, object]:
    return {
        "id": lead.id,
        "name": lead.name,
        "source": lead.source.value,
        "sales_agent": schemas.AgentRef(id=lead.sales_agent.id, name=lead.sales_agent.name),
        "status": lead.status.value,
        "tags": list(lead.tags or []),
        "time_to_close": lead.time_to_close,
        "priority": lead.priority.value,
        "created_at": lead.created_at,
        "updated_at": lead.updated_at,
    }


async def _ensure_agent(session: AsyncSession, agent_id: str) -> None:
    agent = await agents_repo.get_by_id(session, agent_id)
    if agent is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Sales agent with ID '{agent_id}' not found.",
        )


def _lead_not_found(lead_id: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Lead with ID '{lead_id}' not found.")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)
