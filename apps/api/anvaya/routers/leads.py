"""Lead and lead comment endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..db.session import get_session
from ..schemas import base as base_schemas
from ..schemas import comments as comment_schemas
from ..schemas import leads as schemas
from ..services import comments as comments_service
from ..services import leads as leads_service

router = APIRouter()


@router.get("", response_model=list[schemas.LeadSummary])
async def list_leads(
    sales_agent: str | None = Query(default=None, alias="salesAgent"),
    status_filter: str | None = Query(default=None, alias="status"),
    source: str | None = None,
    tags: list[str] | None = Query(default=None),
    session: AsyncSession = Depends(get_session),
) -> list[schemas.LeadSummary]:
    """Return leads filtered by agent, status, source and any-of tags."""

    return await leads_service.list_leads(
        session,
        sales_agent=sales_agent,
        status_filter=status_filter,
        source=source,
        tags=tags,
    )


@router.get("/{lead_id}", response_model=schemas.LeadDetail)
async def get_lead(lead_id: str, session: AsyncSession = Depends(get_session)) -> schemas.LeadDetail:
    return await leads_service.get_lead(lead_id, session)


@router.post("", response_model=schemas.LeadDetail, status_code=status.HTTP_201_CREATED)
async def create_lead(
    payload: schemas.LeadWriteRequest,
    session: AsyncSession = Depends(get_session),
) -> schemas.LeadDetail:
    """Create a lead owned by an existing agent."""

    return await leads_service.create_lead(payload, session)


@router.put("/{lead_id}", response_model=schemas.LeadDetail)
async def update_lead(
    lead_id: str,
    payload: schemas.LeadWriteRequest,
    session: AsyncSession = Depends(get_session),
) -> schemas.LeadDetail:
    """Replace every field of a lead."""

    return await leads_service.update_lead(lead_id, payload, session)


@router.delete("/{lead_id}", response_model=base_schemas.MessageResponse)
async def delete_lead(lead_id: str, session: AsyncSession = Depends(get_session)) -> base_schemas.MessageResponse:
    """Delete a lead and its comments."""

    return await leads_service.delete_lead(lead_id, session)


@router.get("/{lead_id}/comments", response_model=list[comment_schemas.CommentResponse])
async def list_comments(
    lead_id: str,
    session: AsyncSession = Depends(get_session),
) -> list[comment_schemas.CommentResponse]:
    return await comments_service.list_comments(lead_id, session)


@router.post(
    "/{lead_id}/comments",
    response_model=comment_schemas.CommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_comment(
    lead_id: str,
    payload: comment_schemas.CommentCreateRequest,
    session: AsyncSession = Depends(get_session),
) -> comment_schemas.CommentResponse:
    """Add a comment to a lead."""

    return await comments_service.add_comment(lead_id, payload, session)
