"""Schemas for lead endpoints."""
from __future__ import annotations

from datetime import datetime

from pydantic import Field, StrictInt

from .base import CamelModel


class LeadWriteRequest(CamelModel):
    """Body for lead create and full-replace update.

    String fields are loosely typed so the declarative rules can report every
    problem with a field-specific message. ``timeToClose`` must be a JSON integer.
    """

    name: str | None = None
    source: str | None = None
    sales_agent: str | None = None
    status: str | None = None
    tags: list[str] | None = None
    time_to_close: StrictInt | None = None
    priority: str | None = None


class AgentRef(CamelModel):
    id: str
    name: str


class LeadSummary(CamelModel):
    id: str
    name: str
    source: str
    sales_agent: AgentRef
    status: str
    tags: list[str] = Field(default_factory=list)
    time_to_close: int
    priority: str
    created_at: datetime
    updated_at: datetime


class LeadDetail(LeadSummary):
    closed_at: datetime | None = None
