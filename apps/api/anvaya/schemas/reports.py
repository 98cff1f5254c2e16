"""Schemas for report endpoints."""
from __future__ import annotations

from datetime import datetime

from .base import CamelModel


class ClosedLeadItem(CamelModel):
    id: str
    name: str
    sales_agent: str
    closed_at: datetime | None = None


class PipelineSummary(CamelModel):
    total_leads_in_pipeline: int
    by_status: dict[str, int]


class AgentClosedCount(CamelModel):
    agent_id: str
    agent_name: str
    closed_count: int
