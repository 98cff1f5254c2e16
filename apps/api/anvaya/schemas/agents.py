"""Schemas for sales agent endpoints."""
from __future__ import annotations

from datetime import datetime

from .base import CamelModel


class AgentCreateRequest(CamelModel):
    name: str | None = None
    email: str | None = None


class AgentResponse(CamelModel):
    id: str
    name: str
    email: str
    created_at: datetime
