"""Schemas for tag endpoints."""
from __future__ import annotations

from datetime import datetime

from .base import CamelModel


class TagCreateRequest(CamelModel):
    name: str | None = None


class TagResponse(CamelModel):
    id: str
    name: str
    created_at: datetime
