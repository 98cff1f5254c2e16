"""Schemas for lead comments."""
from __future__ import annotations

from datetime import datetime

from .base import CamelModel


class CommentCreateRequest(CamelModel):
    comment_text: str | None = None
    author: str | None = None


class CommentResponse(CamelModel):
    id: str
    comment_text: str
    author: str
    created_at: datetime
