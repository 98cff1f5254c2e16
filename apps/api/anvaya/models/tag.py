"""Tag model."""
from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import OBJECT_ID_LENGTH, Base, generate_id, utcnow


class Tag(Base):
    __tablename__ = "tags"

    id: Mapped[str] = mapped_column(String(OBJECT_ID_LENGTH), primary_key=True, default=generate_id)
    name: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
