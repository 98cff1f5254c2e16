"""Sales agent model."""
from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import OBJECT_ID_LENGTH, Base, generate_id, utcnow

if TYPE_CHECKING:
    from .comment import Comment
    from .lead import Lead


class SalesAgent(Base):
    """Sales agent who owns leads and writes comments."""

    __tablename__ = "sales_agents"

    id: Mapped[str] = mapped_column(String(OBJECT_ID_LENGTH), primary_key=True, default=generate_id)
    name: Mapped[str] = mapped_column(String, nullable=False)
    email: Mapped[str] = mapped_column(String, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)

    leads: Mapped[list["Lead"]] = relationship("Lead", back_populates="sales_agent")
    comments: Mapped[list["Comment"]] = relationship("Comment", back_populates="author")
