"""Comment model."""
from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import OBJECT_ID_LENGTH, Base, generate_id, utcnow

if TYPE_CHECKING:
    from .agent import SalesAgent
    from .lead import Lead


class Comment(Base):
    """Note left by an agent on a lead."""

    __tablename__ = "comments"

    id: Mapped[str] = mapped_column(String(OBJECT_ID_LENGTH), primary_key=True, default=generate_id)
    lead_id: Mapped[str] = mapped_column(ForeignKey("leads.id"), nullable=False, index=True)
    comment_text: Mapped[str] = mapped_column(Text, nullable=False)
    author_id: Mapped[str | None] = mapped_column(ForeignKey("sales_agents.id", ondelete="SET NULL"))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)

    lead: Mapped["Lead"] = relationship("Lead", back_populates="comments")
    author: Mapped["SalesAgent | None"] = relationship("SalesAgent", back_populates="comments")
