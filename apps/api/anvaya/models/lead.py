"""Lead model."""
from __future__ import annotations

from datetime import datetime
import enum

from sqlalchemy import DateTime, Enum, ForeignKey, Integer, String
from sqlalchemy.dialects.postgresql import ARRAY
from typing import TYPE_CHECKING

from sqlalchemy.orm import Mapped, mapped_column, relationship

if TYPE_CHECKING:
    from .agent import SalesAgent
    from .comment import Comment

from .base import OBJECT_ID_LENGTH, Base, enum_values, generate_id, utcnow


class LeadStatus(str, enum.Enum):
    NEW = "New"
    CONTACTED = "Contacted"
    QUALIFIED = "Qualified"
    PROPOSAL_SENT = "Proposal Sent"
    CLOSED = "Closed"


class LeadSource(str, enum.Enum):
    WEBSITE = "Website"
    REFERRAL = "Referral"
    COLD_CALL = "Cold Call"
    ADVERTISEMENT = "Advertisement"
    EMAIL = "Email"
    OTHER = "Other"


class LeadPriority(str, enum.Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class Lead(Base):
    """Sales lead tracked through the pipeline."""

    __tablename__ = "leads"

    id: Mapped[str] = mapped_column(String(OBJECT_ID_LENGTH), primary_key=True, default=generate_id)
    name: Mapped[str] = mapped_column(String, nullable=False)
    source: Mapped[LeadSource] = mapped_column(
        Enum(LeadSource, name="lead_source", values_callable=enum_values), nullable=False
    )
    sales_agent_id: Mapped[str] = mapped_column(ForeignKey("sales_agents.id"), nullable=False, index=True)
    status: Mapped[LeadStatus] = mapped_column(
        Enum(LeadStatus, name="lead_status", values_callable=enum_values),
        default=LeadStatus.NEW,
        nullable=False,
        index=True,
    )
    tags: Mapped[list[str]] = mapped_column(ARRAY(String), default=list, nullable=False)
    time_to_close: Mapped[int] = mapped_column(Integer, nullable=False)
    priority: Mapped[LeadPriority] = mapped_column(
        Enum(LeadPriority, name="lead_priority", values_callable=enum_values),
        default=LeadPriority.MEDIUM,
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )
    closed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    sales_agent: Mapped["SalesAgent"] = relationship("SalesAgent", back_populates="leads")
    comments: Mapped[list["Comment"]] = relationship("Comment", back_populates="lead")
