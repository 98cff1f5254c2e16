"""Expose ORM models."""
from .agent import SalesAgent
from .comment import Comment
from .lead import Lead, LeadPriority, LeadSource, LeadStatus
from .tag import Tag

__all__ = [
    "Comment",
    "Lead",
    "LeadPriority",
    "LeadSource",
    "LeadStatus",
    "SalesAgent",
    "Tag",
]
