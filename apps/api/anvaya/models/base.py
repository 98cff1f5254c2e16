"""Declarative base and metadata utilities."""
from __future__ import annotations

import secrets
import time
from datetime import datetime, timezone

from sqlalchemy.orm import DeclarativeBase

OBJECT_ID_LENGTH = 24


def generate_id() -> str:
    """Return a 24-character hex identifier prefixed with the creation second."""

    return f"{int(time.time()):08x}{secrets.token_hex(8)}"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def enum_values(enum_cls: type) -> list[str]:
    """Persist enum values rather than member names."""

    return [member.value for member in enum_cls]


class Base(DeclarativeBase):
    """Declarative base shared by every Anvaya table."""
