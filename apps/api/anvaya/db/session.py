"""Async engine and per-request sessions for the lead store."""
from __future__ import annotations

from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from ..core.config import Settings, settings


def build_engine(config: Settings) -> AsyncEngine:
    """Create the asyncpg engine described by ``config``.

    Plain ``postgres://`` URLs are switched to the asyncpg driver and
    ``DATABASE_SSL_REQUIRED`` turns on TLS for every pooled connection.
    """

    connect_args: dict[str, object] = {"ssl": True} if config.database_ssl_required else {}
    return create_async_engine(
        config.database_async_url,
        pool_pre_ping=True,
        connect_args=connect_args,
    )


engine = build_engine(settings)
# Loaded rows stay readable after the request's transaction commits.
SessionLocal = async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Yield one session per request; writes open their own ``session.begin()``."""

    async with SessionLocal() as session:
        yield session
