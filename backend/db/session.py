"""Async database engine and session factory."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    async_sessionmaker,
    create_async_engine,
)

from core import settings


def create_engine(database_url: str | None = None) -> AsyncEngine:
    """Create an async engine for the configured database."""
    url = database_url or settings.database_url
    connect_args: dict[str, object] = {}
    if url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_async_engine(url, connect_args=connect_args)


async_engine = create_engine()
AsyncSessionMaker = async_sessionmaker(async_engine, expire_on_commit=False)
