"""Database helpers."""

from .session import AsyncSessionMaker, async_engine, create_engine

__all__ = ["AsyncSessionMaker", "async_engine", "create_engine"]
