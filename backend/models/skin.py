"""Skin catalog model."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Column, DateTime, Integer, String, func
from sqlmodel import Field, SQLModel

CLASSIC_SKIN_TYPE = 1
MODERN_SKIN_TYPE = 2


class Skin(SQLModel, table=True):
    """A catalogued skin, keyed by the md5 of its archive bytes."""

    __tablename__ = "skins"

    md5: str = Field(sa_column=Column(String(32), primary_key=True))
    skin_type: int = Field(
        sa_column=Column(Integer, nullable=False, index=True)
    )
    created_at: datetime = Field(
        sa_column=Column(
            DateTime(timezone=True), server_default=func.now(), nullable=False
        )
    )
