"""Archive item model."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, func
from sqlmodel import Field, SQLModel


class ArchiveItem(SQLModel, table=True):
    """Links a skin to the identifier of its item in the public archive."""

    __tablename__ = "ia_items"

    id: int | None = Field(
        default=None, sa_column=Column(Integer, primary_key=True, autoincrement=True)
    )
    # One row per skin is checked by callers before insert, not constrained here.
    skin_md5: str = Field(
        sa_column=Column(
            String(32),
            ForeignKey("skins.md5", ondelete="CASCADE"),
            nullable=False,
            index=True,
        )
    )
    identifier: str = Field(
        sa_column=Column(String(255), nullable=False, index=True)
    )
    created_at: datetime = Field(
        sa_column=Column(
            DateTime(timezone=True), server_default=func.now(), nullable=False
        )
    )
