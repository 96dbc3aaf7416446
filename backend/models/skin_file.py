"""Original file locations recorded for each skin."""

from __future__ import annotations

from sqlalchemy import Column, ForeignKey, Index, Integer, String, Text
from sqlmodel import Field, SQLModel


class SkinFile(SQLModel, table=True):
    """A path the skin was found under; the first one names the skin."""

    __tablename__ = "files"
    __table_args__ = (Index("ix_files_skin_md5_id", "skin_md5", "id"),)

    id: int | None = Field(
        default=None, sa_column=Column(Integer, primary_key=True, autoincrement=True)
    )
    skin_md5: str = Field(
        sa_column=Column(
            String(32),
            ForeignKey("skins.md5", ondelete="CASCADE"),
            nullable=False,
        )
    )
    file_path: str = Field(sa_column=Column(Text, nullable=False))
