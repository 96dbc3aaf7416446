"""Catalog queries over skins, their files and archive items."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PureWindowsPath
from typing import Any, cast

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import ColumnElement

from core import settings as default_settings
from core.config import Settings
from models import ArchiveItem, Skin, SkinFile


def _eq(column: Any, value: Any) -> ColumnElement[bool]:
    return cast(ColumnElement[bool], column == value)


@dataclass(frozen=True, slots=True)
class SkinAsset:
    """Everything needed to upload one skin."""

    md5: str
    filename: str | None
    skin_url: str
    screenshot_url: str


def _basename(file_path: str) -> str:
    # Catalog paths were recorded on both POSIX and Windows hosts.
    return PureWindowsPath(file_path).name


async def get_skin_filename(session: AsyncSession, md5: str) -> str | None:
    """Return the basename of the first file recorded for the skin."""
    result = await session.execute(
        select(cast(ColumnElement[str], SkinFile.file_path))
        .where(_eq(SkinFile.skin_md5, md5))
        .order_by(cast(Any, SkinFile.id))
        .limit(1)
    )
    file_path = result.scalar_one_or_none()
    if file_path is None:
        return None
    return _basename(file_path) or None


async def load_skin_asset(
    session: AsyncSession,
    md5: str,
    *,
    settings: Settings | None = None,
) -> SkinAsset | None:
    """Resolve a skin by hash, or None when the catalog has no such skin."""
    settings = settings or default_settings
    skin = await session.get(Skin, md5)
    if skin is None:
        return None
    return SkinAsset(
        md5=skin.md5,
        filename=await get_skin_filename(session, md5),
        skin_url=settings.skin_url_template.format(md5=skin.md5),
        screenshot_url=settings.screenshot_url_template.format(md5=skin.md5),
    )


async def skin_exists(session: AsyncSession, md5: str) -> bool:
    return await session.get(Skin, md5) is not None


async def list_unarchived_skin_md5s(session: AsyncSession, *, skin_type: int) -> list[str]:
    """Return hashes of skins of the given type with no archive item."""
    md5_column = cast(ColumnElement[str], Skin.md5)
    result = await session.execute(
        select(md5_column)
        .select_from(Skin)
        .outerjoin(ArchiveItem, _eq(ArchiveItem.skin_md5, Skin.md5))
        .where(
            cast(ColumnElement[Any], ArchiveItem.id).is_(None),
            _eq(Skin.skin_type, skin_type),
        )
        .order_by(md5_column)
    )
    return [row[0] for row in result.all()]


async def identifier_in_use(session: AsyncSession, identifier: str) -> bool:
    """Case-insensitive check for an archive identifier."""
    identifier_column = cast(ColumnElement[str], ArchiveItem.identifier)
    result = await session.execute(
        select(func.count())
        .select_from(ArchiveItem)
        .where(_eq(func.lower(identifier_column), func.lower(identifier)))
    )
    return int(result.scalar_one()) > 0


async def archive_item_exists(session: AsyncSession, identifier: str) -> bool:
    """Exact-match check for an archive identifier."""
    result = await session.execute(
        select(cast(ColumnElement[int], ArchiveItem.id))
        .where(_eq(ArchiveItem.identifier, identifier))
        .limit(1)
    )
    return result.scalar_one_or_none() is not None


async def skin_has_archive_item(session: AsyncSession, md5: str) -> bool:
    """Whether any archive item is already recorded for the skin."""
    result = await session.execute(
        select(cast(ColumnElement[int], ArchiveItem.id))
        .where(_eq(ArchiveItem.skin_md5, md5))
        .limit(1)
    )
    return result.scalar_one_or_none() is not None


async def insert_archive_item(
    session: AsyncSession,
    *,
    skin_md5: str,
    identifier: str,
) -> ArchiveItem:
    item = ArchiveItem(skin_md5=skin_md5, identifier=identifier)
    session.add(item)
    await session.commit()
    return item
