"""Backfill archive items for skins that are already in the archive."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from core import settings as default_settings
from core.config import Settings

from .archive_client import ArchiveClient
from .catalog import (
    archive_item_exists,
    insert_archive_item,
    skin_exists,
    skin_has_archive_item,
)
from .concurrency import run_bounded
from .errors import ArchiveResponseError

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ReconcileSummary:
    total: int = 0
    inserted: int = 0
    already_known: int = 0
    skipped: int = 0


async def list_collection_identifiers(
    archive_client: ArchiveClient,
    *,
    expected_skin_type: str,
) -> list[str]:
    """Return every identifier in the collection, rejecting foreign skin types."""
    result = await archive_client.search_collection()
    if len(result.docs) != result.num_found:
        logger.error(
            "Expected to find %d items but saw %d",
            result.num_found,
            len(result.docs),
        )
    for doc in result.docs:
        if doc.skintype != expected_skin_type:
            raise ArchiveResponseError(
                f"{doc.identifier} has skintype of {doc.skintype}"
            )
    return [doc.identifier for doc in result.docs]


async def ensure_archive_item(
    session: AsyncSession,
    identifier: str,
    *,
    archive_client: ArchiveClient,
    skin_extension: str,
) -> str:
    """Record ``identifier`` locally when its skin is in the catalog.

    Returns ``"known"``, ``"inserted"`` or ``"skipped"``.
    """
    if await archive_item_exists(session, identifier):
        return "known"

    files = await archive_client.get_files(identifier)
    skin_files = [entry for entry in files if entry.name.endswith(skin_extension)]
    if len(skin_files) != 1:
        logger.error(
            'Expected to find one skin file for "%s", found %d',
            identifier,
            len(skin_files),
        )
        return "skipped"

    md5 = skin_files[0].md5
    if md5 is None or not await skin_exists(session, md5):
        logger.error('We don\'t have a record for the skin found in "%s"', identifier)
        return "skipped"

    if await skin_has_archive_item(session, md5):
        logger.warning(
            'Skin %s from "%s" is already recorded under another identifier',
            md5,
            identifier,
            extra={"md5": md5, "identifier": identifier},
        )
        return "skipped"

    await insert_archive_item(session, skin_md5=md5, identifier=identifier)
    logger.info('Inserted "%s".', identifier)
    return "inserted"


async def collect_existing_items(
    session_maker: async_sessionmaker[AsyncSession],
    *,
    archive_client: ArchiveClient,
    settings: Settings | None = None,
    concurrency: int | None = None,
) -> ReconcileSummary:
    """Make sure every item in the archive collection has a local record."""
    settings = settings or default_settings
    concurrency = concurrency or settings.sync_concurrency
    skin_extension = f".{settings.archive_skin_type}"

    identifiers = await list_collection_identifiers(
        archive_client,
        expected_skin_type=settings.archive_skin_type,
    )
    summary = ReconcileSummary(total=len(identifiers))

    async def _ensure(identifier: str) -> None:
        async with session_maker() as session:
            outcome = await ensure_archive_item(
                session,
                identifier,
                archive_client=archive_client,
                skin_extension=skin_extension,
            )
        if outcome == "inserted":
            summary.inserted += 1
        elif outcome == "known":
            summary.already_known += 1
        else:
            summary.skipped += 1

    await run_bounded(identifiers, _ensure, concurrency=concurrency)
    logger.info(
        "Archive reconcile complete: total=%d, inserted=%d, already_known=%d, skipped=%d",
        summary.total,
        summary.inserted,
        summary.already_known,
        summary.skipped,
    )
    return summary
