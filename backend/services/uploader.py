"""Upload a single skin to the archive and record its identifier."""

from __future__ import annotations

import asyncio
import logging
import re

import httpx
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from core import settings as default_settings
from core.config import Settings

from .catalog import SkinAsset, insert_archive_item
from .errors import MissingFilenameError, UnsupportedFormatError
from .identifiers import get_new_identifier
from .staging import TempFileStager
from .upload_tool import SupportsArchiveUpload

ALLOWED_SKIN_EXTENSIONS = (".wsz", ".zip")
SKIN_EXTENSION_PATTERN = re.compile(r"\.(wsz|zip)$", re.IGNORECASE)
logger = logging.getLogger(__name__)


def screenshot_filename(filename: str) -> str:
    """``Foo.wsz`` -> ``Foo.png``."""
    return SKIN_EXTENSION_PATTERN.sub(".png", filename)


def archive_title(filename: str) -> str:
    return f"Winamp Skin: {filename}"


def build_metadata(filename: str, *, settings: Settings) -> dict[str, str]:
    return {
        "collection": settings.archive_collection,
        "skintype": settings.archive_skin_type,
        "mediatype": settings.archive_media_type,
        "title": archive_title(filename),
    }


def validate_skin_filename(skin: SkinAsset) -> str:
    """Return the skin's filename or raise when it cannot be archived."""
    if skin.filename is None:
        raise MissingFilenameError(f"Could not archive skin. Filename not found. {skin.md5}")
    if not skin.filename.lower().endswith(ALLOWED_SKIN_EXTENSIONS):
        raise UnsupportedFormatError(
            f"Unexpected file extension for {skin.md5}: {skin.filename}"
        )
    return skin.filename


async def archive_skin(
    session_maker: async_sessionmaker[AsyncSession],
    skin: SkinAsset,
    *,
    http_client: httpx.AsyncClient,
    upload_tool: SupportsArchiveUpload,
    stager: TempFileStager,
    settings: Settings | None = None,
) -> str:
    """Upload ``skin`` with its screenshot and return the minted identifier."""
    settings = settings or default_settings
    filename = validate_skin_filename(skin)

    skin_path, screenshot_path = await asyncio.gather(
        stager.download(http_client, skin.skin_url, filename),
        stager.download(http_client, skin.screenshot_url, screenshot_filename(filename)),
    )

    async with session_maker() as session:
        identifier = await get_new_identifier(
            session,
            filename,
            namespace=settings.archive_identifier_namespace,
        )

    await upload_tool.upload(
        identifier,
        [skin_path, screenshot_path],
        build_metadata(filename, settings=settings),
    )

    async with session_maker() as session:
        await insert_archive_item(session, skin_md5=skin.md5, identifier=identifier)

    logger.debug("Recorded archive item", extra={"md5": skin.md5, "identifier": identifier})
    return identifier
