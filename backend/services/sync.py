"""Upload every unarchived classic skin to the archive."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

import httpx
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from core import settings as default_settings
from core.config import Settings

from .catalog import list_unarchived_skin_md5s, load_skin_asset
from .concurrency import run_bounded
from .errors import NotFoundError
from .staging import TempFileStager, get_default_stager
from .upload_tool import SupportsArchiveUpload
from .uploader import archive_skin

logger = logging.getLogger(__name__)

# Skins the archive rejects as unreadable; they are never retried.
CORRUPT_SKIN_MD5S = frozenset(
    {
        "2e146de10eef96773ea222fefad52eeb",
        "c3d2836f7f1b91d87d60b93aadf6981a",
        "4288c254d9a22024c48601db5f9812e9",
        "042271e3aea64970a885a8ab1cfe4a3f",
        "0c91d27d8d9ee11ead8306f49dde0001",
        "11944ffeec82f2d01d03cbfbb7783638",
        "2043521751c6ba9b5c021f47afb28b64",
        "72a399cbe37287371413680faccf40e1",
        "6ba8c688c0cffad19ef3e410f9949233",
        "b02cd2ee5b1e5237171c3b23df6f5194",
        "b5554df8cf1048731d1292c609293166",
        "3ca48d8f5b8b0590fee9a45e4eeb3297",
        "096b26067ad5b0eabac47e40e2d9329e",
        "2071b45150b9f3d640f9465051d32be3",
        "6c1673efa65d1d53b4564d2ec7917d07",
        "7749d85b72e8932f718c935211619390",
        "7b32e418a29221d6a527c4e72de8be78",
        "92eb393f78032405047a664cd99afcf5",
        "bd0c3335fa70e7bb1cde8541c2a46139",
        "bf390919a562a18bd8c669b6ebebe07a",
        "c03255f333e2afcda76e1691e46c4dc7",
        "c2e29dfb715bc37fea6b61e770bc902c",
        "dae8579c14dc1b7738340a5f8dbffbc2",
        "e2b29e7b4611b462c660575dd42ff458",
        "ea7f8863f58e42ea9fd1202a791187f1",
        "ec3558f28f058cb1f147191ad19179eb",
        "f014dae16799191a52b35c2f2aec1a74",
        "23e09ddef5c380fe39ec94cf941433da",
        "9592c095fb330699f95f771cc09a4654",
        "d181107c52f97359aa39689f1611887c",
        "dc61584841396e93b802efe82e1f18a8",
        "de6708ea2adbfd756c1b4ee742a415a5",
        "dec7b913d7092dfed2abafee45762eb5",
        "a8f5a330362cde7ec97303564ce921be",
        "07e165e6776f6e7b6a57c8db18af458f",
        "a3d2b4e9894829fc7da23d054e2f4fcf",
        "38c3d55bafd914eb647e8422f559e7fc",
        "43505b99a3fa965a6823858539736370",
        "04d172dc3f08d7fc1c9a047db956ea5d",
        "515941f5dee8ab399bd0e58d0a116274",
        "6b00596f4519fcc9d8bff7a69194333a",
    }
)

CORRUPT_ARCHIVE_MARKER = "error checking archive"
ENCRYPTED_CONTENT_MARKER = "archive files are not allowed to contain encrypted content"
CASE_ALIAS_MARKER = "case alias may already exist"


class FailureKind(str, Enum):
    CORRUPT_ARCHIVE = "corrupt_archive"
    ENCRYPTED = "encrypted"
    CASE_ALIAS = "case_alias"
    UNEXPECTED = "unexpected"


def classify_failure(error: BaseException) -> FailureKind:
    """Map an upload failure onto a known category by its message text."""
    message = str(error)
    if CORRUPT_ARCHIVE_MARKER in message:
        return FailureKind.CORRUPT_ARCHIVE
    if ENCRYPTED_CONTENT_MARKER in message:
        return FailureKind.ENCRYPTED
    if CASE_ALIAS_MARKER in message:
        return FailureKind.CASE_ALIAS
    return FailureKind.UNEXPECTED


@dataclass(slots=True)
class SyncSummary:
    found: int = 0
    skipped_corrupt: int = 0
    uploaded: dict[str, str] = field(default_factory=dict)
    failures: dict[str, FailureKind] = field(default_factory=dict)


def _log_failure(md5: str, kind: FailureKind, error: Exception) -> None:
    if kind is FailureKind.CORRUPT_ARCHIVE:
        logger.warning("Corrupt archive: %s", md5, extra={"md5": md5})
    elif kind is FailureKind.ENCRYPTED:
        logger.warning("Corrupt archive (encrypted): %s", md5, extra={"md5": md5})
    elif kind is FailureKind.CASE_ALIAS:
        logger.warning("Invalid name (case alias): %s", md5, extra={"md5": md5})
    else:
        logger.error(
            "Unexpected failure archiving %s",
            md5,
            extra={"md5": md5},
            exc_info=error,
        )


async def sync_with_archive(
    session_maker: async_sessionmaker[AsyncSession],
    *,
    http_client: httpx.AsyncClient,
    upload_tool: SupportsArchiveUpload,
    stager: TempFileStager | None = None,
    settings: Settings | None = None,
    concurrency: int | None = None,
    corrupt_md5s: frozenset[str] = CORRUPT_SKIN_MD5S,
) -> SyncSummary:
    """Upload each skin of the configured type that has no archive item.

    Every eligible skin is attempted once. Upload failures are logged and the
    batch continues; a hash with no skin record aborts the run.
    """
    settings = settings or default_settings
    stager = stager or get_default_stager()
    concurrency = concurrency or settings.sync_concurrency

    logger.info("Checking which new skins we have...")
    async with session_maker() as session:
        unarchived = await list_unarchived_skin_md5s(session, skin_type=settings.sync_skin_type)

    summary = SyncSummary(found=len(unarchived))
    logger.info("Found %d skins to upload", summary.found)

    eligible = [md5 for md5 in unarchived if md5 not in corrupt_md5s]
    summary.skipped_corrupt = summary.found - len(eligible)

    async def _archive_one(md5: str) -> None:
        async with session_maker() as session:
            skin = await load_skin_asset(session, md5, settings=settings)
        if skin is None:
            raise NotFoundError(f"Expected to get skin for {md5}")

        try:
            logger.info("Attempting to upload %s", md5)
            identifier = await archive_skin(
                session_maker,
                skin,
                http_client=http_client,
                upload_tool=upload_tool,
                stager=stager,
                settings=settings,
            )
        except Exception as exc:
            kind = classify_failure(exc)
            summary.failures[md5] = kind
            _log_failure(md5, kind, exc)
            return

        summary.uploaded[md5] = identifier
        logger.info("Uploaded %s as %s", md5, identifier, extra={"md5": md5, "identifier": identifier})

    await run_bounded(eligible, _archive_one, concurrency=concurrency)

    logger.info(
        "Archive sync complete: found=%d, skipped_corrupt=%d, uploaded=%d, failed=%d",
        summary.found,
        summary.skipped_corrupt,
        len(summary.uploaded),
        len(summary.failures),
    )
    return summary
