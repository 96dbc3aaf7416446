"""Upload new classic skins to the archive and record their identifiers.

Usage:
    uv run python scripts/sync_with_archive.py

Environment overrides:
    ARCHIVE_SYNC_CONCURRENCY=5   (wins over SYNC_CONCURRENCY for this run)
    ARCHIVE_COLLECT_EXISTING=false
"""

from __future__ import annotations

import asyncio
import logging
import os
import sys
from pathlib import Path

import httpx

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.append(str(ROOT_DIR))

from core import configure_logging, settings  # noqa: E402
from db.session import AsyncSessionMaker, async_engine  # noqa: E402
from services import (  # noqa: E402
    ArchiveClient,
    ArchiveSyncError,
    IaUploadTool,
    collect_existing_items,
    get_default_stager,
    sync_with_archive,
)

CONCURRENCY_ENV = "ARCHIVE_SYNC_CONCURRENCY"
COLLECT_EXISTING_ENV = "ARCHIVE_COLLECT_EXISTING"
TRUTHY_VALUES = frozenset({"1", "true", "yes", "on"})
FALSY_VALUES = frozenset({"0", "false", "no", "off"})
logger = logging.getLogger("scripts.sync_with_archive")


def _parse_positive_int(raw_value: str | None, *, default: int, label: str) -> int:
    if raw_value is None or raw_value.strip() == "":
        return default
    try:
        parsed = int(raw_value)
    except ValueError as exc:
        raise ValueError(f"{label} must be an integer") from exc
    if parsed <= 0:
        raise ValueError(f"{label} must be positive")
    return parsed


def _parse_bool(raw_value: str | None, *, default: bool, label: str) -> bool:
    if raw_value is None or raw_value.strip() == "":
        return default
    normalized = raw_value.strip().lower()
    if normalized in TRUTHY_VALUES:
        return True
    if normalized in FALSY_VALUES:
        return False
    raise ValueError(f"{label} must be a boolean")


def _build_http_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(
        follow_redirects=True,
        timeout=httpx.Timeout(settings.archive_http_timeout_seconds),
    )


async def run() -> None:
    concurrency = _parse_positive_int(
        os.getenv(CONCURRENCY_ENV),
        default=settings.sync_concurrency,
        label=CONCURRENCY_ENV,
    )
    collect_existing = _parse_bool(
        os.getenv(COLLECT_EXISTING_ENV),
        default=settings.archive_collect_existing,
        label=COLLECT_EXISTING_ENV,
    )

    try:
        async with _build_http_client() as http_client:
            if collect_existing:
                logger.info("Going to ensure we know about all archive items")
                await collect_existing_items(
                    AsyncSessionMaker,
                    archive_client=ArchiveClient(http_client),
                    concurrency=concurrency,
                )

            await sync_with_archive(
                AsyncSessionMaker,
                http_client=http_client,
                upload_tool=IaUploadTool(settings.archive_upload_command),
                stager=get_default_stager(),
                concurrency=concurrency,
            )
    finally:
        await async_engine.dispose()


def main() -> None:
    configure_logging(settings.log_level)
    try:
        asyncio.run(run())
    except ArchiveSyncError as exc:
        logger.error("Archive sync aborted: %s", exc)
        raise SystemExit(1) from exc


if __name__ == "__main__":
    main()
