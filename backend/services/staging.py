"""Download remote files into tracked scratch directories."""

from __future__ import annotations

import atexit
import logging
import shutil
import tempfile
from functools import lru_cache
from pathlib import Path, PureWindowsPath

import httpx

from .errors import DownloadError

SCRATCH_DIR_PREFIX = "skin-archive-"
logger = logging.getLogger(__name__)


class TempFileStager:
    """Writes downloads to fresh temp directories and removes them on cleanup."""

    def __init__(self, *, base_dir: str | Path | None = None) -> None:
        self._base_dir = str(base_dir) if base_dir is not None else None
        self._directories: list[Path] = []

    @property
    def directories(self) -> tuple[Path, ...]:
        return tuple(self._directories)

    def _make_directory(self) -> Path:
        directory = Path(tempfile.mkdtemp(prefix=SCRATCH_DIR_PREFIX, dir=self._base_dir))
        self._directories.append(directory)
        return directory

    async def download(self, client: httpx.AsyncClient, url: str, filename: str) -> Path:
        """Fetch ``url`` and store it as ``filename`` in a new scratch directory."""
        response = await client.get(url)
        if not response.is_success:
            raise DownloadError(
                f"Failed to download {filename} from {url} (status {response.status_code})",
                url=url,
                status_code=response.status_code,
            )

        safe_name = PureWindowsPath(filename).name or "download"
        target = self._make_directory() / safe_name
        target.write_bytes(response.content)
        return target.resolve()

    def cleanup(self) -> None:
        """Remove every directory created by this stager."""
        while self._directories:
            directory = self._directories.pop()
            shutil.rmtree(directory, ignore_errors=True)
        logger.debug("Removed staged downloads")


@lru_cache
def get_default_stager() -> TempFileStager:
    """Return the process-wide stager, cleaned up at interpreter exit."""
    stager = TempFileStager()
    atexit.register(stager.cleanup)
    return stager
