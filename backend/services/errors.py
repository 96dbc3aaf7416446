"""Errors raised while syncing skins with the archive."""

from __future__ import annotations


class ArchiveSyncError(Exception):
    """Base class for archive sync failures."""


class DownloadError(ArchiveSyncError):
    """A remote resource could not be fetched."""

    def __init__(self, message: str, *, url: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class UnsupportedFormatError(ArchiveSyncError):
    """The skin file is not an archive container the archive accepts."""


class MissingFilenameError(ArchiveSyncError):
    """No original filename is recorded for the skin."""


class NotFoundError(ArchiveSyncError):
    """A hash taken from the catalog has no skin record."""


class UploadToolError(ArchiveSyncError):
    """The external upload command exited unsuccessfully."""

    def __init__(self, message: str, *, returncode: int | None, output: str = "") -> None:
        super().__init__(message)
        self.returncode = returncode
        self.output = output


class ArchiveResponseError(ArchiveSyncError):
    """The archive returned data that contradicts the expected collection."""


__all__ = [
    "ArchiveSyncError",
    "DownloadError",
    "UnsupportedFormatError",
    "MissingFilenameError",
    "NotFoundError",
    "UploadToolError",
    "ArchiveResponseError",
]
