"""Archive sync services."""

from .archive_client import ArchiveClient
from .errors import (
    ArchiveResponseError,
    ArchiveSyncError,
    DownloadError,
    MissingFilenameError,
    NotFoundError,
    UnsupportedFormatError,
    UploadToolError,
)
from .identifiers import get_new_identifier, sanitize
from .reconcile import ReconcileSummary, collect_existing_items
from .staging import TempFileStager, get_default_stager
from .sync import (
    CORRUPT_SKIN_MD5S,
    FailureKind,
    SyncSummary,
    classify_failure,
    sync_with_archive,
)
from .upload_tool import IaUploadTool, SupportsArchiveUpload
from .uploader import archive_skin, screenshot_filename

__all__ = [
    "ArchiveClient",
    "ArchiveSyncError",
    "ArchiveResponseError",
    "DownloadError",
    "MissingFilenameError",
    "NotFoundError",
    "UnsupportedFormatError",
    "UploadToolError",
    "sanitize",
    "get_new_identifier",
    "TempFileStager",
    "get_default_stager",
    "IaUploadTool",
    "SupportsArchiveUpload",
    "archive_skin",
    "screenshot_filename",
    "CORRUPT_SKIN_MD5S",
    "FailureKind",
    "SyncSummary",
    "classify_failure",
    "sync_with_archive",
    "ReconcileSummary",
    "collect_existing_items",
]
