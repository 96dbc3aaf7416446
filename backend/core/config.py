"""Application configuration loaded from the environment."""

from __future__ import annotations

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime settings for the archive sync job."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: str = "INFO"

    database_url: str = "sqlite+aiosqlite:///./skins.db"

    archive_base_url: str = "https://archive.org"
    archive_collection: str = "winampskins"
    archive_skin_type: str = "wsz"
    archive_media_type: str = "software"
    archive_identifier_namespace: str = "winampskins"
    archive_search_rows: int = 100_000
    archive_upload_command: str = "ia"
    archive_http_timeout_seconds: float | None = None
    archive_collect_existing: bool = False

    skin_url_template: str = "https://r2.webampskins.org/skins/{md5}.wsz"
    screenshot_url_template: str = "https://r2.webampskins.org/screenshots/{md5}.png"

    sync_skin_type: int = 1
    sync_concurrency: int = 5

    @field_validator("archive_base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("sync_concurrency", "archive_search_rows")
    @classmethod
    def _require_positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("must be positive")
        return value


settings = Settings()
