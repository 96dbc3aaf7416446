"""HTTP client for the archive's search and metadata endpoints."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx

from core import settings as default_settings
from core.config import Settings


@dataclass(frozen=True, slots=True)
class SearchDoc:
    identifier: str
    skintype: str | None


@dataclass(frozen=True, slots=True)
class SearchResult:
    num_found: int
    docs: list[SearchDoc]


@dataclass(frozen=True, slots=True)
class ArchiveFile:
    name: str
    md5: str | None


class ArchiveClient:
    """Reads collection listings and item metadata from the archive."""

    def __init__(self, http_client: httpx.AsyncClient, *, settings: Settings | None = None) -> None:
        self._http = http_client
        self._settings = settings or default_settings

    def search_params(self) -> list[tuple[str, str | int]]:
        settings = self._settings
        return [
            (
                "q",
                f"collection:{settings.archive_collection} skintype:{settings.archive_skin_type}",
            ),
            ("fl[]", "identifier"),
            ("fl[]", "skintype"),
            ("rows", settings.archive_search_rows),
            ("page", 1),
            ("output", "json"),
        ]

    async def search_collection(self) -> SearchResult:
        """Fetch every item of the configured collection as a single page."""
        response = await self._http.get(
            f"{self._settings.archive_base_url}/advancedsearch.php",
            params=self.search_params(),
        )
        response.raise_for_status()
        payload: dict[str, Any] = response.json()["response"]
        docs = [
            SearchDoc(identifier=doc["identifier"], skintype=doc.get("skintype"))
            for doc in payload.get("docs", [])
        ]
        return SearchResult(num_found=int(payload.get("numFound", 0)), docs=docs)

    async def get_files(self, identifier: str) -> list[ArchiveFile]:
        """Return the file listing from an item's metadata."""
        response = await self._http.get(
            f"{self._settings.archive_base_url}/metadata/{identifier}"
        )
        response.raise_for_status()
        files = response.json().get("files") or []
        return [ArchiveFile(name=entry["name"], md5=entry.get("md5")) for entry in files]
