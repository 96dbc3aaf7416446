"""Tests for the temp file stager."""

from pathlib import Path

import httpx
import pytest

from services import DownloadError, TempFileStager
from services import staging


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_download_writes_file_into_fresh_directory(tmp_path: Path) -> None:
    stager = TempFileStager(base_dir=tmp_path)

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"skin-bytes")

    async with _client(handler) as client:
        first = await stager.download(client, "https://cdn.test/skins/a.wsz", "Cool.wsz")
        second = await stager.download(client, "https://cdn.test/skins/a.wsz", "Cool.wsz")

    assert first.is_absolute()
    assert first.name == "Cool.wsz"
    assert first.read_bytes() == b"skin-bytes"
    assert first.parent != second.parent
    assert set(stager.directories) == {first.parent, second.parent}
    assert all(directory.parent == tmp_path for directory in stager.directories)


@pytest.mark.asyncio
async def test_download_raises_on_unsuccessful_response(tmp_path: Path) -> None:
    stager = TempFileStager(base_dir=tmp_path)

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404)

    async with _client(handler) as client:
        with pytest.raises(DownloadError) as exc_info:
            await stager.download(client, "https://cdn.test/missing.png", "missing.png")

    assert exc_info.value.status_code == 404
    assert exc_info.value.url == "https://cdn.test/missing.png"
    assert "missing.png" in str(exc_info.value)
    assert stager.directories == ()


@pytest.mark.asyncio
async def test_download_keeps_only_the_basename(tmp_path: Path) -> None:
    stager = TempFileStager(base_dir=tmp_path)

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"x")

    async with _client(handler) as client:
        path = await stager.download(client, "https://cdn.test/x", "../../escape.wsz")

    assert path.name == "escape.wsz"
    assert path.parent in stager.directories


@pytest.mark.asyncio
async def test_cleanup_removes_tracked_directories(tmp_path: Path) -> None:
    stager = TempFileStager(base_dir=tmp_path)

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"x")

    async with _client(handler) as client:
        path = await stager.download(client, "https://cdn.test/x", "x.wsz")

    stager.cleanup()

    assert not path.exists()
    assert not path.parent.exists()
    assert stager.directories == ()


def test_default_stager_is_shared_and_registered_at_exit(monkeypatch) -> None:
    registered = []
    monkeypatch.setattr(staging.atexit, "register", registered.append)
    staging.get_default_stager.cache_clear()
    try:
        stager = staging.get_default_stager()
        assert staging.get_default_stager() is stager
        assert registered == [stager.cleanup]
    finally:
        staging.get_default_stager.cache_clear()
