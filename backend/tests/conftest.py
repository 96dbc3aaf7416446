"""Pytest fixtures for the skin archive sync backend."""

from collections.abc import AsyncIterator, Callable, Iterator, Mapping, Sequence
from pathlib import Path

from alembic import command
from alembic.config import Config
import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel

from core.config import settings
from models import Skin, SkinFile
from services import TempFileStager, UploadToolError


def _run_alembic_migrations(database_url: str) -> None:
    """Apply Alembic migrations to the given database URL."""
    backend_dir = Path(__file__).resolve().parents[1]
    alembic_cfg = Config(str(backend_dir / "alembic.ini"))
    alembic_cfg.set_main_option("script_location", str(backend_dir / "alembic"))
    alembic_cfg.attributes["configure_logger"] = False

    original_database_url = settings.database_url
    try:
        settings.database_url = database_url
        command.upgrade(alembic_cfg, "head")
    finally:
        settings.database_url = original_database_url


@pytest.fixture(scope="session")
def test_database_url(tmp_path_factory) -> str:
    """Create and migrate a file-backed SQLite database for tests."""
    db_dir = tmp_path_factory.mktemp("sqlite")
    db_path = db_dir / "backend-test.db"
    database_url = f"sqlite+aiosqlite:///{db_path}"
    _run_alembic_migrations(database_url)
    return database_url


@pytest_asyncio.fixture()
async def test_engine(test_database_url: str) -> AsyncIterator:
    """Create an async engine bound to the migrated SQLite test database."""
    engine = create_async_engine(
        test_database_url,
        connect_args={"check_same_thread": False, "timeout": 30},
    )
    yield engine
    await engine.dispose()


@pytest.fixture()
def session_maker(test_engine) -> async_sessionmaker[AsyncSession]:
    """Return a session factory bound to the test engine."""
    return async_sessionmaker(test_engine, expire_on_commit=False)


@pytest_asyncio.fixture(autouse=True)
async def clean_database(session_maker) -> AsyncIterator[None]:
    """Clear tables before each test to guarantee isolation."""
    async with session_maker() as session:
        for table in reversed(SQLModel.metadata.sorted_tables):
            await session.execute(table.delete())
        await session.commit()
    yield


@pytest_asyncio.fixture()
async def db_session(session_maker) -> AsyncIterator[AsyncSession]:
    """Provide a raw database session to tests."""
    async with session_maker() as session:
        yield session


@pytest.fixture()
def add_skin(session_maker) -> Callable:
    """Insert a skin and optionally its original file path."""

    async def _add_skin(md5: str, *, skin_type: int = 1, file_path: str | None = None) -> None:
        async with session_maker() as session:
            session.add(Skin(md5=md5, skin_type=skin_type))
            await session.flush()
            if file_path is not None:
                session.add(SkinFile(skin_md5=md5, file_path=file_path))
            await session.commit()

    return _add_skin


@pytest.fixture()
def stager(tmp_path) -> Iterator[TempFileStager]:
    stager = TempFileStager(base_dir=tmp_path)
    yield stager
    stager.cleanup()


def cdn_handler(request: httpx.Request) -> httpx.Response:
    """Serve any skin or screenshot URL with a small payload."""
    return httpx.Response(200, content=f"payload:{request.url.path}".encode("utf-8"))


@pytest_asyncio.fixture()
async def cdn_client() -> AsyncIterator[httpx.AsyncClient]:
    async with httpx.AsyncClient(transport=httpx.MockTransport(cdn_handler)) as client:
        yield client


class FakeUploadTool:
    """Records uploads and fails for identifiers mapped to an error message."""

    def __init__(self, failures: Mapping[str, str] | None = None) -> None:
        self.failures = dict(failures or {})
        self.calls: list[tuple[str, list[Path], dict[str, str]]] = []

    async def upload(
        self,
        identifier: str,
        files: Sequence[Path],
        metadata: Mapping[str, str],
    ) -> None:
        self.calls.append((identifier, list(files), dict(metadata)))
        for needle, message in self.failures.items():
            if needle in identifier:
                raise UploadToolError(message, returncode=1, output=message)


@pytest.fixture()
def upload_tool() -> FakeUploadTool:
    return FakeUploadTool()


@pytest.fixture()
def make_upload_tool() -> Callable[..., FakeUploadTool]:
    return FakeUploadTool
