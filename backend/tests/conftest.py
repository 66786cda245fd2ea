"""
Space Facts API - Test Configuration (conftest.py)
===================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: AsyncMock standing in for AsyncSession (repository tests)
    ├── upload_dir: temporary upload directory
    ├── sample_png_bytes / sample_jpeg_bytes: tiny image payloads
    ├── database: Database handle on in-memory SQLite with tables created
    ├── photo_storage: PhotoStorage rooted at upload_dir
    ├── test_app: FastAPI app with database and photo_storage installed on app.state
    └── test_client: HTTPX AsyncClient talking to test_app
"""

import os
import tempfile
from unittest.mock import AsyncMock, MagicMock

# Override settings for testing BEFORE any spacefacts import
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="spacefacts_test_")
os.environ["CORS_ORIGIN"] = "http://localhost:8080"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from spacefacts.config import settings  # noqa: E402
from spacefacts.database import Database  # noqa: E402
from spacefacts.services.photo_storage import PhotoStorage  # noqa: E402


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_get(mock_db_session):
            mock_db_session.get.return_value = planet
            result = await PlanetRepository(mock_db_session).get_planet(1)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.get = AsyncMock(return_value=None)
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.delete = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def upload_dir(tmp_path):
    directory = tmp_path / "uploads"
    directory.mkdir()
    return directory


@pytest.fixture
def sample_png_bytes():
    """PNG signature followed by a few padding bytes; enough for storage tests."""
    return b"\x89PNG\r\n\x1a\n" + b"\x00" * 24


@pytest.fixture
def sample_jpeg_bytes():
    """Minimal JPEG: SOI + JFIF header + EOI."""
    return (
        b"\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00"
        b"\xff\xd9"
    )


@pytest_asyncio.fixture
async def database():
    """A fresh in-memory database per test, schema created, engine disposed after."""
    db = Database("sqlite+aiosqlite:///:memory:")
    await db.create_all()
    yield db
    await db.dispose()


@pytest.fixture
def photo_storage(upload_dir):
    return PhotoStorage(str(upload_dir), settings.max_photo_size)


@pytest.fixture
def test_app(database, photo_storage):
    """
    A new application instance with its resources installed by hand.

    ASGITransport does not run the lifespan, so the fixture does what the
    lifespan would: put the Database handle and PhotoStorage on app.state.
    """
    from spacefacts.main import create_app

    app = create_app()
    app.state.database = database
    app.state.photo_storage = photo_storage
    return app


@pytest_asyncio.fixture
async def test_client(test_app):
    """
    Usage:
        async def test_index(test_client):
            response = await test_client.get("/")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
