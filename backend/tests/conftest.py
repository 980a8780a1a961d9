"""
Showcase Backend — Test Configuration (conftest.py)
====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mock_db_session:  Mock AsyncSession for service unit tests
    ├── memory_storage:   InMemoryImageStorage (no disk access)
    ├── temp_storage:     Temporary upload directory
    ├── png_bytes / jpeg_bytes / gif_bytes: real images generated with Pillow
    ├── test_settings:    Settings pointing at SQLite and a temp upload root
    ├── app:              create_app(test_settings) with tables created
    └── test_client:      HTTPX AsyncClient bound to `app` via ASGITransport
"""

import io
import os
import tempfile
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from PIL import Image

# Override settings BEFORE any app imports: `showcase.main` builds a default
# app at import time and must not touch a real database or ./uploads
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["UPLOAD_ROOT"] = tempfile.mkdtemp(prefix="showcase_test_")
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["CREATE_TABLES_ON_STARTUP"] = "false"

from showcase.config import Settings  # noqa: E402
from showcase.services.file_service import InMemoryImageStorage  # noqa: E402


def make_image_bytes(fmt: str, size=(800, 600), mode="RGB", color=(200, 30, 30)) -> bytes:
    """Encode a solid-colour image with Pillow."""
    img = Image.new(mode, size, color)
    out = io.BytesIO()
    img.save(out, format=fmt)
    return out.getvalue()


# ══════════════════════════════════════════════════════════════════════════
# Unit-test fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_delete_missing(mock_db_session):
            mock_db_session.get.return_value = None
            with pytest.raises(NotFoundError):
                await store.delete(mock_db_session, some_id)
    """
    session = AsyncMock()
    session.execute = AsyncMock(return_value=MagicMock())
    session.get = AsyncMock()
    session.delete = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def make_image():
    """Factory fixture: make_image("PNG", size=(w, h), mode="RGBA", color=...)."""
    return make_image_bytes


@pytest.fixture
def memory_storage():
    return InMemoryImageStorage()


@pytest.fixture
def temp_storage(tmp_path):
    """A fresh upload directory for each test."""
    storage_dir = tmp_path / "uploads"
    storage_dir.mkdir()
    return storage_dir


@pytest.fixture
def png_bytes():
    return make_image_bytes("PNG")


@pytest.fixture
def jpeg_bytes():
    return make_image_bytes("JPEG", size=(1200, 400))


@pytest.fixture
def gif_bytes():
    return make_image_bytes("GIF", size=(300, 500), mode="P", color=3)


# ══════════════════════════════════════════════════════════════════════════
# API fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def test_settings(tmp_path):
    """Settings for one test: file-backed SQLite and a private upload root."""
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'showcase.db'}",
        upload_root=str(tmp_path / "uploads"),
        log_level="WARNING",
        max_upload_size=5 * 1024 * 1024,
    )


@pytest_asyncio.fixture
async def app(test_settings):
    """
    A fully wired application with its tables created.

    ASGITransport does not run the lifespan, so tables are created here.
    """
    from showcase.main import create_app

    application = create_app(test_settings)
    await application.state.database.create_tables()
    yield application
    await application.state.database.dispose()


@pytest_asyncio.fixture
async def test_client(app):
    """
    Provides an async HTTP test client for endpoint testing.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/api/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
