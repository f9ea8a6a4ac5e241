"""
Cheese Catalog Backend — Test Configuration (conftest.py)
===========================================================

What:  Shared pytest fixtures for the test suite.
How:   Repository and end-to-end tests run against a throwaway SQLite file
       per test (aiosqlite); handler tests can swap in AsyncMock stores.

Fixture Hierarchy:
    Function-scoped:
    ├── db_engine:           async engine on a fresh SQLite file, tables created
    ├── repository:          CheeseRepository over db_engine
    ├── cheese_service:      CheeseService over repository
    ├── mock_store:          AsyncMock implementing CheeseStore
    ├── test_client:         httpx AsyncClient → app wired to cheese_service
    ├── mock_client:         httpx AsyncClient → app wired to mock_store
    ├── sample_image_bytes:  tiny JPEG payload
    └── cheese_multipart:    builder for multipart `files=` payloads
"""

import json
import os
import tempfile

# Settings are read at import time: point them at test values first
os.environ["DATABASE_URL"] = (
    "sqlite+aiosqlite:///" + os.path.join(tempfile.mkdtemp(prefix="cheese_test_"), "app.db")
)
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["DB_CREATE_TABLES"] = "false"

from typing import Any, Dict, Optional
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from cheese_api.database import build_engine, build_session_factory, create_tables
from cheese_api.main import create_app
from cheese_api.repositories.cheese_repository import CheeseRepository
from cheese_api.services.cheese_service import CheeseService


# ══════════════════════════════════════════════════════════════════════════
# Database
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db_engine(tmp_path):
    """An async engine on an empty SQLite database with the schema created."""
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'cheese.db'}")
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def repository(db_engine):
    return CheeseRepository(build_session_factory(db_engine))


@pytest.fixture
def cheese_service(repository):
    return CheeseService(repository)


@pytest.fixture
def mock_store():
    """
    An AsyncMock standing in for CheeseStore.

    Defaults describe an empty store; tests override return values as needed
    and assert on calls to prove the store was (or was not) touched.
    """
    store = AsyncMock()
    store.save = AsyncMock()
    store.find_by_id = AsyncMock(return_value=None)
    store.find_all = AsyncMock(return_value=[])
    store.exists_by_id = AsyncMock(return_value=False)
    store.delete_by_id = AsyncMock(return_value=None)
    return store


# ══════════════════════════════════════════════════════════════════════════
# HTTP clients
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def test_client(cheese_service):
    """HTTPX client against an app backed by the SQLite repository."""
    app = create_app(cheese_service)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def mock_client(mock_store):
    """HTTPX client against an app whose service uses mock_store."""
    app = create_app(CheeseService(mock_store))
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


# ══════════════════════════════════════════════════════════════════════════
# Payloads
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def sample_image_bytes():
    """Minimal JPEG: SOI + JFIF header + EOI. Not a real picture."""
    return (
        b'\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00'
        b'\xff\xd9'
    )


@pytest.fixture
def cheese_multipart(sample_image_bytes):
    """
    Build the `files=` argument for a cheese POST/PUT.

    The cheese part is sent the way browsers send it: a JSON Blob part.
    Pass image=None to omit the imageFile part, cheese=None to omit the
    cheese part.
    """

    def build(
        cheese: Optional[Dict[str, Any]] = None,
        image: Optional[bytes] = b"__sample__",
        filename: str = "cheddar.jpg",
        content_type: str = "image/jpeg",
    ) -> Dict[str, Any]:
        files: Dict[str, Any] = {}
        if cheese is not None:
            files["cheese"] = ("blob", json.dumps(cheese).encode(), "application/json")
        if image is not None:
            data = sample_image_bytes if image == b"__sample__" else image
            files["imageFile"] = (filename, data, content_type)
        return files

    return build
