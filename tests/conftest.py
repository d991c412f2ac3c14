"""
Pytest configuration and fixtures for testing.

This module provides shared fixtures for the catalog database, store,
service and HTTP client.
"""

import os
import tempfile

import pytest
import pytest_asyncio

# Point the application at an in-memory database before importing app modules
os.environ.setdefault("DB_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault(
    "LOG_FILE_PATH",
    os.path.join(tempfile.gettempdir(), "library_catalog", "errors.log"),
)

from datetime import date  # noqa: E402
from decimal import Decimal  # noqa: E402

from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import create_async_engine  # noqa: E402
from sqlmodel.ext.asyncio.session import AsyncSession  # noqa: E402
from sqlmodel.pool import StaticPool  # noqa: E402

from library_catalog import application  # noqa: E402
from library_catalog.models.author import Author  # noqa: E402
from library_catalog.models.book import Book  # noqa: E402
from library_catalog.services.catalog import CatalogService  # noqa: E402
from library_catalog.storage.catalog_store import CatalogStore  # noqa: E402
from library_catalog.storage.db import (  # noqa: E402
    enable_sqlite_foreign_keys,
    get_session,
    init_db,
)


@pytest_asyncio.fixture
async def engine():
    """Create in-memory SQLite engine with the catalog tables."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    await init_db(bind=engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session(engine):
    """Create database session for testing."""
    async with AsyncSession(engine, expire_on_commit=False) as session:
        yield session


@pytest.fixture
def store(session):
    """Catalog store bound to the test session."""
    return CatalogStore(session)


@pytest.fixture
def service(store):
    """Catalog service over the test store."""
    return CatalogService(store)


@pytest.fixture
def tolkien_payload():
    """Wire payload for a store-assigned author."""
    return {"name": "J. R. R. Tolkien", "birthDate": "1892-01-03"}


@pytest_asyncio.fixture
async def tolkien(session):
    """Persisted author."""
    author = Author(name="J. R. R. Tolkien", birth_date=date(1892, 1, 3))
    session.add(author)
    await session.commit()
    return author


@pytest_asyncio.fixture
async def hobbit(session, tolkien):
    """Persisted book owned by ``tolkien``."""
    book = Book(
        title="The Hobbit",
        published_year=1937,
        author_id=tolkien.id,
        price=Decimal("12.99"),
    )
    session.add(book)
    await session.commit()
    return book


@pytest_asyncio.fixture
async def client(session):
    """
    HTTP client for the full application wired to the test session.

    The lifespan does not run, so no connection to the configured database
    is attempted.
    """
    app = application()

    async def override_get_session():
        yield session

    app.dependency_overrides[get_session] = override_get_session

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
