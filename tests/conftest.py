"""Test fixtures for the URL shortener application."""

import os

# Settings and the shared engine are built at import time, so the test
# environment has to be in place before the application is imported.
os.environ["ENVIRONMENT"] = "testing"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["DB_CREATE_TABLES"] = "false"
os.environ["LOG_TO_FILE"] = "false"

import pytest
import pytest_asyncio
from typing import AsyncGenerator
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

from urlshortener.api.dependencies import get_base_url
from urlshortener.db.session import get_db
from urlshortener.main import app as main_app
from urlshortener.repositories.url_repository import URLRepository
# Import models to ensure they're registered with SQLModel metadata
from urlshortener.models.url import URLRecord  # noqa: F401


# Test database URL - using SQLite in-memory
TEST_SQLALCHEMY_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
TEST_BASE_URL = "https://shawt.ly/"


@pytest_asyncio.fixture
async def test_engine():
    """Create a fresh in-memory SQLite database for each test."""
    engine = create_async_engine(
        TEST_SQLALCHEMY_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False
    )

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(test_engine) -> async_sessionmaker:
    """Session factory bound to the test engine."""
    return async_sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest_asyncio.fixture
async def test_db(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Database session for a single test."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def url_repository(test_db) -> URLRepository:
    """URL repository bound to the test session."""
    return URLRepository(test_db)


@pytest_asyncio.fixture
async def client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client talking to the app, with one test-engine session per request."""
    async def _override_get_db():
        async with session_factory() as session:
            yield session

    main_app.dependency_overrides[get_db] = _override_get_db
    main_app.dependency_overrides[get_base_url] = lambda: TEST_BASE_URL

    transport = ASGITransport(app=main_app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as test_client:
        yield test_client

    main_app.dependency_overrides.clear()
