"""
Pytest configuration and fixtures for Site CMS tests
"""

import os
import sys
from collections.abc import AsyncGenerator
from datetime import timedelta

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))  # noqa: PTH100, PTH118, PTH119, PTH120

# Import Base first, before importing the app
from sitecms.auth import create_access_token
from sitecms.config import settings
from sitecms.database import Base, get_db
from sitecms.plugins.loader import build_plugin_registry
from sitecms.repositories.unit_of_work import UnitOfWork

from main import app  # noqa: E402

# Every test gets its own in-memory database; StaticPool keeps the single
# connection (and therefore the data) alive for the lifetime of the engine.
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture(scope="function")
async def test_engine():
    """Fresh schema per test function."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture(scope="function")
def test_session_maker(test_engine):
    return async_sessionmaker(test_engine, class_=AsyncSession, autoflush=False, expire_on_commit=False)


@pytest.fixture(scope="function")
async def test_db(test_session_maker) -> AsyncGenerator[AsyncSession, None]:
    """Provide a database session for tests that need it."""
    async with test_session_maker() as session:
        yield session


@pytest.fixture
def uow(test_db: AsyncSession) -> UnitOfWork:
    """Unit of work sharing the test session, so seeded rows are visible without reloading."""
    return UnitOfWork(test_db)


@pytest.fixture
def registry():
    """Registry of the built-in content plugins"""
    return build_plugin_registry()


@pytest.fixture
async def client(test_session_maker) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client for the app, with get_db pointed at the test database"""

    async def override_get_db():
        async with test_session_maker() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers() -> dict:
    """Bearer token for a regular (non-admin) user"""
    access_token = create_access_token(
        data={"sub": "testuser@example.com", "role": "user"}, expires_delta=timedelta(minutes=30)
    )
    return {"Authorization": f"Bearer {access_token}"}


@pytest.fixture
def admin_auth_headers() -> dict:
    """Bearer token carrying the configured admin role"""
    access_token = create_access_token(
        data={"sub": "admin@example.com", "role": settings.admin_role}, expires_delta=timedelta(minutes=30)
    )
    return {"Authorization": f"Bearer {access_token}"}
