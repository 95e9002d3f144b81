"""Test configuration and fixtures.

Test setup:
1. Environment is configured before the application is imported
2. Each test gets a fresh SQLite database file (aiosqlite driver)
3. Request handlers get their own session per request, like production
4. The `session` fixture is a separate session for arranging and asserting
"""

import os
from collections.abc import AsyncGenerator
from pathlib import Path

os.environ.setdefault("SECRET_KEY", "test-secret-key-that-is-long-enough-for-hs256")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"

import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402

from src.database.base import Base  # noqa: E402
from src.database.dependencies import get_db_session  # noqa: E402
from src.features.auth.password import hash_password  # noqa: E402
from src.features.user.models import User  # noqa: E402
from src.main import app  # noqa: E402

DEFAULT_PASSWORD = "TestPass123!"


# Database Setup - Function Scope (fresh database per test)


@pytest_asyncio.fixture
async def db_engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine]:
    """Create an engine on a throwaway SQLite file with the full schema.

    A file (not :memory:) so that concurrent sessions use real separate
    connections and see each other's commits.
    """
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", echo=False)

    async with engine.begin() as conn:
        # WAL lets a committed writer proceed while another connection waits on the lock
        await conn.exec_driver_sql("PRAGMA journal_mode=WAL")
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(db_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def session(session_factory: async_sessionmaker[AsyncSession]) -> AsyncGenerator[AsyncSession]:
    """Session for arranging data and asserting on it.

    Commit before making HTTP calls: SQLite holds the write lock until then.
    """
    async with session_factory() as async_session:
        yield async_session


# FastAPI Client & Dependency Overrides


@pytest_asyncio.fixture(autouse=True)
async def override_get_db_session(session_factory: async_sessionmaker[AsyncSession]):
    """Point the database session dependency at the test database."""

    async def _get_test_session():
        async with session_factory() as request_session:
            try:
                yield request_session
                await request_session.commit()
            except Exception:
                await request_session.rollback()
                raise

    app.dependency_overrides[get_db_session] = _get_test_session
    yield
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client() -> AsyncGenerator[AsyncClient]:
    """Create an async HTTP test client (lifespan is not run)."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


# Test User Factories


@pytest_asyncio.fixture
async def make_user(session: AsyncSession):
    """Factory fixture to create committed test users.

    Usage:
        user = await make_user()
        bob = await make_user(email="bob@example.com", password="Bb1!bbbb")
    """
    counter = 0

    async def _factory(
        email=None,
        password=DEFAULT_PASSWORD,
        first_name="Test",
        last_name="User",
        **kwargs,
    ) -> User:
        nonlocal counter
        counter += 1

        if email is None:
            email = f"testuser{counter}@example.com"

        user = User(
            email=email,
            first_name=first_name,
            last_name=last_name,
            password_hash=hash_password(password),
            **kwargs,
        )

        session.add(user)
        await session.commit()
        return user

    yield _factory
