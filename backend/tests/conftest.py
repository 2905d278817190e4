"""Pytest configuration and fixtures."""

import os
from typing import AsyncGenerator

# Set test env vars before any app import
os.environ.setdefault("AUTH_SECRET", "testsecretkey_for_unit_tests_only_1234567890")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("LOG_FORMAT", "text")

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from factories import make_goal, make_user
from orelse.core.database import get_db
from orelse.main import app
from orelse.models import Base
from orelse.models.goal import Goal
from orelse.models.user import User

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a fresh in-memory database and session for each test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
    async with session_factory() as session:
        yield session

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create test client with database override."""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def author(db_session: AsyncSession) -> User:
    """The user who owns goals in the tests."""
    return await make_user(db_session, "author@test.com", "Goal Author")


@pytest_asyncio.fixture
async def friend(db_session: AsyncSession) -> User:
    """Another user who suggests and votes."""
    return await make_user(db_session, "friend@test.com", "Helpful Friend")


@pytest_asyncio.fixture
async def stranger(db_session: AsyncSession) -> User:
    return await make_user(db_session, "stranger@test.com", "Stranger")


@pytest_asyncio.fixture
async def active_goal(db_session: AsyncSession, author: User) -> Goal:
    return await make_goal(db_session, author)
