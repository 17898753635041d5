"""Pytest fixtures for testing."""
import os
from collections.abc import AsyncGenerator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from api.main import create_app
from core.config import Settings
from db.session import get_async_session
from models.base import Base

TEST_API_TOKEN = "test-api-token"

# Point TEST_DATABASE_URL at a PostgreSQL database (postgresql+asyncpg://...) to run
# the suite against the production engine; by default an in-memory SQLite is used.
TEST_DATABASE_URL = os.environ.get("TEST_DATABASE_URL", "sqlite+aiosqlite://")


def make_settings(**overrides: object) -> Settings:
    """Build settings for tests, ignoring any local .env file."""
    values = {
        "database_url": TEST_DATABASE_URL,
        "API_TOKEN": TEST_API_TOKEN,
        "ENVIRONMENT": "test",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
async def async_engine() -> AsyncGenerator[AsyncEngine]:
    """Create an async engine with a fresh bookmarks table."""
    if TEST_DATABASE_URL.startswith("sqlite"):
        # A single shared connection keeps the in-memory database alive for the test
        engine = create_async_engine(
            TEST_DATABASE_URL,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    else:
        engine = create_async_engine(TEST_DATABASE_URL, echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def db_session(async_engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Create an async session shared by the test and the app under test."""
    session_factory = async_sessionmaker(
        async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    async with session_factory() as session:
        yield session


@pytest.fixture
def settings() -> Settings:
    """Settings used to build the app under test."""
    return make_settings()


@pytest.fixture
def app(settings: Settings, db_session: AsyncSession) -> FastAPI:
    """Create the app with the database session dependency overridden."""
    application = create_app(settings)

    async def override_get_async_session() -> AsyncGenerator[AsyncSession]:
        yield db_session

    application.dependency_overrides[get_async_session] = override_get_async_session
    return application


@pytest.fixture
async def anonymous_client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Client that sends no Authorization header."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as test_client:
        yield test_client


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Client authorized with the configured bearer token."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        headers={"Authorization": f"Bearer {TEST_API_TOKEN}"},
    ) as test_client:
        yield test_client
