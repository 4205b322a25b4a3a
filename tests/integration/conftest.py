"""Integration test fixtures for database and HTTP client operations.

The hosted Postgres schema is replaced by an in-memory SQLite database built
from the SQLModel metadata. Outbound calls to Supabase Auth and PayPal go
through an httpx mock transport.
"""

from collections.abc import AsyncGenerator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

from src.buildor import models  # noqa: F401 - registers tables on the metadata
from src.buildor.api.dependencies import get_http_transport
from src.buildor.core import db
from src.buildor.core import redis as redis_core
from src.buildor.core.health import reset_health_cache
from src.buildor.core.shutdown import request_tracker
from src.buildor.main import create_app
from tests.helpers import UpstreamStub


@pytest.fixture(autouse=True)
async def _reset_redis_between_tests() -> AsyncGenerator[None]:
    """Reset Redis state between tests.

    Redis clients hold references to their event loop, and pytest creates a
    new loop for each test.
    """
    redis_core.reset_redis_state()
    yield
    await redis_core.close_redis()


@pytest.fixture(autouse=True)
def _reset_app_state() -> None:
    reset_health_cache()
    request_tracker.reset()
    yield
    reset_health_cache()
    request_tracker.reset()


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine]:
    """In-memory database shared by the app and the test session."""
    await db.dispose_engine()

    test_engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    db.set_engine(test_engine)
    yield test_engine
    db.set_engine(None)
    await test_engine.dispose()


@pytest.fixture
async def db_session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Provide an async session for seeding and inspecting data.

    Changes must be committed to be visible to the app.
    """
    async with AsyncSession(engine, expire_on_commit=False) as session:
        yield session


@pytest.fixture
def upstream() -> UpstreamStub:
    """Canned Supabase Auth and PayPal responses."""
    return UpstreamStub()


@pytest.fixture
def app(engine: AsyncEngine, upstream: UpstreamStub) -> FastAPI:
    application = create_app()
    application.dependency_overrides[get_http_transport] = lambda: upstream.transport
    return application


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client
