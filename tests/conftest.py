"""Root test fixtures shared across all test types.

This conftest contains fixtures that can be used by both unit and integration tests.
Database-specific fixtures are in tests/integration/conftest.py.
"""

import os

# Configure the app for tests before any app imports
os.environ["APP_ENV"] = "testing"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["DATABASE_SSL_MODE"] = "disable"
os.environ["SUPABASE_JWT_SECRET"] = "test-supabase-jwt-secret-0123456789abcdef"
os.environ["SUPABASE_URL"] = "https://project.supabase.co"
os.environ["SUPABASE_ANON_KEY"] = "test-anon-key"
os.environ["ADMIN_EMAILS"] = '["admin@example.com"]'
os.environ["APP_URL"] = "http://localhost:3027"
os.environ.pop("RESEND_API_KEY", None)
os.environ.pop("REDIS_URL", None)
os.environ.pop("METRICS_API_KEY", None)

# ruff: noqa: E402 - Imports must be after env var setup
from collections.abc import AsyncGenerator

import pytest
from fakeredis import aioredis as fakeredis_aio
from redis.asyncio import Redis

from src.buildor.core import rate_limit
from src.buildor.core import redis as redis_core
from src.buildor.core.config import Settings, get_settings

# Clear settings cache to ensure test environment variables are picked up
get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    """The cached settings object; monkeypatch its attributes to vary config."""
    return get_settings()


# --- Rate Limit Fixtures ---


@pytest.fixture
def reset_rate_limit_buckets() -> None:
    """Reset rate limit in-memory state."""
    rate_limit._rate_limit_buckets.clear()
    yield
    rate_limit._rate_limit_buckets.clear()


# --- Redis Test Fixtures (shared) ---


@pytest.fixture
async def fake_redis() -> AsyncGenerator[Redis]:
    """Provides a fakeredis client for testing."""
    client = fakeredis_aio.FakeRedis(decode_responses=True)
    yield client
    await client.aclose()


@pytest.fixture
async def mock_redis(fake_redis: Redis, monkeypatch: pytest.MonkeyPatch) -> AsyncGenerator[Redis]:
    """Patches get_redis() to return the fakeredis client.

    Patches every module that imported get_redis so the fake is used everywhere.
    """
    redis_core.reset_redis_state()

    async def _get_fake_redis() -> Redis:
        return fake_redis

    monkeypatch.setattr("src.buildor.core.redis.get_redis", _get_fake_redis)
    monkeypatch.setattr("src.buildor.core.cache.get_redis", _get_fake_redis)
    monkeypatch.setattr("src.buildor.core.rate_limit.get_redis", _get_fake_redis)
    yield fake_redis
    redis_core.reset_redis_state()


@pytest.fixture
async def mock_redis_unavailable(monkeypatch: pytest.MonkeyPatch) -> AsyncGenerator[None]:
    """Patches get_redis() to return None (simulates Redis unavailable)."""
    redis_core.reset_redis_state()

    async def _get_none() -> None:
        return None

    monkeypatch.setattr("src.buildor.core.redis.get_redis", _get_none)
    monkeypatch.setattr("src.buildor.core.cache.get_redis", _get_none)
    monkeypatch.setattr("src.buildor.core.rate_limit.get_redis", _get_none)
    yield
    redis_core.reset_redis_state()
