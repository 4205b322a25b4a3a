"""Optional Redis connection.

Redis backs the PayPal token cache and distributed rate limiting. When it is
not configured or unreachable, callers degrade to per-process behaviour.
"""

from dataclasses import dataclass

from redis.asyncio import ConnectionPool, Redis

from src.buildor.core.config import get_settings
from src.buildor.core.logging import get_logger

logger = get_logger(__name__)


@dataclass
class _RedisConnection:
    pool: ConnectionPool | None = None
    client: Redis | None = None
    attempted: bool = False

    async def release(self) -> None:
        if self.client is not None:
            await self.client.aclose()
        if self.pool is not None:
            await self.pool.disconnect()
        self.client = None
        self.pool = None


_conn = _RedisConnection()


async def get_redis() -> Redis | None:
    """Return the shared client, or None when Redis is unavailable.

    A failed connection attempt is not retried until close_redis() or
    reset_redis_state() clears the state.
    """
    if _conn.client is not None or _conn.attempted:
        return _conn.client
    _conn.attempted = True

    settings = get_settings()
    if not settings.redis_url:
        logger.info("Redis not configured, using in-process fallbacks")
        return None

    _conn.pool = ConnectionPool.from_url(
        settings.redis_url,
        max_connections=settings.redis_pool_size,
        decode_responses=True,
    )
    _conn.client = Redis(connection_pool=_conn.pool)
    try:
        await _conn.client.ping()  # type: ignore[misc]
    except Exception as e:
        logger.warning("Redis connection failed, continuing without it", error=str(e))
        await _conn.release()
        return None

    logger.info("Redis connected", pool_size=settings.redis_pool_size)
    return _conn.client


async def close_redis() -> None:
    """Close the pool on application shutdown."""
    global _conn
    if _conn.client is not None:
        logger.info("Closing Redis connection")
    await _conn.release()
    _conn = _RedisConnection()


def reset_redis_state() -> None:
    """Forget the current client so the next call reconnects. For tests."""
    global _conn
    _conn = _RedisConnection()
