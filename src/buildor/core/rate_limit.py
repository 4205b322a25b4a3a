"""Rate limiting: slowapi endpoint limits plus a global per-IP guard.

Endpoint limits (login, signup, PayPal proxies) are declared with
``@limiter.limit(...)``. The global middleware caps every client IP with a
token bucket kept in process memory, or a one-second window counter in Redis
when Redis is reachable so that all workers share the budget.
"""

import asyncio
import time
from collections import defaultdict

from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.middleware.base import RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from src.buildor.core.config import get_settings
from src.buildor.core.logging import get_logger
from src.buildor.core.redis import get_redis

logger = get_logger(__name__)

EXEMPT_PATHS = ("/health", "/api/health", "/metrics", "/docs", "/openapi.json", "/redoc")

_rate_limit_buckets: dict[str, dict[str, float]] = defaultdict(dict)
_rate_limit_lock = asyncio.Lock()


def get_rate_limit_key(request: Request) -> str:
    """Key rate limits by client IP only.

    Never mix in request headers: clients could rotate them to get fresh buckets.
    """
    return get_remote_address(request) or "unknown"


def create_limiter() -> Limiter:
    """Create the slowapi limiter; disabled in the testing environment."""
    settings = get_settings()

    if settings.app_env == "testing":
        return Limiter(key_func=get_rate_limit_key, enabled=False)

    if settings.redis_url:
        logger.info("Rate limiter using Redis backend")
        return Limiter(key_func=get_rate_limit_key, storage_uri=settings.redis_url)

    logger.info("Rate limiter using in-memory backend (not distributed)")
    return Limiter(key_func=get_rate_limit_key)


limiter = create_limiter()


async def _check_in_memory_rate_limit(client_ip: str) -> bool:
    """Token bucket per IP. Returns True when the request may proceed."""
    settings = get_settings()
    rate = settings.global_rate_limit_per_second
    burst = settings.global_rate_limit_burst
    now = time.time()

    async with _rate_limit_lock:
        bucket = _rate_limit_buckets[client_ip]
        tokens = bucket.get("tokens", float(burst))
        last_update = bucket.get("last_update", now)

        tokens = min(burst, tokens + (now - last_update) * rate)
        allowed = tokens >= 1
        if allowed:
            tokens -= 1

        bucket["tokens"] = tokens
        bucket["last_update"] = now
        return allowed


async def _check_redis_rate_limit(redis: object, client_ip: str) -> bool:
    """Shared one-second window counter. Returns True when the request may proceed."""
    settings = get_settings()
    window = int(time.time())
    key = f"global_ratelimit:{client_ip}:{window}"

    pipe = redis.pipeline()  # type: ignore[attr-defined]
    pipe.incr(key)
    pipe.expire(key, 2)
    count, _ = await pipe.execute()
    return int(count) <= settings.global_rate_limit_burst


async def check_global_rate_limit(client_ip: str) -> bool:
    """Check the global limit, preferring Redis and falling back to memory."""
    settings = get_settings()
    if settings.app_env == "testing":
        return True

    redis = await get_redis()
    if redis:
        try:
            return await _check_redis_rate_limit(redis, client_ip)
        except Exception as e:
            logger.warning(
                "Redis rate limit check failed, falling back to in-memory",
                error=str(e),
                client_ip=client_ip,
            )

    return await _check_in_memory_rate_limit(client_ip)


async def global_rate_limit_middleware(
    request: Request,
    call_next: RequestResponseEndpoint,
) -> Response:
    """Reject clients that exceed the global per-IP budget with 429."""
    if request.url.path in EXEMPT_PATHS:
        return await call_next(request)

    client_ip = get_rate_limit_key(request)

    if not await check_global_rate_limit(client_ip):
        logger.warning("Global rate limit exceeded", client_ip=client_ip, path=request.url.path)
        return JSONResponse(
            status_code=429,
            content={
                "detail": "Too many requests. Please slow down.",
                "retry_after": 1,
            },
            headers={"Retry-After": "1"},
        )

    return await call_next(request)
