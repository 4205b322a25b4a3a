"""PayPal access-token cache with Redis backend and graceful fallback.

PayPal OAuth tokens live for hours; caching them saves a round trip on every
order. Without Redis every call exchanges credentials again.
"""

from hashlib import sha256

from src.buildor.core.logging import get_logger
from src.buildor.core.redis import get_redis

logger = get_logger(__name__)

PREFIX_PAYPAL_TOKEN = "paypal_token"

# Refresh this many seconds before PayPal's stated expiry
TOKEN_EXPIRY_MARGIN_SECONDS = 60


def _token_key(base_url: str, client_id: str) -> str:
    digest = sha256(f"{base_url}|{client_id}".encode()).hexdigest()
    return f"{PREFIX_PAYPAL_TOKEN}:{digest}"


async def get_cached_paypal_token(base_url: str, client_id: str) -> str | None:
    """Return a cached access token, or None on miss or when Redis is unavailable."""
    redis = await get_redis()
    if not redis:
        return None
    try:
        return await redis.get(_token_key(base_url, client_id))  # type: ignore[no-any-return]
    except Exception as e:
        logger.warning("PayPal token cache read failed", error=str(e))
        return None


async def cache_paypal_token(
    base_url: str,
    client_id: str,
    token: str,
    expires_in: int,
) -> bool:
    """Store an access token until shortly before it expires.

    Returns:
        True if stored, False if Redis is unavailable or the token is too short-lived.
    """
    ttl = expires_in - TOKEN_EXPIRY_MARGIN_SECONDS
    if ttl <= 0:
        return False

    redis = await get_redis()
    if not redis:
        return False
    try:
        await redis.setex(_token_key(base_url, client_id), ttl, token)
        return True
    except Exception as e:
        logger.warning("PayPal token cache write failed", error=str(e))
        return False


async def invalidate_paypal_token(base_url: str, client_id: str) -> None:
    """Drop a cached token (called when PayPal rejects it)."""
    redis = await get_redis()
    if not redis:
        return
    try:
        await redis.delete(_token_key(base_url, client_id))
    except Exception as e:
        logger.warning("PayPal token cache delete failed", error=str(e))
