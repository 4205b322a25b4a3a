"""Operational endpoints: cached dependency health and Prometheus metrics."""

import secrets
import time
from dataclasses import dataclass, field
from typing import Any

from fastapi import Depends, FastAPI, HTTPException, status
from fastapi.responses import JSONResponse
from fastapi.security import APIKeyHeader
from prometheus_fastapi_instrumentator import Instrumentator
from sqlalchemy import text

from src.buildor.core.config import Settings
from src.buildor.core.db import get_session
from src.buildor.core.logging import get_logger
from src.buildor.core.redis import get_redis
from src.buildor.core.shutdown import request_tracker

logger = get_logger(__name__)

HEALTH_CACHE_TTL = 10  # seconds


@dataclass
class HealthSnapshot:
    report: dict[str, Any] = field(default_factory=dict)
    taken_at: float = 0.0

    def fresh(self, now: float) -> bool:
        return bool(self.report) and now - self.taken_at < HEALTH_CACHE_TTL


_snapshot = HealthSnapshot()


def reset_health_cache() -> None:
    """Forget the last health report (tests)."""
    global _snapshot
    _snapshot = HealthSnapshot()


def _status_code(report: dict[str, Any]) -> int:
    return status.HTTP_503_SERVICE_UNAVAILABLE if report["status"] == "unhealthy" else 200


async def _check_database() -> str:
    try:
        async with get_session() as session:
            await session.execute(text("SELECT 1"))
    except Exception as e:
        logger.warning("Database health check failed", error=str(e))
        return f"unhealthy: {e!s}"
    return "healthy"


async def _check_redis() -> str:
    redis = await get_redis()
    if redis is None:
        return "not_configured"
    try:
        await redis.ping()
    except Exception as e:
        logger.warning("Redis health check failed", error=str(e))
        return f"unhealthy: {e!s}"
    return "healthy"


async def collect_health(now: float) -> dict[str, Any]:
    """Run every check. The database is required; Redis only degrades."""
    database = await _check_database()
    redis = await _check_redis()

    overall = "healthy"
    if database != "healthy":
        overall = "unhealthy"
    elif redis.startswith("unhealthy"):
        overall = "degraded"

    return {
        "status": overall,
        "database": database,
        "redis": redis,
        "cached": False,
        "timestamp": now,
    }


def setup_health_endpoint(app: FastAPI) -> None:
    @app.get("/health")
    async def health() -> JSONResponse:
        """Dependency health, cached for a few seconds; 503 while draining."""
        global _snapshot
        now = time.time()

        if request_tracker.is_shutting_down:
            return JSONResponse(
                content={
                    "status": "draining",
                    "in_flight_requests": request_tracker.in_flight_count,
                    "message": "Server is shutting down",
                },
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            )

        if _snapshot.fresh(now):
            report = {
                **_snapshot.report,
                "cached": True,
                "cache_age_seconds": round(now - _snapshot.taken_at, 1),
            }
            return JSONResponse(content=report, status_code=_status_code(report))

        report = await collect_health(now)
        _snapshot = HealthSnapshot(report=report, taken_at=now)
        return JSONResponse(content=report, status_code=_status_code(report))


def setup_metrics(app: FastAPI, settings: Settings) -> None:
    """Expose Prometheus metrics, behind X-Metrics-Key when a key is configured."""
    instrumentator = Instrumentator().instrument(app)

    if not settings.metrics_api_key:
        instrumentator.expose(app, endpoint="/metrics")
        return

    expected = settings.metrics_api_key
    api_key_header = APIKeyHeader(name="X-Metrics-Key", auto_error=False)

    async def verify_metrics_key(api_key: str | None = Depends(api_key_header)) -> None:
        if api_key is None or not secrets.compare_digest(api_key, expected):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid or missing metrics API key",
            )

    instrumentator.expose(app, endpoint="/metrics", dependencies=[Depends(verify_metrics_key)])
