"""Application middlewares."""

from asgi_correlation_id import CorrelationIdMiddleware, correlation_id
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import RequestResponseEndpoint

from src.buildor.core.config import Settings
from src.buildor.core.logging import bind_request_context, clear_request_context
from src.buildor.core.rate_limit import global_rate_limit_middleware
from src.buildor.core.security import SecurityHeadersMiddleware
from src.buildor.core.shutdown import request_tracker

UNTRACKED_PATHS = ("/health", "/metrics")


async def logging_context_middleware(
    request: Request, call_next: RequestResponseEndpoint
) -> Response:
    """Bind request_id to log context for all requests."""
    clear_request_context()
    bind_request_context(correlation_id.get())
    try:
        return await call_next(request)
    finally:
        clear_request_context()


async def request_tracking_middleware(
    request: Request, call_next: RequestResponseEndpoint
) -> Response:
    """Count in-flight requests so shutdown can drain them."""
    if request.url.path in UNTRACKED_PATHS:
        return await call_next(request)

    async with request_tracker.track_request():
        return await call_next(request)


def setup_middlewares(app: FastAPI, settings: Settings) -> None:
    """Configure all application middlewares.

    Middleware added last runs first on the request.
    """
    # Global rate limiting, innermost
    app.middleware("http")(global_rate_limit_middleware)
    app.middleware("http")(request_tracking_middleware)
    app.middleware("http")(logging_context_middleware)

    csp = None  # Default CSP allows Swagger UI assets
    if not settings.enable_openapi and settings.csp_production:
        csp = settings.csp_production
    app.add_middleware(SecurityHeadersMiddleware, content_security_policy=csp)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
    )

    # Correlation ID - generates/propagates X-Request-ID, outermost
    app.add_middleware(CorrelationIdMiddleware)
