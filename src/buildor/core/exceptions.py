"""Domain errors for hosted providers and the handlers that render them."""

from asgi_correlation_id import correlation_id
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.buildor.core.logging import get_logger

logger = get_logger(__name__)


class ServiceNotConfiguredError(RuntimeError):
    """Credentials for a hosted service (Supabase, PayPal) are missing."""


class UpstreamServiceError(RuntimeError):
    """A hosted service rejected or failed a forwarded call.

    Attributes:
        message: User-facing message.
        status_code: HTTP status to report to the caller.
        detail: Raw upstream response body, if any.
    """

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_502_BAD_GATEWAY,
        detail: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.detail = detail


def setup_exception_handlers(app: FastAPI) -> None:
    """Configure exception handlers that include request_id in responses."""

    @app.exception_handler(StarletteHTTPException)
    async def starlette_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "detail": exc.detail,
                "request_id": correlation_id.get(),
            },
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "detail": exc.detail,
                "request_id": correlation_id.get(),
            },
            headers=exc.headers,
        )

    @app.exception_handler(ServiceNotConfiguredError)
    async def not_configured_handler(
        request: Request, exc: ServiceNotConfiguredError
    ) -> JSONResponse:
        logger.warning("Hosted service not configured", path=request.url.path, error=str(exc))
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "detail": str(exc),
                "request_id": correlation_id.get(),
            },
        )

    @app.exception_handler(UpstreamServiceError)
    async def upstream_error_handler(request: Request, exc: UpstreamServiceError) -> JSONResponse:
        logger.warning(
            "Upstream service error",
            path=request.url.path,
            error=exc.message,
            status_code=exc.status_code,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "detail": exc.message,
                "request_id": correlation_id.get(),
            },
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        request_id = correlation_id.get()
        logger.exception(
            "Unhandled exception",
            exc_info=exc,
            request_id=request_id,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=500,
            content={
                "detail": "Internal server error",
                "request_id": request_id,
            },
        )
