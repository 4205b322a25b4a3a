"""Security headers middleware (Helmet-style)."""

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to every response."""

    # Swagger UI needs inline scripts and CDN assets
    DEFAULT_CSP = (
        "default-src 'self'; "
        "script-src 'self' 'unsafe-inline' cdn.jsdelivr.net; "
        "style-src 'self' 'unsafe-inline' cdn.jsdelivr.net; "
        "img-src 'self' data: cdn.jsdelivr.net; "
        "frame-ancestors 'none'"
    )

    def __init__(
        self,
        app: ASGIApp,
        content_security_policy: str | None = None,
        strict_transport_security: str | None = "max-age=31536000; includeSubDomains",
    ):
        super().__init__(app)
        csp = content_security_policy if content_security_policy is not None else self.DEFAULT_CSP
        self.headers: dict[str, str] = {
            "X-Content-Type-Options": "nosniff",
            "X-Frame-Options": "DENY",
            "Referrer-Policy": "strict-origin-when-cross-origin",
        }
        if csp:
            self.headers["Content-Security-Policy"] = csp
        if strict_transport_security:
            self.headers["Strict-Transport-Security"] = strict_transport_security

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        response = await call_next(request)
        for header, value in self.headers.items():
            response.headers[header] = value
        return response
