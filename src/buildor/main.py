from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from src.buildor.api import paypal
from src.buildor.api.dependencies import AuthServiceDep
from src.buildor.api.middlewares import setup_middlewares
from src.buildor.api.v1.router import api_router
from src.buildor.core.config import get_settings
from src.buildor.core.db import dispose_engine
from src.buildor.core.exceptions import setup_exception_handlers
from src.buildor.core.health import setup_health_endpoint, setup_metrics
from src.buildor.core.logging import get_logger, setup_logging
from src.buildor.core.rate_limit import limiter
from src.buildor.core.redis import close_redis
from src.buildor.core.shutdown import request_tracker
from src.buildor.schemas.paypal import ApiHealthResponse

logger = get_logger(__name__)

OPENAPI_TAGS = [
    {"name": "auth", "description": "Sign-in flows proxied to Supabase Auth"},
    {"name": "portal", "description": "Client portal: projects, finances, team, messages"},
    {"name": "invites", "description": "Invite token resolution and acceptance"},
    {"name": "admin", "description": "Admin dashboard: provider config, clients, invites"},
    {"name": "checkout", "description": "Public checkout configuration"},
    {"name": "paypal", "description": "PayPal order proxy"},
    {"name": "site", "description": "Marketing site content"},
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    settings = get_settings()
    setup_logging(settings.debug)
    logger.info("Starting application", app_name=settings.app_name, env=settings.app_env)

    yield

    await request_tracker.start_shutdown()
    if not await request_tracker.wait_for_drain(timeout=settings.shutdown_grace_period):
        logger.warning(
            "Closing connections with requests still in flight",
            in_flight=request_tracker.in_flight_count,
        )

    await close_redis()
    await dispose_engine()
    logger.info("Shutdown complete")


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Buildor marketing site and client portal API",
        version="0.1.0",
        openapi_tags=OPENAPI_TAGS,
        lifespan=lifespan,
        docs_url="/docs" if settings.enable_openapi else None,
        redoc_url="/redoc" if settings.enable_openapi else None,
        openapi_url="/openapi.json" if settings.enable_openapi else None,
    )

    setup_exception_handlers(app)
    app.state.limiter = limiter
    app.add_exception_handler(
        RateLimitExceeded,
        _rate_limit_exceeded_handler,  # type: ignore[arg-type]
    )
    app.add_exception_handler(
        RequestValidationError,
        paypal.validation_error_handler,  # type: ignore[arg-type]
    )
    setup_middlewares(app, settings)

    app.include_router(api_router)
    app.include_router(paypal.router)

    setup_metrics(app, settings)
    setup_health_endpoint(app)

    @app.get("/api/health", response_model=ApiHealthResponse, tags=["checkout"])
    async def api_health(auth_service: AuthServiceDep) -> ApiHealthResponse:
        """Liveness for the frontend; `env` tells whether Supabase is configured."""
        return ApiHealthResponse(ok=True, env=await auth_service.is_configured())

    return app


app = create_app()
