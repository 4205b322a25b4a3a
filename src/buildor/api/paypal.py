"""PayPal order proxy.

Mounted at /api/paypal, the paths the PayPal JS SDK callbacks on the checkout
page post to. Errors use the `{"error": ..., "detail": ...}` body that page
reads, not the API-wide `{"detail": ...}` shape.
"""

from typing import Any

from fastapi import APIRouter, status
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.requests import Request

from src.buildor.api.dependencies import PayPalServiceDep
from src.buildor.core.exceptions import ServiceNotConfiguredError, UpstreamServiceError
from src.buildor.core.logging import get_logger
from src.buildor.core.rate_limit import limiter
from src.buildor.schemas.paypal import (
    CaptureOrderRequest,
    CaptureOrderResponse,
    CreateOrderRequest,
    CreateOrderResponse,
)

PREFIX = "/api/paypal"

logger = get_logger(__name__)

router = APIRouter(prefix=PREFIX, tags=["paypal"])

_OTHER_METHODS = ["GET", "PUT", "PATCH", "DELETE"]


def _error(status_code: int, error: str, detail: str | None = None) -> JSONResponse:
    content: dict[str, Any] = {"error": error}
    if detail is not None:
        content["detail"] = detail
    return JSONResponse(status_code=status_code, content=content)


def _upstream_error(exc: UpstreamServiceError) -> JSONResponse:
    return _error(exc.status_code, exc.message, exc.detail)


def _describe(exc: RequestValidationError) -> str:
    first = exc.errors()[0]
    field = ".".join(part for part in first["loc"] if isinstance(part, str) and part != "body")
    return f"{field}: {first['msg']}" if field else first["msg"]


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Bad bodies on the PayPal proxy get its `{"error": ...}` shape and a 400.

    Every other path keeps FastAPI's 422 response.
    """
    if not request.url.path.startswith(f"{PREFIX}/"):
        return await request_validation_exception_handler(request, exc)
    detail = _describe(exc)
    logger.info("Rejected PayPal request", path=request.url.path, detail=detail)
    return _error(status.HTTP_400_BAD_REQUEST, "Invalid request", detail)


@router.post(
    "/create-order",
    response_model=CreateOrderResponse,
    responses={
        502: {"description": "PayPal rejected the order"},
        503: {"description": "PayPal not configured"},
    },
)
@limiter.limit("20/minute")
async def create_order(
    request: Request,
    service: PayPalServiceDep,
    order: CreateOrderRequest | None = None,
) -> CreateOrderResponse | JSONResponse:
    """Create a PayPal order and return its ID."""
    order = order or CreateOrderRequest()
    try:
        order_id = await service.create_order(amount=order.amount, currency=order.currency)
    except ServiceNotConfiguredError as e:
        return _error(status.HTTP_503_SERVICE_UNAVAILABLE, str(e))
    except UpstreamServiceError as e:
        return _upstream_error(e)
    return CreateOrderResponse(id=order_id)


@router.post(
    "/capture-order",
    response_model=CaptureOrderResponse,
    responses={
        400: {"description": "Missing orderID"},
        502: {"description": "PayPal rejected the capture"},
        503: {"description": "PayPal not configured"},
    },
)
@limiter.limit("20/minute")
async def capture_order(
    request: Request,
    service: PayPalServiceDep,
    capture: CaptureOrderRequest | None = None,
) -> CaptureOrderResponse | JSONResponse:
    """Capture an approved PayPal order."""
    capture = capture or CaptureOrderRequest()
    try:
        result = await service.capture_order(capture.orderID)
    except ServiceNotConfiguredError as e:
        return _error(status.HTTP_503_SERVICE_UNAVAILABLE, str(e))
    except ValueError as e:
        return _error(status.HTTP_400_BAD_REQUEST, str(e))
    except UpstreamServiceError as e:
        return _upstream_error(e)
    return CaptureOrderResponse(**result)


@router.api_route("/create-order", methods=_OTHER_METHODS, include_in_schema=False)
@router.api_route("/capture-order", methods=_OTHER_METHODS, include_in_schema=False)
async def method_not_allowed() -> JSONResponse:
    return _error(status.HTTP_405_METHOD_NOT_ALLOWED, "Method not allowed")
