"""Public checkout configuration."""

from fastapi import APIRouter

from src.buildor.api.dependencies import PayPalServiceDep
from src.buildor.schemas.paypal import CheckoutConfigResponse

router = APIRouter(prefix="/checkout", tags=["checkout"])


@router.get(
    "/config",
    response_model=CheckoutConfigResponse,
    summary="Checkout config",
    description="PayPal client ID (null when not configured), mode and the product on sale.",
)
async def get_checkout_config(service: PayPalServiceDep) -> CheckoutConfigResponse:
    return await service.get_checkout_config()
