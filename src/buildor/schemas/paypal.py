"""PayPal proxy and checkout schemas.

Request field names follow the PayPal JS SDK callbacks (`orderID`).
"""

from typing import Any

from pydantic import BaseModel, Field, field_validator

from src.buildor.schemas.app_config import PayPalMode


class CreateOrderRequest(BaseModel):
    amount: str = Field(default="2.00", pattern=r"^\d{1,10}(\.\d{1,2})?$")
    currency: str = Field(default="USD", min_length=3, max_length=3)

    @field_validator("amount", mode="before")
    @classmethod
    def amount_as_text(cls, value: Any) -> Any:
        if isinstance(value, int | float) and not isinstance(value, bool):
            return f"{value:.2f}"
        return value


class CreateOrderResponse(BaseModel):
    id: str


class CaptureOrderRequest(BaseModel):
    orderID: str | None = None  # noqa: N815


class CaptureOrderResponse(BaseModel):
    status: str | None = None
    id: str | None = None


class CheckoutProduct(BaseModel):
    name: str
    description: str
    price: str
    currency: str


class CheckoutConfigResponse(BaseModel):
    """What the checkout page needs to load the PayPal SDK.

    `client_id` is null when PayPal is not configured.
    """

    client_id: str | None
    mode: PayPalMode
    product: CheckoutProduct


class ApiHealthResponse(BaseModel):
    ok: bool = True
    env: bool
