"""PayPal REST proxy: order creation and capture.

Credentials live in the app_config table (single source of truth for the
admin dashboard). OAuth access tokens are cached in Redis when available.
"""

from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

import httpx
from fastapi import status

from src.buildor.core.cache import (
    cache_paypal_token,
    get_cached_paypal_token,
    invalidate_paypal_token,
)
from src.buildor.core.config import get_settings
from src.buildor.core.exceptions import ServiceNotConfiguredError, UpstreamServiceError
from src.buildor.core.logging import get_logger
from src.buildor.repositories import AppConfigRepository
from src.buildor.schemas.paypal import CheckoutConfigResponse, CheckoutProduct
from src.buildor.services.app_config_service import normalize_paypal_mode

logger = get_logger(__name__)

PAYPAL_CONFIG_KEYS = ["paypal_client_id", "paypal_client_secret", "paypal_mode"]


@dataclass(frozen=True)
class PayPalCredentials:
    client_id: str
    client_secret: str
    mode: str

    @property
    def base_url(self) -> str:
        settings = get_settings()
        if self.mode == "live":
            return settings.paypal_live_base_url
        return settings.paypal_sandbox_base_url


class PayPalService:
    """Create and capture PayPal orders on behalf of the checkout page."""

    def __init__(
        self,
        config_repo: AppConfigRepository,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.config_repo = config_repo
        self.transport = transport

    async def get_credentials(self) -> PayPalCredentials:
        stored = await self.config_repo.get_values(PAYPAL_CONFIG_KEYS)
        client_id = stored.get("paypal_client_id")
        client_secret = stored.get("paypal_client_secret")
        if not client_id or not client_secret:
            raise ServiceNotConfiguredError("PayPal not configured")
        return PayPalCredentials(
            client_id=client_id,
            client_secret=client_secret,
            mode=normalize_paypal_mode(stored.get("paypal_mode")),
        )

    async def get_checkout_config(self) -> CheckoutConfigResponse:
        """Public settings for the checkout page. Never exposes the secret."""
        settings = get_settings()
        stored = await self.config_repo.get_values(PAYPAL_CONFIG_KEYS)
        return CheckoutConfigResponse(
            client_id=stored.get("paypal_client_id") or None,
            mode=normalize_paypal_mode(stored.get("paypal_mode")),  # type: ignore[arg-type]
            product=CheckoutProduct(
                name=settings.checkout_product_name,
                description=settings.checkout_product_description,
                price=settings.checkout_product_price,
                currency=settings.checkout_product_currency,
            ),
        )

    def _client(self, credentials: PayPalCredentials) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=credentials.base_url,
            timeout=get_settings().paypal_http_timeout_seconds,
            transport=self.transport,
        )

    async def get_access_token(self, credentials: PayPalCredentials) -> str:
        """Exchange client credentials for an access token, using the cache first."""
        base_url = credentials.base_url
        cached = await get_cached_paypal_token(base_url, credentials.client_id)
        if cached:
            return cached

        try:
            async with self._client(credentials) as client:
                response = await client.post(
                    "/v1/oauth2/token",
                    data={"grant_type": "client_credentials"},
                    auth=(credentials.client_id, credentials.client_secret),
                )
        except httpx.HTTPError as e:
            logger.error("PayPal token request failed", error=str(e))
            raise UpstreamServiceError(
                "PayPal auth failed", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
            ) from e

        if response.status_code != status.HTTP_200_OK:
            logger.warning("PayPal rejected credentials", status_code=response.status_code)
            raise UpstreamServiceError(
                "PayPal auth failed",
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=response.text,
            )

        payload = response.json()
        token = payload["access_token"]
        await cache_paypal_token(
            base_url, credentials.client_id, token, int(payload.get("expires_in", 0))
        )
        return str(token)

    async def _post_with_token(
        self,
        credentials: PayPalCredentials,
        path: str,
        json: dict[str, Any] | None,
        failure_message: str,
    ) -> dict[str, Any]:
        token = await self.get_access_token(credentials)
        try:
            async with self._client(credentials) as client:
                response = await client.post(
                    path,
                    json=json,
                    headers={
                        "Authorization": f"Bearer {token}",
                        "Content-Type": "application/json",
                    },
                )
        except httpx.HTTPError as e:
            logger.error("PayPal request failed", path=path, error=str(e))
            raise UpstreamServiceError(failure_message, detail=str(e)) from e

        if response.status_code == status.HTTP_401_UNAUTHORIZED:
            await invalidate_paypal_token(credentials.base_url, credentials.client_id)

        if not response.is_success:
            logger.warning(
                "PayPal request rejected",
                path=path,
                status_code=response.status_code,
            )
            raise UpstreamServiceError(failure_message, detail=response.text)

        return response.json()  # type: ignore[no-any-return]

    async def create_order(self, amount: str = "2.00", currency: str = "USD") -> str:
        """Create a CAPTURE-intent order for one purchase unit. Returns the order ID."""
        credentials = await self.get_credentials()
        order = await self._post_with_token(
            credentials,
            "/v2/checkout/orders",
            json={
                "intent": "CAPTURE",
                "purchase_units": [{"amount": {"currency_code": currency, "value": amount}}],
            },
            failure_message="PayPal order creation failed",
        )
        logger.info("PayPal order created", order_id=order.get("id"), mode=credentials.mode)
        return str(order["id"])

    async def capture_order(self, order_id: str | None) -> dict[str, Any]:
        """Capture an approved order. Returns {"status", "id"}.

        Raises:
            ServiceNotConfiguredError: Checked before the order ID.
            ValueError: If the order ID is missing.
        """
        credentials = await self.get_credentials()
        if not order_id:
            raise ValueError("Missing orderID")

        capture = await self._post_with_token(
            credentials,
            f"/v2/checkout/orders/{quote(order_id, safe='')}/capture",
            json=None,
            failure_message="PayPal capture failed",
        )
        logger.info(
            "PayPal order captured",
            order_id=capture.get("id"),
            status=capture.get("status"),
        )
        return {"status": capture.get("status"), "id": capture.get("id")}
