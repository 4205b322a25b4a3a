"""Unit tests for the PayPal proxy service against a mocked PayPal API."""

import httpx
import pytest
from redis.asyncio import Redis

from src.buildor.core.cache import get_cached_paypal_token
from src.buildor.core.exceptions import ServiceNotConfiguredError, UpstreamServiceError
from src.buildor.services.paypal_service import PayPalService
from tests.helpers import FakeConfigRepository, UpstreamStub, request_json

pytestmark = pytest.mark.unit

SANDBOX = "https://api-m.sandbox.paypal.com"
CREDENTIALS = {
    "paypal_client_id": "pp-client",
    "paypal_client_secret": "pp-secret",
    "paypal_mode": "sandbox",
}


@pytest.fixture
def upstream() -> UpstreamStub:
    stub = UpstreamStub()
    stub.add(
        "POST",
        "/v1/oauth2/token",
        json={"access_token": "A21AA-token", "token_type": "Bearer", "expires_in": 32400},
    )
    return stub


def _service(upstream: UpstreamStub, values: dict[str, str] | None = None) -> PayPalService:
    repo = FakeConfigRepository(CREDENTIALS if values is None else values)
    return PayPalService(repo, upstream.transport)  # type: ignore[arg-type]


class TestCredentials:
    async def test_missing_secret_is_not_configured(self, upstream, mock_redis_unavailable):
        service = _service(upstream, {"paypal_client_id": "pp-client"})

        with pytest.raises(ServiceNotConfiguredError, match="PayPal not configured"):
            await service.get_credentials()

    async def test_mode_selects_base_url(self, upstream, mock_redis_unavailable):
        live = await _service(upstream, {**CREDENTIALS, "paypal_mode": "live"}).get_credentials()
        odd = await _service(upstream, {**CREDENTIALS, "paypal_mode": "test"}).get_credentials()

        assert live.base_url == "https://api-m.paypal.com"
        assert odd.mode == "sandbox"
        assert odd.base_url == SANDBOX


class TestCreateOrder:
    async def test_creates_capture_order(self, upstream, mock_redis_unavailable):
        upstream.add("POST", "/v2/checkout/orders", status_code=201, json={"id": "ORDER-1"})

        order_id = await _service(upstream).create_order("2.00", "USD")

        assert order_id == "ORDER-1"
        token_call = upstream.calls("/v1/oauth2/token")[0]
        assert token_call.url.host == "api-m.sandbox.paypal.com"
        assert token_call.headers["Authorization"].startswith("Basic ")
        assert token_call.content == b"grant_type=client_credentials"

        order_call = upstream.calls("/v2/checkout/orders")[0]
        assert order_call.headers["Authorization"] == "Bearer A21AA-token"
        assert request_json(order_call) == {
            "intent": "CAPTURE",
            "purchase_units": [{"amount": {"currency_code": "USD", "value": "2.00"}}],
        }

    async def test_rejected_order_is_upstream_error(self, upstream, mock_redis_unavailable):
        upstream.add(
            "POST", "/v2/checkout/orders", status_code=422, text='{"name":"UNPROCESSABLE"}'
        )

        with pytest.raises(UpstreamServiceError) as exc_info:
            await _service(upstream).create_order()

        assert exc_info.value.message == "PayPal order creation failed"
        assert exc_info.value.status_code == 502
        assert exc_info.value.detail == '{"name":"UNPROCESSABLE"}'

    async def test_bad_credentials_is_auth_failure(self, upstream, mock_redis_unavailable):
        upstream.add("POST", "/v1/oauth2/token", status_code=401, json={"error": "invalid_client"})

        with pytest.raises(UpstreamServiceError) as exc_info:
            await _service(upstream).create_order()

        assert exc_info.value.message == "PayPal auth failed"
        assert exc_info.value.status_code == 500
        assert upstream.calls("/v2/checkout/orders") == []

    async def test_network_error(self, upstream, mock_redis_unavailable):
        upstream.fail("POST", "/v2/checkout/orders", httpx.ConnectError("boom"))

        with pytest.raises(UpstreamServiceError, match="PayPal order creation failed"):
            await _service(upstream).create_order()


class TestCaptureOrder:
    async def test_captures(self, upstream, mock_redis_unavailable):
        upstream.add(
            "POST",
            "/v2/checkout/orders/ORDER-1/capture",
            status_code=201,
            json={"id": "ORDER-1", "status": "COMPLETED", "payer": {"name": "x"}},
        )

        result = await _service(upstream).capture_order("ORDER-1")

        assert result == {"status": "COMPLETED", "id": "ORDER-1"}

    async def test_missing_order_id(self, upstream, mock_redis_unavailable):
        with pytest.raises(ValueError, match="Missing orderID"):
            await _service(upstream).capture_order(None)
        assert upstream.requests == []

    async def test_credentials_checked_before_order_id(self, upstream, mock_redis_unavailable):
        with pytest.raises(ServiceNotConfiguredError):
            await _service(upstream, {}).capture_order(None)

    async def test_order_id_is_path_escaped(self, upstream, mock_redis_unavailable):
        with pytest.raises(UpstreamServiceError):
            await _service(upstream).capture_order("../oauth2/token")

        capture_calls = [r for r in upstream.requests if r.url.path != "/v1/oauth2/token"]
        assert len(capture_calls) == 1
        assert "%2F" in capture_calls[0].url.raw_path.decode()


class TestTokenCache:
    async def test_token_reused_from_cache(self, upstream, mock_redis: Redis):
        upstream.add("POST", "/v2/checkout/orders", status_code=201, json={"id": "ORDER-1"})
        service = _service(upstream)

        await service.create_order()
        await service.create_order()

        assert len(upstream.calls("/v1/oauth2/token")) == 1
        assert await get_cached_paypal_token(SANDBOX, "pp-client") == "A21AA-token"

    async def test_rejected_token_is_invalidated(self, upstream, mock_redis: Redis):
        upstream.add("POST", "/v2/checkout/orders", status_code=401, json={"name": "AUTH"})
        service = _service(upstream)

        with pytest.raises(UpstreamServiceError):
            await service.create_order()

        assert await get_cached_paypal_token(SANDBOX, "pp-client") is None


class TestCheckoutConfig:
    async def test_unconfigured(self, upstream):
        config = await _service(upstream, {}).get_checkout_config()

        assert config.client_id is None
        assert config.mode == "sandbox"
        assert config.product.price == "2.00"
        assert config.product.currency == "USD"

    async def test_never_exposes_secret(self, upstream):
        service = _service(upstream, {**CREDENTIALS, "paypal_mode": "live"})
        config = await service.get_checkout_config()

        assert config.client_id == "pp-client"
        assert config.mode == "live"
        assert "pp-secret" not in config.model_dump_json()
