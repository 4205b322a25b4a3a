"""Correlation IDs and error body shape."""

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.integration


async def test_error_includes_request_id(client: AsyncClient):
    response = await client.get("/api/v1/does-not-exist")

    assert response.status_code == 404
    data = response.json()
    assert data["detail"]
    assert isinstance(data["request_id"], str)
    assert response.headers["X-Request-ID"] == data["request_id"]


async def test_request_id_propagated(client: AsyncClient):
    request_id = "0f8fad5b-d9cb-469f-a165-70867728950e"

    response = await client.get("/api/v1/portal/me", headers={"X-Request-ID": request_id})

    assert response.status_code == 401
    assert response.headers["X-Request-ID"] == request_id
    assert response.json()["request_id"] == request_id


async def test_security_headers(client: AsyncClient):
    response = await client.get("/api/v1/site")

    assert response.headers["X-Frame-Options"] == "DENY"
    assert "Content-Security-Policy" in response.headers
