"""Authentication endpoints proxied to Supabase Auth."""

from uuid import uuid4

import pytest
from httpx import AsyncClient

from src.buildor.core.security import DEV_USER_EMAIL, decode_access_token
from tests.helpers import UpstreamStub, auth_headers, store_config

pytestmark = pytest.mark.integration

USER_ID = uuid4()
SESSION_PAYLOAD = {
    "access_token": "access",
    "refresh_token": "refresh",
    "expires_in": 3600,
    "token_type": "bearer",
    "user": {
        "id": str(USER_ID),
        "email": "dana@example.com",
        "app_metadata": {"provider": "email"},
    },
}


class TestLogin:
    async def test_success(self, client: AsyncClient, upstream: UpstreamStub):
        upstream.add("POST", "/auth/v1/token", json=SESSION_PAYLOAD)

        response = await client.post(
            "/api/v1/auth/login", json={"email": "dana@example.com", "password": "pw"}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["access_token"] == "access"
        assert data["user"]["id"] == str(USER_ID)
        assert upstream.requests[0].url.host == "project.supabase.co"

    async def test_blank_fields(self, client: AsyncClient, upstream: UpstreamStub):
        response = await client.post("/api/v1/auth/login", json={"email": " ", "password": ""})

        assert response.status_code == 400
        assert response.json()["detail"] == "Enter email and password."
        assert upstream.requests == []

    async def test_rejected(self, client: AsyncClient, upstream: UpstreamStub):
        upstream.add(
            "POST",
            "/auth/v1/token",
            status_code=400,
            json={"error_description": "Invalid login credentials"},
        )

        response = await client.post(
            "/api/v1/auth/login", json={"email": "dana@example.com", "password": "nope"}
        )

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid login credentials"

    async def test_not_configured(
        self, client: AsyncClient, upstream: UpstreamStub, settings, monkeypatch
    ):
        monkeypatch.setattr(settings, "supabase_url", None)

        response = await client.post(
            "/api/v1/auth/login", json={"email": "dana@example.com", "password": "pw"}
        )

        assert response.status_code == 503
        assert response.json()["detail"] == "Supabase is not configured"


class TestSignup:
    async def test_confirmation_required(self, client: AsyncClient, upstream: UpstreamStub):
        upstream.add("POST", "/auth/v1/signup", json={"id": str(USER_ID)})

        response = await client.post(
            "/api/v1/auth/signup",
            json={"email": "dana@example.com", "password": "Xq7!vLp2#tRm9wZk"},
        )

        assert response.status_code == 201
        assert response.json() == {"session": None, "confirmation_required": True}

    async def test_weak_password(self, client: AsyncClient, upstream: UpstreamStub):
        response = await client.post(
            "/api/v1/auth/signup", json={"email": "dana@example.com", "password": "password"}
        )

        assert response.status_code == 422
        assert upstream.requests == []


class TestOAuth:
    async def test_url(self, client: AsyncClient, engine):
        response = await client.get("/api/v1/auth/oauth/github")

        assert response.status_code == 200
        assert response.json()["url"].startswith(
            "https://project.supabase.co/auth/v1/authorize?provider=github"
        )

    async def test_url_from_stored_config(
        self, client: AsyncClient, db_session, settings, monkeypatch
    ):
        monkeypatch.setattr(settings, "supabase_url", None)
        monkeypatch.setattr(settings, "supabase_anon_key", None)
        await store_config(
            db_session, supabase_url="https://stored.supabase.co", supabase_anon_key="anon"
        )

        response = await client.get("/api/v1/auth/oauth/google")

        assert response.json()["url"].startswith("https://stored.supabase.co/auth/v1/authorize")

    async def test_unsupported_provider(self, client: AsyncClient):
        response = await client.get("/api/v1/auth/oauth/myspace")

        assert response.status_code == 404


class TestSessionEndpoints:
    async def test_me(self, client: AsyncClient):
        user_id = uuid4()

        response = await client.get(
            "/api/v1/auth/me",
            headers=auth_headers(user_id, email="dana@example.com", full_name="Dana"),
        )

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == str(user_id)
        assert data["display_name"] == "Dana"
        assert data["is_admin"] is False

    async def test_me_admin(self, client: AsyncClient):
        headers = auth_headers(email="admin@example.com")
        response = await client.get("/api/v1/auth/me", headers=headers)

        assert response.json()["is_admin"] is True

    async def test_me_without_token(self, client: AsyncClient):
        response = await client.get("/api/v1/auth/me")

        assert response.status_code == 401
        assert response.json()["detail"] == "Missing or invalid authorization header"

    async def test_refresh(self, client: AsyncClient, upstream: UpstreamStub):
        upstream.add("POST", "/auth/v1/token", json=SESSION_PAYLOAD)

        response = await client.post("/api/v1/auth/refresh", json={"refresh_token": "refresh"})

        assert response.status_code == 200
        assert response.json()["refresh_token"] == "refresh"

    async def test_logout_succeeds_even_if_upstream_fails(
        self, client: AsyncClient, upstream: UpstreamStub
    ):
        upstream.add("POST", "/auth/v1/logout", status_code=500, text="oops")

        response = await client.post("/api/v1/auth/logout", headers={"Authorization": "Bearer x"})

        assert response.status_code == 200
        assert response.json() == {"message": "Signed out"}


class TestDevLogin:
    async def test_hidden_outside_development(self, client: AsyncClient):
        response = await client.post("/api/v1/auth/dev-login")

        assert response.status_code == 404

    async def test_issues_dev_token_in_development(
        self, client: AsyncClient, settings, monkeypatch
    ):
        monkeypatch.setattr(settings, "app_env", "development")

        response = await client.post("/api/v1/auth/dev-login")

        assert response.status_code == 200
        claims = decode_access_token(response.json()["access_token"])
        assert claims is not None
        assert claims["email"] == DEV_USER_EMAIL

    async def test_dev_user_is_admin(self, client: AsyncClient, settings, monkeypatch):
        monkeypatch.setattr(settings, "app_env", "development")
        token = (await client.post("/api/v1/auth/dev-login")).json()["access_token"]

        response = await client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})

        assert response.json()["is_admin"] is True


class TestApiHealth:
    async def test_configured(self, client: AsyncClient, engine):
        response = await client.get("/api/health")

        assert response.json() == {"ok": True, "env": True}

    async def test_not_configured(self, client: AsyncClient, engine, settings, monkeypatch):
        monkeypatch.setattr(settings, "supabase_anon_key", None)

        response = await client.get("/api/health")

        assert response.status_code == 200
        assert response.json() == {"ok": True, "env": False}
