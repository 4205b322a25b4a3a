"""Test helper functions for common data creation patterns."""

import json
from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import UUID, uuid4

import httpx
from jose import jwt
from sqlalchemy.ext.asyncio import AsyncSession

from src.buildor.core.config import get_settings
from src.buildor.models import AppConfig, Client, ClientMember
from src.buildor.models.enums import MemberRole
from tests.factories import ClientFactory, ClientMemberFactory


def make_access_token(
    user_id: UUID | None = None,
    email: str = "member@example.com",
    provider: str | None = "email",
    full_name: str | None = None,
    expires_delta: timedelta = timedelta(hours=1),
    audience: str | None = None,
    secret: str | None = None,
) -> str:
    """Mint a Supabase-shaped access token signed with the test JWT secret."""
    settings = get_settings()
    claims: dict[str, Any] = {
        "sub": str(user_id or uuid4()),
        "email": email,
        "aud": audience or settings.supabase_jwt_audience,
        "role": "authenticated",
        "exp": datetime.now(UTC) + expires_delta,
        "app_metadata": {"provider": provider} if provider else {},
        "user_metadata": {"full_name": full_name} if full_name else {},
    }
    return jwt.encode(  # type: ignore[no-any-return]
        claims,
        secret or settings.supabase_jwt_secret,
        algorithm=settings.jwt_algorithm,
    )


def auth_headers(user_id: UUID | None = None, **kwargs: Any) -> dict[str, str]:
    return {"Authorization": f"Bearer {make_access_token(user_id, **kwargs)}"}


def admin_headers() -> dict[str, str]:
    return auth_headers(email="admin@example.com")


class UpstreamStub:
    """Canned responses for outbound httpx calls, keyed by (method, path).

    Every request is recorded so tests can assert on what was forwarded.
    """

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], httpx.Response | Exception] = {}
        self.requests: list[httpx.Request] = []

    def add(
        self,
        method: str,
        path: str,
        status_code: int = 200,
        json: Any = None,
        text: str | None = None,
    ) -> None:
        if text is not None:
            self.routes[(method, path)] = httpx.Response(status_code, text=text)
        else:
            self.routes[(method, path)] = httpx.Response(status_code, json=json)

    def fail(self, method: str, path: str, error: Exception) -> None:
        self.routes[(method, path)] = error

    def calls(self, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path == path]

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"error": "not stubbed"})
        if isinstance(route, Exception):
            raise route
        return httpx.Response(
            route.status_code,
            content=route.content,
            headers=route.headers,
        )

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self._handle)


def request_json(request: httpx.Request) -> Any:
    return json.loads(request.content)


async def create_client_with_member(
    session: AsyncSession,
    role: MemberRole = MemberRole.OWNER,
    user_id: UUID | None = None,
    **client_kwargs: Any,
) -> tuple[Client, ClientMember]:
    """Create a client and an active membership for a user.

    Returns:
        Tuple of (client, membership)
    """
    client = ClientFactory.build(**client_kwargs)
    session.add(client)
    await session.flush()

    membership = ClientMemberFactory.build(
        client_id=client.id,
        user_id=user_id or uuid4(),
        role=role.value,
    )
    session.add(membership)
    await session.commit()

    return client, membership


async def store_config(session: AsyncSession, **entries: str) -> None:
    """Write app_config rows directly."""
    for key, value in entries.items():
        session.add(AppConfig(key=key, value=value))
    await session.commit()


async def store_paypal_credentials(session: AsyncSession, mode: str = "sandbox") -> None:
    await store_config(
        session,
        paypal_client_id="pp-client",
        paypal_client_secret="pp-secret",
        paypal_mode=mode,
    )


class FakeConfigRepository:
    """Serves app_config lookups from a dict, for service unit tests."""

    def __init__(self, values: dict[str, str] | None = None):
        self.values = dict(values or {})

    async def get_all(self) -> dict[str, str]:
        return dict(self.values)

    async def get_values(self, keys: list[str]) -> dict[str, str]:
        return {key: self.values[key] for key in keys if key in self.values}
