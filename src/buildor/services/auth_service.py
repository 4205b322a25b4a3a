"""Authentication service - a thin proxy over Supabase Auth (GoTrue).

Passwords and sessions are owned by Supabase. This service forwards
credentials, maps the returned session and builds OAuth redirect URLs.
Access tokens are verified locally in `core.security`.
"""

from typing import Any
from urllib.parse import urlencode

import httpx
from fastapi import status

from src.buildor.core.config import get_settings
from src.buildor.core.exceptions import ServiceNotConfiguredError, UpstreamServiceError
from src.buildor.core.logging import get_logger
from src.buildor.core.security import AuthUser, claims_to_user
from src.buildor.repositories import AppConfigRepository
from src.buildor.schemas.auth import SessionResponse, SessionUser, SignupResponse

logger = get_logger(__name__)

OAUTH_PROVIDERS = ("google", "github")

SUPABASE_URL_KEY = "supabase_url"
SUPABASE_ANON_KEY_KEY = "supabase_anon_key"


def is_admin_user(user: AuthUser) -> bool:
    """Admin when listed by email or signed in with an admin provider.

    The dev user is an admin only while dev login itself is enabled.
    """
    settings = get_settings()
    if user.is_dev:
        return settings.is_development and settings.dev_login_enabled
    if user.email and user.email.lower() in settings.admin_emails:
        return True
    return bool(user.provider) and user.provider in settings.admin_providers


def _error_message(response: httpx.Response, fallback: str) -> str:
    """Pull the human-readable message out of a GoTrue error body."""
    try:
        body = response.json()
    except ValueError:
        return fallback
    if not isinstance(body, dict):
        return fallback
    for field in ("error_description", "msg", "message", "error"):
        value = body.get(field)
        if isinstance(value, str) and value:
            return value
    return fallback


def _session_user(data: dict[str, Any] | None) -> SessionUser | None:
    if not data:
        return None
    user = claims_to_user(
        {
            "sub": data.get("id"),
            "email": data.get("email"),
            "user_metadata": data.get("user_metadata"),
            "app_metadata": data.get("app_metadata"),
        }
    )
    if user is None:
        return None
    return SessionUser(
        id=user.id,
        email=user.email,
        display_name=user.display_name,
        avatar_url=user.avatar_url,
        provider=user.provider,
    )


def _session_from_payload(payload: dict[str, Any]) -> SessionResponse:
    return SessionResponse(
        access_token=payload["access_token"],
        refresh_token=payload.get("refresh_token"),
        token_type=payload.get("token_type") or "bearer",
        expires_in=payload.get("expires_in"),
        user=_session_user(payload.get("user")),
    )


class AuthService:
    """Forward sign-in flows to Supabase Auth."""

    def __init__(
        self,
        config_repo: AppConfigRepository,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.config_repo = config_repo
        self.transport = transport

    async def get_supabase_credentials(self) -> tuple[str, str]:
        """Resolve the Supabase URL and anon key: environment first, then app_config."""
        settings = get_settings()
        url = settings.supabase_url
        anon_key = settings.supabase_anon_key

        if not url or not anon_key:
            stored = await self.config_repo.get_values([SUPABASE_URL_KEY, SUPABASE_ANON_KEY_KEY])
            url = url or stored.get(SUPABASE_URL_KEY)
            anon_key = anon_key or stored.get(SUPABASE_ANON_KEY_KEY)

        if not url or not anon_key:
            raise ServiceNotConfiguredError("Supabase is not configured")
        return url.rstrip("/"), anon_key

    async def is_configured(self) -> bool:
        try:
            await self.get_supabase_credentials()
        except ServiceNotConfiguredError:
            return False
        return True

    async def _post(
        self,
        path: str,
        json: dict[str, Any] | None = None,
        params: dict[str, str] | None = None,
        access_token: str | None = None,
    ) -> httpx.Response:
        url, anon_key = await self.get_supabase_credentials()
        headers = {"apikey": anon_key}
        if access_token:
            headers["Authorization"] = f"Bearer {access_token}"

        settings = get_settings()
        try:
            async with httpx.AsyncClient(
                base_url=url,
                timeout=settings.auth_http_timeout_seconds,
                transport=self.transport,
            ) as client:
                return await client.post(path, json=json, params=params, headers=headers)
        except httpx.HTTPError as e:
            logger.error("Supabase Auth request failed", path=path, error=str(e))
            raise UpstreamServiceError("Authentication service unavailable") from e

    async def login(self, email: str, password: str) -> SessionResponse:
        """Sign in with email and password.

        Raises:
            ValueError: If email or password is blank.
            UpstreamServiceError: 401 with Supabase's message on bad credentials.
        """
        email = email.strip()
        if not email or not password:
            raise ValueError("Enter email and password.")

        response = await self._post(
            "/auth/v1/token",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
        )
        if response.status_code != status.HTTP_200_OK:
            message = _error_message(response, "Invalid login credentials")
            logger.info("Login rejected", status_code=response.status_code)
            raise UpstreamServiceError(message, status_code=status.HTTP_401_UNAUTHORIZED)

        session = _session_from_payload(response.json())
        logger.info("User signed in", user_id=str(session.user.id) if session.user else None)
        return session

    async def signup(self, email: str, password: str) -> SignupResponse:
        """Create an account. Supabase may hold the session until email confirmation."""
        email = email.strip()
        if not email or not password:
            raise ValueError("Enter email and password.")

        response = await self._post("/auth/v1/signup", json={"email": email, "password": password})
        if response.status_code not in (status.HTTP_200_OK, status.HTTP_201_CREATED):
            message = _error_message(response, "Sign up failed")
            raise UpstreamServiceError(message, status_code=status.HTTP_400_BAD_REQUEST)

        payload = response.json()
        if payload.get("access_token"):
            return SignupResponse(session=_session_from_payload(payload))

        # No session means Supabase sent a confirmation email
        logger.info("Signup awaiting email confirmation")
        return SignupResponse(confirmation_required=True)

    async def refresh(self, refresh_token: str) -> SessionResponse:
        response = await self._post(
            "/auth/v1/token",
            params={"grant_type": "refresh_token"},
            json={"refresh_token": refresh_token},
        )
        if response.status_code != status.HTTP_200_OK:
            message = _error_message(response, "Invalid refresh token")
            raise UpstreamServiceError(message, status_code=status.HTTP_401_UNAUTHORIZED)
        return _session_from_payload(response.json())

    async def logout(self, access_token: str) -> None:
        """Revoke the session upstream. Local sign-out succeeds regardless."""
        try:
            response = await self._post("/auth/v1/logout", access_token=access_token)
        except (ServiceNotConfiguredError, UpstreamServiceError) as e:
            logger.warning("Supabase logout skipped", error=str(e))
            return
        if response.status_code >= status.HTTP_400_BAD_REQUEST:
            logger.warning("Supabase logout rejected", status_code=response.status_code)

    async def build_oauth_url(self, provider: str) -> str:
        """Return the Supabase authorize URL that starts an OAuth sign-in."""
        if provider not in OAUTH_PROVIDERS:
            raise ValueError(f"Unsupported provider: {provider}")

        url, _ = await self.get_supabase_credentials()
        settings = get_settings()
        redirect_to = f"{settings.app_url}/auth/callback"
        query = urlencode({"provider": provider, "redirect_to": redirect_to})
        return f"{url}/auth/v1/authorize?{query}"
