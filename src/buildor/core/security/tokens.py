"""Supabase access-token verification.

Supabase Auth issues HS256 JWTs signed with the project's JWT secret. The API
never issues tokens of its own except the development-only dev login.
"""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import UUID

from jose import JWTError, jwt

from src.buildor.core.config import get_settings

DEV_USER_ID = UUID("00000000-0000-4000-8000-00000000de00")
DEV_USER_EMAIL = "dev@buildor.local"
DEV_PROVIDER = "dev"


@dataclass(frozen=True)
class AuthUser:
    """The signed-in user as seen by this API."""

    id: UUID
    email: str
    display_name: str | None = None
    avatar_url: str | None = None
    provider: str | None = None

    @property
    def is_dev(self) -> bool:
        """Only tokens minted by dev login carry the `dev` provider claim."""
        return self.provider == DEV_PROVIDER


def decode_access_token(token: str) -> dict[str, Any] | None:
    """Verify a Supabase access token. Returns its claims, or None on any error."""
    settings = get_settings()
    try:
        return jwt.decode(  # type: ignore[no-any-return]
            token,
            settings.supabase_jwt_secret,
            algorithms=[settings.jwt_algorithm],
            audience=settings.supabase_jwt_audience,
        )
    except JWTError:
        return None


def claims_to_user(claims: dict[str, Any]) -> AuthUser | None:
    """Map token claims to an AuthUser. Returns None if `sub` is not a UUID."""
    try:
        user_id = UUID(str(claims.get("sub", "")))
    except ValueError:
        return None

    user_metadata = claims.get("user_metadata") or {}
    app_metadata = claims.get("app_metadata") or {}

    return AuthUser(
        id=user_id,
        email=claims.get("email") or "",
        display_name=user_metadata.get("full_name") or user_metadata.get("name"),
        avatar_url=user_metadata.get("avatar_url"),
        provider=app_metadata.get("provider"),
    )


def create_dev_token() -> str:
    """Mint a Supabase-shaped token for the local dev user.

    Callers must check that dev login is allowed before calling this.
    """
    settings = get_settings()
    expire = datetime.now(UTC) + timedelta(minutes=settings.dev_token_expire_minutes)
    to_encode = {
        "sub": str(DEV_USER_ID),
        "email": DEV_USER_EMAIL,
        "aud": settings.supabase_jwt_audience,
        "role": "authenticated",
        "exp": expire,
        "app_metadata": {"provider": DEV_PROVIDER},
        "user_metadata": {"full_name": "Dev"},
    }
    return jwt.encode(  # type: ignore[no-any-return]
        to_encode,
        settings.supabase_jwt_secret,
        algorithm=settings.jwt_algorithm,
    )
