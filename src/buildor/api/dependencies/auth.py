"""Authentication and authorization dependencies.

Access tokens are Supabase JWTs verified locally; there is no user table on
this side, so the token claims are the user.
"""

from typing import Annotated

from fastapi import Depends, Header, HTTPException, status

from src.buildor.core.logging import bind_user_context
from src.buildor.core.security import AuthUser, claims_to_user, decode_access_token
from src.buildor.services.auth_service import is_admin_user


def get_bearer_token(authorization: Annotated[str | None, Header()] = None) -> str:
    """Extract the raw bearer token from the Authorization header."""
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing or invalid authorization header",
        )
    return authorization[7:]


BearerToken = Annotated[str, Depends(get_bearer_token)]


async def get_current_user(token: BearerToken) -> AuthUser:
    """Validate the access token and return the signed-in user."""
    claims = decode_access_token(token)
    if claims is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )

    user = claims_to_user(claims)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token payload",
        )

    bind_user_context(user.id, email=user.email)
    return user


CurrentUser = Annotated[AuthUser, Depends(get_current_user)]


async def require_admin(current_user: CurrentUser) -> AuthUser:
    """Require the current user to be a dashboard admin."""
    if not is_admin_user(current_user):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return current_user


AdminUser = Annotated[AuthUser, Depends(require_admin)]
