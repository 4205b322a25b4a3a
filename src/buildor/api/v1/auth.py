"""Authentication endpoints - proxied to Supabase Auth."""

from fastapi import APIRouter, HTTPException, status
from starlette.requests import Request

from src.buildor.api.dependencies import AuthServiceDep, BearerToken, CurrentUser
from src.buildor.core.config import get_settings
from src.buildor.core.rate_limit import limiter
from src.buildor.core.security import DEV_USER_EMAIL, DEV_USER_ID, create_dev_token
from src.buildor.schemas.auth import (
    CurrentUserResponse,
    LoginRequest,
    MessageResponse,
    OAuthUrlResponse,
    RefreshRequest,
    SessionResponse,
    SessionUser,
    SignupRequest,
    SignupResponse,
)
from src.buildor.services.auth_service import OAUTH_PROVIDERS, is_admin_user

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/login",
    response_model=SessionResponse,
    responses={
        400: {"description": "Email or password missing"},
        401: {"description": "Credentials rejected by Supabase"},
        503: {"description": "Supabase is not configured"},
    },
)
@limiter.limit("5/minute")
async def login(
    request: Request, login_data: LoginRequest, service: AuthServiceDep
) -> SessionResponse:
    """Sign in with email and password."""
    try:
        return await service.login(login_data.email, login_data.password)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e


@router.post(
    "/signup",
    response_model=SignupResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create account",
    description="Create a Supabase account. May require email confirmation before a session.",
)
@limiter.limit("3/minute")
async def signup(
    request: Request, signup_data: SignupRequest, service: AuthServiceDep
) -> SignupResponse:
    try:
        return await service.signup(signup_data.email, signup_data.password)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e


@router.post("/refresh", response_model=SessionResponse)
@limiter.limit("10/minute")
async def refresh(
    request: Request, refresh_data: RefreshRequest, service: AuthServiceDep
) -> SessionResponse:
    """Exchange a refresh token for a new session."""
    return await service.refresh(refresh_data.refresh_token)


@router.get(
    "/oauth/{provider}",
    response_model=OAuthUrlResponse,
    summary="OAuth sign-in URL",
    description="Return the Supabase authorize URL for Google or GitHub sign-in.",
)
async def oauth_url(provider: str, service: AuthServiceDep) -> OAuthUrlResponse:
    if provider not in OAUTH_PROVIDERS:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unsupported provider: {provider}",
        )
    url = await service.build_oauth_url(provider)
    return OAuthUrlResponse(provider=provider, url=url)


@router.post("/logout", response_model=MessageResponse)
async def logout(token: BearerToken, service: AuthServiceDep) -> MessageResponse:
    """Revoke the Supabase session. Always succeeds for the caller."""
    await service.logout(token)
    return MessageResponse(message="Signed out")


@router.get("/me", response_model=CurrentUserResponse)
async def me(current_user: CurrentUser) -> CurrentUserResponse:
    return CurrentUserResponse(
        id=current_user.id,
        email=current_user.email,
        display_name=current_user.display_name,
        avatar_url=current_user.avatar_url,
        provider=current_user.provider,
        is_admin=is_admin_user(current_user),
    )


@router.post(
    "/dev-login",
    response_model=SessionResponse,
    include_in_schema=False,
)
async def dev_login() -> SessionResponse:
    """Sign in as the local dev user. Only available in development."""
    settings = get_settings()
    if not (settings.is_development and settings.dev_login_enabled):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not Found")

    return SessionResponse(
        access_token=create_dev_token(),
        expires_in=settings.dev_token_expire_minutes * 60,
        user=SessionUser(id=DEV_USER_ID, email=DEV_USER_EMAIL, display_name="Dev", provider="dev"),
    )
