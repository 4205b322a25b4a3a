from src.buildor.schemas.auth import (
    CurrentUserResponse,
    LoginRequest,
    RefreshRequest,
    SessionResponse,
    SignupRequest,
    SignupResponse,
)
from src.buildor.schemas.client import ClientCreateRequest, ClientRead
from src.buildor.schemas.invite import (
    InviteCreateRequest,
    InviteCreateResponse,
    InviteRead,
    InviteResolutionResponse,
)
from src.buildor.schemas.portal import PortalContextResponse

__all__ = [
    # Auth
    "CurrentUserResponse",
    "LoginRequest",
    "RefreshRequest",
    "SessionResponse",
    "SignupRequest",
    "SignupResponse",
    # Client
    "ClientCreateRequest",
    "ClientRead",
    # Invite
    "InviteCreateRequest",
    "InviteCreateResponse",
    "InviteRead",
    "InviteResolutionResponse",
    # Portal
    "PortalContextResponse",
]
