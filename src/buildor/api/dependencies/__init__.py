"""FastAPI dependency injection definitions.

Re-exports all dependencies for convenience.
"""

# Auth
from src.buildor.api.dependencies.auth import (
    AdminUser,
    BearerToken,
    CurrentUser,
    get_bearer_token,
    get_current_user,
    require_admin,
)

# Database
from src.buildor.api.dependencies.db import DBSession, get_db_session

# Portal
from src.buildor.api.dependencies.portal import (
    FinancesAccess,
    PortalContextDep,
    PortalMember,
    ProjectsAccess,
    TeamAccess,
    get_portal_context,
)

# Services
from src.buildor.api.dependencies.services import (
    AppConfigServiceDep,
    AuthServiceDep,
    ClientServiceDep,
    HTTPTransport,
    InviteServiceDep,
    MessageServiceDep,
    PayPalServiceDep,
    PortalServiceDep,
    get_http_transport,
)

__all__ = [
    # Database
    "DBSession",
    "get_db_session",
    # Auth
    "AdminUser",
    "BearerToken",
    "CurrentUser",
    "get_bearer_token",
    "get_current_user",
    "require_admin",
    # Portal
    "FinancesAccess",
    "PortalContextDep",
    "PortalMember",
    "ProjectsAccess",
    "TeamAccess",
    "get_portal_context",
    # Services
    "AppConfigServiceDep",
    "AuthServiceDep",
    "ClientServiceDep",
    "HTTPTransport",
    "InviteServiceDep",
    "MessageServiceDep",
    "PayPalServiceDep",
    "PortalServiceDep",
    "get_http_transport",
]
