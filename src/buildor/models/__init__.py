"""Model exports.

Import from here: `from src.buildor.models import Client, ClientInvite`
"""

from src.buildor.models.app_config import AppConfig
from src.buildor.models.client import Client, ClientInvite, ClientMember
from src.buildor.models.enums import (
    InviteStatus,
    InvoiceStatus,
    MemberRole,
    MemberStatus,
    ProjectStatus,
)
from src.buildor.models.portal import Invoice, Project, ProjectMessage
from src.buildor.models.profile import Profile

__all__ = [
    # Enums
    "InviteStatus",
    "InvoiceStatus",
    "MemberRole",
    "MemberStatus",
    "ProjectStatus",
    # Tenancy
    "Client",
    "ClientInvite",
    "ClientMember",
    # Portal records
    "Invoice",
    "Project",
    "ProjectMessage",
    # Identity and configuration
    "AppConfig",
    "Profile",
]
