"""Repository layer - data access abstraction."""

from src.buildor.repositories.app_config import AppConfigRepository
from src.buildor.repositories.base import BaseRepository
from src.buildor.repositories.client import ClientRepository
from src.buildor.repositories.invite import ClientInviteRepository
from src.buildor.repositories.invoice import InvoiceRepository
from src.buildor.repositories.member import ClientMemberRepository
from src.buildor.repositories.message import ProjectMessageRepository
from src.buildor.repositories.profile import ProfileRepository
from src.buildor.repositories.project import ProjectRepository

__all__ = [
    # Base
    "BaseRepository",
    # Tenancy
    "ClientInviteRepository",
    "ClientMemberRepository",
    "ClientRepository",
    # Portal records
    "InvoiceRepository",
    "ProjectMessageRepository",
    "ProjectRepository",
    # Identity and configuration
    "AppConfigRepository",
    "ProfileRepository",
]
