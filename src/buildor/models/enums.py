"""Shared enums for models."""

from enum import Enum


class MemberRole(str, Enum):
    """Role of a user inside a client portal."""

    OWNER = "owner"
    CONTRIBUTOR = "contributor"
    ACCOUNTANT = "accountant"


class MemberStatus(str, Enum):
    """Client membership status."""

    ACTIVE = "active"
    REMOVED = "removed"


class InviteStatus(str, Enum):
    """Stored client invite status."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    EXPIRED = "expired"
    REVOKED = "revoked"


class ProjectStatus(str, Enum):
    ACTIVE = "active"
    UPCOMING = "upcoming"
    COMPLETED = "completed"
    ARCHIVED = "archived"
    PAUSED = "paused"


class InvoiceStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    OVERDUE = "overdue"
    CANCELLED = "cancelled"
    DRAFT = "draft"
