"""Invite schemas."""

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, EmailStr

InviteResolutionStatus = Literal["valid", "invalid", "expired", "already-accepted", "revoked"]
InviteDisplayStatus = Literal["pending", "accepted", "revoked", "expired"]


class InviteDetails(BaseModel):
    """Public info about an invite (for the accept page)."""

    id: UUID
    client_id: UUID
    role: str
    email: str | None
    status: str
    expires_at: datetime
    client_name: str
    client_company: str | None = None
    client_logo_url: str | None = None


class InviteResolutionResponse(BaseModel):
    status: InviteResolutionStatus
    invite: InviteDetails | None = None


class InviteCreateRequest(BaseModel):
    role: Literal["owner", "contributor", "accountant"] = "owner"
    email: EmailStr | None = None
    send_email: bool = False


class InviteRead(BaseModel):
    """Read model for invites (admin view)."""

    id: UUID
    client_id: UUID
    token: str
    email: str | None
    role: str
    status: str
    expires_at: datetime
    accepted_by: UUID | None
    accepted_at: datetime | None
    created_at: datetime
    is_expired: bool
    display_status: InviteDisplayStatus
    invite_url: str


class InviteCreateResponse(InviteRead):
    """A freshly created invite.

    `email_sent` is null when no email was requested and false when the
    email provider rejected it; the link itself is valid either way.
    """

    email_sent: bool | None = None


class InviteListResponse(BaseModel):
    invites: list[InviteRead]
    total: int
