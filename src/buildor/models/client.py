"""Client tenancy models: clients, their members and invites."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel

from src.buildor.models.base import as_utc, utc_now
from src.buildor.models.enums import InviteStatus, MemberRole, MemberStatus


class Client(SQLModel, table=True):
    """A portal tenant: one company or person the studio works for."""

    __tablename__ = "clients"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=200)
    company: str | None = Field(default=None, max_length=200)
    email: str = Field(max_length=255)
    logo_url: str | None = Field(default=None, max_length=1000)
    notes: str | None = Field(default=None)
    created_by: UUID | None = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now, index=True)


class ClientMember(SQLModel, table=True):
    """Membership of an auth user in a client portal."""

    __tablename__ = "client_members"
    __table_args__ = (
        UniqueConstraint("client_id", "user_id", name="client_members_client_id_user_id_key"),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    client_id: UUID = Field(foreign_key="clients.id", index=True)
    user_id: UUID = Field(index=True)
    role: str = Field(default=MemberRole.CONTRIBUTOR.value, max_length=20)
    status: str = Field(default=MemberStatus.ACTIVE.value, max_length=20)
    invite_id: UUID | None = Field(default=None, foreign_key="client_invites.id")
    joined_at: datetime = Field(default_factory=utc_now)


class ClientInvite(SQLModel, table=True):
    """Single-use invitation to join a client portal.

    The token is stored as issued: admins copy invite links from the
    dashboard after creation.
    """

    __tablename__ = "client_invites"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    client_id: UUID = Field(foreign_key="clients.id", index=True)
    token: str = Field(max_length=128, unique=True, index=True)
    email: str | None = Field(default=None, max_length=255)
    role: str = Field(default=MemberRole.OWNER.value, max_length=20)
    status: str = Field(default=InviteStatus.PENDING.value, max_length=20)
    expires_at: datetime
    created_by: UUID | None = Field(default=None)
    accepted_by: UUID | None = Field(default=None)
    accepted_at: datetime | None = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now)

    def is_expired(self, now: datetime | None = None) -> bool:
        """True when the expiry has passed or the row was marked expired."""
        if self.status == InviteStatus.EXPIRED.value:
            return True
        return as_utc(self.expires_at) < as_utc(now or utc_now())
