"""Client invite service: token resolution, acceptance and admin management."""

import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.buildor.core.config import get_settings
from src.buildor.core.logging import get_logger
from src.buildor.core.notifications import send_invite_email
from src.buildor.models import (
    Client,
    ClientInvite,
    ClientMember,
    InviteStatus,
    MemberRole,
)
from src.buildor.models.base import utc_now
from src.buildor.repositories import (
    ClientInviteRepository,
    ClientMemberRepository,
    ClientRepository,
)
from src.buildor.schemas.invite import InviteDetails, InviteRead

logger = get_logger(__name__)

DEFAULT_CLIENT_NAME = "Your workspace"


@dataclass(frozen=True)
class InviteResolution:
    """Outcome of looking up a token: `invalid`, `already-accepted`, `revoked`,
    `expired` or `valid`."""

    status: str
    invite: ClientInvite | None = None
    client: Client | None = None

    @property
    def is_valid(self) -> bool:
        return self.status == "valid"

    def details(self) -> InviteDetails | None:
        if self.invite is None:
            return None
        return InviteDetails(
            id=self.invite.id,
            client_id=self.invite.client_id,
            role=self.invite.role,
            email=self.invite.email,
            status=self.invite.status,
            expires_at=self.invite.expires_at,
            client_name=(self.client.name if self.client else None) or DEFAULT_CLIENT_NAME,
            client_company=self.client.company if self.client else None,
            client_logo_url=self.client.logo_url if self.client else None,
        )


def resolution_status(invite: ClientInvite | None, now: datetime | None = None) -> str:
    if invite is None:
        return "invalid"
    if invite.status == InviteStatus.ACCEPTED.value:
        return "already-accepted"
    if invite.status == InviteStatus.REVOKED.value:
        return "revoked"
    if invite.is_expired(now):
        return "expired"
    return "valid"


def display_status(invite: ClientInvite, now: datetime | None = None) -> str:
    """Status shown in the admin list; pending invites past expiry show as expired."""
    if invite.status in (InviteStatus.ACCEPTED.value, InviteStatus.REVOKED.value):
        return invite.status
    if invite.is_expired(now):
        return InviteStatus.EXPIRED.value
    return InviteStatus.PENDING.value


def build_invite_url(token: str) -> str:
    return f"{get_settings().app_url}/portal/{token}"


def to_invite_read(invite: ClientInvite, now: datetime | None = None) -> InviteRead:
    now = now or utc_now()
    return InviteRead(
        id=invite.id,
        client_id=invite.client_id,
        token=invite.token,
        email=invite.email,
        role=invite.role,
        status=invite.status,
        expires_at=invite.expires_at,
        accepted_by=invite.accepted_by,
        accepted_at=invite.accepted_at,
        created_at=invite.created_at,
        is_expired=invite.is_expired(now),
        display_status=display_status(invite, now),  # type: ignore[arg-type]
        invite_url=build_invite_url(invite.token),
    )


class InviteService:
    """Service for client invite operations."""

    def __init__(
        self,
        invite_repo: ClientInviteRepository,
        client_repo: ClientRepository,
        member_repo: ClientMemberRepository,
        session: AsyncSession,
    ):
        self.invite_repo = invite_repo
        self.client_repo = client_repo
        self.member_repo = member_repo
        self.session = session

    async def resolve(self, token: str) -> InviteResolution:
        """Look up a token for the public invite page. Never raises for bad tokens."""
        invite = await self.invite_repo.get_by_token(token) if token else None
        if invite is None:
            return InviteResolution(status="invalid")

        client = await self.client_repo.get_by_id(invite.client_id)
        return InviteResolution(status=resolution_status(invite), invite=invite, client=client)

    async def accept(self, token: str, user_id: UUID) -> tuple[Client, ClientMember]:
        """Accept a valid invite for the signed-in user.

        Marks the invite accepted and creates the membership in one
        transaction. An existing membership for the same client is kept as is.

        Returns (client, membership).
        """
        try:
            try:
                client, membership = await self._accept_once(token, user_id)
            except IntegrityError:
                # Another request inserted this user's membership first
                await self.session.rollback()
                logger.warning(
                    "Membership created concurrently, retrying invite accept",
                    user_id=str(user_id),
                )
                client, membership = await self._accept_once(token, user_id)
        except ValueError:
            await self.session.rollback()
            raise
        except Exception as e:
            await self.session.rollback()
            logger.error("Failed to accept invite", error=str(e))
            raise

        return client, membership

    async def _accept_once(self, token: str, user_id: UUID) -> tuple[Client, ClientMember]:
        invite = await self.invite_repo.get_by_token(token, for_update=True) if token else None
        if invite is None or resolution_status(invite) != "valid":
            raise ValueError("Invite is not valid")

        client = await self.client_repo.get_by_id(invite.client_id)
        if client is None:
            raise ValueError("Invite is not valid")

        await self.invite_repo.mark_accepted(invite, user_id)

        membership = await self.member_repo.get_by_client_and_user(invite.client_id, user_id)
        if membership is None:
            membership = self.member_repo.create_membership(
                client_id=invite.client_id,
                user_id=user_id,
                role=invite.role,
                invite_id=invite.id,
            )

        invite_id = str(invite.id)
        await self.session.commit()
        await self.session.refresh(membership)

        logger.info(
            "Invite accepted",
            invite_id=invite_id,
            client_id=str(client.id),
            user_id=str(user_id),
        )
        return client, membership

    async def create_invite(
        self,
        client_id: UUID,
        created_by: UUID | None,
        role: str = MemberRole.OWNER.value,
        email: str | None = None,
        send_email: bool = False,
    ) -> tuple[ClientInvite, bool | None]:
        """Create an invite link for a client and optionally email it.

        Returns the invite and whether the email went out, or None when no
        email was asked for.
        """
        settings = get_settings()

        try:
            client = await self.client_repo.get_by_id(client_id)
            if client is None:
                raise ValueError("Client not found")

            invite = ClientInvite(
                client_id=client_id,
                token=secrets.token_urlsafe(32),
                email=email,
                role=role,
                created_by=created_by,
                expires_at=utc_now() + timedelta(days=settings.invite_expire_days),
            )
            self.invite_repo.add(invite)
            await self.session.commit()
            await self.session.refresh(invite)

            logger.info(
                "Invite created",
                invite_id=str(invite.id),
                client_id=str(client_id),
                role=role,
            )
        except ValueError:
            await self.session.rollback()
            raise
        except Exception as e:
            await self.session.rollback()
            logger.error("Failed to create invite", error=str(e))
            raise

        email_sent = None
        if send_email and email:
            email_sent = send_invite_email(
                to=email,
                invite_url=build_invite_url(invite.token),
                client_name=client.name,
                role=role,
            )
            if not email_sent:
                logger.warning("Invite email not sent", invite_id=str(invite.id))

        return invite, email_sent

    async def list_for_client(self, client_id: UUID) -> list[InviteRead]:
        invites = await self.invite_repo.list_by_client(client_id)
        now = utc_now()
        return [to_invite_read(invite, now) for invite in invites]

    async def revoke(self, invite_id: UUID) -> ClientInvite:
        """Revoke a pending invite."""
        try:
            invite = await self.invite_repo.get_by_id(invite_id)
            if invite is None:
                raise ValueError("Invite not found")

            if invite.status != InviteStatus.PENDING.value:
                raise ValueError(f"Cannot revoke invite with status: {invite.status}")

            await self.invite_repo.mark_revoked(invite)
            await self.session.commit()

            logger.info("Invite revoked", invite_id=str(invite_id))
            return invite

        except ValueError:
            await self.session.rollback()
            raise
        except Exception as e:
            await self.session.rollback()
            logger.error("Failed to revoke invite", error=str(e))
            raise
