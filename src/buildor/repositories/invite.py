"""Repository for ClientInvite entity."""

from uuid import UUID

from sqlalchemy import func
from sqlmodel import select

from src.buildor.models import ClientInvite, InviteStatus
from src.buildor.models.base import utc_now
from src.buildor.repositories.base import BaseRepository


class ClientInviteRepository(BaseRepository[ClientInvite]):
    model = ClientInvite

    async def get_by_token(self, token: str, for_update: bool = False) -> ClientInvite | None:
        """Get an invite by token, whatever its status.

        With for_update the row stays locked until the transaction ends, so
        concurrent accepts of one token run one after the other.
        """
        query = select(ClientInvite).where(ClientInvite.token == token)
        if for_update:
            query = query.with_for_update()
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def list_by_client(self, client_id: UUID) -> list[ClientInvite]:
        """List a client's invites, newest first."""
        result = await self.session.execute(
            select(ClientInvite)
            .where(ClientInvite.client_id == client_id)
            .order_by(ClientInvite.created_at.desc())  # type: ignore[attr-defined]
        )
        return list(result.scalars().all())

    async def mark_accepted(self, invite: ClientInvite, user_id: UUID) -> ClientInvite:
        """Mark an invite as accepted."""
        invite.status = InviteStatus.ACCEPTED.value
        invite.accepted_by = user_id
        invite.accepted_at = utc_now()
        self.session.add(invite)
        await self.session.flush()
        return invite

    async def mark_revoked(self, invite: ClientInvite) -> ClientInvite:
        """Mark an invite as revoked."""
        invite.status = InviteStatus.REVOKED.value
        self.session.add(invite)
        await self.session.flush()
        return invite

    async def count_pending_unexpired(self) -> int:
        result = await self.session.execute(
            select(func.count())
            .select_from(ClientInvite)
            .where(
                ClientInvite.status == InviteStatus.PENDING.value,
                ClientInvite.expires_at > utc_now(),
            )
        )
        return int(result.scalar_one())

    async def count_accepted(self) -> int:
        result = await self.session.execute(
            select(func.count())
            .select_from(ClientInvite)
            .where(ClientInvite.status == InviteStatus.ACCEPTED.value)
        )
        return int(result.scalar_one())
