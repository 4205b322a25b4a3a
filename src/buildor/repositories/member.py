"""Repository for ClientMember entity."""

from uuid import UUID

from sqlmodel import select

from src.buildor.models import ClientMember, MemberStatus, Profile
from src.buildor.repositories.base import BaseRepository


class ClientMemberRepository(BaseRepository[ClientMember]):
    model = ClientMember

    async def get_first_active_for_user(self, user_id: UUID) -> ClientMember | None:
        """Get the user's oldest active membership.

        A user is expected to belong to one client; if there are several, the
        first one joined wins.
        """
        result = await self.session.execute(
            select(ClientMember)
            .where(
                ClientMember.user_id == user_id,
                ClientMember.status == MemberStatus.ACTIVE.value,
            )
            .order_by(ClientMember.joined_at.asc())  # type: ignore[attr-defined]
            .limit(1)
        )
        return result.scalars().first()

    async def get_by_client_and_user(self, client_id: UUID, user_id: UUID) -> ClientMember | None:
        """Get a membership regardless of status."""
        result = await self.session.execute(
            select(ClientMember).where(
                ClientMember.client_id == client_id,
                ClientMember.user_id == user_id,
            )
        )
        return result.scalar_one_or_none()

    async def list_active_with_profiles(
        self, client_id: UUID
    ) -> list[tuple[ClientMember, Profile | None]]:
        """List active members of a client joined with their profiles, oldest first."""
        result = await self.session.execute(
            select(ClientMember, Profile)
            .outerjoin(Profile, Profile.id == ClientMember.user_id)  # type: ignore[arg-type]
            .where(
                ClientMember.client_id == client_id,
                ClientMember.status == MemberStatus.ACTIVE.value,
            )
            .order_by(ClientMember.joined_at.asc())  # type: ignore[attr-defined]
        )
        return [(member, profile) for member, profile in result.all()]

    def create_membership(
        self,
        client_id: UUID,
        user_id: UUID,
        role: str,
        invite_id: UUID | None = None,
    ) -> ClientMember:
        """Create a new active membership (adds to session, no flush)."""
        membership = ClientMember(
            client_id=client_id,
            user_id=user_id,
            role=role,
            status=MemberStatus.ACTIVE.value,
            invite_id=invite_id,
        )
        self.session.add(membership)
        return membership
