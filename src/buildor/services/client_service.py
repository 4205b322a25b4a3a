"""Client management for the admin dashboard."""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.buildor.core.logging import get_logger
from src.buildor.models import Client
from src.buildor.repositories import ClientInviteRepository, ClientRepository
from src.buildor.schemas.client import AdminStatsResponse, ClientCreateRequest

logger = get_logger(__name__)


class ClientService:
    def __init__(
        self,
        client_repo: ClientRepository,
        invite_repo: ClientInviteRepository,
        session: AsyncSession,
    ):
        self.client_repo = client_repo
        self.invite_repo = invite_repo
        self.session = session

    async def list_clients(self) -> list[Client]:
        return await self.client_repo.list_all()

    async def get_client(self, client_id: UUID) -> Client | None:
        return await self.client_repo.get_by_id(client_id)

    async def create_client(self, data: ClientCreateRequest, created_by: UUID | None) -> Client:
        """Create a client. Input is trimmed by the request schema."""
        try:
            client = Client(
                name=data.name,
                email=data.email,
                company=data.company,
                notes=data.notes,
                created_by=created_by,
            )
            self.client_repo.add(client)
            await self.session.commit()
            await self.session.refresh(client)

            logger.info("Client created", client_id=str(client.id))
            return client
        except Exception as e:
            await self.session.rollback()
            logger.error("Failed to create client", error=str(e))
            raise

    async def get_stats(self) -> AdminStatsResponse:
        return AdminStatsResponse(
            client_count=await self.client_repo.count(),
            pending_invite_count=await self.invite_repo.count_pending_unexpired(),
            accepted_invite_count=await self.invite_repo.count_accepted(),
        )
