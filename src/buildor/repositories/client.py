"""Repository for Client entity."""

from sqlalchemy import func
from sqlmodel import select

from src.buildor.models import Client
from src.buildor.repositories.base import BaseRepository


class ClientRepository(BaseRepository[Client]):
    model = Client

    async def list_all(self, limit: int = 500) -> list[Client]:
        """List clients, newest first."""
        result = await self.session.execute(
            select(Client)
            .order_by(Client.created_at.desc())  # type: ignore[attr-defined]
            .limit(limit)
        )
        return list(result.scalars().all())

    async def count(self) -> int:
        result = await self.session.execute(select(func.count()).select_from(Client))
        return int(result.scalar_one())
