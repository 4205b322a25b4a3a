"""Repository for Project entity."""

from uuid import UUID

from sqlmodel import select

from src.buildor.models import Project
from src.buildor.repositories.base import BaseRepository


class ProjectRepository(BaseRepository[Project]):
    model = Project

    async def list_by_client(self, client_id: UUID) -> list[Project]:
        """List a client's projects, most recently updated first."""
        result = await self.session.execute(
            select(Project)
            .where(Project.client_id == client_id)
            .order_by(Project.updated_at.desc())  # type: ignore[attr-defined]
        )
        return list(result.scalars().all())

    async def get_for_client(self, project_id: UUID, client_id: UUID) -> Project | None:
        """Get a project only if it belongs to the given client."""
        result = await self.session.execute(
            select(Project).where(Project.id == project_id, Project.client_id == client_id)
        )
        return result.scalar_one_or_none()
