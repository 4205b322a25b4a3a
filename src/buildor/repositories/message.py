"""Repository for ProjectMessage entity."""

from uuid import UUID

from sqlmodel import select

from src.buildor.models import Profile, ProjectMessage
from src.buildor.repositories.base import BaseRepository


class ProjectMessageRepository(BaseRepository[ProjectMessage]):
    model = ProjectMessage

    async def list_with_authors(
        self, project_id: UUID
    ) -> list[tuple[ProjectMessage, Profile | None]]:
        """List a project's messages oldest first, joined with author profiles."""
        result = await self.session.execute(
            select(ProjectMessage, Profile)
            .outerjoin(Profile, Profile.id == ProjectMessage.user_id)  # type: ignore[arg-type]
            .where(ProjectMessage.project_id == project_id)
            .order_by(ProjectMessage.created_at.asc())  # type: ignore[attr-defined]
        )
        return [(message, profile) for message, profile in result.all()]
