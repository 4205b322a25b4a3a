"""Project chat messages."""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.buildor.core.logging import get_logger
from src.buildor.models import ProjectMessage
from src.buildor.repositories import (
    ProfileRepository,
    ProjectMessageRepository,
    ProjectRepository,
)
from src.buildor.schemas.portal import ProjectMessageRead

logger = get_logger(__name__)


class MessageService:
    """Read and post messages on a client's project threads."""

    def __init__(
        self,
        project_repo: ProjectRepository,
        message_repo: ProjectMessageRepository,
        profile_repo: ProfileRepository,
        session: AsyncSession,
    ):
        self.project_repo = project_repo
        self.message_repo = message_repo
        self.profile_repo = profile_repo
        self.session = session

    async def _ensure_project(self, project_id: UUID, client_id: UUID) -> None:
        project = await self.project_repo.get_for_client(project_id, client_id)
        if project is None:
            raise ValueError("Project not found")

    async def list_messages(self, project_id: UUID, client_id: UUID) -> list[ProjectMessageRead]:
        """List a project's messages oldest first with author name and avatar."""
        await self._ensure_project(project_id, client_id)
        rows = await self.message_repo.list_with_authors(project_id)
        return [
            ProjectMessageRead(
                id=message.id,
                project_id=message.project_id,
                user_id=message.user_id,
                content=message.content,
                created_at=message.created_at,
                full_name=profile.full_name if profile else None,
                avatar_url=profile.avatar_url if profile else None,
            )
            for message, profile in rows
        ]

    async def post_message(
        self,
        project_id: UUID,
        client_id: UUID,
        user_id: UUID,
        content: str,
    ) -> ProjectMessageRead:
        """Post a message as the given member. Content must already be validated."""
        try:
            await self._ensure_project(project_id, client_id)

            message = ProjectMessage(
                project_id=project_id,
                client_id=client_id,
                user_id=user_id,
                content=content,
            )
            self.message_repo.add(message)
            await self.session.commit()
            await self.session.refresh(message)

            profile = await self.profile_repo.get_by_id(user_id)

            logger.info(
                "Project message posted",
                project_id=str(project_id),
                message_id=str(message.id),
            )
            return ProjectMessageRead(
                id=message.id,
                project_id=message.project_id,
                user_id=message.user_id,
                content=message.content,
                created_at=message.created_at,
                full_name=profile.full_name if profile else None,
                avatar_url=profile.avatar_url if profile else None,
            )
        except ValueError:
            await self.session.rollback()
            raise
        except Exception as e:
            await self.session.rollback()
            logger.error("Failed to post project message", error=str(e))
            raise
