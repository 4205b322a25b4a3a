"""Portal membership and permission dependencies."""

from typing import Annotated

from fastapi import Depends, HTTPException, status

from src.buildor.api.dependencies.auth import CurrentUser
from src.buildor.api.dependencies.services import PortalServiceDep
from src.buildor.core.logging import bind_user_context
from src.buildor.services.portal_service import PortalContext, PortalDataError


async def get_portal_context(
    current_user: CurrentUser,
    portal_service: PortalServiceDep,
) -> PortalContext:
    """Resolve the caller's membership. Users without one get an empty context."""
    try:
        context = await portal_service.resolve_membership(current_user.id)
    except PortalDataError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        ) from e

    if context.client is not None:
        bind_user_context(current_user.id, context.client.id)
    return context


PortalContextDep = Annotated[PortalContext, Depends(get_portal_context)]


async def require_portal_member(context: PortalContextDep) -> PortalContext:
    if not context.has_access:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="No portal access",
        )
    return context


PortalMember = Annotated[PortalContext, Depends(require_portal_member)]


async def require_projects_access(context: PortalMember) -> PortalContext:
    if not context.can_see_projects:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Your role does not include projects",
        )
    return context


async def require_finances_access(context: PortalMember) -> PortalContext:
    if not context.can_see_finances:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Your role does not include finances",
        )
    return context


async def require_team_access(context: PortalMember) -> PortalContext:
    if not context.can_see_team:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only owners can see the team",
        )
    return context


ProjectsAccess = Annotated[PortalContext, Depends(require_projects_access)]
FinancesAccess = Annotated[PortalContext, Depends(require_finances_access)]
TeamAccess = Annotated[PortalContext, Depends(require_team_access)]
