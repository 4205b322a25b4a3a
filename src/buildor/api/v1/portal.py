"""Client portal endpoints.

Every route is scoped to the caller's own client; permissions follow the
member role (owner, contributor, accountant).
"""

from uuid import UUID

from fastapi import APIRouter, HTTPException, status

from src.buildor.api.dependencies import (
    CurrentUser,
    FinancesAccess,
    MessageServiceDep,
    PortalContextDep,
    PortalMember,
    PortalServiceDep,
    ProjectsAccess,
    TeamAccess,
)
from src.buildor.schemas.portal import (
    InvoiceListResponse,
    InvoiceRead,
    OverviewResponse,
    PortalContextResponse,
    ProjectFilter,
    ProjectListResponse,
    ProjectMessageCreate,
    ProjectMessageListResponse,
    ProjectMessageRead,
    ProjectRead,
    TeamResponse,
)

router = APIRouter(prefix="/portal", tags=["portal"])


@router.get(
    "/me",
    response_model=PortalContextResponse,
    summary="Portal context",
    description="The caller's client, membership, role and permission flags.",
)
async def get_context(context: PortalContextDep) -> PortalContextResponse:
    return context.to_response()


@router.get("/overview", response_model=OverviewResponse)
async def get_overview(context: PortalMember, service: PortalServiceDep) -> OverviewResponse:
    """Dashboard counts, active projects and the recent activity feed."""
    return await service.get_overview(context.client_id)


@router.get("/projects", response_model=ProjectListResponse)
async def list_projects(
    context: ProjectsAccess,
    service: PortalServiceDep,
    filter: ProjectFilter = "all",
) -> ProjectListResponse:
    projects = await service.list_projects(context.client_id, filter)
    return ProjectListResponse(
        projects=[ProjectRead.model_validate(p) for p in projects],
        total=len(projects),
    )


@router.get("/invoices", response_model=InvoiceListResponse)
async def list_invoices(context: FinancesAccess, service: PortalServiceDep) -> InvoiceListResponse:
    invoices, summary = await service.list_invoices(context.client_id)
    return InvoiceListResponse(
        invoices=[InvoiceRead.model_validate(inv) for inv in invoices],
        summary=summary,
    )


@router.get("/team", response_model=TeamResponse)
async def list_team(context: TeamAccess, service: PortalServiceDep) -> TeamResponse:
    members = await service.list_team(context.client_id)
    return TeamResponse(members=members, total=len(members))


@router.get(
    "/projects/{project_id}/messages",
    response_model=ProjectMessageListResponse,
    summary="List project messages",
)
async def list_messages(
    project_id: UUID,
    context: ProjectsAccess,
    service: MessageServiceDep,
) -> ProjectMessageListResponse:
    try:
        messages = await service.list_messages(project_id, context.client_id)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    return ProjectMessageListResponse(messages=messages)


@router.post(
    "/projects/{project_id}/messages",
    response_model=ProjectMessageRead,
    status_code=status.HTTP_201_CREATED,
    summary="Post project message",
)
async def post_message(
    project_id: UUID,
    message: ProjectMessageCreate,
    current_user: CurrentUser,
    context: ProjectsAccess,
    service: MessageServiceDep,
) -> ProjectMessageRead:
    try:
        return await service.post_message(
            project_id=project_id,
            client_id=context.client_id,
            user_id=current_user.id,
            content=message.content,
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
