"""Admin dashboard endpoints: provider config, clients and invites.

All routes require an admin user.
"""

from uuid import UUID

from fastapi import APIRouter, HTTPException, status

from src.buildor.api.dependencies import (
    AdminUser,
    AppConfigServiceDep,
    ClientServiceDep,
    InviteServiceDep,
)
from src.buildor.schemas.app_config import (
    ConfigEntriesResponse,
    ConfigImportRequest,
    ConfigImportResponse,
    ConfigSaveResponse,
    ConfigTransfer,
    ConfigUpdateRequest,
)
from src.buildor.schemas.client import (
    AdminStatsResponse,
    ClientCreateRequest,
    ClientListResponse,
    ClientRead,
)
from src.buildor.schemas.invite import (
    InviteCreateRequest,
    InviteCreateResponse,
    InviteListResponse,
    InviteRead,
)
from src.buildor.services.invite_service import to_invite_read

router = APIRouter(prefix="/admin", tags=["admin"])


# =============================================================================
# Provider configuration
# =============================================================================


@router.get("/config", response_model=ConfigEntriesResponse)
async def get_config(admin_user: AdminUser, service: AppConfigServiceDep) -> ConfigEntriesResponse:
    return ConfigEntriesResponse(entries=await service.get_all())


@router.put(
    "/config",
    response_model=ConfigSaveResponse,
    summary="Save config entries",
    description="Upsert key/value entries. Blank values are ignored.",
)
async def save_config(
    request: ConfigUpdateRequest,
    admin_user: AdminUser,
    service: AppConfigServiceDep,
) -> ConfigSaveResponse:
    try:
        saved = await service.save(request.entries)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    return ConfigSaveResponse(saved_keys=saved)


@router.get(
    "/config/export",
    response_model=ConfigTransfer,
    summary="Export config",
    description="Provider settings grouped for copying to another environment.",
)
async def export_config(admin_user: AdminUser, service: AppConfigServiceDep) -> ConfigTransfer:
    return await service.export()


@router.post(
    "/config/import",
    response_model=ConfigImportResponse,
    summary="Import config",
    description="Paste JSON produced by the export endpoint. Smart quotes are tolerated.",
)
async def import_config(
    request: ConfigImportRequest,
    admin_user: AdminUser,
    service: AppConfigServiceDep,
) -> ConfigImportResponse:
    try:
        groups, saved = await service.import_raw(request.raw)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    return ConfigImportResponse(imported_groups=groups, saved_keys=saved)


# =============================================================================
# Clients
# =============================================================================


@router.get("/clients", response_model=ClientListResponse)
async def list_clients(admin_user: AdminUser, service: ClientServiceDep) -> ClientListResponse:
    clients = await service.list_clients()
    return ClientListResponse(
        clients=[ClientRead.model_validate(c) for c in clients],
        total=len(clients),
    )


@router.post(
    "/clients",
    response_model=ClientRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create client",
)
async def create_client(
    request: ClientCreateRequest,
    admin_user: AdminUser,
    service: ClientServiceDep,
) -> ClientRead:
    client = await service.create_client(request, created_by=admin_user.id)
    return ClientRead.model_validate(client)


@router.get("/clients/{client_id}", response_model=ClientRead)
async def get_client(
    client_id: UUID,
    admin_user: AdminUser,
    service: ClientServiceDep,
) -> ClientRead:
    client = await service.get_client(client_id)
    if client is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Client not found",
        )
    return ClientRead.model_validate(client)


# =============================================================================
# Invites
# =============================================================================


@router.get("/clients/{client_id}/invites", response_model=InviteListResponse)
async def list_client_invites(
    client_id: UUID,
    admin_user: AdminUser,
    client_service: ClientServiceDep,
    invite_service: InviteServiceDep,
) -> InviteListResponse:
    if await client_service.get_client(client_id) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Client not found",
        )
    invites = await invite_service.list_for_client(client_id)
    return InviteListResponse(invites=invites, total=len(invites))


@router.post(
    "/clients/{client_id}/invites",
    response_model=InviteCreateResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Generate invite link",
    description="Create a single-use portal invite. Optionally email the link.",
)
async def create_client_invite(
    client_id: UUID,
    request: InviteCreateRequest,
    admin_user: AdminUser,
    invite_service: InviteServiceDep,
) -> InviteCreateResponse:
    try:
        invite, email_sent = await invite_service.create_invite(
            client_id=client_id,
            created_by=admin_user.id,
            role=request.role,
            email=request.email,
            send_email=request.send_email,
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    return InviteCreateResponse(**to_invite_read(invite).model_dump(), email_sent=email_sent)


@router.post("/invites/{invite_id}/revoke", response_model=InviteRead)
async def revoke_invite(
    invite_id: UUID,
    admin_user: AdminUser,
    invite_service: InviteServiceDep,
) -> InviteRead:
    """Revoke a pending invite."""
    try:
        invite = await invite_service.revoke(invite_id)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    return to_invite_read(invite)


@router.get("/stats", response_model=AdminStatsResponse)
async def get_stats(admin_user: AdminUser, service: ClientServiceDep) -> AdminStatsResponse:
    return await service.get_stats()
