"""Public invite endpoints: resolve a token, accept it after sign-in."""

from fastapi import APIRouter, HTTPException, status

from src.buildor.api.dependencies import CurrentUser, InviteServiceDep
from src.buildor.schemas.invite import InviteResolutionResponse
from src.buildor.schemas.portal import PortalContextResponse
from src.buildor.services.portal_service import PortalContext

router = APIRouter(prefix="/invites", tags=["invites"])


@router.get(
    "/{token}",
    response_model=InviteResolutionResponse,
    summary="Resolve invite",
    description=(
        "Look up an invite token without signing in. Always 200; the status field "
        "tells valid, invalid, expired, already-accepted and revoked apart."
    ),
)
async def resolve_invite(token: str, invite_service: InviteServiceDep) -> InviteResolutionResponse:
    resolution = await invite_service.resolve(token)
    return InviteResolutionResponse(
        status=resolution.status,  # type: ignore[arg-type]
        invite=resolution.details(),
    )


@router.post(
    "/{token}/accept",
    response_model=PortalContextResponse,
    summary="Accept invite",
    description="Join the invite's client portal as the signed-in user.",
)
async def accept_invite(
    token: str,
    current_user: CurrentUser,
    invite_service: InviteServiceDep,
) -> PortalContextResponse:
    try:
        client, membership = await invite_service.accept(token, current_user.id)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        ) from e
    return PortalContext(client=client, member=membership).to_response()
