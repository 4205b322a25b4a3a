"""Service factory dependencies."""

from typing import Annotated

import httpx
from fastapi import Depends

from src.buildor.api.dependencies.db import DBSession
from src.buildor.api.dependencies.repositories import (
    AppConfigRepo,
    ClientRepo,
    InviteRepo,
    InvoiceRepo,
    MemberRepo,
    MessageRepo,
    ProfileRepo,
    ProjectRepo,
)
from src.buildor.services import (
    AppConfigService,
    AuthService,
    ClientService,
    InviteService,
    MessageService,
    PayPalService,
    PortalService,
)


def get_http_transport() -> httpx.AsyncBaseTransport | None:
    """Transport for outbound provider calls. None uses httpx's default network transport."""
    return None


HTTPTransport = Annotated[httpx.AsyncBaseTransport | None, Depends(get_http_transport)]


def get_auth_service(config_repo: AppConfigRepo, transport: HTTPTransport) -> AuthService:
    return AuthService(config_repo, transport)


def get_portal_service(
    client_repo: ClientRepo,
    member_repo: MemberRepo,
    project_repo: ProjectRepo,
    invoice_repo: InvoiceRepo,
    session: DBSession,
) -> PortalService:
    return PortalService(client_repo, member_repo, project_repo, invoice_repo, session)


def get_message_service(
    project_repo: ProjectRepo,
    message_repo: MessageRepo,
    profile_repo: ProfileRepo,
    session: DBSession,
) -> MessageService:
    return MessageService(project_repo, message_repo, profile_repo, session)


def get_invite_service(
    invite_repo: InviteRepo,
    client_repo: ClientRepo,
    member_repo: MemberRepo,
    session: DBSession,
) -> InviteService:
    return InviteService(invite_repo, client_repo, member_repo, session)


def get_client_service(
    client_repo: ClientRepo,
    invite_repo: InviteRepo,
    session: DBSession,
) -> ClientService:
    return ClientService(client_repo, invite_repo, session)


def get_app_config_service(config_repo: AppConfigRepo, session: DBSession) -> AppConfigService:
    return AppConfigService(config_repo, session)


def get_paypal_service(config_repo: AppConfigRepo, transport: HTTPTransport) -> PayPalService:
    return PayPalService(config_repo, transport)


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
PortalServiceDep = Annotated[PortalService, Depends(get_portal_service)]
MessageServiceDep = Annotated[MessageService, Depends(get_message_service)]
InviteServiceDep = Annotated[InviteService, Depends(get_invite_service)]
ClientServiceDep = Annotated[ClientService, Depends(get_client_service)]
AppConfigServiceDep = Annotated[AppConfigService, Depends(get_app_config_service)]
PayPalServiceDep = Annotated[PayPalService, Depends(get_paypal_service)]
