"""Repository factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.buildor.api.dependencies.db import DBSession
from src.buildor.repositories import (
    AppConfigRepository,
    ClientInviteRepository,
    ClientMemberRepository,
    ClientRepository,
    InvoiceRepository,
    ProfileRepository,
    ProjectMessageRepository,
    ProjectRepository,
)


def get_client_repository(session: DBSession) -> ClientRepository:
    return ClientRepository(session)


def get_member_repository(session: DBSession) -> ClientMemberRepository:
    return ClientMemberRepository(session)


def get_invite_repository(session: DBSession) -> ClientInviteRepository:
    return ClientInviteRepository(session)


def get_project_repository(session: DBSession) -> ProjectRepository:
    return ProjectRepository(session)


def get_invoice_repository(session: DBSession) -> InvoiceRepository:
    return InvoiceRepository(session)


def get_message_repository(session: DBSession) -> ProjectMessageRepository:
    return ProjectMessageRepository(session)


def get_profile_repository(session: DBSession) -> ProfileRepository:
    return ProfileRepository(session)


def get_app_config_repository(session: DBSession) -> AppConfigRepository:
    return AppConfigRepository(session)


ClientRepo = Annotated[ClientRepository, Depends(get_client_repository)]
MemberRepo = Annotated[ClientMemberRepository, Depends(get_member_repository)]
InviteRepo = Annotated[ClientInviteRepository, Depends(get_invite_repository)]
ProjectRepo = Annotated[ProjectRepository, Depends(get_project_repository)]
InvoiceRepo = Annotated[InvoiceRepository, Depends(get_invoice_repository)]
MessageRepo = Annotated[ProjectMessageRepository, Depends(get_message_repository)]
ProfileRepo = Annotated[ProfileRepository, Depends(get_profile_repository)]
AppConfigRepo = Annotated[AppConfigRepository, Depends(get_app_config_repository)]
