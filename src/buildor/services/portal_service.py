"""Client portal service: membership resolution, permissions and dashboards.

Queries run sequentially on the request's session; an AsyncSession must not be
shared between concurrent tasks.
"""

from dataclasses import dataclass
from decimal import Decimal
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.buildor.core.logging import get_logger
from src.buildor.models import (
    Client,
    ClientMember,
    Invoice,
    InvoiceStatus,
    MemberRole,
    MemberStatus,
    Profile,
    Project,
    ProjectStatus,
)
from src.buildor.models.base import as_utc
from src.buildor.repositories import (
    ClientMemberRepository,
    ClientRepository,
    InvoiceRepository,
    ProjectRepository,
)
from src.buildor.schemas.client import ClientRead
from src.buildor.schemas.portal import (
    ActivityItem,
    FinanceSummary,
    MemberRead,
    MemberWithProfile,
    OverviewResponse,
    PortalContextResponse,
    ProjectRead,
)

logger = get_logger(__name__)

ACTIVITY_LIMIT = 10
DEFAULT_CURRENCY = "USD"

PROJECT_ROLES = frozenset({MemberRole.OWNER.value, MemberRole.CONTRIBUTOR.value})
FINANCE_ROLES = frozenset({MemberRole.OWNER.value, MemberRole.ACCOUNTANT.value})
TEAM_ROLES = frozenset({MemberRole.OWNER.value})

PENDING_INVOICE_STATUSES = frozenset({InvoiceStatus.PENDING.value, InvoiceStatus.OVERDUE.value})


class PortalDataError(LookupError):
    """A membership points at a client row that cannot be loaded."""


@dataclass(frozen=True)
class PortalContext:
    """The caller's place in the portal. Empty when they have no membership.

    A membership that is no longer active keeps its row but grants nothing.
    """

    client: Client | None = None
    member: ClientMember | None = None

    @property
    def is_active(self) -> bool:
        return self.member is not None and self.member.status == MemberStatus.ACTIVE.value

    @property
    def role(self) -> str | None:
        return self.member.role if self.is_active else None

    @property
    def client_id(self) -> UUID:
        if self.client is None:
            raise LookupError("No portal access")
        return self.client.id

    @property
    def has_access(self) -> bool:
        return self.client is not None and self.is_active

    @property
    def can_see_projects(self) -> bool:
        return self.role in PROJECT_ROLES

    @property
    def can_see_finances(self) -> bool:
        return self.role in FINANCE_ROLES

    @property
    def can_see_team(self) -> bool:
        return self.role in TEAM_ROLES

    def to_response(self) -> PortalContextResponse:
        return PortalContextResponse(
            client=ClientRead.model_validate(self.client) if self.client else None,
            member=MemberRead.model_validate(self.member) if self.member else None,
            role=self.role,
            is_active=self.is_active,
            can_see_projects=self.can_see_projects,
            can_see_finances=self.can_see_finances,
            can_see_team=self.can_see_team,
        )


def filter_projects(projects: list[Project], project_filter: str) -> list[Project]:
    """Apply a portal tab filter. `all` hides archived projects."""
    if project_filter == "all":
        return [p for p in projects if p.status != ProjectStatus.ARCHIVED.value]
    return [p for p in projects if p.status == project_filter]


def summarize_invoices(invoices: list[Invoice]) -> FinanceSummary:
    total = sum((inv.amount_total for inv in invoices), Decimal("0"))
    paid = sum(
        (inv.amount_total for inv in invoices if inv.status == InvoiceStatus.PAID.value),
        Decimal("0"),
    )
    currency = invoices[0].currency if invoices else DEFAULT_CURRENCY
    return FinanceSummary(total=total, total_paid=paid, outstanding=total - paid, currency=currency)


def flatten_member(member: ClientMember, profile: Profile | None) -> MemberWithProfile:
    return MemberWithProfile(
        id=member.id,
        client_id=member.client_id,
        user_id=member.user_id,
        role=member.role,
        status=member.status,
        joined_at=member.joined_at,
        full_name=profile.full_name if profile else None,
        avatar_url=profile.avatar_url if profile else None,
        email=profile.email if profile else None,
    )


def derive_activity(
    projects: list[Project],
    invoices: list[Invoice],
    members: list[MemberWithProfile],
) -> list[ActivityItem]:
    """Build the overview feed from the latest projects, invoices and members.

    Inputs are expected in display order (projects by last update, invoices by
    issue date). Takes the first 5 projects, 5 invoices and 3 members, then
    returns the newest 10 items.
    """
    items: list[ActivityItem] = []

    for project in projects[:5]:
        items.append(
            ActivityItem(
                id=f"proj-{project.id}",
                type="project_update",
                label=project.name,
                detail=f"{project.status} · {project.progress}% complete",
                timestamp=project.updated_at,
            )
        )

    for invoice in invoices[:5]:
        is_paid = invoice.status == InvoiceStatus.PAID.value
        items.append(
            ActivityItem(
                id=f"inv-{invoice.id}",
                type="invoice_paid" if is_paid else "invoice_created",
                label=f"Invoice {invoice.invoice_number}",
                detail=f"{invoice.currency} {invoice.amount_total:.2f} · {invoice.status}",
                timestamp=invoice.created_at,
            )
        )

    for member in members[:3]:
        items.append(
            ActivityItem(
                id=f"mem-{member.id}",
                type="member_joined",
                label=member.full_name or member.email or "Team member",
                detail=f"joined as {member.role}",
                timestamp=member.joined_at,
            )
        )

    items.sort(key=lambda item: as_utc(item.timestamp), reverse=True)
    return items[:ACTIVITY_LIMIT]


class PortalService:
    """Read side of the client portal."""

    def __init__(
        self,
        client_repo: ClientRepository,
        member_repo: ClientMemberRepository,
        project_repo: ProjectRepository,
        invoice_repo: InvoiceRepository,
        session: AsyncSession,
    ):
        self.client_repo = client_repo
        self.member_repo = member_repo
        self.project_repo = project_repo
        self.invoice_repo = invoice_repo
        self.session = session

    async def resolve_membership(self, user_id: UUID) -> PortalContext:
        """Find the user's active membership and its client.

        Raises:
            PortalDataError: If the membership's client row is missing.
        """
        member = await self.member_repo.get_first_active_for_user(user_id)
        if member is None:
            return PortalContext()

        client = await self.client_repo.get_by_id(member.client_id)
        if client is None:
            logger.error(
                "Membership references missing client",
                member_id=str(member.id),
                client_id=str(member.client_id),
            )
            raise PortalDataError("Failed to load client data")

        return PortalContext(client=client, member=member)

    async def list_projects(self, client_id: UUID, project_filter: str = "all") -> list[Project]:
        projects = await self.project_repo.list_by_client(client_id)
        return filter_projects(projects, project_filter)

    async def list_invoices(self, client_id: UUID) -> tuple[list[Invoice], FinanceSummary]:
        invoices = await self.invoice_repo.list_by_client(client_id)
        return invoices, summarize_invoices(invoices)

    async def list_team(self, client_id: UUID) -> list[MemberWithProfile]:
        rows = await self.member_repo.list_active_with_profiles(client_id)
        return [flatten_member(member, profile) for member, profile in rows]

    async def get_overview(self, client_id: UUID) -> OverviewResponse:
        projects = await self.project_repo.list_by_client(client_id)
        invoices = await self.invoice_repo.list_by_client(client_id)
        members = await self.list_team(client_id)

        active_projects = [p for p in projects if p.status == ProjectStatus.ACTIVE.value]
        pending_invoices = [i for i in invoices if i.status in PENDING_INVOICE_STATUSES]

        return OverviewResponse(
            active_project_count=len(active_projects),
            pending_invoice_count=len(pending_invoices),
            member_count=len(members),
            active_projects=[ProjectRead.model_validate(p) for p in active_projects],
            activity=derive_activity(projects, invoices, members),
        )
