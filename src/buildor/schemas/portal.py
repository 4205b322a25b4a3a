"""Client portal schemas."""

from datetime import date, datetime
from decimal import Decimal
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from src.buildor.schemas.client import ClientRead

MAX_MESSAGE_LENGTH = 4000

ProjectFilter = Literal["all", "active", "upcoming", "archived"]
ActivityType = Literal["project_update", "invoice_created", "invoice_paid", "member_joined"]


class MemberRead(BaseModel):
    id: UUID
    client_id: UUID
    user_id: UUID
    role: str
    status: str
    invite_id: UUID | None
    joined_at: datetime

    model_config = {"from_attributes": True}


class PortalContextResponse(BaseModel):
    """Who the caller is inside the portal and what they may see.

    A user without membership gets nulls and all flags false. A membership
    that exists but is not active is returned with `is_active` false.
    """

    client: ClientRead | None = None
    member: MemberRead | None = None
    role: str | None = None
    is_active: bool = False
    can_see_projects: bool = False
    can_see_finances: bool = False
    can_see_team: bool = False


class ProjectRead(BaseModel):
    id: UUID
    client_id: UUID
    name: str
    description: str | None
    status: str
    progress: int
    start_date: date | None
    due_date: date | None
    archive_url: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ProjectListResponse(BaseModel):
    projects: list[ProjectRead]
    total: int


class InvoiceRead(BaseModel):
    id: UUID
    client_id: UUID
    invoice_number: str
    status: str
    currency: str
    amount_total: Decimal
    issue_date: date
    due_date: date | None
    paid_at: datetime | None
    pdf_url: str | None
    notes: str | None
    created_at: datetime

    model_config = {"from_attributes": True}


class FinanceSummary(BaseModel):
    total: Decimal
    total_paid: Decimal
    outstanding: Decimal
    currency: str


class InvoiceListResponse(BaseModel):
    invoices: list[InvoiceRead]
    summary: FinanceSummary


class MemberWithProfile(BaseModel):
    """Active member flattened with profile fields."""

    id: UUID
    client_id: UUID
    user_id: UUID
    role: str
    status: str
    joined_at: datetime
    full_name: str | None = None
    avatar_url: str | None = None
    email: str | None = None


class TeamResponse(BaseModel):
    members: list[MemberWithProfile]
    total: int


class ActivityItem(BaseModel):
    id: str
    type: ActivityType
    label: str
    detail: str
    timestamp: datetime


class OverviewResponse(BaseModel):
    active_project_count: int
    pending_invoice_count: int
    member_count: int
    active_projects: list[ProjectRead]
    activity: list[ActivityItem]


class ProjectMessageCreate(BaseModel):
    content: str

    @field_validator("content")
    @classmethod
    def validate_content(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Message cannot be empty")
        if len(v) > MAX_MESSAGE_LENGTH:
            raise ValueError(f"Message must be at most {MAX_MESSAGE_LENGTH} characters")
        return v


class ProjectMessageRead(BaseModel):
    id: UUID
    project_id: UUID
    user_id: UUID
    content: str
    created_at: datetime
    full_name: str | None = None
    avatar_url: str | None = None


class ProjectMessageListResponse(BaseModel):
    messages: list[ProjectMessageRead] = Field(default_factory=list)
