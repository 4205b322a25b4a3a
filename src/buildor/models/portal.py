"""Tenant-scoped records shown in the client portal."""

from datetime import date, datetime
from decimal import Decimal
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel

from src.buildor.models.base import utc_now
from src.buildor.models.enums import InvoiceStatus, ProjectStatus


class Project(SQLModel, table=True):
    __tablename__ = "projects"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    client_id: UUID = Field(foreign_key="clients.id", index=True)
    name: str = Field(max_length=200)
    description: str | None = Field(default=None)
    status: str = Field(default=ProjectStatus.UPCOMING.value, max_length=20)
    progress: int = Field(default=0, ge=0, le=100)
    start_date: date | None = Field(default=None)
    due_date: date | None = Field(default=None)
    archive_url: str | None = Field(default=None, max_length=1000)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now, index=True)


class Invoice(SQLModel, table=True):
    __tablename__ = "invoices"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    client_id: UUID = Field(foreign_key="clients.id", index=True)
    invoice_number: str = Field(max_length=50)
    status: str = Field(default=InvoiceStatus.DRAFT.value, max_length=20)
    currency: str = Field(default="USD", max_length=3)
    amount_total: Decimal = Field(default=Decimal("0.00"), max_digits=12, decimal_places=2)
    issue_date: date
    due_date: date | None = Field(default=None)
    paid_at: datetime | None = Field(default=None)
    pdf_url: str | None = Field(default=None, max_length=1000)
    notes: str | None = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now)


class ProjectMessage(SQLModel, table=True):
    """A chat message on a project thread."""

    __tablename__ = "project_messages"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    project_id: UUID = Field(foreign_key="projects.id", index=True)
    client_id: UUID = Field(foreign_key="clients.id")
    user_id: UUID
    content: str
    created_at: datetime = Field(default_factory=utc_now)
