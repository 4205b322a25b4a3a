"""Client schemas (admin view)."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator


class ClientCreateRequest(BaseModel):
    name: str = Field(max_length=200)
    email: str = Field(max_length=255)
    company: str | None = Field(default=None, max_length=200)
    notes: str | None = None

    @field_validator("name", "email")
    @classmethod
    def strip_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Field is required")
        return v

    @field_validator("company", "notes")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = v.strip()
        return v or None


class ClientRead(BaseModel):
    id: UUID
    name: str
    company: str | None
    email: str
    logo_url: str | None
    notes: str | None
    created_by: UUID | None
    created_at: datetime

    model_config = {"from_attributes": True}


class ClientListResponse(BaseModel):
    clients: list[ClientRead]
    total: int


class AdminStatsResponse(BaseModel):
    """Headline numbers for the admin dashboard."""

    client_count: int
    pending_invite_count: int
    accepted_invite_count: int
