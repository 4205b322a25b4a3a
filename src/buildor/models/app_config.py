"""Key/value configuration edited from the admin dashboard."""

from datetime import datetime

from sqlmodel import Field, SQLModel

from src.buildor.models.base import utc_now


class AppConfig(SQLModel, table=True):
    """Single source of truth for provider credentials (Supabase, OAuth, PayPal)."""

    __tablename__ = "app_config"

    key: str = Field(primary_key=True, max_length=64)
    value: str
    updated_at: datetime = Field(default_factory=utc_now)
