"""Public profile of an auth user, maintained by Supabase triggers."""

from uuid import UUID

from sqlmodel import Field, SQLModel


class Profile(SQLModel, table=True):
    __tablename__ = "profiles"

    id: UUID = Field(primary_key=True)  # Same as auth.users.id
    full_name: str | None = Field(default=None, max_length=200)
    avatar_url: str | None = Field(default=None, max_length=1000)
    email: str | None = Field(default=None, max_length=255)
