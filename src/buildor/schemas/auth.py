from uuid import UUID

from pydantic import BaseModel, Field, field_validator
from zxcvbn import zxcvbn

# Minimum zxcvbn score (0-4 scale): 2 = "somewhat guessable", matching Supabase defaults
MIN_PASSWORD_SCORE = 2


class LoginRequest(BaseModel):
    # Blank values are reported by the service with a friendly message, not a 422
    email: str = ""
    password: str = ""

    @field_validator("email")
    @classmethod
    def strip_email(cls, v: str) -> str:
        return v.strip()


class SignupRequest(LoginRequest):
    @field_validator("password")
    @classmethod
    def validate_password_strength(cls, v: str) -> str:
        """Validate password strength using zxcvbn entropy estimation."""
        if not v:
            return v

        result = zxcvbn(v)
        if result["score"] < MIN_PASSWORD_SCORE:
            feedback = result.get("feedback", {})
            warning = feedback.get("warning", "")
            suggestions = feedback.get("suggestions", [])

            if warning:
                raise ValueError(f"Weak password: {warning}")
            elif suggestions:
                raise ValueError(f"Weak password: {suggestions[0]}")
            else:
                raise ValueError(
                    "Password is too weak. Use a longer password with a mix of characters."
                )

        return v


class RefreshRequest(BaseModel):
    refresh_token: str = Field(min_length=1)


class SessionUser(BaseModel):
    id: UUID
    email: str
    display_name: str | None = None
    avatar_url: str | None = None
    provider: str | None = None


class SessionResponse(BaseModel):
    """A hosted-auth session as handed to the frontend."""

    access_token: str
    refresh_token: str | None = None
    token_type: str = "bearer"
    expires_in: int | None = None
    user: SessionUser | None = None


class SignupResponse(BaseModel):
    session: SessionResponse | None = None
    confirmation_required: bool = False


class OAuthUrlResponse(BaseModel):
    provider: str
    url: str


class CurrentUserResponse(SessionUser):
    is_admin: bool = False


class MessageResponse(BaseModel):
    message: str
