"""Security utilities - Supabase token verification and response headers.

Re-exports all security-related names for convenience.
"""

from src.buildor.core.security.headers import SecurityHeadersMiddleware
from src.buildor.core.security.tokens import (
    DEV_USER_EMAIL,
    DEV_USER_ID,
    AuthUser,
    claims_to_user,
    create_dev_token,
    decode_access_token,
)

__all__ = [
    # Tokens
    "DEV_USER_EMAIL",
    "DEV_USER_ID",
    "AuthUser",
    "claims_to_user",
    "create_dev_token",
    "decode_access_token",
    # Headers
    "SecurityHeadersMiddleware",
]
