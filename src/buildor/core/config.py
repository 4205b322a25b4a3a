from functools import lru_cache
from urllib.parse import urlparse

from pydantic import ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    app_name: str = "Buildor Portal API"
    app_env: str = "development"  # development, testing, production
    debug: bool = False
    enable_openapi: bool = True

    # Security
    log_user_emails: bool = False  # Keep off in production for GDPR compliance
    allowed_app_url_domains: list[str] = ["localhost", "127.0.0.1"]
    csp_production: str = "default-src 'self'; frame-ancestors 'none'"

    # Database (Supabase Postgres)
    database_url: str
    database_pool_size: int = 5
    database_max_overflow: int = 10
    database_ssl_mode: str = "prefer"  # disable, prefer, require, verify-ca, verify-full
    # The Supabase transaction pooler (pgbouncer) does not support prepared statements
    database_statement_cache_size: int = 0

    # Shutdown
    shutdown_grace_period: int = 30

    # Supabase Auth
    supabase_url: str | None = None
    supabase_anon_key: str | None = None
    supabase_jwt_secret: str
    supabase_jwt_audience: str = "authenticated"
    jwt_algorithm: str = "HS256"
    auth_http_timeout_seconds: float = 10.0
    dev_login_enabled: bool = True  # Only honoured when app_env == "development"
    dev_token_expire_minutes: int = 60

    # Admin access
    admin_emails: list[str] = []
    admin_providers: list[str] = []  # e.g. ["google", "github"]

    @field_validator("supabase_jwt_secret")
    @classmethod
    def validate_jwt_secret(cls, v: str) -> str:
        if v == "change-this-to-your-supabase-jwt-secret":
            raise ValueError(
                "SUPABASE_JWT_SECRET must be changed from default value. "
                "Copy it from Supabase: Project Settings -> API -> JWT Secret"
            )
        if len(v) < 32:
            raise ValueError("SUPABASE_JWT_SECRET must be at least 32 characters")
        return v

    @field_validator("admin_emails")
    @classmethod
    def normalize_admin_emails(cls, v: list[str]) -> list[str]:
        return [email.strip().lower() for email in v if email.strip()]

    @field_validator("cors_origins")
    @classmethod
    def validate_cors_origins(cls, v: list[str]) -> list[str]:
        """Validate CORS origins - reject wildcards when credentials are used."""
        for origin in v:
            if origin == "*":
                raise ValueError(
                    "CORS wildcard '*' is not allowed when allow_credentials=True. "
                    "Specify explicit origins instead."
                )
        return v

    @field_validator("app_url")
    @classmethod
    def validate_app_url(cls, v: str, info: ValidationInfo) -> str:
        """Validate APP_URL is from allowed domain list (it is embedded in invite links)."""
        allowed = info.data.get("allowed_app_url_domains", ["localhost", "127.0.0.1"])
        parsed = urlparse(v)
        hostname = parsed.hostname or ""

        if not any(hostname == domain or hostname.endswith(f".{domain}") for domain in allowed):
            raise ValueError(
                f"APP_URL domain '{hostname}' not in allowed list. "
                f"Add it to ALLOWED_APP_URL_DOMAINS or use: {allowed}"
            )
        return v.rstrip("/")

    # PayPal (credentials themselves live in the app_config table)
    paypal_sandbox_base_url: str = "https://api-m.sandbox.paypal.com"
    paypal_live_base_url: str = "https://api-m.paypal.com"
    paypal_http_timeout_seconds: float = 15.0

    # Checkout product
    checkout_product_name: str = "Buildor Test"
    checkout_product_description: str = "Test payment - $2.00"
    checkout_product_price: str = "2.00"
    checkout_product_currency: str = "USD"

    # CORS
    cors_origins: list[str] = ["http://localhost:3027"]

    # Metrics
    metrics_api_key: str | None = None  # If set, /metrics requires this key

    # Email (Resend)
    resend_api_key: str | None = None  # If not set, emails are logged but not sent
    email_from: str = "noreply@example.com"
    email_send_timeout_seconds: int = 10
    app_url: str = "http://localhost:3027"  # Frontend URL for invite and OAuth links

    # Invites
    invite_expire_days: int = 7

    # Redis (optional - app works without it)
    redis_url: str | None = None
    redis_pool_size: int = 10

    # Rate Limiting (global middleware - DoS protection)
    global_rate_limit_per_second: int = 10
    global_rate_limit_burst: int = 20

    @property
    def is_development(self) -> bool:
        return self.app_env == "development"


@lru_cache
def get_settings() -> Settings:
    return Settings()
