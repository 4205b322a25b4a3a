"""Structured logging with structlog, routed through stdlib logging."""

import logging
import sys
from typing import Any
from uuid import UUID

import structlog
from structlog.contextvars import bind_contextvars, clear_contextvars

# Keys that carry provider credentials or session tokens
REDACTED_KEYS = frozenset(
    {
        "password",
        "access_token",
        "refresh_token",
        "client_secret",
        "paypal_client_secret",
        "anon_key",
        "supabase_anon_key",
        "authorization",
    }
)


def redact_secrets(
    logger: Any, method_name: str, event_dict: structlog.typing.EventDict
) -> structlog.typing.EventDict:
    """Mask credential values before an event is rendered."""
    for key in REDACTED_KEYS.intersection(event_dict):
        event_dict[key] = "***"
    return event_dict


def setup_logging(debug: bool = False) -> None:
    """Configure structlog.

    Args:
        debug: Coloured console output when True, one JSON object per line otherwise.
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=logging.DEBUG if debug else logging.INFO,
    )

    processors: list[structlog.typing.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        redact_secrets,
        structlog.processors.StackInfoRenderer(),
    ]
    if debug:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
    else:
        processors += [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer()]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    for noisy in ("sqlalchemy.engine", "httpx", "httpcore"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def bind_request_context(request_id: str | None) -> None:
    """Attach the correlation ID to every log line of the current request."""
    if request_id:
        bind_contextvars(request_id=request_id)


def bind_user_context(
    user_id: UUID,
    client_id: UUID | None = None,
    email: str | None = None,
) -> None:
    """Attach the signed-in user (and their portal client, when known).

    The email is only bound when ``log_user_emails`` is enabled.
    """
    from src.buildor.core.config import get_settings

    context: dict[str, str] = {"user_id": str(user_id)}
    if client_id is not None:
        context["client_id"] = str(client_id)
    if email and get_settings().log_user_emails:
        context["user_email"] = email
    bind_contextvars(**context)


def clear_request_context() -> None:
    clear_contextvars()
