"""Tests for request-scoped structured logging context."""

from uuid import uuid4

import pytest
from structlog.contextvars import get_contextvars
from structlog.testing import capture_logs

from src.buildor.core.logging import (
    bind_request_context,
    bind_user_context,
    clear_request_context,
    get_logger,
    redact_secrets,
)

pytestmark = pytest.mark.unit


@pytest.fixture(autouse=True)
def _clean_context():
    clear_request_context()
    yield
    clear_request_context()


def test_bind_request_context():
    bind_request_context("req-123")
    assert get_contextvars()["request_id"] == "req-123"


def test_bind_request_context_ignores_missing_id():
    bind_request_context(None)
    assert "request_id" not in get_contextvars()


def test_bind_user_context_with_client():
    user_id, client_id = uuid4(), uuid4()

    bind_user_context(user_id, client_id, email="dana@example.com")

    context = get_contextvars()
    assert context["user_id"] == str(user_id)
    assert context["client_id"] == str(client_id)
    assert "user_email" not in context


def test_user_email_logged_only_when_enabled(settings, monkeypatch):
    monkeypatch.setattr(settings, "log_user_emails", True)

    bind_user_context(uuid4(), email="dana@example.com")

    assert get_contextvars()["user_email"] == "dana@example.com"


def test_clear_request_context():
    bind_request_context("req-123")
    clear_request_context()
    assert get_contextvars() == {}


def test_logger_emits_structured_events():
    with capture_logs() as logs:
        get_logger("test").info("Invite accepted", invite_id="abc")

    assert logs == [{"event": "Invite accepted", "invite_id": "abc", "log_level": "info"}]


def test_redact_secrets_masks_credentials():
    event = {"event": "PayPal token requested", "client_secret": "pp-secret", "mode": "sandbox"}

    result = redact_secrets(None, "info", event)

    assert result["client_secret"] == "***"
    assert result["mode"] == "sandbox"
