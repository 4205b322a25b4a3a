"""Email client using Resend API."""

import html
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FuturesTimeoutError

import resend

from src.buildor.core.config import get_settings
from src.buildor.core.logging import get_logger

logger = get_logger(__name__)

# Resend's SDK is synchronous; a small pool lets us bound each send with a timeout
_email_executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix="email_sender")

_BODY_STYLE = (
    "font-family: Inter, -apple-system, BlinkMacSystemFont, 'Segoe UI', sans-serif; "
    "line-height: 1.6; color: #0f172a; max-width: 600px; margin: 0 auto; padding: 20px;"
)
_BUTTON_STYLE = (
    "background-color: #06b6d4; color: #0b1120; padding: 12px 24px; "
    "text-decoration: none; border-radius: 6px; display: inline-block; font-weight: 600;"
)
_LINK_STYLE = "color: #0891b2; word-break: break-all;"
_MUTED_STYLE = "color: #64748b; font-size: 14px;"


def send_invite_email(to: str, invite_url: str, client_name: str, role: str) -> bool:
    """Send a client-portal invite link.

    Args:
        to: Recipient email address
        invite_url: Full portal invite URL containing the token
        client_name: Name of the client workspace being joined
        role: Portal role granted by the invite

    Returns:
        True if the email was sent (or skipped because no API key is set), False on error
    """
    settings = get_settings()

    if not settings.resend_api_key:
        logger.warning("RESEND_API_KEY not set - invite email not sent", to=to)
        return True

    resend.api_key = settings.resend_api_key

    def _send() -> None:
        resend.Emails.send(
            {
                "from": settings.email_from,
                "to": [to],
                "subject": f"You're invited to the {client_name} portal",
                "html": _get_invite_email_html(client_name, role, invite_url),
            }
        )

    try:
        future = _email_executor.submit(_send)
        future.result(timeout=settings.email_send_timeout_seconds)
        logger.info("Invite email sent", to=to)
        return True
    except FuturesTimeoutError:
        logger.error("Email send timed out", to=to, timeout=settings.email_send_timeout_seconds)
        return False
    except Exception as e:
        logger.error("Failed to send invite email", to=to, error=str(e))
        return False


def _get_invite_email_html(client_name: str, role: str, invite_url: str) -> str:
    safe_client = html.escape(client_name)
    safe_role = html.escape(role)
    safe_url = html.escape(invite_url, quote=True)
    return f"""
<!DOCTYPE html>
<html>
<body style="{_BODY_STYLE}">
  <h2>Join the {safe_client} client portal</h2>
  <p>You have been invited as <strong>{safe_role}</strong>. The portal shows your
  projects, invoices and team in one place.</p>
  <p style="margin: 30px 0;">
    <a href="{safe_url}" style="{_BUTTON_STYLE}">Open the portal</a>
  </p>
  <p style="{_MUTED_STYLE}">Or copy this link into your browser:</p>
  <p><a href="{safe_url}" style="{_LINK_STYLE}">{safe_url}</a></p>
  <p style="{_MUTED_STYLE}">The link can be used once and expires in a few days.</p>
</body>
</html>
"""
