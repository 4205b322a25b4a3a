"""Notification utilities - email."""

from src.buildor.core.notifications.email import send_invite_email

__all__ = [
    "send_invite_email",
]
