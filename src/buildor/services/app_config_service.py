"""Admin-editable configuration stored in the app_config table.

Holds provider credentials (Supabase, Google, GitHub, PayPal) and converts
between flat rows and the grouped JSON transfer format used to copy settings
between environments.
"""

import json
import re
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from src.buildor.core.logging import get_logger
from src.buildor.repositories import AppConfigRepository
from src.buildor.schemas.app_config import (
    ConfigTransfer,
    OAuthTransfer,
    PayPalTransfer,
    SupabaseTransfer,
)

logger = get_logger(__name__)

CONFIG_KEY_PATTERN = re.compile(r"^[a-z][a-z0-9_]{0,63}$")

# Invisible characters that sneak in when JSON is copied out of chat apps or documents
_INVISIBLE_CHARS = re.compile("[\u200b\u200c\u200d\u202a-\u202e]")
_SMART_DOUBLE_QUOTES = re.compile("[\u201c\u201d\u201e\u201f\u2033]")
_SMART_SINGLE_QUOTES = re.compile("[\u2018\u2019\u201a\u201b\u2032]")


def normalize_paypal_mode(mode: Any) -> str:
    return "live" if mode == "live" else "sandbox"


def sanitize_import_text(raw: str) -> str:
    """Undo the damage rich-text editors do to pasted JSON."""
    text = raw.removeprefix("\ufeff")
    text = _INVISIBLE_CHARS.sub("", text)
    text = _SMART_DOUBLE_QUOTES.sub('"', text)
    text = _SMART_SINGLE_QUOTES.sub("'", text)
    return text.strip()


def _as_text(value: Any) -> str:
    return "" if value is None else str(value)


def transfer_to_entries(data: dict[str, Any]) -> tuple[list[str], dict[str, str]]:
    """Map a parsed transfer payload to app_config entries.

    Supabase is taken only when both url and anon key are present; the other
    groups are taken whenever present.

    Returns (imported_groups, entries).
    """
    groups: list[str] = []
    entries: dict[str, str] = {}

    supabase = data.get("supabase")
    if isinstance(supabase, dict):
        url = supabase.get("url")
        anon_key = supabase.get("anonKey") or supabase.get("anon_key")
        if url and anon_key:
            groups.append("supabase")
            entries["supabase_url"] = _as_text(url)
            entries["supabase_anon_key"] = _as_text(anon_key)

    for provider in ("google", "github"):
        group = data.get(provider)
        if isinstance(group, dict):
            groups.append(provider)
            entries[f"{provider}_client_id"] = _as_text(group.get("clientId"))
            entries[f"{provider}_client_secret"] = _as_text(group.get("clientSecret"))

    paypal = data.get("paypal")
    if isinstance(paypal, dict):
        groups.append("paypal")
        entries["paypal_client_id"] = _as_text(paypal.get("clientId"))
        entries["paypal_client_secret"] = _as_text(paypal.get("clientSecret"))
        entries["paypal_mode"] = normalize_paypal_mode(paypal.get("mode"))

    return groups, entries


class AppConfigService:
    def __init__(self, config_repo: AppConfigRepository, session: AsyncSession):
        self.config_repo = config_repo
        self.session = session

    async def get_all(self) -> dict[str, str]:
        return await self.config_repo.get_all()

    async def save(self, entries: dict[str, str | None]) -> list[str]:
        """Upsert entries by key. Blank values are skipped, values are trimmed.

        Returns:
            The keys that were written.

        Raises:
            ValueError: If a key is not a lowercase identifier.
        """
        for key in entries:
            if not CONFIG_KEY_PATTERN.match(key):
                raise ValueError(f"Invalid config key: {key}")

        rows = {
            key: str(value).strip()
            for key, value in entries.items()
            if value is not None and str(value).strip()
        }
        if not rows:
            return []

        try:
            await self.config_repo.upsert_many(rows)
            await self.session.commit()
        except Exception as e:
            await self.session.rollback()
            logger.error("Failed to save app config", error=str(e))
            raise

        logger.info("App config saved", keys=sorted(rows))
        return sorted(rows)

    async def export(self) -> ConfigTransfer:
        stored = await self.config_repo.get_all()
        return ConfigTransfer(
            supabase=SupabaseTransfer(
                url=stored.get("supabase_url", ""),
                anon_key=stored.get("supabase_anon_key", ""),
            ),
            google=OAuthTransfer(
                client_id=stored.get("google_client_id", ""),
                client_secret=stored.get("google_client_secret", ""),
            ),
            github=OAuthTransfer(
                client_id=stored.get("github_client_id", ""),
                client_secret=stored.get("github_client_secret", ""),
            ),
            paypal=PayPalTransfer(
                client_id=stored.get("paypal_client_id", ""),
                client_secret=stored.get("paypal_client_secret", ""),
                mode=normalize_paypal_mode(stored.get("paypal_mode")),  # type: ignore[arg-type]
            ),
        )

    async def import_raw(self, raw: str) -> tuple[list[str], list[str]]:
        """Parse pasted transfer JSON and save it.

        Returns (imported_groups, saved_keys).

        Raises:
            ValueError: With a user-facing message for empty or malformed input.
        """
        text = sanitize_import_text(raw)
        if not text:
            raise ValueError("Paste the JSON first.")

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ValueError(str(e)) from e

        if not isinstance(data, dict):
            raise ValueError("Expected a JSON object")

        groups, entries = transfer_to_entries(data)
        saved = await self.save(entries)
        logger.info("App config imported", groups=groups)
        return groups, saved
