"""Repository for AppConfig key/value rows."""

from sqlmodel import select

from src.buildor.models import AppConfig
from src.buildor.models.base import utc_now
from src.buildor.repositories.base import BaseRepository


class AppConfigRepository(BaseRepository[AppConfig]):
    model = AppConfig

    async def get_all(self) -> dict[str, str]:
        """Return every row as a key/value mapping."""
        result = await self.session.execute(select(AppConfig))
        return {
            row.key: row.value
            for row in result.scalars().all()
            if row.key and row.value is not None
        }

    async def get_values(self, keys: list[str]) -> dict[str, str]:
        """Return the stored values for the given keys; missing keys are omitted."""
        result = await self.session.execute(
            select(AppConfig).where(AppConfig.key.in_(keys))  # type: ignore[attr-defined]
        )
        return {row.key: row.value for row in result.scalars().all() if row.value is not None}

    async def upsert_many(self, entries: dict[str, str]) -> None:
        """Insert or update rows by key (adds to session and flushes, no commit)."""
        now = utc_now()
        for key, value in entries.items():
            row = await self.session.get(AppConfig, key)
            if row is None:
                row = AppConfig(key=key, value=value, updated_at=now)
            else:
                row.value = value
                row.updated_at = now
            self.session.add(row)
        await self.session.flush()
