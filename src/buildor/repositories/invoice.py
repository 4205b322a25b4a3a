"""Repository for Invoice entity."""

from uuid import UUID

from sqlmodel import select

from src.buildor.models import Invoice
from src.buildor.repositories.base import BaseRepository


class InvoiceRepository(BaseRepository[Invoice]):
    model = Invoice

    async def list_by_client(self, client_id: UUID) -> list[Invoice]:
        """List a client's invoices, latest issue date first."""
        result = await self.session.execute(
            select(Invoice)
            .where(Invoice.client_id == client_id)
            .order_by(Invoice.issue_date.desc())  # type: ignore[attr-defined]
        )
        return list(result.scalars().all())
