"""SQL-backed invoice number generator."""

from sqlmodel import select, func
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.services.invoice_number_generator import InvoiceNumberGenerator
from src.domain.invoice import Invoice

DEFAULT_PREFIX = "INV-"


class SqlInvoiceNumberGenerator(InvoiceNumberGenerator):
    """
    Next number = highest issued number for the tenant + 1

    Numbers are zero padded to at least 6 digits. A longer number is always
    the larger one, so ordering by length and then text gives numeric order
    past INV-999999 as well. The unique (tenant_id, invoice_number) index rejects a
    duplicate if two issues race.
    """

    def __init__(self, session: AsyncSession, prefix: str = DEFAULT_PREFIX):
        self.session = session
        self.prefix = prefix

    async def next_number(self, tenant_id: str) -> str:
        statement = (
            select(Invoice.invoice_number)
            .where(Invoice.tenant_id == tenant_id)
            .where(Invoice.invoice_number.like(f"{self.prefix}%"))
            .order_by(
                func.length(Invoice.invoice_number).desc(),
                Invoice.invoice_number.desc(),
            )
            .limit(1)
        )
        result = await self.session.execute(statement)
        max_number = result.scalars().first()

        sequence = 1
        if max_number:
            suffix = max_number[len(self.prefix):]
            if suffix.isdigit():
                sequence = int(suffix) + 1

        return f"{self.prefix}{sequence:06d}"
