"""SQLAlchemy Invoice Repository Implementation

Implements invoice persistence using SQLAlchemy async session.
"""

from typing import Optional, List
from datetime import date, datetime
from sqlalchemy import delete
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.invoice_state import OVERDUE_CANDIDATE_STATUSES


class SqlAlchemyInvoiceRepository(InvoiceRepository):
    """
    SQLAlchemy implementation of InvoiceRepository

    Uses async session for database operations.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, invoice: Invoice) -> Invoice:
        self.session.add(invoice)
        await self.session.flush()
        await self.session.refresh(invoice)
        return invoice

    async def get_by_id(
        self, invoice_id: str, tenant_id: Optional[str] = None
    ) -> Optional[Invoice]:
        statement = select(Invoice).where(Invoice.id == invoice_id)
        if tenant_id:
            statement = statement.where(Invoice.tenant_id == tenant_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def list(
        self,
        tenant_id: Optional[str] = None,
        status: Optional[InvoiceStatus] = None,
        from_date: Optional[date] = None,
        to_date: Optional[date] = None,
        search: Optional[str] = None,
        limit: Optional[int] = 50,
        offset: int = 0,
    ) -> List[Invoice]:
        """
        List invoices, newest first

        Args:
            tenant_id: Tenant identifier
            status: Optional filter by status
            from_date: Invoices dated on or after
            to_date: Invoices dated on or before
            search: Substring match on invoice number
            limit: Maximum number of invoices to return, None for all
            offset: Offset for pagination

        Returns:
            List of invoices
        """
        statement = select(Invoice)

        if tenant_id:
            statement = statement.where(Invoice.tenant_id == tenant_id)
        if status:
            statement = statement.where(Invoice.status == status)
        if from_date:
            statement = statement.where(Invoice.invoice_date >= from_date)
        if to_date:
            statement = statement.where(Invoice.invoice_date <= to_date)
        if search:
            statement = statement.where(Invoice.invoice_number.ilike(f"%{search}%"))

        statement = statement.order_by(Invoice.created_at.desc())
        if limit is not None:
            statement = statement.limit(limit).offset(offset)

        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def update(self, invoice: Invoice) -> Invoice:
        invoice.updated_at = datetime.utcnow()
        self.session.add(invoice)
        await self.session.flush()
        await self.session.refresh(invoice)
        return invoice

    async def delete(self, invoice_id: str) -> None:
        await self.session.execute(delete(Invoice).where(Invoice.id == invoice_id))
        await self.session.flush()

    async def get_overdue_candidates(
        self, today: date, tenant_id: Optional[str] = None
    ) -> List[Invoice]:
        """
        Retrieve issued/partial invoices whose due_date is before today

        Args:
            today: Reference date
            tenant_id: Restrict to one tenant, None for all

        Returns:
            List of invoices that should become overdue
        """
        statement = (
            select(Invoice)
            .where(Invoice.status.in_(OVERDUE_CANDIDATE_STATUSES))
            .where(Invoice.due_date < today)
        )
        if tenant_id:
            statement = statement.where(Invoice.tenant_id == tenant_id)

        statement = statement.order_by(Invoice.due_date.asc())
        result = await self.session.execute(statement)
        return list(result.scalars().all())
