"""SQLAlchemy Payment Repository Implementation"""

from decimal import Decimal
from typing import List, Optional
from sqlalchemy import delete
from sqlmodel import select, func
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.payment_repository import PaymentRepository
from src.domain.payment import Payment


class SqlAlchemyPaymentRepository(PaymentRepository):
    """SQLAlchemy implementation of PaymentRepository"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, payment: Payment) -> Payment:
        self.session.add(payment)
        await self.session.flush()
        await self.session.refresh(payment)
        return payment

    async def get_by_id(
        self, payment_id: str, tenant_id: Optional[str] = None
    ) -> Optional[Payment]:
        statement = select(Payment).where(Payment.id == payment_id)
        if tenant_id:
            statement = statement.where(Payment.tenant_id == tenant_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def update(self, payment: Payment) -> Payment:
        self.session.add(payment)
        await self.session.flush()
        await self.session.refresh(payment)
        return payment

    async def delete(self, payment_id: str) -> None:
        await self.session.execute(delete(Payment).where(Payment.id == payment_id))
        await self.session.flush()

    async def get_by_invoice_id(self, invoice_id: str) -> List[Payment]:
        statement = (
            select(Payment)
            .where(Payment.invoice_id == invoice_id)
            .order_by(Payment.payment_date.asc(), Payment.created_at.asc())
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def sum_by_invoice_id(self, invoice_id: str) -> Decimal:
        statement = select(func.sum(Payment.amount)).where(Payment.invoice_id == invoice_id)
        result = await self.session.execute(statement)
        total = result.scalar_one_or_none()
        return Decimal(str(total)) if total is not None else Decimal("0")
