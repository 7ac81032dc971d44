"""ListPayments Use Case"""

from typing import List
from libs.result import Result, Return, Error
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.payment_repository import PaymentRepository
from src.domain.errors import DomainError, NotFoundError
from src.domain.tenant_context import TenantContext
from .dtos import PaymentDTO


class ListPayments:
    def __init__(self, invoice_repo: InvoiceRepository, payment_repo: PaymentRepository):
        self.invoice_repo = invoice_repo
        self.payment_repo = payment_repo

    async def execute(self, context: TenantContext, invoice_id: str) -> Result[List[PaymentDTO]]:
        try:
            context.require()
            invoice = await self.invoice_repo.get_by_id(invoice_id, tenant_id=context.scope)
            if not invoice:
                raise NotFoundError("Invoice not found")

            payments = await self.payment_repo.get_by_invoice_id(invoice.id)
            return Return.ok([PaymentDTO.from_entity(payment) for payment in payments])

        except DomainError as e:
            return Return.err(Error(code=e.code.value, message=e.message, reason=type(e).__name__))
        except Exception as e:
            return Return.err(
                Error(code="LIST_PAYMENTS_FAILED", message="Failed to list payments", reason=str(e))
            )
