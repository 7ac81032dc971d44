"""CancelInvoice Use Case"""

import logging
from datetime import datetime
from typing import Optional
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain import invoice_state
from src.domain.errors import DomainError, NotFoundError
from src.domain.tenant_context import TenantContext
from .dtos import InvoiceResponseDTO

logger = logging.getLogger(__name__)


class CancelInvoice:
    """
    Use Case: Cancel an invoice

    Business Rules:
    1. Paid invoices can never be cancelled
    2. Cancellation is terminal; the invoice is kept, not deleted
    3. cancelled_at and cancelled_reason are recorded
    """

    def __init__(self, uow: UnitOfWork, invoice_repo: InvoiceRepository):
        self.uow = uow
        self.invoice_repo = invoice_repo

    async def execute(
        self, context: TenantContext, invoice_id: str, reason: Optional[str] = None
    ) -> Result[InvoiceResponseDTO]:
        try:
            context.require()

            invoice = await self.invoice_repo.get_by_id(invoice_id, tenant_id=context.scope)
            if not invoice:
                raise NotFoundError("Invoice not found")

            invoice_state.cancel(invoice, reason, datetime.utcnow())
            invoice = await self.invoice_repo.update(invoice)
            await self.uow.commit()

            logger.info(f"Invoice {invoice.id} cancelled: {reason}")
            return Return.ok(InvoiceResponseDTO.from_entity(invoice))

        except DomainError as e:
            await self.uow.rollback()
            return Return.err(Error(code=e.code.value, message=e.message, reason=type(e).__name__))
        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="CANCEL_INVOICE_FAILED",
                    message="Failed to cancel invoice",
                    reason=str(e),
                )
            )
