"""DeletePayment Use Case

Removes a payment recorded in error and recomputes the invoice.
"""

import logging
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.payment_repository import PaymentRepository
from src.domain import invoice_state
from src.domain.errors import DomainError, NotFoundError
from src.domain.tenant_context import TenantContext
from .dtos import DeletePaymentResponseDTO, InvoiceResponseDTO

logger = logging.getLogger(__name__)


class DeletePayment:
    """
    Use Case: Delete a payment

    Business Rules:
    1. Not allowed when the invoice is cancelled
    2. paid_amount is recomputed from the remaining payments
    3. A paid invoice reopens as partial, or issued once no payment is left

    Flow:
    1. Load payment and its invoice (scoped to tenant)
    2. Guard, delete payment
    3. Recompute amounts and status, commit
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        payment_repo: PaymentRepository,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.payment_repo = payment_repo

    async def execute(
        self, context: TenantContext, payment_id: str
    ) -> Result[DeletePaymentResponseDTO]:
        try:
            context.require()

            # Step 1: Load payment and invoice
            payment = await self.payment_repo.get_by_id(payment_id, tenant_id=context.scope)
            if not payment:
                raise NotFoundError("Payment not found")
            invoice = await self.invoice_repo.get_by_id(payment.invoice_id)
            if not invoice:
                raise NotFoundError("Invoice not found")

            # Step 2: Guard and delete
            invoice_state.ensure_correction_allowed(invoice, "delete")
            amount = payment.amount
            await self.payment_repo.delete(payment_id)

            # Step 3: Recompute from the remaining payments
            paid_amount = await self.payment_repo.sum_by_invoice_id(invoice.id)
            invoice_state.apply_paid_amount(invoice, paid_amount, reopen=True)
            invoice = await self.invoice_repo.update(invoice)
            await self.uow.commit()

            logger.info(
                f"Payment {payment_id} ({amount}) deleted from invoice {invoice.id}: "
                f"status={invoice.status.value}, balance={invoice.balance_amount}"
            )
            return Return.ok(
                DeletePaymentResponseDTO(
                    success=True, invoice=InvoiceResponseDTO.from_entity(invoice)
                )
            )

        except DomainError as e:
            await self.uow.rollback()
            return Return.err(Error(code=e.code.value, message=e.message, reason=type(e).__name__))
        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="DELETE_PAYMENT_FAILED",
                    message="Failed to delete payment",
                    reason=str(e),
                )
            )
