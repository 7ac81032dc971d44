"""UpdatePayment Use Case

Corrects a recorded payment and recomputes the invoice's paid/balance/status.
"""

import logging
from decimal import Decimal
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.payment_repository import PaymentRepository
from src.domain import invoice_state
from src.domain.errors import DomainError, NotFoundError
from src.domain.invoice_state import OverpaymentPolicy
from src.domain.tenant_context import TenantContext
from .dtos import (
    InvoiceResponseDTO,
    PaymentDTO,
    RecordPaymentResponseDTO,
    UpdatePaymentCommandDTO,
)

logger = logging.getLogger(__name__)


class UpdatePayment:
    """
    Use Case: Correct a payment recorded against an invoice

    Business Rules:
    1. Not allowed when the invoice is cancelled
    2. A changed amount must be > 0 and, under the "reject" policy, fit
       within total minus the invoice's other payments
    3. paid_amount is recomputed from all payments, balance = total - paid
    4. A correction may reopen a paid invoice (partial, or issued when
       nothing remains paid)

    Flow:
    1. Load payment and its invoice (scoped to tenant)
    2. Guard the correction
    3. Apply the changed fields
    4. Recompute amounts and status, commit
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        payment_repo: PaymentRepository,
        overpayment_policy: str = OverpaymentPolicy.REJECT,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.payment_repo = payment_repo
        self.overpayment_policy = overpayment_policy

    async def execute(
        self,
        context: TenantContext,
        payment_id: str,
        command: UpdatePaymentCommandDTO,
    ) -> Result[RecordPaymentResponseDTO]:
        """
        Execute payment correction

        Args:
            context: Caller's tenant scope
            payment_id: Payment to correct
            command: Fields to change

        Returns:
            Result[RecordPaymentResponseDTO]: Corrected payment and updated invoice, or error
        """
        try:
            context.require()

            # Step 1: Load payment and invoice
            payment = await self.payment_repo.get_by_id(payment_id, tenant_id=context.scope)
            if not payment:
                raise NotFoundError("Payment not found")
            invoice = await self.invoice_repo.get_by_id(payment.invoice_id)
            if not invoice:
                raise NotFoundError("Invoice not found")

            # Step 2: Guard
            changes = command.changes()
            amount = changes.get("amount")
            other_payments = Decimal("0")
            if amount is not None:
                paid_total = await self.payment_repo.sum_by_invoice_id(invoice.id)
                other_payments = paid_total - payment.amount
            invoice_state.ensure_correction_allowed(
                invoice,
                "update",
                amount=amount,
                other_payments=other_payments,
                policy=self.overpayment_policy,
            )

            # Step 3: Apply changes
            for field, value in changes.items():
                if value is None and field in ("amount", "payment_mode", "payment_date"):
                    continue
                if field == "amount":
                    value = invoice_state.money(value)
                setattr(payment, field, value)
            payment = await self.payment_repo.update(payment)

            # Step 4: Recompute from the sum of payments
            paid_amount = await self.payment_repo.sum_by_invoice_id(invoice.id)
            invoice_state.apply_paid_amount(invoice, paid_amount, reopen=True)
            invoice = await self.invoice_repo.update(invoice)
            await self.uow.commit()

            logger.info(
                f"Payment {payment.id} on invoice {invoice.id} corrected: "
                f"status={invoice.status.value}, balance={invoice.balance_amount}"
            )
            return Return.ok(
                RecordPaymentResponseDTO(
                    payment=PaymentDTO.from_entity(payment),
                    invoice=InvoiceResponseDTO.from_entity(invoice),
                )
            )

        except DomainError as e:
            await self.uow.rollback()
            return Return.err(Error(code=e.code.value, message=e.message, reason=type(e).__name__))
        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="UPDATE_PAYMENT_FAILED",
                    message="Failed to update payment",
                    reason=str(e),
                )
            )
