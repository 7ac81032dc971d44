"""RecordPayment Use Case

Appends a payment to an invoice and recomputes its paid/balance/status.
"""

import logging
from datetime import date
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.payment_repository import PaymentRepository
from src.app.repositories.vehicle_inward_repository import VehicleInwardRepository
from src.app.repositories.notification_queue_repository import NotificationQueueRepository
from src.app.use_cases.notifications.payloads import payment_received_event
from src.domain import invoice_state
from src.domain.errors import DomainError, NotFoundError
from src.domain.invoice_state import OverpaymentPolicy
from src.domain.payment import Payment
from src.domain.tenant_context import TenantContext
from .dtos import (
    InvoiceResponseDTO,
    PaymentDTO,
    RecordPaymentCommandDTO,
    RecordPaymentResponseDTO,
)

logger = logging.getLogger(__name__)


class RecordPayment:
    """
    Use Case: Record a payment against an invoice

    Business Rules:
    1. Not allowed on cancelled (or still draft) invoices
    2. amount > 0
    3. Overpayment policy "reject" refuses amounts above the balance,
       "allow" accepts them and lets the balance go negative
    4. paid_amount = sum of all payments, balance = total - paid
    5. Status becomes paid when balance <= 0, otherwise partial
    6. A payment_received notification is queued in the same transaction

    Flow:
    1. Load invoice (scoped to tenant)
    2. Check payment is allowed
    3. Insert payment
    4. Recompute amounts and status from the payment sum
    5. Queue notification, commit
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        payment_repo: PaymentRepository,
        vehicle_repo: VehicleInwardRepository,
        queue_repo: NotificationQueueRepository,
        overpayment_policy: str = OverpaymentPolicy.REJECT,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.payment_repo = payment_repo
        self.vehicle_repo = vehicle_repo
        self.queue_repo = queue_repo
        self.overpayment_policy = overpayment_policy

    async def execute(
        self,
        context: TenantContext,
        invoice_id: str,
        command: RecordPaymentCommandDTO,
    ) -> Result[RecordPaymentResponseDTO]:
        """
        Execute payment recording

        Args:
            context: Caller's tenant scope
            invoice_id: Invoice to pay
            command: Amount, mode and reference of the payment

        Returns:
            Result[RecordPaymentResponseDTO]: Payment and updated invoice, or error
        """
        try:
            context.require()

            # Step 1: Load invoice
            invoice = await self.invoice_repo.get_by_id(invoice_id, tenant_id=context.scope)
            if not invoice:
                raise NotFoundError("Invoice not found")

            # Step 2: Guard
            invoice_state.ensure_payment_allowed(
                invoice, command.amount, self.overpayment_policy
            )

            # Step 3: Insert payment
            payment = await self.payment_repo.create(
                Payment(
                    tenant_id=invoice.tenant_id,
                    invoice_id=invoice.id,
                    amount=invoice_state.money(command.amount),
                    payment_mode=command.payment_mode,
                    payment_date=command.payment_date or date.today(),
                    reference_number=command.reference_number,
                    paid_by=command.paid_by,
                    notes=command.notes,
                    created_by=context.user_id,
                )
            )

            # Step 4: Recompute from the sum of payments
            paid_amount = await self.payment_repo.sum_by_invoice_id(invoice.id)
            invoice_state.apply_paid_amount(invoice, paid_amount)
            invoice = await self.invoice_repo.update(invoice)

            # Step 5: Queue notification and commit
            vehicle = await self.vehicle_repo.get_by_id(invoice.vehicle_inward_id)
            await self.queue_repo.enqueue(payment_received_event(invoice, payment, vehicle))
            await self.uow.commit()

            logger.info(
                f"Payment {payment.amount} recorded on invoice {invoice.id}: "
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
                    code="RECORD_PAYMENT_FAILED",
                    message="Failed to record payment",
                    reason=str(e),
                )
            )
