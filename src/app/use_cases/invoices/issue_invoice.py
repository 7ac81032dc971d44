"""IssueInvoice Use Case

Moves a draft invoice to issued and assigns its invoice number.
"""

import logging
from datetime import datetime
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.invoice_number_generator import InvoiceNumberGenerator
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.vehicle_inward_repository import VehicleInwardRepository
from src.app.repositories.notification_queue_repository import NotificationQueueRepository
from src.app.use_cases.notifications.payloads import invoice_event
from src.domain import invoice_state
from src.domain.errors import DomainError, InvalidStateError, NotFoundError
from src.domain.invoice import InvoiceStatus
from src.domain.notification_queue import NotificationEventType
from src.domain.tenant_context import TenantContext
from .dtos import InvoiceResponseDTO

logger = logging.getLogger(__name__)


class IssueInvoice:
    """
    Use Case: Issue a draft invoice

    Business Rules:
    1. Only draft invoices can be issued; a second call fails
    2. An invoice number is generated only when none is set yet
    3. issued_at is stamped; invoice_date is left unchanged
    4. An invoice_issued notification is queued in the same transaction

    Flow:
    1. Load invoice (scoped to tenant)
    2. Check status is draft
    3. Assign number, transition to issued
    4. Queue notification, commit
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        vehicle_repo: VehicleInwardRepository,
        number_generator: InvoiceNumberGenerator,
        queue_repo: NotificationQueueRepository,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.vehicle_repo = vehicle_repo
        self.number_generator = number_generator
        self.queue_repo = queue_repo

    async def execute(self, context: TenantContext, invoice_id: str) -> Result[InvoiceResponseDTO]:
        try:
            context.require()

            # Step 1: Load invoice
            invoice = await self.invoice_repo.get_by_id(invoice_id, tenant_id=context.scope)
            if not invoice:
                raise NotFoundError("Invoice not found")

            # Step 2: Guard state before consuming a number
            if invoice.status != InvoiceStatus.DRAFT:
                raise InvalidStateError("Only draft invoices can be issued")

            # Step 3: Assign number and transition
            invoice_number = invoice.invoice_number or await self.number_generator.next_number(
                invoice.tenant_id
            )
            invoice_state.issue(invoice, invoice_number, datetime.utcnow())
            invoice = await self.invoice_repo.update(invoice)

            # Step 4: Queue notification and commit
            vehicle = await self.vehicle_repo.get_by_id(invoice.vehicle_inward_id)
            await self.queue_repo.enqueue(
                invoice_event(NotificationEventType.INVOICE_ISSUED, invoice, vehicle)
            )
            await self.uow.commit()

            logger.info(f"Invoice {invoice.id} issued as {invoice.invoice_number}")
            return Return.ok(InvoiceResponseDTO.from_entity(invoice))

        except DomainError as e:
            await self.uow.rollback()
            return Return.err(Error(code=e.code.value, message=e.message, reason=type(e).__name__))
        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="ISSUE_INVOICE_FAILED",
                    message="Failed to issue invoice",
                    reason=str(e),
                )
            )
