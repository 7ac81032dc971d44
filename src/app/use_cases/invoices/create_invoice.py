"""CreateInvoice Use Case

Creates an invoice (draft, or directly issued) from a completed vehicle job.
"""

import logging
from datetime import date, datetime, timedelta
from typing import Optional
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.invoice_number_generator import InvoiceNumberGenerator
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_line_repository import InvoiceLineRepository
from src.app.repositories.vehicle_inward_repository import VehicleInwardRepository
from src.app.repositories.notification_queue_repository import NotificationQueueRepository
from src.app.use_cases.notifications.payloads import invoice_event
from src.domain import invoice_state
from src.domain.errors import DomainError, NotFoundError, ValidationError
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.invoice_line import InvoiceLineItem
from src.domain.notification_queue import NotificationEventType
from src.domain.tenant_context import TenantContext
from .dtos import CreateInvoiceCommandDTO, InvoiceResponseDTO

logger = logging.getLogger(__name__)

DEFAULT_DUE_DAYS = 30


class CreateInvoice:
    """
    Use Case: Create invoice with line items

    Business Rules:
    1. At least one line item; quantity > 0, unit_price >= 0
    2. The job must exist within the caller's tenant scope
    3. line_total = quantity * unit_price, subtotal = sum(line_total)
    4. total = subtotal - discount + tax, balance = total
    5. Header and line items form one logical unit: if the line items
       cannot be written, the already committed header is deleted again
    6. With issue_immediately, an invoice number is assigned and an
       invoice_issued notification is queued

    Flow:
    1. Validate tenant context and line items
    2. Load job (scoped to tenant)
    3. Compute totals and dates
    4. Create and commit invoice header
    5. Create line items (and issue), commit; compensate on failure
    6. Return response
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        invoice_line_repo: InvoiceLineRepository,
        vehicle_repo: VehicleInwardRepository,
        number_generator: InvoiceNumberGenerator,
        queue_repo: NotificationQueueRepository,
        due_days: int = DEFAULT_DUE_DAYS,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.invoice_line_repo = invoice_line_repo
        self.vehicle_repo = vehicle_repo
        self.number_generator = number_generator
        self.queue_repo = queue_repo
        self.due_days = due_days

    async def execute(
        self, context: TenantContext, command: CreateInvoiceCommandDTO
    ) -> Result[InvoiceResponseDTO]:
        """
        Execute invoice creation

        Args:
            context: Caller's tenant scope
            command: CreateInvoiceCommandDTO with job, line items and amounts

        Returns:
            Result[InvoiceResponseDTO]: Created invoice with line items, or error
        """
        try:
            # Step 1: Validate input
            context.require()
            if not command.line_items:
                raise ValidationError("At least one line item is required")

            line_totals = [
                invoice_state.compute_line_total(item.quantity, item.unit_price)
                for item in command.line_items
            ]

            # Step 2: Load job within tenant scope
            vehicle = await self.vehicle_repo.get_by_id(
                command.vehicle_inward_id, tenant_id=context.scope
            )
            if not vehicle:
                raise NotFoundError("Vehicle inward not found")

            # Step 3: Compute totals and dates
            subtotal, total = invoice_state.compute_totals(
                line_totals, command.discount_amount, command.tax_amount
            )
            invoice_date = command.invoice_date or date.today()
            due_date = command.due_date or invoice_date + timedelta(days=self.due_days)
            if due_date < invoice_date:
                raise ValidationError("Due date cannot be before invoice date")

            # Step 4: Create and commit header
            invoice = Invoice(
                tenant_id=vehicle.tenant_id,
                vehicle_inward_id=vehicle.id,
                invoice_date=invoice_date,
                due_date=due_date,
                status=InvoiceStatus.DRAFT,
                subtotal_amount=subtotal,
                discount_amount=invoice_state.money(command.discount_amount),
                discount_reason=command.discount_reason,
                tax_amount=invoice_state.money(command.tax_amount),
                total_amount=total,
                paid_amount=invoice_state.money(0),
                balance_amount=total,
                notes=command.notes,
                created_by=context.user_id,
            )
            invoice = await self.invoice_repo.create(invoice)
            await self.uow.commit()
            invoice_id = invoice.id

            # Step 5: Line items and optional issue, compensating on failure
            try:
                line_items = await self.invoice_line_repo.create_many(
                    [
                        InvoiceLineItem(
                            invoice_id=invoice_id,
                            product_name=item.product_name,
                            brand=item.brand,
                            department=item.department,
                            quantity=item.quantity,
                            unit_price=item.unit_price,
                            line_total=line_total,
                        )
                        for item, line_total in zip(command.line_items, line_totals)
                    ]
                )

                if command.issue_immediately:
                    invoice_number = await self.number_generator.next_number(invoice.tenant_id)
                    invoice_state.issue(invoice, invoice_number, datetime.utcnow())
                    invoice = await self.invoice_repo.update(invoice)
                    await self.queue_repo.enqueue(
                        invoice_event(NotificationEventType.INVOICE_ISSUED, invoice, vehicle)
                    )

                await self.uow.commit()
            except Exception:
                await self._compensate(invoice_id)
                raise

            logger.info(
                f"Invoice {invoice_id} created for job {vehicle.id} "
                f"(status={invoice.status.value}, total={invoice.total_amount})"
            )

            # Step 6: Build response
            return Return.ok(InvoiceResponseDTO.from_entity(invoice, line_items=line_items))

        except DomainError as e:
            await self.uow.rollback()
            return Return.err(Error(code=e.code.value, message=e.message, reason=type(e).__name__))
        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="CREATE_INVOICE_FAILED",
                    message="Failed to create invoice",
                    reason=str(e),
                )
            )

    async def _compensate(self, invoice_id: Optional[str]) -> None:
        """Delete a header whose line items could not be written"""
        await self.uow.rollback()
        try:
            await self.invoice_repo.delete(invoice_id)
            await self.uow.commit()
            logger.warning(f"Rolled back invoice header {invoice_id} after line item failure")
        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Compensating delete of invoice {invoice_id} failed: {e}")
