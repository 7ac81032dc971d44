"""MarkOverdueInvoices Use Case

Batch job that flags issued/partial invoices past their due date.
"""

import logging
from datetime import date
from typing import Optional
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.vehicle_inward_repository import VehicleInwardRepository
from src.app.repositories.notification_queue_repository import NotificationQueueRepository
from src.app.use_cases.notifications.payloads import invoice_event
from src.domain import invoice_state
from src.domain.notification_queue import NotificationEventType
from .dtos import MarkOverdueResultDTO

logger = logging.getLogger(__name__)


class MarkOverdueInvoices:
    """
    Use Case: Mark overdue invoices

    Business Rules:
    1. issued/partial invoices with due_date < today become overdue
    2. Idempotent: a second run finds nothing left to change
    3. One invoice_overdue notification is queued per newly overdue invoice

    Flow:
    1. Load candidates
    2. Transition each, queue its notification
    3. Commit once
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        vehicle_repo: VehicleInwardRepository,
        queue_repo: NotificationQueueRepository,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.vehicle_repo = vehicle_repo
        self.queue_repo = queue_repo

    async def execute(
        self, today: Optional[date] = None, tenant_id: Optional[str] = None
    ) -> Result[MarkOverdueResultDTO]:
        """
        Execute overdue marking

        Args:
            today: Reference date (defaults to today)
            tenant_id: Restrict to one tenant, None for all

        Returns:
            Result[MarkOverdueResultDTO]: Invoices marked and notifications queued
        """
        today = today or date.today()
        try:
            # Step 1: Load candidates
            candidates = await self.invoice_repo.get_overdue_candidates(today, tenant_id=tenant_id)

            # Step 2: Transition and queue
            invoice_ids = []
            for invoice in candidates:
                if not invoice_state.is_overdue(invoice, today):
                    continue
                invoice_state.mark_overdue(invoice)
                invoice = await self.invoice_repo.update(invoice)

                vehicle = await self.vehicle_repo.get_by_id(invoice.vehicle_inward_id)
                await self.queue_repo.enqueue(
                    invoice_event(NotificationEventType.INVOICE_OVERDUE, invoice, vehicle)
                )
                invoice_ids.append(invoice.id)

            # Step 3: Commit
            await self.uow.commit()

            if invoice_ids:
                logger.info(f"Marked {len(invoice_ids)} invoices overdue as of {today}")

            return Return.ok(
                MarkOverdueResultDTO(
                    marked_count=len(invoice_ids),
                    invoice_ids=invoice_ids,
                    notifications_enqueued=len(invoice_ids),
                    run_date=today,
                )
            )

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="MARK_OVERDUE_FAILED",
                    message="Failed to mark overdue invoices",
                    reason=str(e),
                )
            )
