"""GetInvoiceSummary Use Case

Receivables overview for the accounts dashboard.
"""

from collections import Counter
from datetime import date
from decimal import Decimal
from typing import Optional
from libs.result import Result, Return, Error
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.errors import DomainError
from src.domain.invoice import InvoiceStatus
from src.domain.tenant_context import TenantContext
from .dtos import InvoiceSummaryDTO

OPEN_STATUSES = (InvoiceStatus.ISSUED, InvoiceStatus.PARTIAL, InvoiceStatus.OVERDUE)
EXCLUDED_FROM_TOTALS = (InvoiceStatus.DRAFT, InvoiceStatus.CANCELLED)


class GetInvoiceSummary:
    """
    Use Case: Summarize invoice totals

    Business Rules:
    1. total_invoiced and total_received ignore draft and cancelled invoices
    2. total_outstanding is the balance of issued/partial/overdue invoices
    3. total_overdue is the balance of overdue invoices only
    """

    def __init__(self, invoice_repo: InvoiceRepository):
        self.invoice_repo = invoice_repo

    async def execute(
        self,
        context: TenantContext,
        from_date: Optional[date] = None,
        to_date: Optional[date] = None,
    ) -> Result[InvoiceSummaryDTO]:
        try:
            context.require()
            invoices = await self.invoice_repo.list(
                tenant_id=context.scope,
                from_date=from_date,
                to_date=to_date,
                limit=None,
            )

            total_invoiced = Decimal("0")
            total_received = Decimal("0")
            total_outstanding = Decimal("0")
            total_overdue = Decimal("0")

            for invoice in invoices:
                if invoice.status in EXCLUDED_FROM_TOTALS:
                    continue
                total_invoiced += invoice.total_amount
                total_received += invoice.paid_amount
                if invoice.status in OPEN_STATUSES:
                    total_outstanding += invoice.balance_amount
                if invoice.status == InvoiceStatus.OVERDUE:
                    total_overdue += invoice.balance_amount

            counts = Counter(invoice.status.value for invoice in invoices)

            return Return.ok(
                InvoiceSummaryDTO(
                    total_invoiced=total_invoiced,
                    total_received=total_received,
                    total_outstanding=total_outstanding,
                    total_overdue=total_overdue,
                    invoice_count=len(invoices),
                    counts_by_status=dict(counts),
                )
            )

        except DomainError as e:
            return Return.err(Error(code=e.code.value, message=e.message, reason=type(e).__name__))
        except Exception as e:
            return Return.err(
                Error(code="INVOICE_SUMMARY_FAILED", message="Failed to summarize invoices", reason=str(e))
            )
