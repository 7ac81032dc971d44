"""GetInvoice Use Case"""

from libs.result import Result, Return, Error
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_line_repository import InvoiceLineRepository
from src.app.repositories.payment_repository import PaymentRepository
from src.domain.errors import DomainError, NotFoundError
from src.domain.tenant_context import TenantContext
from .dtos import InvoiceResponseDTO


class GetInvoice:
    """Use Case: Invoice with its line items and payments"""

    def __init__(
        self,
        invoice_repo: InvoiceRepository,
        invoice_line_repo: InvoiceLineRepository,
        payment_repo: PaymentRepository,
    ):
        self.invoice_repo = invoice_repo
        self.invoice_line_repo = invoice_line_repo
        self.payment_repo = payment_repo

    async def execute(self, context: TenantContext, invoice_id: str) -> Result[InvoiceResponseDTO]:
        try:
            context.require()
            invoice = await self.invoice_repo.get_by_id(invoice_id, tenant_id=context.scope)
            if not invoice:
                raise NotFoundError("Invoice not found")

            line_items = await self.invoice_line_repo.get_by_invoice_id(invoice.id)
            payments = await self.payment_repo.get_by_invoice_id(invoice.id)
            return Return.ok(
                InvoiceResponseDTO.from_entity(invoice, line_items=line_items, payments=payments)
            )

        except DomainError as e:
            return Return.err(Error(code=e.code.value, message=e.message, reason=type(e).__name__))
        except Exception as e:
            return Return.err(
                Error(code="GET_INVOICE_FAILED", message="Failed to load invoice", reason=str(e))
            )
