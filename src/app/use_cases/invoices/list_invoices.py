"""ListInvoices Use Case"""

from libs.result import Result, Return, Error
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.errors import DomainError, ValidationError
from src.domain.invoice import InvoiceStatus
from src.domain.tenant_context import TenantContext
from .dtos import InvoiceListResponseDTO, InvoiceResponseDTO, ListInvoicesQueryDTO


class ListInvoices:
    """
    Use Case: List invoices with filters

    Business Rules:
    1. Results are restricted to the caller's tenant unless super admin
    2. Newest first, paginated
    """

    def __init__(self, invoice_repo: InvoiceRepository):
        self.invoice_repo = invoice_repo

    async def execute(
        self, context: TenantContext, query: ListInvoicesQueryDTO
    ) -> Result[InvoiceListResponseDTO]:
        try:
            context.require()

            status = None
            if query.status:
                try:
                    status = InvoiceStatus(query.status)
                except ValueError:
                    raise ValidationError(f"Unknown invoice status: {query.status}")

            invoices = await self.invoice_repo.list(
                tenant_id=context.scope,
                status=status,
                from_date=query.from_date,
                to_date=query.to_date,
                search=query.search,
                limit=query.limit,
                offset=query.offset,
            )

            return Return.ok(
                InvoiceListResponseDTO(
                    invoices=[InvoiceResponseDTO.from_entity(invoice) for invoice in invoices],
                    count=len(invoices),
                    limit=query.limit,
                    offset=query.offset,
                )
            )

        except DomainError as e:
            return Return.err(Error(code=e.code.value, message=e.message, reason=type(e).__name__))
        except Exception as e:
            return Return.err(
                Error(code="LIST_INVOICES_FAILED", message="Failed to list invoices", reason=str(e))
            )
