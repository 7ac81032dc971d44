"""RenderInvoicePdf Use Case

Produces the printable invoice (proforma while draft).
"""

import base64
from datetime import datetime
from libs.result import Result, Return, Error
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_line_repository import InvoiceLineRepository
from src.app.repositories.payment_repository import PaymentRepository
from src.app.repositories.vehicle_inward_repository import VehicleInwardRepository
from src.app.services.pdf_service import PdfService
from src.domain.errors import DomainError, NotFoundError
from src.domain.tenant_context import TenantContext
from .dtos import InvoicePdfDTO


class RenderInvoicePdf:
    """
    Use Case: Render invoice PDF

    Flow:
    1. Load invoice (scoped to tenant), line items, payments and job
    2. Render through PdfService
    3. Return base64 encoded document
    """

    def __init__(
        self,
        invoice_repo: InvoiceRepository,
        invoice_line_repo: InvoiceLineRepository,
        payment_repo: PaymentRepository,
        vehicle_repo: VehicleInwardRepository,
        pdf_service: PdfService,
        company_name: str = "Workshop",
        company_address: str = "",
    ):
        self.invoice_repo = invoice_repo
        self.invoice_line_repo = invoice_line_repo
        self.payment_repo = payment_repo
        self.vehicle_repo = vehicle_repo
        self.pdf_service = pdf_service
        self.company_name = company_name
        self.company_address = company_address

    async def execute(self, context: TenantContext, invoice_id: str) -> Result[InvoicePdfDTO]:
        try:
            context.require()

            # Step 1: Load data
            invoice = await self.invoice_repo.get_by_id(invoice_id, tenant_id=context.scope)
            if not invoice:
                raise NotFoundError("Invoice not found")

            line_items = await self.invoice_line_repo.get_by_invoice_id(invoice.id)
            payments = await self.payment_repo.get_by_invoice_id(invoice.id)
            vehicle = await self.vehicle_repo.get_by_id(invoice.vehicle_inward_id)

            # Step 2: Render
            pdf_bytes = self.pdf_service.generate_invoice(
                invoice,
                line_items,
                payments=payments,
                vehicle=vehicle,
                company_name=self.company_name,
                company_address=self.company_address,
            )

            # Step 3: Build response
            name = invoice.invoice_number or f"proforma_{invoice.id[:8]}"
            return Return.ok(
                InvoicePdfDTO(
                    invoice_id=invoice.id,
                    invoice_number=invoice.invoice_number,
                    filename=f"{name}.pdf",
                    pdf_base64=base64.b64encode(pdf_bytes).decode("utf-8"),
                    generated_at=datetime.utcnow(),
                )
            )

        except DomainError as e:
            return Return.err(Error(code=e.code.value, message=e.message, reason=type(e).__name__))
        except Exception as e:
            return Return.err(
                Error(
                    code="PDF_GENERATION_FAILED",
                    message="Failed to generate invoice PDF",
                    reason=str(e),
                )
            )
