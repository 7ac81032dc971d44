"""Invoice PDF attachments for customer notifications."""

import logging
from typing import Optional

from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_line_repository import InvoiceLineRepository
from src.app.repositories.payment_repository import PaymentRepository
from src.app.repositories.vehicle_inward_repository import VehicleInwardRepository
from src.app.services.messaging_gateway import Attachment
from src.app.services.pdf_service import PdfService

logger = logging.getLogger(__name__)


class InvoiceDocumentBuilder:
    """
    Builds the invoice PDF sent along with an invoice_issued message

    Best effort: a document that cannot be built is logged and the message
    goes out as text only.
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

    async def build(self, tenant_id: str, invoice_id: Optional[str]) -> Optional[Attachment]:
        if not invoice_id:
            return None

        try:
            invoice = await self.invoice_repo.get_by_id(invoice_id, tenant_id=tenant_id)
            if not invoice:
                logger.warning(f"Invoice {invoice_id} not found, sending without attachment")
                return None

            line_items = await self.invoice_line_repo.get_by_invoice_id(invoice.id)
            payments = await self.payment_repo.get_by_invoice_id(invoice.id)
            vehicle = await self.vehicle_repo.get_by_id(invoice.vehicle_inward_id)

            content = self.pdf_service.generate_invoice(
                invoice,
                line_items,
                payments=payments,
                vehicle=vehicle,
                company_name=self.company_name,
                company_address=self.company_address,
            )
        except Exception as e:
            logger.warning(f"Could not build PDF for invoice {invoice_id}: {e}")
            return None

        name = invoice.invoice_number or invoice.id[:8]
        return Attachment(filename=f"Invoice_{name}.pdf", content=content)
