"""PDF Generation Service Interface

Defines the contract for PDF generation operations.
"""

from abc import ABC, abstractmethod
from typing import List, Optional
from src.domain.invoice import Invoice
from src.domain.invoice_line import InvoiceLineItem
from src.domain.payment import Payment
from src.domain.vehicle_inward import VehicleInward


class PdfService(ABC):
    """
    Service interface for PDF generation

    Provides PDF generation capabilities for invoices.
    """

    @abstractmethod
    def generate_invoice(
        self,
        invoice: Invoice,
        line_items: List[InvoiceLineItem],
        payments: Optional[List[Payment]] = None,
        vehicle: Optional[VehicleInward] = None,
        company_name: str = "Workshop",
        company_address: str = "",
    ) -> bytes:
        """
        Generate an invoice PDF

        Draft invoices are rendered as a proforma.

        Args:
            invoice: Invoice entity with billing details
            line_items: Line items for the invoice
            payments: Payments recorded so far
            vehicle: Job the invoice was raised for
            company_name: Company name to display on invoice
            company_address: Company address to display on invoice

        Returns:
            PDF document as bytes
        """
        pass
