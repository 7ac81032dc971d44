"""Invoice Line Item Repository Interface"""

from abc import ABC, abstractmethod
from typing import List
from src.domain.invoice_line import InvoiceLineItem


class InvoiceLineRepository(ABC):
    """Repository interface for invoice line items"""

    @abstractmethod
    async def get_by_invoice_id(self, invoice_id: str) -> List[InvoiceLineItem]:
        """
        Retrieve all line items for an invoice

        Args:
            invoice_id: Invoice ID

        Returns:
            List of line items in insertion order
        """
        pass

    @abstractmethod
    async def create_many(self, line_items: List[InvoiceLineItem]) -> List[InvoiceLineItem]:
        """
        Persist line items for one invoice

        Args:
            line_items: Line items to persist

        Returns:
            Created line items
        """
        pass
