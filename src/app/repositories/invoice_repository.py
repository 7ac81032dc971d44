"""Invoice Repository Interface

Defines the contract for invoice persistence operations.
"""

from abc import ABC, abstractmethod
from typing import Optional, List
from datetime import date
from src.domain.invoice import Invoice, InvoiceStatus


class InvoiceRepository(ABC):
    """
    Repository interface for Invoice persistence

    Every read takes an optional tenant_id; None means unrestricted
    (super admin or scheduler jobs).
    """

    @abstractmethod
    async def create(self, invoice: Invoice) -> Invoice:
        """
        Create a new invoice

        Args:
            invoice: Invoice entity to persist

        Returns:
            Created Invoice
        """
        pass

    @abstractmethod
    async def get_by_id(
        self, invoice_id: str, tenant_id: Optional[str] = None
    ) -> Optional[Invoice]:
        """
        Retrieve invoice by ID

        Args:
            invoice_id: Invoice ID
            tenant_id: Restrict the lookup to this tenant

        Returns:
            Invoice if found and visible, None otherwise
        """
        pass

    @abstractmethod
    async def list(
        self,
        tenant_id: Optional[str] = None,
        status: Optional[InvoiceStatus] = None,
        from_date: Optional[date] = None,
        to_date: Optional[date] = None,
        search: Optional[str] = None,
        limit: Optional[int] = 50,
        offset: int = 0,
    ) -> List[Invoice]:
        """
        List invoices, newest first

        Args:
            tenant_id: Tenant identifier
            status: Optional filter by status
            from_date: Invoices dated on or after
            to_date: Invoices dated on or before
            search: Substring match on invoice number
            limit: Maximum number of invoices to return, None for all
            offset: Offset for pagination

        Returns:
            List of invoices
        """
        pass

    @abstractmethod
    async def update(self, invoice: Invoice) -> Invoice:
        """
        Update an existing invoice

        Args:
            invoice: Invoice entity with updated values

        Returns:
            Updated Invoice
        """
        pass

    @abstractmethod
    async def delete(self, invoice_id: str) -> None:
        """
        Hard-delete an invoice header

        Only used to undo a half-created invoice whose line items failed.
        """
        pass

    @abstractmethod
    async def get_overdue_candidates(
        self, today: date, tenant_id: Optional[str] = None
    ) -> List[Invoice]:
        """
        Retrieve issued/partial invoices whose due_date is before today

        Args:
            today: Reference date
            tenant_id: Restrict to one tenant, None for all

        Returns:
            List of invoices that should become overdue
        """
        pass
