"""Payment Repository Interface"""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import List, Optional
from src.domain.payment import Payment


class PaymentRepository(ABC):
    """Repository interface for invoice payments"""

    @abstractmethod
    async def create(self, payment: Payment) -> Payment:
        """
        Append a payment

        Args:
            payment: Payment entity to persist

        Returns:
            Created Payment
        """
        pass

    @abstractmethod
    async def get_by_id(
        self, payment_id: str, tenant_id: Optional[str] = None
    ) -> Optional[Payment]:
        """
        Retrieve a payment by ID

        Args:
            payment_id: Payment ID
            tenant_id: Restrict the lookup to this tenant

        Returns:
            Payment if found, None otherwise
        """
        pass

    @abstractmethod
    async def update(self, payment: Payment) -> Payment:
        """Persist a corrected payment"""
        pass

    @abstractmethod
    async def delete(self, payment_id: str) -> None:
        """Remove a payment recorded in error"""
        pass

    @abstractmethod
    async def get_by_invoice_id(self, invoice_id: str) -> List[Payment]:
        """
        Retrieve payments for an invoice, oldest first

        Args:
            invoice_id: Invoice ID

        Returns:
            List of payments
        """
        pass

    @abstractmethod
    async def sum_by_invoice_id(self, invoice_id: str) -> Decimal:
        """
        Total amount paid against an invoice

        Args:
            invoice_id: Invoice ID

        Returns:
            Sum of payment amounts, 0 when there are none
        """
        pass
