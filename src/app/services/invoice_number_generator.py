"""Invoice Number Generator Interface"""

from abc import ABC, abstractmethod


class InvoiceNumberGenerator(ABC):
    """Assigns sequential invoice numbers at issue time"""

    @abstractmethod
    async def next_number(self, tenant_id: str) -> str:
        """
        Generate the next invoice number for a tenant

        Format: <PREFIX>NNNNNN (e.g., INV-000042)

        Args:
            tenant_id: Tenant identifier

        Returns:
            Invoice number not yet used by the tenant
        """
        pass
