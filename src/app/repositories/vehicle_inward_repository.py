"""Vehicle Inward Repository Interface"""

from abc import ABC, abstractmethod
from typing import Optional
from src.domain.vehicle_inward import VehicleInward


class VehicleInwardRepository(ABC):
    """Read access to jobs invoices are raised from"""

    @abstractmethod
    async def get_by_id(
        self, vehicle_inward_id: str, tenant_id: Optional[str] = None
    ) -> Optional[VehicleInward]:
        """
        Retrieve a job by ID

        Args:
            vehicle_inward_id: Job ID
            tenant_id: Restrict the lookup to this tenant

        Returns:
            VehicleInward if found and visible, None otherwise
        """
        pass
