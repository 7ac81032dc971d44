"""SQLAlchemy Vehicle Inward Repository Implementation"""

from typing import Optional
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.vehicle_inward_repository import VehicleInwardRepository
from src.domain.vehicle_inward import VehicleInward


class SqlAlchemyVehicleInwardRepository(VehicleInwardRepository):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(
        self, vehicle_inward_id: str, tenant_id: Optional[str] = None
    ) -> Optional[VehicleInward]:
        statement = select(VehicleInward).where(VehicleInward.id == vehicle_inward_id)
        if tenant_id:
            statement = statement.where(VehicleInward.tenant_id == tenant_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()
