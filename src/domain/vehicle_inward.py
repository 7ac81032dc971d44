"""Vehicle Inward Domain Entity

The job (work order) an invoice is raised from. Owned by the intake
workflow; the billing core only reads it.
"""

from datetime import datetime
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import String
from src.domain.base import BaseModel, generate_uuid


class VehicleInward(BaseModel, table=True):
    """
    Vehicle Inward - A vehicle checked in for accessories/service work

    Domain Rules:
    - Visible only within its tenant
    - Customer fields are snapshotted into notification payloads
    """

    __tablename__ = "vehicle_inward"
    __table_args__ = (
        Index('ix_vehicle_inward_tenant_id', 'tenant_id'),
    )

    id: str = Field(
        default_factory=generate_uuid,
        primary_key=True,
        description="Unique job identifier (UUID)"
    )

    tenant_id: str = Field(
        description="Tenant ID"
    )

    registration_number: str = Field(
        sa_column=Column(String(20), nullable=False),
        description="Vehicle registration number"
    )

    model: Optional[str] = Field(
        default=None,
        description="Vehicle make/model"
    )

    customer_name: Optional[str] = Field(
        default=None,
        description="Customer name"
    )

    customer_phone: Optional[str] = Field(
        default=None,
        description="Customer phone number"
    )

    status: str = Field(
        default="pending",
        description="Job status in the intake workflow"
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Check-in timestamp"
    )

    def snapshot(self) -> dict:
        """Denormalized fields needed to template notifications"""
        return {
            "id": self.id,
            "tenant_id": self.tenant_id,
            "registration_number": self.registration_number,
            "model": self.model,
            "customer_name": self.customer_name,
            "customer_phone": self.customer_phone,
            "status": self.status,
        }
