"""Invoice Domain Entity

Tracks workshop invoices raised against a vehicle job, with payment status.
"""

from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import Numeric, String, Date, Text
from src.domain.base import BaseModel, generate_uuid


class InvoiceStatus(str, Enum):
    """Invoice lifecycle states"""
    DRAFT = "draft"
    ISSUED = "issued"
    PARTIAL = "partial"
    PAID = "paid"
    OVERDUE = "overdue"
    CANCELLED = "cancelled"


class Invoice(BaseModel, table=True):
    """
    Invoice - Bill raised for a completed vehicle job

    Domain Rules:
    - invoice_number is null until the invoice is issued, then unique per tenant
    - balance_amount = total_amount - paid_amount after every mutation
    - total_amount = subtotal_amount - discount_amount + tax_amount
    - Status transitions: draft -> issued -> partial/paid/overdue, any
      non-terminal state -> cancelled (see src.domain.invoice_state)
    - paid and cancelled are terminal; a paid invoice can never be cancelled
    - Never hard-deleted; cancellation is the soft delete
    """

    __tablename__ = "invoices"
    __table_args__ = (
        Index('ix_invoices_tenant_id', 'tenant_id'),
        Index('ix_invoices_status', 'status'),
        Index('ix_invoices_due_date', 'due_date'),
        Index('ix_invoices_tenant_invoice_number', 'tenant_id', 'invoice_number', unique=True),
    )

    id: str = Field(
        default_factory=generate_uuid,
        primary_key=True,
        description="Unique invoice identifier (UUID)"
    )

    tenant_id: str = Field(
        description="Tenant ID"
    )

    vehicle_inward_id: str = Field(
        description="Job (vehicle inward) the invoice was raised for"
    )

    invoice_number: Optional[str] = Field(
        default=None,
        sa_column=Column(String(50), nullable=True),
        description="Sequential invoice number, assigned on issue (e.g., INV-000042)"
    )

    invoice_date: date = Field(
        sa_column=Column(Date, nullable=False),
        description="Invoice date"
    )

    due_date: date = Field(
        sa_column=Column(Date, nullable=False),
        description="Payment due date"
    )

    status: InvoiceStatus = Field(
        default=InvoiceStatus.DRAFT,
        description="Invoice status (draft, issued, partial, paid, overdue, cancelled)"
    )

    subtotal_amount: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(12, 2), nullable=False),
        description="Sum of line item totals"
    )

    discount_amount: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(12, 2), nullable=False),
        description="Discount applied to the subtotal"
    )

    discount_reason: Optional[str] = Field(
        default=None,
        sa_column=Column(String(255), nullable=True),
        description="Why the discount was given"
    )

    tax_amount: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(12, 2), nullable=False),
        description="Tax added after discount"
    )

    total_amount: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(12, 2), nullable=False),
        description="subtotal - discount + tax"
    )

    paid_amount: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(12, 2), nullable=False),
        description="Sum of recorded payments"
    )

    balance_amount: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(12, 2), nullable=False),
        description="total_amount - paid_amount"
    )

    notes: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
        description="Free-form notes printed on the invoice"
    )

    created_by: Optional[str] = Field(
        default=None,
        description="User who created the invoice"
    )

    issued_at: Optional[datetime] = Field(
        default=None,
        description="Timestamp when invoice was issued"
    )

    cancelled_at: Optional[datetime] = Field(
        default=None,
        description="Timestamp when invoice was cancelled"
    )

    cancelled_reason: Optional[str] = Field(
        default=None,
        sa_column=Column(String(500), nullable=True),
        description="Reason given for cancellation"
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Invoice creation timestamp"
    )

    updated_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Last update timestamp"
    )

    class Config:
        """SQLModel configuration"""
        json_schema_extra = {
            "example": {
                "id": "5f0c7a4e-2d7b-4b7e-9a53-0d3f3a8f1c21",
                "tenant_id": "b7e1c9a2-6f3d-4c1e-8a2b-1f4e5d6c7b8a",
                "vehicle_inward_id": "0a9b8c7d-6e5f-4a3b-2c1d-0e9f8a7b6c5d",
                "invoice_number": "INV-000042",
                "invoice_date": "2024-03-01",
                "due_date": "2024-03-31",
                "status": "issued",
                "subtotal_amount": "2000.00",
                "discount_amount": "100.00",
                "tax_amount": "100.00",
                "total_amount": "2000.00",
                "paid_amount": "0.00",
                "balance_amount": "2000.00",
                "issued_at": "2024-03-01T10:00:00Z",
                "created_at": "2024-03-01T09:55:00Z",
                "updated_at": "2024-03-01T10:00:00Z"
            }
        }
