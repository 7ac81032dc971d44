"""Payment Domain Entity

Records money received against an invoice.
"""

from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import Date, ForeignKey, Numeric, String, Text
from src.domain.base import BaseModel, generate_uuid


class PaymentMode(str, Enum):
    """How the customer paid"""
    CASH = "cash"
    UPI = "upi"
    CARD = "card"
    BANK_TRANSFER = "bank_transfer"
    CHEQUE = "cheque"
    OTHER = "other"


class Payment(BaseModel, table=True):
    """
    Payment - Amount received against an invoice

    Domain Rules:
    - amount must be > 0
    - The parent invoice's paid_amount is the sum of its payments
    - Corrections and deletions recompute the parent invoice
    - Not accepted, changed or removed for cancelled invoices
    """

    __tablename__ = "payments"
    __table_args__ = (
        Index('ix_payments_invoice_id', 'invoice_id'),
        Index('ix_payments_tenant_id', 'tenant_id'),
    )

    id: str = Field(
        default_factory=generate_uuid,
        primary_key=True,
        description="Unique payment identifier (UUID)"
    )

    tenant_id: str = Field(
        description="Tenant ID"
    )

    invoice_id: str = Field(
        sa_column=Column(String(36), ForeignKey("invoices.id"), nullable=False),
        description="Foreign key to Invoice"
    )

    amount: Decimal = Field(
        sa_column=Column(Numeric(12, 2), nullable=False),
        description="Amount received"
    )

    payment_mode: PaymentMode = Field(
        description="Payment mode (cash, upi, card, bank_transfer, cheque, other)"
    )

    payment_date: date = Field(
        sa_column=Column(Date, nullable=False),
        description="Date the payment was received"
    )

    reference_number: Optional[str] = Field(
        default=None,
        sa_column=Column(String(100), nullable=True),
        description="UPI/cheque/bank reference"
    )

    paid_by: Optional[str] = Field(
        default=None,
        sa_column=Column(String(255), nullable=True),
        description="Name of the payer"
    )

    notes: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
        description="Free-form notes"
    )

    created_by: Optional[str] = Field(
        default=None,
        description="User who recorded the payment"
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Payment record creation timestamp"
    )

    class Config:
        """SQLModel configuration"""
        json_schema_extra = {
            "example": {
                "id": "7d6c5b4a-3928-4716-9514-131211100908",
                "tenant_id": "b7e1c9a2-6f3d-4c1e-8a2b-1f4e5d6c7b8a",
                "invoice_id": "5f0c7a4e-2d7b-4b7e-9a53-0d3f3a8f1c21",
                "amount": "2000.00",
                "payment_mode": "upi",
                "payment_date": "2024-03-05",
                "reference_number": "UPI-4412",
                "paid_by": "R. Sharma",
                "created_at": "2024-03-05T12:00:00Z"
            }
        }
