"""Invoice Line Item Domain Entity

Tracks individual products and services billed on an invoice.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import ForeignKey, Numeric, String
from src.domain.base import BaseModel, generate_uuid


class InvoiceLineItem(BaseModel, table=True):
    """
    Invoice Line Item - One billed product or service

    Domain Rules:
    - Each line item belongs to exactly one invoice
    - line_total = quantity * unit_price
    - Written together with the invoice header; removed with it if creation fails
    """

    __tablename__ = "invoice_line_items"
    __table_args__ = (
        Index('ix_invoice_line_items_invoice_id', 'invoice_id'),
    )

    id: str = Field(
        default_factory=generate_uuid,
        primary_key=True,
        description="Unique line item identifier (UUID)"
    )

    invoice_id: str = Field(
        sa_column=Column(String(36), ForeignKey("invoices.id", ondelete="CASCADE"), nullable=False),
        description="Foreign key to Invoice"
    )

    product_name: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Product or service name (e.g., 'Seat covers')"
    )

    brand: Optional[str] = Field(
        default=None,
        sa_column=Column(String(100), nullable=True),
        description="Product brand"
    )

    department: Optional[str] = Field(
        default=None,
        sa_column=Column(String(100), nullable=True),
        description="Department that performed the work"
    )

    quantity: Decimal = Field(
        sa_column=Column(Numeric(12, 2), nullable=False),
        description="Quantity billed"
    )

    unit_price: Decimal = Field(
        sa_column=Column(Numeric(12, 2), nullable=False),
        description="Price per unit"
    )

    line_total: Decimal = Field(
        sa_column=Column(Numeric(12, 2), nullable=False),
        description="quantity * unit_price"
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Line item creation timestamp"
    )

    class Config:
        """SQLModel configuration"""
        json_schema_extra = {
            "example": {
                "id": "3c2b1a09-8f7e-4d6c-5b4a-392817161514",
                "invoice_id": "5f0c7a4e-2d7b-4b7e-9a53-0d3f3a8f1c21",
                "product_name": "Seat covers",
                "brand": "AutoForm",
                "department": "Upholstery",
                "quantity": "2.00",
                "unit_price": "500.00",
                "line_total": "1000.00",
                "created_at": "2024-03-01T09:55:00Z"
            }
        }
