"""Request schemas for Invoice API

Pydantic models for validating incoming HTTP requests.
"""

from datetime import date
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator, model_validator

from src.domain.payment import PaymentMode


class LineItemRequestSchema(BaseModel):
    product_name: str = Field(..., min_length=1, max_length=255, description="Product or service")
    brand: Optional[str] = Field(default=None, max_length=100)
    department: Optional[str] = Field(default=None, max_length=100)
    quantity: Decimal = Field(..., gt=0, description="Quantity (must be > 0)")
    unit_price: Decimal = Field(..., ge=0, description="Unit price (must be >= 0)")


class CreateInvoiceRequestSchema(BaseModel):
    """
    Request schema for creating an invoice

    Used for POST /invoices endpoint.
    """

    vehicle_inward_id: str = Field(..., min_length=1, description="Job the invoice is raised for")
    line_items: List[LineItemRequestSchema] = Field(
        ...,
        min_length=1,
        description="At least one line item",
    )
    invoice_date: Optional[date] = Field(default=None, description="Defaults to today")
    due_date: Optional[date] = Field(default=None, description="Defaults to invoice_date + due days")
    discount_amount: Decimal = Field(default=Decimal("0"), ge=0)
    discount_reason: Optional[str] = Field(default=None, max_length=255)
    tax_amount: Decimal = Field(default=Decimal("0"), ge=0)
    notes: Optional[str] = Field(default=None)
    issue_immediately: bool = Field(
        default=False,
        description="Assign an invoice number and issue right away",
    )

    @model_validator(mode="after")
    def validate_dates(self):
        if self.invoice_date and self.due_date and self.due_date < self.invoice_date:
            raise ValueError("due_date cannot be before invoice_date")
        return self

    class Config:
        json_schema_extra = {
            "example": {
                "vehicle_inward_id": "0a9b8c7d-6e5f-4a3b-2c1d-0e9f8a7b6c5d",
                "line_items": [
                    {"product_name": "Seat Cover", "brand": "Autoform", "quantity": "1", "unit_price": "1500.00"},
                    {"product_name": "Installation", "quantity": "1", "unit_price": "500.00"}
                ],
                "discount_amount": "100.00",
                "tax_amount": "100.00",
                "issue_immediately": True
            }
        }


class RecordPaymentRequestSchema(BaseModel):
    """
    Request schema for recording a payment

    Used for POST /invoices/{invoice_id}/payments endpoint.
    """

    amount: Decimal = Field(..., description="Payment amount (must be > 0)")
    payment_mode: PaymentMode = Field(default=PaymentMode.CASH)
    payment_date: Optional[date] = Field(default=None, description="Defaults to today")
    reference_number: Optional[str] = Field(default=None, max_length=100)
    paid_by: Optional[str] = Field(default=None, max_length=255)
    notes: Optional[str] = Field(default=None)

    @field_validator("amount")
    @classmethod
    def validate_amount(cls, v):
        """Ensure amount is positive"""
        if v <= 0:
            raise ValueError("Amount must be greater than 0")
        return v

    class Config:
        json_schema_extra = {
            "example": {
                "amount": "500.00",
                "payment_mode": "upi",
                "reference_number": "UPI-8812"
            }
        }


class CancelInvoiceRequestSchema(BaseModel):
    reason: Optional[str] = Field(default=None, max_length=500, description="Why the invoice is cancelled")


class UpdatePaymentRequestSchema(BaseModel):
    """
    Request schema for correcting a payment

    Used for PUT /payments/{payment_id} endpoint. Omitted fields keep their value.
    """

    amount: Optional[Decimal] = Field(default=None, description="Corrected amount (must be > 0)")
    payment_mode: Optional[PaymentMode] = Field(default=None)
    payment_date: Optional[date] = Field(default=None)
    reference_number: Optional[str] = Field(default=None, max_length=100)
    paid_by: Optional[str] = Field(default=None, max_length=255)
    notes: Optional[str] = Field(default=None)

    @field_validator("amount")
    @classmethod
    def validate_amount(cls, v):
        if v is not None and v <= 0:
            raise ValueError("Amount must be greater than 0")
        return v
