"""Data Transfer Objects for Invoice Use Cases

Pydantic models for command inputs and response outputs.
"""

from datetime import datetime, date
from decimal import Decimal
from typing import Dict, List, Optional
from pydantic import BaseModel, Field

from src.domain.invoice import Invoice
from src.domain.invoice_line import InvoiceLineItem
from src.domain.payment import Payment, PaymentMode


class LineItemInputDTO(BaseModel):
    """One product or service to bill"""

    product_name: str = Field(
        ...,
        min_length=1,
        description="Product or service name"
    )

    brand: Optional[str] = Field(
        default=None,
        description="Product brand"
    )

    department: Optional[str] = Field(
        default=None,
        description="Department that performed the work"
    )

    quantity: Decimal = Field(
        ...,
        description="Quantity billed (must be > 0)"
    )

    unit_price: Decimal = Field(
        ...,
        description="Price per unit (must be >= 0)"
    )


class CreateInvoiceCommandDTO(BaseModel):
    """
    Command DTO for creating an invoice from a job

    Used as input to CreateInvoice use case. With issue_immediately the
    invoice is created directly in issued state.
    """

    vehicle_inward_id: str = Field(
        ...,
        description="Job the invoice is raised for"
    )

    line_items: List[LineItemInputDTO] = Field(
        default_factory=list,
        description="Line items (at least one)"
    )

    invoice_date: Optional[date] = Field(
        default=None,
        description="Invoice date (defaults to today)"
    )

    due_date: Optional[date] = Field(
        default=None,
        description="Due date (defaults to invoice_date + configured due days)"
    )

    discount_amount: Decimal = Field(
        default=Decimal("0"),
        description="Discount subtracted from the subtotal"
    )

    discount_reason: Optional[str] = Field(
        default=None,
        description="Reason for the discount"
    )

    tax_amount: Decimal = Field(
        default=Decimal("0"),
        description="Tax added after the discount"
    )

    notes: Optional[str] = Field(
        default=None,
        description="Notes printed on the invoice"
    )

    issue_immediately: bool = Field(
        default=False,
        description="Issue the invoice right after creating it"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "vehicle_inward_id": "0a9b8c7d-6e5f-4a3b-2c1d-0e9f8a7b6c5d",
                "line_items": [
                    {"product_name": "Seat covers", "brand": "AutoForm", "quantity": "2", "unit_price": "500"},
                    {"product_name": "Dashcam", "quantity": "1", "unit_price": "1000"}
                ],
                "tax_amount": "100",
                "discount_amount": "0",
                "issue_immediately": False
            }
        }


class RecordPaymentCommandDTO(BaseModel):
    """Command DTO for recording a payment against an invoice"""

    amount: Decimal = Field(
        ...,
        description="Amount received (must be > 0)"
    )

    payment_mode: PaymentMode = Field(
        ...,
        description="Payment mode"
    )

    payment_date: Optional[date] = Field(
        default=None,
        description="Date received (defaults to today)"
    )

    reference_number: Optional[str] = Field(
        default=None,
        description="UPI/cheque/bank reference"
    )

    paid_by: Optional[str] = Field(
        default=None,
        description="Name of the payer"
    )

    notes: Optional[str] = Field(
        default=None,
        description="Free-form notes"
    )


class UpdatePaymentCommandDTO(BaseModel):
    """
    Command DTO for correcting a recorded payment

    Only the fields that were explicitly set are applied.
    """

    amount: Optional[Decimal] = Field(default=None, description="Corrected amount (must be > 0)")
    payment_mode: Optional[PaymentMode] = Field(default=None)
    payment_date: Optional[date] = Field(default=None)
    reference_number: Optional[str] = Field(default=None)
    paid_by: Optional[str] = Field(default=None)
    notes: Optional[str] = Field(default=None)

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


class ListInvoicesQueryDTO(BaseModel):
    """Filters for ListInvoices"""

    status: Optional[str] = Field(default=None, description="Invoice status filter")
    from_date: Optional[date] = Field(default=None, description="Invoice date lower bound")
    to_date: Optional[date] = Field(default=None, description="Invoice date upper bound")
    search: Optional[str] = Field(default=None, description="Invoice number substring")
    limit: int = Field(default=50, ge=1, le=500, description="Page size")
    offset: int = Field(default=0, ge=0, description="Page offset")


class LineItemDTO(BaseModel):
    id: str
    product_name: str
    brand: Optional[str] = None
    department: Optional[str] = None
    quantity: Decimal
    unit_price: Decimal
    line_total: Decimal

    @classmethod
    def from_entity(cls, line: InvoiceLineItem) -> "LineItemDTO":
        return cls(
            id=line.id,
            product_name=line.product_name,
            brand=line.brand,
            department=line.department,
            quantity=line.quantity,
            unit_price=line.unit_price,
            line_total=line.line_total,
        )


class PaymentDTO(BaseModel):
    id: str
    invoice_id: str
    amount: Decimal
    payment_mode: str
    payment_date: date
    reference_number: Optional[str] = None
    paid_by: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime

    @classmethod
    def from_entity(cls, payment: Payment) -> "PaymentDTO":
        return cls(
            id=payment.id,
            invoice_id=payment.invoice_id,
            amount=payment.amount,
            payment_mode=payment.payment_mode.value,
            payment_date=payment.payment_date,
            reference_number=payment.reference_number,
            paid_by=payment.paid_by,
            notes=payment.notes,
            created_at=payment.created_at,
        )


class InvoiceResponseDTO(BaseModel):
    """
    Response DTO for invoice operations

    line_items and payments are only filled by operations that load them.
    """

    invoice_id: str = Field(..., description="Invoice ID")
    tenant_id: str = Field(..., description="Tenant identifier")
    vehicle_inward_id: str = Field(..., description="Job ID")
    invoice_number: Optional[str] = Field(default=None, description="Invoice number, null while draft")
    invoice_date: date = Field(..., description="Invoice date")
    due_date: date = Field(..., description="Due date")
    status: str = Field(..., description="Invoice status")
    subtotal_amount: Decimal = Field(..., description="Sum of line totals")
    discount_amount: Decimal = Field(..., description="Discount")
    discount_reason: Optional[str] = Field(default=None, description="Discount reason")
    tax_amount: Decimal = Field(..., description="Tax")
    total_amount: Decimal = Field(..., description="subtotal - discount + tax")
    paid_amount: Decimal = Field(..., description="Sum of payments")
    balance_amount: Decimal = Field(..., description="total - paid")
    notes: Optional[str] = Field(default=None, description="Notes")
    issued_at: Optional[datetime] = Field(default=None, description="Issue timestamp")
    cancelled_at: Optional[datetime] = Field(default=None, description="Cancellation timestamp")
    cancelled_reason: Optional[str] = Field(default=None, description="Cancellation reason")
    created_at: datetime = Field(..., description="Creation timestamp")
    line_items: Optional[List[LineItemDTO]] = Field(default=None, description="Line items")
    payments: Optional[List[PaymentDTO]] = Field(default=None, description="Payments")

    @classmethod
    def from_entity(
        cls,
        invoice: Invoice,
        line_items: Optional[List[InvoiceLineItem]] = None,
        payments: Optional[List[Payment]] = None,
    ) -> "InvoiceResponseDTO":
        return cls(
            invoice_id=invoice.id,
            tenant_id=invoice.tenant_id,
            vehicle_inward_id=invoice.vehicle_inward_id,
            invoice_number=invoice.invoice_number,
            invoice_date=invoice.invoice_date,
            due_date=invoice.due_date,
            status=invoice.status.value,
            subtotal_amount=invoice.subtotal_amount,
            discount_amount=invoice.discount_amount,
            discount_reason=invoice.discount_reason,
            tax_amount=invoice.tax_amount,
            total_amount=invoice.total_amount,
            paid_amount=invoice.paid_amount,
            balance_amount=invoice.balance_amount,
            notes=invoice.notes,
            issued_at=invoice.issued_at,
            cancelled_at=invoice.cancelled_at,
            cancelled_reason=invoice.cancelled_reason,
            created_at=invoice.created_at,
            line_items=[LineItemDTO.from_entity(line) for line in line_items]
            if line_items is not None
            else None,
            payments=[PaymentDTO.from_entity(p) for p in payments]
            if payments is not None
            else None,
        )

    class Config:
        json_schema_extra = {
            "example": {
                "invoice_id": "5f0c7a4e-2d7b-4b7e-9a53-0d3f3a8f1c21",
                "tenant_id": "b7e1c9a2-6f3d-4c1e-8a2b-1f4e5d6c7b8a",
                "vehicle_inward_id": "0a9b8c7d-6e5f-4a3b-2c1d-0e9f8a7b6c5d",
                "invoice_number": "INV-000042",
                "invoice_date": "2024-03-01",
                "due_date": "2024-03-31",
                "status": "issued",
                "subtotal_amount": "2000.00",
                "discount_amount": "0.00",
                "tax_amount": "100.00",
                "total_amount": "2100.00",
                "paid_amount": "0.00",
                "balance_amount": "2100.00",
                "issued_at": "2024-03-01T10:00:00Z",
                "created_at": "2024-03-01T09:55:00Z"
            }
        }


class RecordPaymentResponseDTO(BaseModel):
    payment: PaymentDTO
    invoice: InvoiceResponseDTO


class DeletePaymentResponseDTO(BaseModel):
    success: bool
    invoice: InvoiceResponseDTO


class InvoiceListResponseDTO(BaseModel):
    invoices: List[InvoiceResponseDTO]
    count: int = Field(..., description="Number of invoices in this page")
    limit: int
    offset: int


class InvoiceSummaryDTO(BaseModel):
    """
    Response DTO for GetInvoiceSummary

    Draft and cancelled invoices are excluded from money totals.
    """

    total_invoiced: Decimal = Field(..., description="Sum of totals of issued invoices")
    total_received: Decimal = Field(..., description="Sum of payments received")
    total_outstanding: Decimal = Field(..., description="Balance still open")
    total_overdue: Decimal = Field(..., description="Balance of overdue invoices")
    invoice_count: int = Field(..., description="Invoices considered")
    counts_by_status: Dict[str, int] = Field(default_factory=dict)


class MarkOverdueResultDTO(BaseModel):
    marked_count: int = Field(..., description="Invoices moved to overdue")
    invoice_ids: List[str] = Field(default_factory=list)
    notifications_enqueued: int = Field(default=0)
    run_date: date


class InvoicePdfDTO(BaseModel):
    invoice_id: str
    invoice_number: Optional[str] = None
    filename: str
    pdf_base64: str = Field(..., description="PDF document, base64 encoded")
    generated_at: datetime
