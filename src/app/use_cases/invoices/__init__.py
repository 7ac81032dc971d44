"""Invoice lifecycle use cases"""
from .create_invoice import CreateInvoice
from .issue_invoice import IssueInvoice
from .record_payment import RecordPayment
from .update_payment import UpdatePayment
from .delete_payment import DeletePayment
from .cancel_invoice import CancelInvoice
from .mark_overdue_invoices import MarkOverdueInvoices
from .get_invoice import GetInvoice
from .list_invoices import ListInvoices
from .get_invoice_summary import GetInvoiceSummary
from .list_payments import ListPayments
from .render_invoice_pdf import RenderInvoicePdf
from .dtos import (
    LineItemInputDTO,
    CreateInvoiceCommandDTO,
    RecordPaymentCommandDTO,
    UpdatePaymentCommandDTO,
    ListInvoicesQueryDTO,
    LineItemDTO,
    PaymentDTO,
    InvoiceResponseDTO,
    RecordPaymentResponseDTO,
    DeletePaymentResponseDTO,
    InvoiceListResponseDTO,
    InvoiceSummaryDTO,
    MarkOverdueResultDTO,
    InvoicePdfDTO,
)

__all__ = [
    "CreateInvoice",
    "IssueInvoice",
    "RecordPayment",
    "UpdatePayment",
    "DeletePayment",
    "CancelInvoice",
    "MarkOverdueInvoices",
    "GetInvoice",
    "ListInvoices",
    "GetInvoiceSummary",
    "ListPayments",
    "RenderInvoicePdf",
    "LineItemInputDTO",
    "CreateInvoiceCommandDTO",
    "RecordPaymentCommandDTO",
    "UpdatePaymentCommandDTO",
    "ListInvoicesQueryDTO",
    "LineItemDTO",
    "PaymentDTO",
    "InvoiceResponseDTO",
    "RecordPaymentResponseDTO",
    "DeletePaymentResponseDTO",
    "InvoiceListResponseDTO",
    "InvoiceSummaryDTO",
    "MarkOverdueResultDTO",
    "InvoicePdfDTO",
]
