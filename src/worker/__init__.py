"""Background workers for the workshop service"""
from .notification_processor import NotificationProcessorWorker
from .overdue_invoice_marker import OverdueInvoiceWorker

__all__ = ["NotificationProcessorWorker", "OverdueInvoiceWorker"]
