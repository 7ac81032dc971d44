from .unit_of_work import UnitOfWork
from .invoice_number_generator import InvoiceNumberGenerator
from .messaging_gateway import (
    MessagingProvider,
    MessagingProviderType,
    MessagingConfig,
    OutboundMessage,
    Attachment,
    SendResult,
)
from .pdf_service import PdfService

__all__ = [
    "UnitOfWork",
    "InvoiceNumberGenerator",
    "MessagingProvider",
    "MessagingProviderType",
    "MessagingConfig",
    "OutboundMessage",
    "Attachment",
    "SendResult",
    "PdfService",
]
