from .unit_of_work import SqlAlchemyUnitOfWork
from .invoice_number_generator import SqlInvoiceNumberGenerator
from .pdf_service import ReportLabPdfService
from .messaging import create_messaging_provider, normalize_phone_number

__all__ = [
    "SqlAlchemyUnitOfWork",
    "SqlInvoiceNumberGenerator",
    "ReportLabPdfService",
    "create_messaging_provider",
    "normalize_phone_number",
]
