from .invoice_repository import InvoiceRepository
from .invoice_line_repository import InvoiceLineRepository
from .payment_repository import PaymentRepository
from .vehicle_inward_repository import VehicleInwardRepository
from .notification_queue_repository import NotificationQueueRepository
from .messaging_settings_repository import MessagingSettingsRepository

__all__ = [
    "InvoiceRepository",
    "InvoiceLineRepository",
    "PaymentRepository",
    "VehicleInwardRepository",
    "NotificationQueueRepository",
    "MessagingSettingsRepository",
]
