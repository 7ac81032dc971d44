from .invoice_repository import SqlAlchemyInvoiceRepository
from .invoice_line_repository import SqlAlchemyInvoiceLineRepository
from .payment_repository import SqlAlchemyPaymentRepository
from .vehicle_inward_repository import SqlAlchemyVehicleInwardRepository
from .notification_queue_repository import SqlAlchemyNotificationQueueRepository
from .messaging_settings_repository import SqlAlchemyMessagingSettingsRepository

__all__ = [
    "SqlAlchemyInvoiceRepository",
    "SqlAlchemyInvoiceLineRepository",
    "SqlAlchemyPaymentRepository",
    "SqlAlchemyVehicleInwardRepository",
    "SqlAlchemyNotificationQueueRepository",
    "SqlAlchemyMessagingSettingsRepository",
]
