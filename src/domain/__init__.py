from .base import BaseModel, generate_uuid
from .errors import (
    ErrorCode,
    DomainError,
    ValidationError,
    NotFoundError,
    InvalidStateError,
    TransientDeliveryError,
    ProviderConfigurationError,
)
from .tenant_context import TenantContext
from .invoice import Invoice, InvoiceStatus
from .invoice_line import InvoiceLineItem
from .payment import Payment, PaymentMode
from .vehicle_inward import VehicleInward
from .notification_queue import (
    NotificationQueueEntry,
    NotificationStatus,
    NotificationEventType,
)
from .messaging_settings import (
    MessagingSettings,
    MessageTemplate,
    NotificationPreference,
    RecipientRole,
)

__all__ = [
    "BaseModel",
    "generate_uuid",
    "ErrorCode",
    "DomainError",
    "ValidationError",
    "NotFoundError",
    "InvalidStateError",
    "TransientDeliveryError",
    "ProviderConfigurationError",
    "TenantContext",
    "Invoice",
    "InvoiceStatus",
    "InvoiceLineItem",
    "Payment",
    "PaymentMode",
    "VehicleInward",
    "NotificationQueueEntry",
    "NotificationStatus",
    "NotificationEventType",
    "MessagingSettings",
    "MessageTemplate",
    "NotificationPreference",
    "RecipientRole",
]
