"""Queue entries produced by the invoice lifecycle.

Payloads carry references plus a denormalized snapshot so the worker can
template messages without reading the invoice again.
"""

from typing import Optional

from src.domain.invoice import Invoice
from src.domain.notification_queue import NotificationEventType, NotificationQueueEntry
from src.domain.payment import Payment
from src.domain.vehicle_inward import VehicleInward


def _vehicle_data(vehicle: Optional[VehicleInward]) -> dict:
    return vehicle.snapshot() if vehicle else {}


def _invoice_data(invoice: Invoice) -> dict:
    return {
        "invoiceId": invoice.id,
        "invoiceNumber": invoice.invoice_number,
        "amount": str(invoice.total_amount),
        "balanceAmount": str(invoice.balance_amount),
        "dueDate": invoice.due_date.isoformat(),
    }


def invoice_event(
    event_type: NotificationEventType,
    invoice: Invoice,
    vehicle: Optional[VehicleInward] = None,
) -> NotificationQueueEntry:
    return NotificationQueueEntry(
        tenant_id=invoice.tenant_id,
        event_type=event_type.value,
        payload={
            "vehicleId": invoice.vehicle_inward_id,
            "invoiceId": invoice.id,
            "vehicleData": _vehicle_data(vehicle),
            "invoiceData": _invoice_data(invoice),
        },
    )


def payment_received_event(
    invoice: Invoice,
    payment: Payment,
    vehicle: Optional[VehicleInward] = None,
) -> NotificationQueueEntry:
    return NotificationQueueEntry(
        tenant_id=invoice.tenant_id,
        event_type=NotificationEventType.PAYMENT_RECEIVED.value,
        payload={
            "vehicleId": invoice.vehicle_inward_id,
            "invoiceId": invoice.id,
            "vehicleData": _vehicle_data(vehicle),
            "invoiceData": _invoice_data(invoice),
            "paymentData": {
                "paymentId": payment.id,
                "amount": str(payment.amount),
                "paymentMode": payment.payment_mode.value,
                "invoiceNumber": invoice.invoice_number,
                "balanceAmount": str(invoice.balance_amount),
            },
        },
    )
