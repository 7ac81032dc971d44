"""Entity builders shared by unit tests"""

from datetime import date, datetime
from decimal import Decimal

from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.notification_queue import NotificationQueueEntry, NotificationStatus
from src.domain.payment import Payment, PaymentMode

TENANT_ID = "b7e1c9a2-6f3d-4c1e-8a2b-1f4e5d6c7b8a"


def make_invoice(status=InvoiceStatus.ISSUED, total="2000.00", paid="0.00", **overrides):
    """Invoice entity with consistent amounts"""
    total = Decimal(total)
    paid = Decimal(paid)
    values = dict(
        id="inv-0001",
        tenant_id=TENANT_ID,
        vehicle_inward_id="veh-0001-aaaa-bbbb",
        invoice_number="INV-000001" if status != InvoiceStatus.DRAFT else None,
        invoice_date=date(2024, 3, 1),
        due_date=date(2024, 3, 31),
        status=status,
        subtotal_amount=total,
        discount_amount=Decimal("0.00"),
        tax_amount=Decimal("0.00"),
        total_amount=total,
        paid_amount=paid,
        balance_amount=total - paid,
        created_at=datetime(2024, 3, 1, 9, 0, 0),
        updated_at=datetime(2024, 3, 1, 9, 0, 0),
    )
    values.update(overrides)
    return Invoice(**values)


def make_payment(payment_id="pay-0001", amount="500.00", **overrides):
    values = dict(
        id=payment_id,
        tenant_id=TENANT_ID,
        invoice_id="inv-0001",
        amount=Decimal(amount),
        payment_mode=PaymentMode.CASH,
        payment_date=date(2024, 3, 10),
        created_at=datetime(2024, 3, 10, 11, 0, 0),
    )
    values.update(overrides)
    return Payment(**values)

def make_entry(
    entry_id="n-1",
    event_type="invoice_issued",
    status=NotificationStatus.PENDING,
    retry_count=0,
    payload=None,
):
    """Queue entry for an invoice event"""
    if payload is None:
        payload = {
            "vehicleId": "veh-0001-aaaa-bbbb",
            "invoiceId": "inv-0001",
            "vehicleData": {
                "registration_number": "MH12AB1234",
                "customer_name": "Ravi Kumar",
                "customer_phone": "9876543210",
            },
            "invoiceData": {
                "invoiceNumber": "INV-000001",
                "amount": "2000.00",
                "balanceAmount": "2000.00",
                "dueDate": "2024-03-31",
            },
        }
    return NotificationQueueEntry(
        id=entry_id,
        tenant_id=TENANT_ID,
        event_type=event_type,
        payload=payload,
        status=status,
        retry_count=retry_count,
        created_at=datetime(2024, 3, 1, 10, 0, 0),
        updated_at=datetime(2024, 3, 1, 10, 0, 0),
    )
