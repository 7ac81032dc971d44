"""Message templates for workflow notifications.

Templates use {{name}} placeholders. A tenant's custom template wins over
the global one, which wins over the built-in default.
"""

import re
from typing import Any, Dict, Optional, Tuple

from src.app.repositories.messaging_settings_repository import MessagingSettingsRepository
from src.domain.messaging_settings import NotificationPreference
from src.domain.notification_queue import NotificationQueueEntry

PLACEHOLDER = re.compile(r"\{\{\s*(\w+)\s*\}\}")

DEFAULT_TEMPLATES: Dict[str, str] = {
    "vehicle_inward_created": (
        "🚗 *New Vehicle Entry*\n\n{{vehicleInfo}}\n{{customerInfo}}\n\n"
        "Status: Pending\n\nPlease check the dashboard for details."
    ),
    "vehicle_status_updated": (
        "📝 *Status Updated*\n\n{{vehicleInfo}}\n{{customerInfo}}\n\n"
        "New Status: {{status}}"
    ),
    "installation_complete": (
        "✅ *Installation Complete*\n\n{{vehicleInfo}}\n{{customerInfo}}\n\n"
        "All products have been installed successfully.\n\nReady for accountant review."
    ),
    "invoice_number_added": (
        "🧾 *Invoice Number Added*\n\n{{vehicleInfo}}\n{{customerInfo}}\n\n"
        "Invoice number has been set by accountant."
    ),
    "accountant_completed": (
        "✓ *Accountant Completed*\n\n{{vehicleInfo}}\n{{customerInfo}}\n\n"
        "Invoice processing completed.\n\nReady for delivery."
    ),
    "vehicle_delivered": (
        "🎉 *Vehicle Delivered*\n\n{{vehicleInfo}}\n{{customerInfo}}\n\n"
        "Vehicle has been marked as delivered.\n\nThank you for your work!"
    ),
    "invoice_issued": (
        "🧾 *Invoice Issued*\n\n{{vehicleInfo}}\n{{customerInfo}}\n\n"
        "Invoice #: {{invoiceNumber}}\nAmount: ₹{{amount}}\nDue Date: {{dueDate}}\n\n"
        "Please make payment before due date."
    ),
    "payment_received": (
        "✅ *Payment Received*\n\n{{vehicleInfo}}\n{{customerInfo}}\n\n"
        "Invoice #: {{invoiceNumber}}\nPayment: ₹{{paymentAmount}}\nMode: {{paymentMode}}\n\n"
        "Thank you for your payment!"
    ),
    "invoice_overdue": (
        "⚠️ *Payment Overdue*\n\n{{vehicleInfo}}\n{{customerInfo}}\n\n"
        "Invoice #: {{invoiceNumber}}\nAmount Due: ₹{{balanceAmount}}\nDue Date: {{dueDate}}\n\n"
        "Please make payment at the earliest."
    ),
    "invoice_reminder": (
        "📋 *Payment Reminder*\n\n{{vehicleInfo}}\n{{customerInfo}}\n\n"
        "Invoice #: {{invoiceNumber}}\nAmount Due: ₹{{balanceAmount}}\nDue Date: {{dueDate}}\n\n"
        "This is a friendly reminder about your pending payment."
    ),
}

GENERIC_TEMPLATE = (
    "📢 *Notification*\n\n{{vehicleInfo}}\n{{customerInfo}}\n\n"
    "Please check the dashboard for updates."
)


def render_template(template: str, values: Dict[str, Any]) -> str:
    """Substitute {{name}} placeholders, unknown names render empty"""
    text = PLACEHOLDER.sub(lambda match: str(values.get(match.group(1)) or ""), template)
    return re.sub(r"\n{3,}", "\n\n", text).strip()


def template_values(
    entry: NotificationQueueEntry,
    recipient: Optional[NotificationPreference] = None,
) -> Dict[str, Any]:
    """Placeholder values taken from the queue payload snapshot"""
    payload = entry.payload or {}
    vehicle = payload.get("vehicleData") or {}
    invoice = payload.get("invoiceData") or {}
    payment = payload.get("paymentData") or {}
    vehicle_id = str(payload.get("vehicleId") or vehicle.get("id") or "")

    registration = vehicle.get("registration_number")
    customer_name = vehicle.get("customer_name")

    if registration:
        vehicle_info = f"Vehicle: {registration}"
    elif vehicle_id:
        vehicle_info = f"Vehicle ID: {vehicle_id[:8]}"
    else:
        vehicle_info = ""

    return {
        "vehicleInfo": vehicle_info,
        "customerInfo": f"Customer: {customer_name}" if customer_name else "",
        "vehicleNumber": registration,
        "vehicleId": vehicle_id[:8],
        "customerName": customer_name,
        "status": payload.get("status") or vehicle.get("status"),
        "recipientName": recipient.name if recipient else customer_name,
        "recipientRole": recipient.role.value.capitalize() if recipient else "Customer",
        "invoiceNumber": invoice.get("invoiceNumber") or payment.get("invoiceNumber"),
        "amount": invoice.get("amount"),
        "balanceAmount": invoice.get("balanceAmount") or payment.get("balanceAmount"),
        "dueDate": invoice.get("dueDate"),
        "paymentAmount": payment.get("amount"),
        "paymentMode": payment.get("paymentMode"),
    }


class MessageRenderer:
    """
    Renders queue entries into message text

    Custom templates are looked up once per (tenant, event) for the
    lifetime of the renderer, which is one worker run.
    """

    def __init__(self, settings_repo: MessagingSettingsRepository):
        self.settings_repo = settings_repo
        self._cache: Dict[Tuple[str, str], str] = {}

    async def template_for(self, tenant_id: str, event_type: str) -> str:
        key = (tenant_id, event_type)
        if key not in self._cache:
            custom = await self.settings_repo.get_template(tenant_id, event_type)
            if custom and custom.template:
                self._cache[key] = custom.template
            else:
                self._cache[key] = DEFAULT_TEMPLATES.get(event_type, GENERIC_TEMPLATE)
        return self._cache[key]

    async def render(
        self,
        entry: NotificationQueueEntry,
        recipient: Optional[NotificationPreference] = None,
    ) -> str:
        template = await self.template_for(entry.tenant_id, entry.event_type)
        return render_template(template, template_values(entry, recipient))
