"""Workflow notifier: turns a queue entry into WhatsApp messages."""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from src.app.repositories.messaging_settings_repository import MessagingSettingsRepository
from src.app.services.messaging_gateway import MessagingProvider, OutboundMessage
from src.domain.errors import ProviderConfigurationError, TransientDeliveryError
from src.domain.messaging_settings import (
    MessagingSettings,
    NotificationPreference,
    RecipientRole,
)
from src.domain.notification_queue import NotificationEventType, NotificationQueueEntry
from .attachments import InvoiceDocumentBuilder
from .templates import MessageRenderer

logger = logging.getLogger(__name__)

ProviderFactory = Callable[[MessagingSettings], MessagingProvider]


@dataclass(frozen=True)
class Route:
    """Who hears about an event"""
    roles: Tuple[RecipientRole, ...]
    notify_customer: bool = False
    attach_invoice: bool = False


_STAFF_ACCOUNTS = (RecipientRole.ACCOUNTANT, RecipientRole.MANAGER)

EVENT_ROUTES: Dict[NotificationEventType, Route] = {
    NotificationEventType.VEHICLE_INWARD_CREATED: Route(
        (RecipientRole.INSTALLER, RecipientRole.MANAGER, RecipientRole.ACCOUNTANT)
    ),
    NotificationEventType.VEHICLE_STATUS_UPDATED: Route(
        (RecipientRole.COORDINATOR, RecipientRole.MANAGER)
    ),
    NotificationEventType.INSTALLATION_COMPLETE: Route(
        (RecipientRole.MANAGER, RecipientRole.ACCOUNTANT)
    ),
    NotificationEventType.INVOICE_NUMBER_ADDED: Route((RecipientRole.MANAGER,)),
    NotificationEventType.ACCOUNTANT_COMPLETED: Route(
        (RecipientRole.COORDINATOR, RecipientRole.MANAGER)
    ),
    NotificationEventType.VEHICLE_DELIVERED: Route(
        (RecipientRole.MANAGER, RecipientRole.ACCOUNTANT)
    ),
    NotificationEventType.INVOICE_ISSUED: Route(
        _STAFF_ACCOUNTS, notify_customer=True, attach_invoice=True
    ),
    NotificationEventType.PAYMENT_RECEIVED: Route(_STAFF_ACCOUNTS, notify_customer=True),
    NotificationEventType.INVOICE_OVERDUE: Route(_STAFF_ACCOUNTS, notify_customer=True),
    NotificationEventType.INVOICE_REMINDER: Route(_STAFF_ACCOUNTS, notify_customer=True),
}


@dataclass
class Recipient:
    phone: str
    preference: Optional[NotificationPreference] = None

    @property
    def is_customer(self) -> bool:
        return self.preference is None


class WorkflowNotifier:
    """
    Sends one queue entry to everyone routed for its event

    Business Rules:
    1. Missing or disabled messaging settings fail the entry without retry
    2. Incomplete provider credentials fail the entry without retry
    3. Nobody to notify counts as delivered
    4. Delivered if at least one recipient got the message
    5. Every send failing raises TransientDeliveryError so the worker retries
    """

    def __init__(
        self,
        settings_repo: MessagingSettingsRepository,
        provider_factory: ProviderFactory,
        renderer: MessageRenderer,
        document_builder: Optional[InvoiceDocumentBuilder] = None,
    ):
        self.settings_repo = settings_repo
        self.provider_factory = provider_factory
        self.renderer = renderer
        self.document_builder = document_builder

    async def notify(self, entry: NotificationQueueEntry, route: Route) -> bool:
        settings = await self.settings_repo.get_settings(entry.tenant_id)
        if settings is None:
            raise ProviderConfigurationError(
                f"Messaging is not configured for tenant {entry.tenant_id}"
            )
        if not settings.enabled:
            raise ProviderConfigurationError(
                f"Messaging is disabled for tenant {entry.tenant_id}"
            )

        provider = self.provider_factory(settings)

        recipients = await self._recipients(entry, route)
        if not recipients:
            logger.info(f"No recipients for {entry.event_type} notification {entry.id}")
            return True

        attachment = None
        if route.attach_invoice and self.document_builder:
            attachment = await self.document_builder.build(
                entry.tenant_id, (entry.payload or {}).get("invoiceId")
            )

        sent = 0
        errors = []
        for recipient in recipients:
            text = await self.renderer.render(entry, recipient.preference)
            result = await provider.send(
                OutboundMessage(
                    to=recipient.phone,
                    text=text,
                    attachment=attachment if recipient.is_customer else None,
                )
            )
            if result.success:
                sent += 1
            else:
                errors.append(f"{recipient.phone}: {result.error}")

        logger.info(
            f"Notification {entry.id} ({entry.event_type}): "
            f"{sent}/{len(recipients)} recipients reached"
        )

        if sent == 0:
            raise TransientDeliveryError("; ".join(errors))
        return True

    async def _recipients(
        self, entry: NotificationQueueEntry, route: Route
    ) -> List[Recipient]:
        recipients: List[Recipient] = []
        seen = set()

        if route.notify_customer:
            vehicle = (entry.payload or {}).get("vehicleData") or {}
            phone = vehicle.get("customer_phone")
            if phone:
                recipients.append(Recipient(phone=phone))
                seen.add(phone)

        if route.roles:
            preferences = await self.settings_repo.get_recipients(
                entry.tenant_id, list(route.roles)
            )
            for preference in preferences:
                if not preference.wants(entry.event_type):
                    continue
                if preference.phone_number in seen:
                    continue
                seen.add(preference.phone_number)
                recipients.append(Recipient(phone=preference.phone_number, preference=preference))

        return recipients
