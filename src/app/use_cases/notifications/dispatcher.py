"""Routes queue entries to the notifier by event type."""

import logging
from typing import Dict

from src.domain.notification_queue import NotificationEventType, NotificationQueueEntry
from .notifier import EVENT_ROUTES, Route, WorkflowNotifier

logger = logging.getLogger(__name__)


class NotificationDispatcher:
    """
    Event type -> route table

    The table must cover every NotificationEventType; a missing entry is a
    wiring error caught at construction rather than on the first message.
    """

    def __init__(
        self,
        notifier: WorkflowNotifier,
        routes: Dict[NotificationEventType, Route] = EVENT_ROUTES,
    ):
        missing = [event.value for event in NotificationEventType if event not in routes]
        if missing:
            raise ValueError(f"No notification route for: {', '.join(missing)}")
        self.notifier = notifier
        self.routes = routes

    async def dispatch(self, entry: NotificationQueueEntry) -> bool:
        """
        Deliver one entry

        Returns:
            True when delivered, False for an unknown event type

        Raises:
            TransientDeliveryError: Every recipient send failed
            ProviderConfigurationError: Settings missing, disabled or incomplete
        """
        event_type = NotificationEventType.parse(entry.event_type)
        if event_type is None:
            logger.warning(f"Unknown event type {entry.event_type!r} for notification {entry.id}")
            return False

        return await self.notifier.notify(entry, self.routes[event_type])
