"""Notification outbox use cases"""
from .enqueue_notification import EnqueueNotification
from .get_notification_status import GetNotificationStatus
from .process_notification_queue import ProcessNotificationQueue
from .dispatcher import NotificationDispatcher
from .notifier import EVENT_ROUTES, Route, WorkflowNotifier
from .templates import MessageRenderer
from .attachments import InvoiceDocumentBuilder
from .dtos import (
    EnqueueNotificationCommandDTO,
    NotificationDTO,
    NotificationRunSummaryDTO,
)

__all__ = [
    "EnqueueNotification",
    "GetNotificationStatus",
    "ProcessNotificationQueue",
    "NotificationDispatcher",
    "EVENT_ROUTES",
    "Route",
    "WorkflowNotifier",
    "MessageRenderer",
    "InvoiceDocumentBuilder",
    "EnqueueNotificationCommandDTO",
    "NotificationDTO",
    "NotificationRunSummaryDTO",
]
