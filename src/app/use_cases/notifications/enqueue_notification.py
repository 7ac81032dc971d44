"""EnqueueNotification Use Case

Producer side of the notification outbox.
"""

import logging
import uuid
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.notification_queue_repository import NotificationQueueRepository
from src.domain.errors import DomainError, ValidationError
from src.domain.notification_queue import NotificationEventType, NotificationQueueEntry
from src.domain.tenant_context import TenantContext
from .dtos import EnqueueNotificationCommandDTO, NotificationDTO

logger = logging.getLogger(__name__)

NIL_TENANT_ID = "00000000-0000-0000-0000-000000000000"


def validate_tenant_id(tenant_id: str) -> str:
    """Tenant id must be a real UUID, the nil UUID is a placeholder"""
    if not tenant_id:
        raise ValidationError("Tenant ID required")
    try:
        parsed = uuid.UUID(str(tenant_id))
    except ValueError:
        raise ValidationError(f"Invalid tenant ID: {tenant_id}")
    if str(parsed) == NIL_TENANT_ID:
        raise ValidationError("Invalid tenant ID: nil UUID")
    return str(parsed)


class EnqueueNotification:
    """
    Use Case: Queue a notification

    Business Rules:
    1. tenant_id must be a non-nil UUID the caller may access
    2. event_type must be a known NotificationEventType
    3. Entry starts pending with retry_count 0
    """

    def __init__(self, uow: UnitOfWork, queue_repo: NotificationQueueRepository):
        self.uow = uow
        self.queue_repo = queue_repo

    async def execute(
        self, context: TenantContext, command: EnqueueNotificationCommandDTO
    ) -> Result[NotificationDTO]:
        try:
            # Step 1: Validate
            context.require()
            tenant_id = validate_tenant_id(command.tenant_id)
            if not context.can_access(tenant_id):
                raise ValidationError("Cannot enqueue notifications for another tenant")

            event_type = NotificationEventType.parse(command.event_type)
            if event_type is None:
                raise ValidationError(f"Unknown event type: {command.event_type}")

            # Step 2: Insert
            entry = await self.queue_repo.enqueue(
                NotificationQueueEntry(
                    tenant_id=tenant_id,
                    event_type=event_type.value,
                    payload=command.payload,
                )
            )
            await self.uow.commit()

            logger.info(f"Queued {event_type.value} notification {entry.id} for tenant {tenant_id}")
            return Return.ok(NotificationDTO.from_entity(entry))

        except DomainError as e:
            await self.uow.rollback()
            return Return.err(Error(code=e.code.value, message=e.message, reason=type(e).__name__))
        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="ENQUEUE_NOTIFICATION_FAILED",
                    message="Failed to queue notification",
                    reason=str(e),
                )
            )
