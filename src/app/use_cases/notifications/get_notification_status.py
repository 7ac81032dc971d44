"""GetNotificationStatus Use Case"""

from libs.result import Result, Return, Error
from src.app.repositories.notification_queue_repository import NotificationQueueRepository
from src.domain.errors import DomainError, NotFoundError, ValidationError
from src.domain.tenant_context import TenantContext
from .dtos import NotificationDTO


class GetNotificationStatus:
    """Use Case: Latest queue entry for a vehicle and event type"""

    def __init__(self, queue_repo: NotificationQueueRepository):
        self.queue_repo = queue_repo

    async def execute(
        self, context: TenantContext, vehicle_id: str, event_type: str
    ) -> Result[NotificationDTO]:
        try:
            context.require()
            if not vehicle_id or not event_type:
                raise ValidationError("vehicle_id and event_type are required")

            entry = await self.queue_repo.get_latest_for_vehicle(
                vehicle_id, event_type, tenant_id=context.scope
            )
            if not entry:
                raise NotFoundError("Notification not found")

            return Return.ok(NotificationDTO.from_entity(entry))

        except DomainError as e:
            return Return.err(Error(code=e.code.value, message=e.message, reason=type(e).__name__))
        except Exception as e:
            return Return.err(
                Error(
                    code="NOTIFICATION_STATUS_FAILED",
                    message="Failed to load notification status",
                    reason=str(e),
                )
            )
