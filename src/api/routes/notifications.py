"""Notification API Routes

Producer endpoint for the notification queue and delivery status lookup.
"""

from fastapi import APIRouter, Depends, Query, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.api.dependencies import require_tenant_member
from src.api.error import ClientError
from src.api.schemas.notification_request import EnqueueNotificationRequestSchema
from src.adapter.repositories import SqlAlchemyNotificationQueueRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.use_cases.notifications import (
    EnqueueNotification,
    EnqueueNotificationCommandDTO,
    GetNotificationStatus,
    NotificationDTO,
)
from src.depends import get_session
from src.domain.tenant_context import TenantContext

router = APIRouter(prefix="/notifications", tags=["Notifications"])


@router.post(
    "",
    response_model=NotificationDTO,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {
            "description": "Invalid tenant or event type",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "VALIDATION_ERROR",
                            "message": "Unknown event type: vehicle_washed"
                        }
                    }
                }
            }
        }
    }
)
async def enqueue_notification(
    request: EnqueueNotificationRequestSchema,
    context: TenantContext = Depends(require_tenant_member),
    session: AsyncSession = Depends(get_session),
):
    """
    Queue a WhatsApp notification for a workflow event.

    The entry is delivered by the notification worker on its next run, or
    right away through `GET /cron/process-notifications?immediate=true&id=...`.

    **Returns:**
    - 201: Entry queued as pending
    - 400: Tenant id is not a valid UUID, or unknown event type
    """
    use_case = EnqueueNotification(
        SqlAlchemyUnitOfWork(session), SqlAlchemyNotificationQueueRepository(session)
    )
    command = EnqueueNotificationCommandDTO(
        tenant_id=request.tenant_id,
        event_type=request.event_type,
        payload=request.payload,
    )
    result = await use_case.execute(context, command)

    if result.is_err():
        raise ClientError.from_error(result.error)

    return result.value


@router.get("/status", response_model=NotificationDTO)
async def get_notification_status(
    vehicle_id: str = Query(..., min_length=1),
    event_type: str = Query(..., min_length=1),
    context: TenantContext = Depends(require_tenant_member),
    session: AsyncSession = Depends(get_session),
):
    """
    Latest queue entry for a vehicle and event type.

    **Returns:**
    - 200: Entry with status, retry count and last error
    - 404: Nothing queued for this vehicle and event
    """
    use_case = GetNotificationStatus(SqlAlchemyNotificationQueueRepository(session))
    result = await use_case.execute(context, vehicle_id, event_type)

    if result.is_err():
        raise ClientError.from_error(result.error)

    return result.value
