"""Scheduler API Routes

Endpoints hit by an external cron to drain the notification queue and to
mark overdue invoices.
"""

from typing import Optional
from fastapi import APIRouter, Depends, Header, Query, status
from fastapi.responses import JSONResponse
from sqlmodel.ext.asyncio.session import AsyncSession

from src.api.dependencies import check_cron_secret
from src.api.error import ClientError
from src.app.use_cases.invoices import MarkOverdueResultDTO
from src.app.use_cases.notifications import NotificationRunSummaryDTO
from src.depends import get_session
from src.worker.notification_processor import build_notification_processor
from src.worker.overdue_invoice_marker import build_overdue_marker

router = APIRouter(prefix="/cron", tags=["Cron"])

UNAUTHORIZED_RESPONSE = {
    "description": "Missing or wrong bearer secret",
    "content": {
        "application/json": {
            "example": {"error": {"code": "UNAUTHORIZED", "message": "Unauthorized"}}
        }
    },
}


@router.get(
    "/process-notifications",
    response_model=NotificationRunSummaryDTO,
    responses={401: UNAUTHORIZED_RESPONSE, 500: {"description": "Queue could not be read"}},
)
async def process_notifications(
    immediate: bool = Query(default=False, description="Bypass the secret check"),
    notification_id: Optional[str] = Query(default=None, alias="id"),
    authorization: Optional[str] = Header(default=None),
    session: AsyncSession = Depends(get_session),
):
    """
    Drain the notification queue once.

    **Authorization:** `Authorization: Bearer <CRON_SECRET>` when a secret
    is configured, unless `immediate=true`.

    **Query parameters:**
    - `immediate`: out-of-schedule run triggered right after an event
    - `id`: process only this queue entry

    **Returns:**
    - 200: Run summary `{processed, sent, failed, skipped, errors, ...}`
    - 401: Secret mismatch
    - 500: Queue could not be read; the summary carries `error`
    """
    check_cron_secret(authorization, bypass=immediate)

    use_case = build_notification_processor(session)
    result = await use_case.execute(notification_id=notification_id, immediate=immediate)

    summary = result.value
    if summary.error:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=summary.model_dump(mode="json"),
        )
    return summary


@router.get(
    "/mark-overdue-invoices",
    response_model=MarkOverdueResultDTO,
    responses={401: UNAUTHORIZED_RESPONSE},
)
async def mark_overdue_invoices(
    authorization: Optional[str] = Header(default=None),
    session: AsyncSession = Depends(get_session),
):
    """
    Move issued/partial invoices past their due date to overdue.

    Idempotent: running twice on the same day marks nothing the second time.
    """
    check_cron_secret(authorization)

    result = await build_overdue_marker(session).execute()

    if result.is_err():
        raise ClientError(result.error, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    return result.value
