"""ProcessNotificationQueue Use Case

Drains the notification outbox with bounded retries.
"""

import logging
from datetime import datetime
from typing import List, Optional
from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.notification_queue_repository import NotificationQueueRepository
from src.domain.errors import TransientDeliveryError
from src.domain.notification_queue import (
    NotificationQueueEntry,
    NotificationStatus,
    TERMINAL_STATUSES,
)
from .dispatcher import NotificationDispatcher
from .dtos import NotificationRunSummaryDTO

logger = logging.getLogger(__name__)

DEFAULT_MAX_RETRIES = 3
DEFAULT_BATCH_SIZE = 50
SEND_FAILED_MESSAGE = "Failed to send notification"


class ProcessNotificationQueue:
    """
    Use Case: Deliver pending notifications

    Business Rules:
    1. Batch = pending entries with retry_count < max_retries, oldest first
    2. A single entry can be forced by id; sent/failed entries are never reprocessed
    3. Each entry is claimed with a compare-and-set before dispatch; losing
       the claim means another run owns it and the entry is skipped
    4. Delivered -> sent with processed_at
    5. Not delivered -> retry_count + 1, back to pending while retries
       remain, else failed
    6. Dispatch raising anything other than TransientDeliveryError -> failed
       immediately, no retry
    7. One entry's failure never aborts the batch and nothing escapes execute()

    Flow:
    1. Select entries (batch or single id)
    2. For each: claim + commit, dispatch, record outcome + commit
    3. Count what is left pending
    """

    def __init__(
        self,
        uow: UnitOfWork,
        queue_repo: NotificationQueueRepository,
        dispatcher: NotificationDispatcher,
        max_retries: int = DEFAULT_MAX_RETRIES,
        batch_size: int = DEFAULT_BATCH_SIZE,
    ):
        self.uow = uow
        self.queue_repo = queue_repo
        self.dispatcher = dispatcher
        self.max_retries = max_retries
        self.batch_size = batch_size

    async def execute(
        self, notification_id: Optional[str] = None, immediate: bool = False
    ) -> Result[NotificationRunSummaryDTO]:
        """
        Execute one drain of the queue

        Args:
            notification_id: Process only this entry
            immediate: Caller asked for an out-of-schedule run

        Returns:
            Result[NotificationRunSummaryDTO]: Always ok; infrastructure
            failures are reported in the summary's error field
        """
        summary = NotificationRunSummaryDTO(
            immediate=immediate, notification_id=notification_id
        )

        # Step 1: Select entries
        try:
            entries = await self._select(notification_id, summary)
        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Could not load notification queue: {e}", exc_info=True)
            summary.message = "Notification processing failed"
            summary.error = str(e)
            return Return.ok(summary)

        # Step 2: Process each entry
        for entry in entries:
            await self._process(entry, summary)

        # Step 3: Remaining backlog
        try:
            summary.total_pending = await self.queue_repo.count_pending()
        except Exception as e:
            logger.warning(f"Could not count pending notifications: {e}")

        logger.info(
            f"Notification run: processed={summary.processed}, sent={summary.sent}, "
            f"failed={summary.failed}, skipped={summary.skipped}"
        )
        return Return.ok(summary)

    async def _select(
        self, notification_id: Optional[str], summary: NotificationRunSummaryDTO
    ) -> List[NotificationQueueEntry]:
        if not notification_id:
            return await self.queue_repo.get_pending_batch(self.max_retries, self.batch_size)

        entry = await self.queue_repo.get_by_id(notification_id)
        if entry is None:
            summary.errors.append(f"{notification_id}: Notification not found")
            return []
        if entry.status in TERMINAL_STATUSES:
            logger.info(f"Notification {entry.id} already {entry.status.value}, skipping")
            summary.skipped += 1
            return []
        return [entry]

    async def _process(
        self, entry: NotificationQueueEntry, summary: NotificationRunSummaryDTO
    ) -> None:
        # Rollback expires loaded rows, read what we need up front
        entry_id = entry.id
        retry_count = entry.retry_count

        # Claim
        try:
            claimed = await self.queue_repo.claim(entry_id, entry.status)
            await self.uow.commit()
        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Could not claim notification {entry_id}: {e}")
            summary.errors.append(f"{entry_id}: {e}")
            return

        if not claimed:
            logger.info(f"Notification {entry_id} claimed by another run, skipping")
            summary.skipped += 1
            return

        summary.processed += 1

        # Dispatch
        try:
            delivered = await self.dispatcher.dispatch(entry)
            error_message = None if delivered else SEND_FAILED_MESSAGE
        except TransientDeliveryError as e:
            delivered = False
            error_message = e.message or SEND_FAILED_MESSAGE
        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Notification {entry_id} failed permanently: {e}")
            summary.failed += 1
            summary.errors.append(f"{entry_id}: {e}")
            await self._record(self.queue_repo.mark_failed(entry_id, str(e)), entry_id, summary)
            return

        # Record outcome
        if delivered:
            summary.sent += 1
            await self._record(
                self.queue_repo.mark_sent(entry_id, datetime.utcnow()), entry_id, summary
            )
            return

        retry_count += 1
        status = (
            NotificationStatus.PENDING
            if retry_count < self.max_retries
            else NotificationStatus.FAILED
        )
        logger.warning(
            f"Notification {entry_id} attempt {retry_count}/{self.max_retries} failed: "
            f"{error_message}"
        )
        summary.failed += 1
        await self._record(
            self.queue_repo.mark_attempt_failed(entry_id, retry_count, status, error_message),
            entry_id,
            summary,
        )

    async def _record(self, update, entry_id: str, summary) -> None:
        try:
            await update
            await self.uow.commit()
        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Could not record outcome of notification {entry_id}: {e}")
            summary.errors.append(f"{entry_id}: {e}")
