"""SQLAlchemy Notification Queue Repository Implementation

Implements the notification outbox using SQLAlchemy async session.
"""

from typing import Optional, List
from datetime import datetime
from sqlalchemy import update
from sqlmodel import select, func
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.notification_queue_repository import NotificationQueueRepository
from src.domain.notification_queue import NotificationQueueEntry, NotificationStatus


class SqlAlchemyNotificationQueueRepository(NotificationQueueRepository):
    """
    SQLAlchemy implementation of NotificationQueueRepository

    Status changes are issued as UPDATE statements rather than by mutating
    loaded entities, so the WHERE clause decides who wins a race.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def enqueue(self, entry: NotificationQueueEntry) -> NotificationQueueEntry:
        self.session.add(entry)
        await self.session.flush()
        await self.session.refresh(entry)
        return entry

    async def get_by_id(self, entry_id: str) -> Optional[NotificationQueueEntry]:
        statement = (
            select(NotificationQueueEntry)
            .where(NotificationQueueEntry.id == entry_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(statement)
        return self._detach(result.scalar_one_or_none())

    async def get_pending_batch(
        self, max_retries: int, limit: int
    ) -> List[NotificationQueueEntry]:
        """
        Retrieve entries eligible for delivery

        Args:
            max_retries: Retry ceiling
            limit: Maximum batch size

        Returns:
            Oldest eligible entries first
        """
        statement = (
            select(NotificationQueueEntry)
            .where(NotificationQueueEntry.status == NotificationStatus.PENDING)
            .where(NotificationQueueEntry.retry_count < max_retries)
            .order_by(NotificationQueueEntry.created_at.asc())
            .limit(limit)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(statement)
        return [self._detach(entry) for entry in result.scalars().all()]

    async def claim(self, entry_id: str, expected_status: NotificationStatus) -> bool:
        """
        Atomically move an entry to processing

        Args:
            entry_id: Queue entry ID
            expected_status: Status observed when the entry was selected

        Returns:
            True if exactly one row was updated
        """
        statement = (
            update(NotificationQueueEntry)
            .where(NotificationQueueEntry.id == entry_id)
            .where(NotificationQueueEntry.status == expected_status)
            .values(status=NotificationStatus.PROCESSING, updated_at=datetime.utcnow())
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(statement)
        return result.rowcount == 1

    async def mark_sent(self, entry_id: str, processed_at: datetime) -> None:
        await self._update(
            entry_id,
            status=NotificationStatus.SENT,
            processed_at=processed_at,
            error_message=None,
        )

    async def mark_attempt_failed(
        self,
        entry_id: str,
        retry_count: int,
        status: NotificationStatus,
        error_message: str,
    ) -> None:
        await self._update(
            entry_id,
            status=status,
            retry_count=retry_count,
            error_message=error_message,
        )

    async def mark_failed(self, entry_id: str, error_message: str) -> None:
        await self._update(
            entry_id,
            status=NotificationStatus.FAILED,
            error_message=error_message,
        )

    async def count_pending(self) -> int:
        statement = (
            select(func.count())
            .select_from(NotificationQueueEntry)
            .where(NotificationQueueEntry.status == NotificationStatus.PENDING)
        )
        result = await self.session.execute(statement)
        return result.scalar_one()

    async def get_latest_for_vehicle(
        self,
        vehicle_id: str,
        event_type: str,
        tenant_id: Optional[str] = None,
    ) -> Optional[NotificationQueueEntry]:
        statement = (
            select(NotificationQueueEntry)
            .where(NotificationQueueEntry.payload["vehicleId"].as_string() == vehicle_id)
            .where(NotificationQueueEntry.event_type == event_type)
        )
        if tenant_id:
            statement = statement.where(NotificationQueueEntry.tenant_id == tenant_id)

        statement = statement.order_by(NotificationQueueEntry.created_at.desc()).limit(1)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def _update(self, entry_id: str, **values) -> None:
        values["updated_at"] = datetime.utcnow()
        statement = (
            update(NotificationQueueEntry)
            .where(NotificationQueueEntry.id == entry_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        await self.session.execute(statement)

    def _detach(self, entry: Optional[NotificationQueueEntry]) -> Optional[NotificationQueueEntry]:
        """Hand out a snapshot that a later rollback cannot expire"""
        if entry is not None:
            self.session.expunge(entry)
        return entry
