"""Notification Queue Repository Interface

Defines the contract for producing and draining the notification outbox.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional, List
from src.domain.notification_queue import NotificationQueueEntry, NotificationStatus


class NotificationQueueRepository(ABC):
    """
    Repository interface for NotificationQueueEntry persistence

    State changes other than `enqueue` are single-row UPDATE statements so
    concurrent worker invocations cannot overwrite each other's claim.
    """

    @abstractmethod
    async def enqueue(self, entry: NotificationQueueEntry) -> NotificationQueueEntry:
        """
        Insert a pending entry

        Args:
            entry: Entry to persist (status=pending, retry_count=0)

        Returns:
            Created entry
        """
        pass

    @abstractmethod
    async def get_by_id(self, entry_id: str) -> Optional[NotificationQueueEntry]:
        """
        Retrieve an entry by ID regardless of status

        Args:
            entry_id: Queue entry ID

        Returns:
            Entry if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_pending_batch(
        self, max_retries: int, limit: int
    ) -> List[NotificationQueueEntry]:
        """
        Retrieve entries eligible for delivery

        Selects status=pending and retry_count < max_retries ordered by
        created_at ascending.

        Args:
            max_retries: Retry ceiling
            limit: Maximum batch size

        Returns:
            Oldest eligible entries first
        """
        pass

    @abstractmethod
    async def claim(self, entry_id: str, expected_status: NotificationStatus) -> bool:
        """
        Atomically move an entry to processing

        The update only applies while the row still has expected_status.

        Args:
            entry_id: Queue entry ID
            expected_status: Status observed when the entry was selected

        Returns:
            True if this caller won the claim, False if the row changed meanwhile
        """
        pass

    @abstractmethod
    async def mark_sent(self, entry_id: str, processed_at: datetime) -> None:
        """Mark an entry delivered"""
        pass

    @abstractmethod
    async def mark_attempt_failed(
        self,
        entry_id: str,
        retry_count: int,
        status: NotificationStatus,
        error_message: str,
    ) -> None:
        """
        Record a failed delivery attempt

        Args:
            entry_id: Queue entry ID
            retry_count: New retry count
            status: pending while retries remain, failed otherwise
            error_message: Reason recorded for operators
        """
        pass

    @abstractmethod
    async def mark_failed(self, entry_id: str, error_message: str) -> None:
        """Fail an entry immediately without touching retry_count"""
        pass

    @abstractmethod
    async def count_pending(self) -> int:
        """Number of entries still pending"""
        pass

    @abstractmethod
    async def get_latest_for_vehicle(
        self,
        vehicle_id: str,
        event_type: str,
        tenant_id: Optional[str] = None,
    ) -> Optional[NotificationQueueEntry]:
        """
        Most recent entry for a vehicle and event type

        Args:
            vehicle_id: Value of payload["vehicleId"]
            event_type: Event type tag
            tenant_id: Restrict to one tenant

        Returns:
            Latest entry or None
        """
        pass
