"""Unit tests for ProcessNotificationQueue use case

Tests cover:
- Delivered entries become sent
- Retry law: pending while retries remain, failed at max_retries
- Exceptions fail immediately without retry
- Unknown event types go through the retry path
- Lost claims are skipped
- Forced single-entry processing, terminal rows untouched
- Infrastructure failure returns a summary instead of raising
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.notifications.process_notification_queue import (
    ProcessNotificationQueue,
    SEND_FAILED_MESSAGE,
)
from src.domain.errors import ProviderConfigurationError, TransientDeliveryError
from src.domain.notification_queue import NotificationStatus
from tests.unit.factories import make_entry


@pytest.fixture
def mock_queue_repo():
    repo = MagicMock()
    repo.get_pending_batch = AsyncMock(return_value=[])
    repo.get_by_id = AsyncMock(return_value=None)
    repo.claim = AsyncMock(return_value=True)
    repo.mark_sent = AsyncMock()
    repo.mark_attempt_failed = AsyncMock()
    repo.mark_failed = AsyncMock()
    repo.count_pending = AsyncMock(return_value=0)
    return repo


@pytest.fixture
def mock_dispatcher():
    dispatcher = MagicMock()
    dispatcher.dispatch = AsyncMock(return_value=True)
    return dispatcher


@pytest.fixture
def process_use_case(mock_uow, mock_queue_repo, mock_dispatcher):
    return ProcessNotificationQueue(
        uow=mock_uow,
        queue_repo=mock_queue_repo,
        dispatcher=mock_dispatcher,
        max_retries=3,
        batch_size=50,
    )


@pytest.mark.asyncio
class TestBatchProcessing:
    async def test_delivered_entry_marked_sent(self, process_use_case, mock_queue_repo):
        # Arrange
        mock_queue_repo.get_pending_batch = AsyncMock(return_value=[make_entry()])

        # Act
        result = await process_use_case.execute()

        # Assert
        summary = result.value
        assert summary.processed == 1
        assert summary.sent == 1
        assert summary.failed == 0
        assert summary.message == "Notification processing completed"
        mock_queue_repo.get_pending_batch.assert_awaited_once_with(3, 50)
        mock_queue_repo.claim.assert_awaited_once_with("n-1", NotificationStatus.PENDING)
        mock_queue_repo.mark_sent.assert_awaited_once()

    async def test_scenario_second_failure_goes_back_to_pending(
        self, process_use_case, mock_queue_repo, mock_dispatcher
    ):
        """
        Given: Entry with retry_count=1 and max_retries=3
        When: The send returns False
        Then: retry_count=2, status=pending, failed count 1
        """
        # Arrange
        mock_queue_repo.get_pending_batch = AsyncMock(return_value=[make_entry(retry_count=1)])
        mock_dispatcher.dispatch = AsyncMock(return_value=False)

        # Act
        result = await process_use_case.execute()

        # Assert
        assert result.value.failed == 1
        mock_queue_repo.mark_attempt_failed.assert_awaited_once_with(
            "n-1", 2, NotificationStatus.PENDING, SEND_FAILED_MESSAGE
        )

    async def test_last_retry_marks_failed(self, process_use_case, mock_queue_repo, mock_dispatcher):
        mock_queue_repo.get_pending_batch = AsyncMock(return_value=[make_entry(retry_count=2)])
        mock_dispatcher.dispatch = AsyncMock(side_effect=TransientDeliveryError("9198: timeout"))

        await process_use_case.execute()

        mock_queue_repo.mark_attempt_failed.assert_awaited_once_with(
            "n-1", 3, NotificationStatus.FAILED, "9198: timeout"
        )

    async def test_exception_fails_immediately(
        self, process_use_case, mock_queue_repo, mock_dispatcher
    ):
        """
        Given: Entry with retry_count=0
        When: Dispatch raises
        Then: failed immediately with the exception message, retry_count untouched
        """
        mock_queue_repo.get_pending_batch = AsyncMock(return_value=[make_entry()])
        mock_dispatcher.dispatch = AsyncMock(side_effect=KeyError("vehicleData"))

        result = await process_use_case.execute()

        assert result.value.failed == 1
        assert len(result.value.errors) == 1
        mock_queue_repo.mark_failed.assert_awaited_once()
        mock_queue_repo.mark_attempt_failed.assert_not_called()

    async def test_provider_configuration_error_not_retried(
        self, process_use_case, mock_queue_repo, mock_dispatcher
    ):
        mock_queue_repo.get_pending_batch = AsyncMock(return_value=[make_entry()])
        mock_dispatcher.dispatch = AsyncMock(
            side_effect=ProviderConfigurationError("Twilio configuration is incomplete (missing: auth_token)")
        )

        await process_use_case.execute()

        mock_queue_repo.mark_failed.assert_awaited_once_with(
            "n-1", "Twilio configuration is incomplete (missing: auth_token)"
        )

    async def test_unknown_event_type_takes_retry_path(
        self, process_use_case, mock_queue_repo, mock_dispatcher
    ):
        mock_queue_repo.get_pending_batch = AsyncMock(
            return_value=[make_entry(event_type="vehicle_washed")]
        )
        mock_dispatcher.dispatch = AsyncMock(return_value=False)

        result = await process_use_case.execute()

        assert result.value.failed == 1
        assert result.value.errors == []
        mock_queue_repo.mark_attempt_failed.assert_awaited_once_with(
            "n-1", 1, NotificationStatus.PENDING, SEND_FAILED_MESSAGE
        )

    async def test_one_failure_does_not_abort_batch(
        self, process_use_case, mock_queue_repo, mock_dispatcher
    ):
        mock_queue_repo.get_pending_batch = AsyncMock(
            return_value=[make_entry("n-1"), make_entry("n-2"), make_entry("n-3")]
        )
        mock_dispatcher.dispatch = AsyncMock(side_effect=[True, RuntimeError("boom"), False])

        result = await process_use_case.execute()

        summary = result.value
        assert summary.processed == 3
        assert summary.sent == 1
        assert summary.failed == 2
        assert summary.errors == ["n-2: boom"]

    async def test_lost_claim_is_skipped(self, process_use_case, mock_queue_repo, mock_dispatcher):
        mock_queue_repo.get_pending_batch = AsyncMock(return_value=[make_entry()])
        mock_queue_repo.claim = AsyncMock(return_value=False)

        result = await process_use_case.execute()

        assert result.value.skipped == 1
        assert result.value.processed == 0
        mock_dispatcher.dispatch.assert_not_called()


@pytest.mark.asyncio
class TestSingleEntry:
    async def test_forced_entry_ignores_retry_filter(
        self, process_use_case, mock_queue_repo, mock_dispatcher
    ):
        entry = make_entry(retry_count=5)
        mock_queue_repo.get_by_id = AsyncMock(return_value=entry)

        result = await process_use_case.execute(notification_id="n-1", immediate=True)

        assert result.value.sent == 1
        assert result.value.immediate is True
        assert result.value.notification_id == "n-1"
        mock_queue_repo.get_pending_batch.assert_not_called()

    @pytest.mark.parametrize("status", [NotificationStatus.SENT, NotificationStatus.FAILED])
    async def test_terminal_entry_not_reprocessed(
        self, process_use_case, mock_queue_repo, mock_dispatcher, status
    ):
        mock_queue_repo.get_by_id = AsyncMock(return_value=make_entry(status=status))

        result = await process_use_case.execute(notification_id="n-1")

        assert result.value.skipped == 1
        assert result.value.processed == 0
        mock_queue_repo.claim.assert_not_called()
        mock_dispatcher.dispatch.assert_not_called()

    async def test_missing_entry(self, process_use_case, mock_queue_repo):
        result = await process_use_case.execute(notification_id="nope")

        assert result.value.processed == 0
        assert result.value.errors == ["nope: Notification not found"]


@pytest.mark.asyncio
class TestInfrastructureFailure:
    async def test_queue_unreadable_returns_summary(self, process_use_case, mock_queue_repo, mock_uow):
        """
        Given: The queue query raises
        When: The worker runs
        Then: Summary with processed=0 and error set, nothing raised
        """
        mock_queue_repo.get_pending_batch = AsyncMock(side_effect=ConnectionError("db unreachable"))

        result = await process_use_case.execute(immediate=True)

        assert result.is_ok()
        assert result.value.processed == 0
        assert result.value.error == "db unreachable"
        assert result.value.immediate is True
        mock_uow.rollback.assert_awaited()
