"""Unit tests for MarkOverdueInvoices use case

Tests cover:
- Past-due issued/partial invoices become overdue
- One invoice_overdue notification per marked invoice
- Idempotency across runs
- Failure rolls back
"""

import pytest
from datetime import date
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.invoices.mark_overdue_invoices import MarkOverdueInvoices
from src.domain.invoice import InvoiceStatus
from tests.unit.factories import make_invoice

TODAY = date(2024, 4, 15)


@pytest.fixture
def mock_invoice_repo():
    repo = MagicMock()
    repo.update = AsyncMock(side_effect=lambda invoice: invoice)
    return repo


@pytest.fixture
def mock_queue_repo():
    repo = MagicMock()
    repo.enqueue = AsyncMock(side_effect=lambda entry: entry)
    return repo


@pytest.fixture
def overdue_use_case(mock_uow, mock_invoice_repo, mock_queue_repo, sample_vehicle):
    vehicle_repo = MagicMock()
    vehicle_repo.get_by_id = AsyncMock(return_value=sample_vehicle)
    return MarkOverdueInvoices(mock_uow, mock_invoice_repo, vehicle_repo, mock_queue_repo)


@pytest.mark.asyncio
class TestMarkOverdueInvoices:
    async def test_marks_candidates(
        self, overdue_use_case, mock_invoice_repo, mock_queue_repo, mock_uow
    ):
        """
        Given: An issued and a partial invoice both past due
        When: The job runs
        Then: Both are overdue, two notifications queued, one commit
        """
        # Arrange
        issued = make_invoice(id="inv-1", due_date=date(2024, 3, 31))
        partial = make_invoice(
            id="inv-2", status=InvoiceStatus.PARTIAL, paid="500.00", due_date=date(2024, 4, 1)
        )
        mock_invoice_repo.get_overdue_candidates = AsyncMock(return_value=[issued, partial])

        # Act
        result = await overdue_use_case.execute(today=TODAY)

        # Assert
        assert result.is_ok()
        assert result.value.marked_count == 2
        assert result.value.invoice_ids == ["inv-1", "inv-2"]
        assert result.value.run_date == TODAY
        assert issued.status == InvoiceStatus.OVERDUE
        assert partial.status == InvoiceStatus.OVERDUE
        events = [call.args[0].event_type for call in mock_queue_repo.enqueue.call_args_list]
        assert events == ["invoice_overdue", "invoice_overdue"]
        mock_uow.commit.assert_awaited_once()

    async def test_second_run_is_noop(self, overdue_use_case, mock_invoice_repo, mock_queue_repo):
        mock_invoice_repo.get_overdue_candidates = AsyncMock(return_value=[])

        result = await overdue_use_case.execute(today=TODAY)

        assert result.is_ok()
        assert result.value.marked_count == 0
        mock_queue_repo.enqueue.assert_not_called()

    async def test_skips_invoice_not_yet_due(self, overdue_use_case, mock_invoice_repo):
        not_due = make_invoice(due_date=TODAY)
        mock_invoice_repo.get_overdue_candidates = AsyncMock(return_value=[not_due])

        result = await overdue_use_case.execute(today=TODAY)

        assert result.value.marked_count == 0
        assert not_due.status == InvoiceStatus.ISSUED

    async def test_failure_rolls_back(self, overdue_use_case, mock_invoice_repo, mock_uow):
        mock_invoice_repo.get_overdue_candidates = AsyncMock(side_effect=RuntimeError("db down"))

        result = await overdue_use_case.execute(today=TODAY)

        assert result.is_err()
        assert result.error.code == "MARK_OVERDUE_FAILED"
        mock_uow.rollback.assert_awaited_once()
