"""Unit tests for IssueInvoice use case

Tests cover:
- Draft is issued with the next number and queues invoice_issued
- Issuing twice is rejected without consuming a number
- Not found
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.invoices.issue_invoice import IssueInvoice
from src.domain.invoice import InvoiceStatus
from tests.unit.factories import make_invoice


@pytest.fixture
def mock_invoice_repo():
    repo = MagicMock()
    repo.update = AsyncMock(side_effect=lambda invoice: invoice)
    return repo


@pytest.fixture
def mock_number_generator():
    generator = MagicMock()
    generator.next_number = AsyncMock(return_value="INV-000043")
    return generator


@pytest.fixture
def mock_queue_repo():
    repo = MagicMock()
    repo.enqueue = AsyncMock(side_effect=lambda entry: entry)
    return repo


@pytest.fixture
def issue_use_case(mock_uow, mock_invoice_repo, sample_vehicle, mock_number_generator, mock_queue_repo):
    vehicle_repo = MagicMock()
    vehicle_repo.get_by_id = AsyncMock(return_value=sample_vehicle)
    return IssueInvoice(
        uow=mock_uow,
        invoice_repo=mock_invoice_repo,
        vehicle_repo=vehicle_repo,
        number_generator=mock_number_generator,
        queue_repo=mock_queue_repo,
    )


@pytest.mark.asyncio
class TestIssueInvoice:
    async def test_issue_draft(
        self, issue_use_case, tenant_context, mock_invoice_repo, mock_queue_repo, mock_uow
    ):
        # Arrange
        mock_invoice_repo.get_by_id = AsyncMock(return_value=make_invoice(status=InvoiceStatus.DRAFT))

        # Act
        result = await issue_use_case.execute(tenant_context, "inv-0001")

        # Assert
        assert result.is_ok()
        assert result.value.status == "issued"
        assert result.value.invoice_number == "INV-000043"
        assert mock_queue_repo.enqueue.call_args.args[0].event_type == "invoice_issued"
        mock_uow.commit.assert_awaited_once()

    async def test_issue_twice_rejected(
        self, issue_use_case, tenant_context, mock_invoice_repo, mock_number_generator, mock_queue_repo
    ):
        """
        Given: An already issued invoice
        When: IssueInvoice executes again
        Then: INVALID_STATE, number and status unchanged, no number consumed
        """
        invoice = make_invoice(status=InvoiceStatus.ISSUED)
        mock_invoice_repo.get_by_id = AsyncMock(return_value=invoice)

        result = await issue_use_case.execute(tenant_context, "inv-0001")

        assert result.is_err()
        assert result.error.code == "INVALID_STATE"
        assert result.error.message == "Only draft invoices can be issued"
        assert invoice.invoice_number == "INV-000001"
        mock_number_generator.next_number.assert_not_called()
        mock_queue_repo.enqueue.assert_not_called()

    async def test_not_found(self, issue_use_case, tenant_context, mock_invoice_repo):
        mock_invoice_repo.get_by_id = AsyncMock(return_value=None)

        result = await issue_use_case.execute(tenant_context, "missing")

        assert result.is_err()
        assert result.error.code == "NOT_FOUND"
