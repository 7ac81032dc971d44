"""Unit tests for CreateInvoice use case

Tests cover:
- Draft creation with computed totals
- Create-and-issue assigns a number and queues invoice_issued
- Validation and not-found errors
- Compensating delete when line items cannot be written
"""

import pytest
from datetime import date
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.invoices.create_invoice import CreateInvoice
from src.app.use_cases.invoices.dtos import CreateInvoiceCommandDTO, LineItemInputDTO
from src.domain.invoice import InvoiceStatus
from src.domain.tenant_context import TenantContext


def _echo(entity):
    return entity


@pytest.fixture
def mock_invoice_repo():
    repo = MagicMock()
    repo.create = AsyncMock(side_effect=_echo)
    repo.update = AsyncMock(side_effect=_echo)
    repo.delete = AsyncMock()
    return repo


@pytest.fixture
def mock_line_repo():
    repo = MagicMock()
    repo.create_many = AsyncMock(side_effect=_echo)
    return repo


@pytest.fixture
def mock_vehicle_repo(sample_vehicle):
    repo = MagicMock()
    repo.get_by_id = AsyncMock(return_value=sample_vehicle)
    return repo


@pytest.fixture
def mock_number_generator():
    generator = MagicMock()
    generator.next_number = AsyncMock(return_value="INV-000042")
    return generator


@pytest.fixture
def mock_queue_repo():
    repo = MagicMock()
    repo.enqueue = AsyncMock(side_effect=_echo)
    return repo


@pytest.fixture
def create_invoice_use_case(
    mock_uow, mock_invoice_repo, mock_line_repo, mock_vehicle_repo, mock_number_generator, mock_queue_repo
):
    return CreateInvoice(
        uow=mock_uow,
        invoice_repo=mock_invoice_repo,
        invoice_line_repo=mock_line_repo,
        vehicle_repo=mock_vehicle_repo,
        number_generator=mock_number_generator,
        queue_repo=mock_queue_repo,
        due_days=30,
    )


@pytest.fixture
def sample_command():
    return CreateInvoiceCommandDTO(
        vehicle_inward_id="veh-0001-aaaa-bbbb",
        line_items=[
            LineItemInputDTO(product_name="Seat covers", quantity=Decimal("2"), unit_price=Decimal("500")),
            LineItemInputDTO(product_name="Dashcam", quantity=Decimal("1"), unit_price=Decimal("1000")),
        ],
        invoice_date=date(2024, 3, 1),
        discount_amount=Decimal("100"),
        tax_amount=Decimal("100"),
    )


@pytest.mark.asyncio
class TestCreateInvoiceSuccess:
    async def test_create_draft(
        self, create_invoice_use_case, tenant_context, sample_command, mock_uow,
        mock_number_generator, mock_queue_repo,
    ):
        """
        Given: A job and two line items (2x500, 1x1000), discount 100, tax 100
        When: CreateInvoice executes without issue_immediately
        Then: Draft with subtotal 2000, total 2000, balance 2000 and no number
        """
        # Act
        result = await create_invoice_use_case.execute(tenant_context, sample_command)

        # Assert
        assert result.is_ok()
        invoice = result.value
        assert invoice.status == InvoiceStatus.DRAFT.value
        assert invoice.subtotal_amount == Decimal("2000.00")
        assert invoice.total_amount == Decimal("2000.00")
        assert invoice.balance_amount == Decimal("2000.00")
        assert invoice.invoice_number is None
        assert invoice.due_date == date(2024, 3, 31)
        assert len(invoice.line_items) == 2
        assert invoice.line_items[0].line_total == Decimal("1000.00")
        mock_number_generator.next_number.assert_not_called()
        mock_queue_repo.enqueue.assert_not_called()
        assert mock_uow.commit.await_count == 2

    async def test_create_and_issue(
        self, create_invoice_use_case, tenant_context, sample_command, mock_queue_repo
    ):
        """
        Given: issue_immediately=True
        When: CreateInvoice executes
        Then: Invoice is issued with a number and invoice_issued is queued
        """
        # Arrange
        command = sample_command.model_copy(update={"issue_immediately": True})

        # Act
        result = await create_invoice_use_case.execute(tenant_context, command)

        # Assert
        assert result.is_ok()
        assert result.value.status == InvoiceStatus.ISSUED.value
        assert result.value.invoice_number == "INV-000042"
        assert result.value.issued_at is not None

        entry = mock_queue_repo.enqueue.call_args.args[0]
        assert entry.event_type == "invoice_issued"
        assert entry.payload["invoiceData"]["invoiceNumber"] == "INV-000042"
        assert entry.payload["vehicleData"]["customer_phone"] == "9876543210"


@pytest.mark.asyncio
class TestCreateInvoiceErrors:
    async def test_no_line_items(self, create_invoice_use_case, tenant_context, mock_invoice_repo):
        command = CreateInvoiceCommandDTO(vehicle_inward_id="veh-0001-aaaa-bbbb", line_items=[])

        result = await create_invoice_use_case.execute(tenant_context, command)

        assert result.is_err()
        assert result.error.code == "VALIDATION_ERROR"
        assert result.error.message == "At least one line item is required"
        mock_invoice_repo.create.assert_not_called()

    async def test_job_not_found(
        self, create_invoice_use_case, tenant_context, sample_command, mock_vehicle_repo, mock_invoice_repo
    ):
        """
        Given: The job does not exist in the caller's tenant
        When: CreateInvoice executes
        Then: NOT_FOUND, nothing written
        """
        mock_vehicle_repo.get_by_id = AsyncMock(return_value=None)

        result = await create_invoice_use_case.execute(tenant_context, sample_command)

        assert result.is_err()
        assert result.error.code == "NOT_FOUND"
        mock_invoice_repo.create.assert_not_called()

    async def test_lookup_is_scoped_to_tenant(
        self, create_invoice_use_case, tenant_context, sample_command, mock_vehicle_repo
    ):
        await create_invoice_use_case.execute(tenant_context, sample_command)

        mock_vehicle_repo.get_by_id.assert_awaited_once_with(
            "veh-0001-aaaa-bbbb", tenant_id=tenant_context.tenant_id
        )

    async def test_missing_tenant(self, create_invoice_use_case, sample_command):
        result = await create_invoice_use_case.execute(TenantContext(), sample_command)

        assert result.is_err()
        assert result.error.message == "Tenant ID required"

    async def test_due_date_before_invoice_date(
        self, create_invoice_use_case, tenant_context, sample_command
    ):
        command = sample_command.model_copy(update={"due_date": date(2024, 2, 1)})

        result = await create_invoice_use_case.execute(tenant_context, command)

        assert result.is_err()
        assert result.error.code == "VALIDATION_ERROR"


@pytest.mark.asyncio
class TestCreateInvoiceCompensation:
    async def test_line_item_failure_deletes_header(
        self, create_invoice_use_case, tenant_context, sample_command,
        mock_line_repo, mock_invoice_repo, mock_uow,
    ):
        """
        Given: The header commits but writing line items fails
        When: CreateInvoice executes
        Then: The header is deleted again and CREATE_INVOICE_FAILED is returned
        """
        # Arrange
        mock_line_repo.create_many = AsyncMock(side_effect=RuntimeError("disk full"))

        # Act
        result = await create_invoice_use_case.execute(tenant_context, sample_command)

        # Assert
        assert result.is_err()
        assert result.error.code == "CREATE_INVOICE_FAILED"
        assert result.error.reason == "disk full"

        created = mock_invoice_repo.create.call_args.args[0]
        mock_invoice_repo.delete.assert_awaited_once_with(created.id)
        mock_uow.rollback.assert_awaited()
