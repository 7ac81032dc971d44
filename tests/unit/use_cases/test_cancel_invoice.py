"""Unit tests for CancelInvoice use case"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.invoices.cancel_invoice import CancelInvoice
from src.domain.invoice import InvoiceStatus
from tests.unit.factories import make_invoice


@pytest.fixture
def mock_invoice_repo():
    repo = MagicMock()
    repo.update = AsyncMock(side_effect=lambda invoice: invoice)
    return repo


@pytest.fixture
def cancel_use_case(mock_uow, mock_invoice_repo):
    return CancelInvoice(mock_uow, mock_invoice_repo)


@pytest.mark.asyncio
class TestCancelInvoice:
    async def test_cancel_partial(self, cancel_use_case, tenant_context, mock_invoice_repo, mock_uow):
        mock_invoice_repo.get_by_id = AsyncMock(
            return_value=make_invoice(status=InvoiceStatus.PARTIAL, paid="100.00")
        )

        result = await cancel_use_case.execute(tenant_context, "inv-0001", reason="Duplicate")

        assert result.is_ok()
        assert result.value.status == "cancelled"
        assert result.value.cancelled_reason == "Duplicate"
        assert result.value.cancelled_at is not None
        mock_uow.commit.assert_awaited_once()

    async def test_cancel_paid_rejected(self, cancel_use_case, tenant_context, mock_invoice_repo):
        """
        Given: A fully paid invoice
        When: Cancel is requested
        Then: INVALID_STATE and the invoice stays paid
        """
        invoice = make_invoice(status=InvoiceStatus.PAID, paid="2000.00")
        mock_invoice_repo.get_by_id = AsyncMock(return_value=invoice)

        result = await cancel_use_case.execute(tenant_context, "inv-0001")

        assert result.is_err()
        assert result.error.code == "INVALID_STATE"
        assert result.error.message == "Cannot cancel paid invoice"
        assert invoice.status == InvoiceStatus.PAID
        mock_invoice_repo.update.assert_not_called()

    async def test_cancel_other_tenants_invoice_is_not_found(
        self, cancel_use_case, tenant_context, mock_invoice_repo
    ):
        mock_invoice_repo.get_by_id = AsyncMock(return_value=None)

        result = await cancel_use_case.execute(tenant_context, "inv-other")

        assert result.is_err()
        assert result.error.code == "NOT_FOUND"
        mock_invoice_repo.get_by_id.assert_awaited_once_with(
            "inv-other", tenant_id=tenant_context.tenant_id
        )
