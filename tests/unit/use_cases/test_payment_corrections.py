"""Unit tests for UpdatePayment and DeletePayment use cases

Tests cover:
- Amount corrections recompute paid/balance/status
- A paid invoice reopens after a correction or deletion
- Cancelled invoices reject both operations
- Overpayment check excludes the payment being corrected
"""

import pytest
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.invoices.delete_payment import DeletePayment
from src.app.use_cases.invoices.dtos import UpdatePaymentCommandDTO
from src.app.use_cases.invoices.update_payment import UpdatePayment
from src.domain.invoice import InvoiceStatus
from src.domain.invoice_state import OverpaymentPolicy
from tests.unit.factories import make_invoice, make_payment


@pytest.fixture
def mock_invoice_repo():
    repo = MagicMock()
    repo.update = AsyncMock(side_effect=lambda invoice: invoice)
    return repo


@pytest.fixture
def mock_payment_repo():
    repo = MagicMock()
    repo.update = AsyncMock(side_effect=lambda payment: payment)
    repo.delete = AsyncMock()
    return repo


@pytest.fixture
def update_use_case(mock_uow, mock_invoice_repo, mock_payment_repo):
    def _build(policy=OverpaymentPolicy.REJECT):
        return UpdatePayment(
            uow=mock_uow,
            invoice_repo=mock_invoice_repo,
            payment_repo=mock_payment_repo,
            overpayment_policy=policy,
        )

    return _build


@pytest.fixture
def delete_use_case(mock_uow, mock_invoice_repo, mock_payment_repo):
    return DeletePayment(
        uow=mock_uow,
        invoice_repo=mock_invoice_repo,
        payment_repo=mock_payment_repo,
    )


@pytest.mark.asyncio
class TestUpdatePayment:
    async def test_lower_amount_reopens_paid_invoice(
        self, update_use_case, tenant_context, mock_invoice_repo, mock_payment_repo, mock_uow
    ):
        """
        Given: Invoice of 2000 fully paid by one payment
        When: The payment is corrected to 1500
        Then: paid=1500, balance=500, status=partial
        """
        # Arrange
        mock_payment_repo.get_by_id = AsyncMock(return_value=make_payment(amount="2000.00"))
        mock_invoice_repo.get_by_id = AsyncMock(
            return_value=make_invoice(status=InvoiceStatus.PAID, paid="2000.00")
        )
        mock_payment_repo.sum_by_invoice_id = AsyncMock(
            side_effect=[Decimal("2000.00"), Decimal("1500.00")]
        )

        # Act
        result = await update_use_case().execute(
            tenant_context, "pay-0001", UpdatePaymentCommandDTO(amount=Decimal("1500"))
        )

        # Assert
        assert result.is_ok(), result.error
        assert result.value.payment.amount == Decimal("1500.00")
        assert result.value.invoice.status == "partial"
        assert result.value.invoice.paid_amount == Decimal("1500.00")
        assert result.value.invoice.balance_amount == Decimal("500.00")
        mock_uow.commit.assert_awaited_once()

    async def test_only_set_fields_change(
        self, update_use_case, tenant_context, mock_invoice_repo, mock_payment_repo
    ):
        mock_payment_repo.get_by_id = AsyncMock(
            return_value=make_payment(amount="500.00", reference_number="UPI-1")
        )
        mock_invoice_repo.get_by_id = AsyncMock(
            return_value=make_invoice(status=InvoiceStatus.PARTIAL, paid="500.00")
        )
        mock_payment_repo.sum_by_invoice_id = AsyncMock(return_value=Decimal("500.00"))

        result = await update_use_case().execute(
            tenant_context, "pay-0001", UpdatePaymentCommandDTO(notes="entered twice")
        )

        assert result.is_ok()
        assert result.value.payment.notes == "entered twice"
        assert result.value.payment.reference_number == "UPI-1"
        assert result.value.payment.amount == Decimal("500.00")
        assert result.value.invoice.status == "partial"

    async def test_overpayment_excludes_corrected_payment(
        self, update_use_case, tenant_context, mock_invoice_repo, mock_payment_repo, mock_uow
    ):
        """
        Given: Invoice of 2000 with payments of 500 and 1000
        When: The 500 payment is corrected to 1200
        Then: VALIDATION_ERROR because only 1000 remains available
        """
        mock_payment_repo.get_by_id = AsyncMock(return_value=make_payment(amount="500.00"))
        mock_invoice_repo.get_by_id = AsyncMock(
            return_value=make_invoice(status=InvoiceStatus.PARTIAL, paid="1500.00")
        )
        mock_payment_repo.sum_by_invoice_id = AsyncMock(return_value=Decimal("1500.00"))

        result = await update_use_case().execute(
            tenant_context, "pay-0001", UpdatePaymentCommandDTO(amount=Decimal("1200"))
        )

        assert result.is_err()
        assert result.error.code == "VALIDATION_ERROR"
        assert "exceeds outstanding balance 1000.00" in result.error.message
        mock_payment_repo.update.assert_not_called()
        mock_uow.rollback.assert_awaited_once()

    async def test_overpayment_allowed_by_policy(
        self, update_use_case, tenant_context, mock_invoice_repo, mock_payment_repo
    ):
        mock_payment_repo.get_by_id = AsyncMock(return_value=make_payment(amount="2000.00"))
        mock_invoice_repo.get_by_id = AsyncMock(
            return_value=make_invoice(status=InvoiceStatus.PAID, paid="2000.00")
        )
        mock_payment_repo.sum_by_invoice_id = AsyncMock(
            side_effect=[Decimal("2000.00"), Decimal("2100.00")]
        )

        result = await update_use_case(OverpaymentPolicy.ALLOW).execute(
            tenant_context, "pay-0001", UpdatePaymentCommandDTO(amount=Decimal("2100"))
        )

        assert result.is_ok()
        assert result.value.invoice.status == "paid"
        assert result.value.invoice.balance_amount == Decimal("-100.00")

    async def test_cancelled_invoice(
        self, update_use_case, tenant_context, mock_invoice_repo, mock_payment_repo
    ):
        mock_payment_repo.get_by_id = AsyncMock(return_value=make_payment())
        mock_invoice_repo.get_by_id = AsyncMock(return_value=make_invoice(status=InvoiceStatus.CANCELLED))

        result = await update_use_case().execute(
            tenant_context, "pay-0001", UpdatePaymentCommandDTO(notes="x")
        )

        assert result.is_err()
        assert result.error.code == "INVALID_STATE"
        assert result.error.message == "Cannot update payment for cancelled invoice"
        mock_payment_repo.update.assert_not_called()

    async def test_payment_not_found(self, update_use_case, tenant_context, mock_payment_repo):
        mock_payment_repo.get_by_id = AsyncMock(return_value=None)

        result = await update_use_case().execute(
            tenant_context, "missing", UpdatePaymentCommandDTO(notes="x")
        )

        assert result.is_err()
        assert result.error.code == "NOT_FOUND"
        assert mock_payment_repo.get_by_id.call_args.kwargs["tenant_id"] == tenant_context.tenant_id


@pytest.mark.asyncio
class TestDeletePayment:
    async def test_last_payment_reopens_as_issued(
        self, delete_use_case, tenant_context, mock_invoice_repo, mock_payment_repo, mock_uow
    ):
        """
        Given: Invoice of 2000 paid by a single payment
        When: The payment is deleted
        Then: paid=0, balance=2000, status=issued
        """
        # Arrange
        mock_payment_repo.get_by_id = AsyncMock(return_value=make_payment(amount="2000.00"))
        mock_invoice_repo.get_by_id = AsyncMock(
            return_value=make_invoice(status=InvoiceStatus.PAID, paid="2000.00")
        )
        mock_payment_repo.sum_by_invoice_id = AsyncMock(return_value=Decimal("0"))

        # Act
        result = await delete_use_case.execute(tenant_context, "pay-0001")

        # Assert
        assert result.is_ok()
        assert result.value.success is True
        assert result.value.invoice.status == "issued"
        assert result.value.invoice.balance_amount == Decimal("2000.00")
        mock_payment_repo.delete.assert_awaited_once_with("pay-0001")
        mock_uow.commit.assert_awaited_once()

    async def test_overdue_invoice_stays_overdue(
        self, delete_use_case, tenant_context, mock_invoice_repo, mock_payment_repo
    ):
        mock_payment_repo.get_by_id = AsyncMock(return_value=make_payment(amount="500.00"))
        mock_invoice_repo.get_by_id = AsyncMock(
            return_value=make_invoice(status=InvoiceStatus.OVERDUE, paid="500.00")
        )
        mock_payment_repo.sum_by_invoice_id = AsyncMock(return_value=Decimal("0"))

        result = await delete_use_case.execute(tenant_context, "pay-0001")

        assert result.is_ok()
        assert result.value.invoice.status == "overdue"
        assert result.value.invoice.paid_amount == Decimal("0.00")

    async def test_cancelled_invoice(
        self, delete_use_case, tenant_context, mock_invoice_repo, mock_payment_repo
    ):
        mock_payment_repo.get_by_id = AsyncMock(return_value=make_payment())
        mock_invoice_repo.get_by_id = AsyncMock(return_value=make_invoice(status=InvoiceStatus.CANCELLED))

        result = await delete_use_case.execute(tenant_context, "pay-0001")

        assert result.is_err()
        assert result.error.message == "Cannot delete payment for cancelled invoice"
        mock_payment_repo.delete.assert_not_called()
