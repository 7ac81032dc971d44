"""Unit tests for OverdueInvoiceWorker"""

from datetime import date

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from libs.result import Error, Return
from src.app.use_cases.invoices.dtos import MarkOverdueResultDTO
from src.worker.overdue_invoice_marker import OverdueInvoiceWorker


@pytest.fixture
def worker():
    session = MagicMock()
    session.__aenter__ = AsyncMock(return_value=session)
    session.__aexit__ = AsyncMock(return_value=False)
    with patch("src.worker.overdue_invoice_marker.create_async_engine") as mock_create_engine:
        engine = MagicMock()
        engine.dispose = AsyncMock()
        mock_create_engine.return_value = engine
        worker = OverdueInvoiceWorker(db_uri="sqlite+aiosqlite:///:memory:")
    worker.async_session_factory = MagicMock(return_value=session)
    return worker


@pytest.mark.asyncio
class TestOverdueInvoiceWorker:
    async def test_run_once(self, worker):
        # Arrange
        dto = MarkOverdueResultDTO(
            marked_count=1,
            invoice_ids=["inv-0001"],
            notifications_enqueued=1,
            run_date=date(2024, 4, 1),
        )
        use_case = MagicMock()
        use_case.execute = AsyncMock(return_value=Return.ok(dto))

        # Act
        with patch(
            "src.worker.overdue_invoice_marker.build_overdue_marker", return_value=use_case
        ):
            result = await worker.run_once(today=date(2024, 4, 1))

        # Assert
        assert result.marked_count == 1
        use_case.execute.assert_awaited_once_with(today=date(2024, 4, 1))

    async def test_run_once_raises_on_error(self, worker):
        use_case = MagicMock()
        use_case.execute = AsyncMock(
            return_value=Return.err(
                Error(code="MARK_OVERDUE_FAILED", message="Failed to mark overdue invoices", reason="db")
            )
        )

        with patch(
            "src.worker.overdue_invoice_marker.build_overdue_marker", return_value=use_case
        ):
            with pytest.raises(RuntimeError, match="Failed to mark overdue invoices"):
                await worker.run_once()
