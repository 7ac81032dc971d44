"""Overdue Invoice Background Worker

Daily job that moves issued/partial invoices past their due date to
overdue and queues the customer reminder.
"""

import asyncio
import logging
from datetime import date
from typing import Optional
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.repositories import (
    SqlAlchemyInvoiceRepository,
    SqlAlchemyNotificationQueueRepository,
    SqlAlchemyVehicleInwardRepository,
)
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.use_cases.invoices import MarkOverdueInvoices, MarkOverdueResultDTO

logger = logging.getLogger(__name__)


def build_overdue_marker(session: AsyncSession) -> MarkOverdueInvoices:
    return MarkOverdueInvoices(
        uow=SqlAlchemyUnitOfWork(session),
        invoice_repo=SqlAlchemyInvoiceRepository(session),
        vehicle_repo=SqlAlchemyVehicleInwardRepository(session),
        queue_repo=SqlAlchemyNotificationQueueRepository(session),
    )


class OverdueInvoiceWorker:
    """
    Background worker for overdue invoice detection

    Usage:
        worker = OverdueInvoiceWorker()
        result = await worker.run_once()

        await worker.run_forever(interval_seconds=86400)  # Daily
    """

    def __init__(
        self,
        db_uri: Optional[str] = None,
    ):
        self.db_uri = db_uri or ApplicationConfig.DB_URI

        self.engine = create_async_engine(self.db_uri, echo=False, future=True)
        self.async_session_factory = sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
        )

        logger.info("OverdueInvoiceWorker initialized")

    async def run_once(self, today: Optional[date] = None) -> MarkOverdueResultDTO:
        """
        Mark overdue invoices once

        Args:
            today: Reference date (defaults to today)

        Returns:
            MarkOverdueResultDTO with the invoices moved to overdue
        """
        async with self.async_session_factory() as session:
            use_case = build_overdue_marker(session)
            result = await use_case.execute(today=today)

            if result.is_err():
                logger.error(f"Overdue marking failed: {result.error.reason}")
                raise RuntimeError(f"Overdue marking failed: {result.error.message}")

            return result.value

    async def run_forever(self, interval_seconds: int = 86400):
        logger.info(
            f"Starting continuous overdue invoice check with {interval_seconds}s interval"
        )

        while True:
            try:
                result = await self.run_once()
                logger.info(
                    f"Overdue check complete. Marked {result.marked_count} invoices overdue"
                )
            except Exception as e:
                logger.error(f"Overdue check failed: {e}")

            await asyncio.sleep(interval_seconds)

    async def shutdown(self):
        """Cleanup resources"""
        await self.engine.dispose()
        logger.info("OverdueInvoiceWorker shutdown complete")


async def main():
    """
    Entry point for running the worker as a standalone script

    Usage:
        python -m src.worker.overdue_invoice_marker --once
        python -m src.worker.overdue_invoice_marker --interval 3600
    """
    import argparse

    logging.basicConfig(
        level=ApplicationConfig.LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    parser = argparse.ArgumentParser(description="Overdue Invoice Worker")
    parser.add_argument(
        "--once", action="store_true", help="Run once and exit"
    )
    parser.add_argument(
        "--interval", type=int, default=ApplicationConfig.OVERDUE_CHECK_INTERVAL_SECONDS,
        help="Interval between runs in seconds (default: 86400 = 24 hours)"
    )
    args = parser.parse_args()

    worker = OverdueInvoiceWorker()

    try:
        if args.once:
            result = await worker.run_once()
            print("Overdue check complete:")
            print(f"  Run date: {result.run_date}")
            print(f"  Invoices marked overdue: {result.marked_count}")
            for invoice_id in result.invoice_ids:
                print(f"  - {invoice_id}")
        else:
            await worker.run_forever(interval_seconds=args.interval)
    except KeyboardInterrupt:
        logger.info("Received shutdown signal")
    finally:
        await worker.shutdown()


if __name__ == "__main__":
    asyncio.run(main())
