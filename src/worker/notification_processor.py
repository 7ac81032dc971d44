"""Notification Delivery Background Worker

Drains the notification queue on a fixed interval. Can be run as a
standalone script, from a scheduler, or through the cron endpoint.
"""

import asyncio
import logging
from typing import Optional
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.repositories import (
    SqlAlchemyInvoiceRepository,
    SqlAlchemyInvoiceLineRepository,
    SqlAlchemyMessagingSettingsRepository,
    SqlAlchemyNotificationQueueRepository,
    SqlAlchemyPaymentRepository,
    SqlAlchemyVehicleInwardRepository,
)
from src.adapter.services.messaging import config_from_settings, create_messaging_provider
from src.adapter.services.pdf_service import ReportLabPdfService
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.use_cases.notifications import (
    InvoiceDocumentBuilder,
    MessageRenderer,
    NotificationDispatcher,
    NotificationRunSummaryDTO,
    ProcessNotificationQueue,
    WorkflowNotifier,
)

logger = logging.getLogger(__name__)


def build_notification_processor(session: AsyncSession) -> ProcessNotificationQueue:
    """
    Wire ProcessNotificationQueue against one database session

    Args:
        session: Session shared by the queue, settings and invoice repositories

    Returns:
        Ready-to-run use case
    """
    settings_repo = SqlAlchemyMessagingSettingsRepository(session)
    timeout = ApplicationConfig.MESSAGING_TIMEOUT_SECONDS

    def provider_factory(settings):
        return create_messaging_provider(
            settings.provider, config_from_settings(settings), timeout=timeout
        )

    document_builder = InvoiceDocumentBuilder(
        invoice_repo=SqlAlchemyInvoiceRepository(session),
        invoice_line_repo=SqlAlchemyInvoiceLineRepository(session),
        payment_repo=SqlAlchemyPaymentRepository(session),
        vehicle_repo=SqlAlchemyVehicleInwardRepository(session),
        pdf_service=ReportLabPdfService(),
        company_name=ApplicationConfig.COMPANY_NAME,
        company_address=ApplicationConfig.COMPANY_ADDRESS,
    )

    notifier = WorkflowNotifier(
        settings_repo=settings_repo,
        provider_factory=provider_factory,
        renderer=MessageRenderer(settings_repo),
        document_builder=document_builder,
    )

    return ProcessNotificationQueue(
        uow=SqlAlchemyUnitOfWork(session),
        queue_repo=SqlAlchemyNotificationQueueRepository(session),
        dispatcher=NotificationDispatcher(notifier),
        max_retries=ApplicationConfig.NOTIFICATION_MAX_RETRIES,
        batch_size=ApplicationConfig.NOTIFICATION_BATCH_SIZE,
    )


class NotificationProcessorWorker:
    """
    Background worker for WhatsApp notification delivery

    Features:
    - Sends pending queue entries in batches, oldest first
    - Retries failed sends up to NOTIFICATION_MAX_RETRIES
    - Can run once or continuously
    - Configurable interval (default: 5 minutes)

    Usage:
        # Run once
        worker = NotificationProcessorWorker()
        summary = await worker.run_once()

        # Run continuously
        worker = NotificationProcessorWorker()
        await worker.run_forever(interval_seconds=300)
    """

    def __init__(
        self,
        db_uri: Optional[str] = None,
    ):
        """
        Initialize the worker

        Args:
            db_uri: Database URI (defaults to ApplicationConfig.DB_URI)
        """
        self.db_uri = db_uri or ApplicationConfig.DB_URI

        self.engine = create_async_engine(self.db_uri, echo=False, future=True)
        self.async_session_factory = sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
        )

        logger.info("NotificationProcessorWorker initialized")

    async def run_once(
        self, immediate: bool = False, notification_id: Optional[str] = None
    ) -> NotificationRunSummaryDTO:
        """
        Drain the queue once

        Args:
            immediate: Out-of-schedule run
            notification_id: Process only this entry

        Returns:
            NotificationRunSummaryDTO with delivery counts
        """
        async with self.async_session_factory() as session:
            use_case = build_notification_processor(session)
            result = await use_case.execute(
                notification_id=notification_id, immediate=immediate
            )

            summary = result.value
            if summary.error:
                logger.error(f"Notification processing failed: {summary.error}")
            for error in summary.errors:
                logger.error(f"  - {error}")

            return summary

    async def run_forever(self, interval_seconds: int = 300):
        """
        Drain the queue continuously at the specified interval

        Args:
            interval_seconds: Seconds between runs (default: 5 minutes)
        """
        logger.info(
            f"Starting continuous notification processing with {interval_seconds}s interval"
        )

        while True:
            try:
                summary = await self.run_once()
                logger.info(
                    f"Notification cycle complete. "
                    f"Processed {summary.processed}, sent {summary.sent}, "
                    f"failed {summary.failed}, {summary.total_pending} still pending"
                )
            except Exception as e:
                logger.error(f"Notification cycle failed: {e}")

            await asyncio.sleep(interval_seconds)

    async def shutdown(self):
        """Cleanup resources"""
        await self.engine.dispose()
        logger.info("NotificationProcessorWorker shutdown complete")


async def main():
    """
    Entry point for running the worker as a standalone script

    Usage:
        # Run once
        python -m src.worker.notification_processor --once

        # Force one entry
        python -m src.worker.notification_processor --once --id <notification-id>

        # Run continuously (default: every 5 minutes)
        python -m src.worker.notification_processor --interval 60
    """
    import argparse

    logging.basicConfig(
        level=ApplicationConfig.LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    parser = argparse.ArgumentParser(description="Notification Delivery Worker")
    parser.add_argument(
        "--once", action="store_true", help="Run once and exit"
    )
    parser.add_argument(
        "--id", dest="notification_id", default=None,
        help="Process a single queue entry (implies --once)"
    )
    parser.add_argument(
        "--interval", type=int, default=ApplicationConfig.NOTIFICATION_INTERVAL_SECONDS,
        help="Interval between runs in seconds (default: 300)"
    )
    args = parser.parse_args()

    worker = NotificationProcessorWorker()

    try:
        if args.once or args.notification_id:
            summary = await worker.run_once(
                immediate=True, notification_id=args.notification_id
            )
            print("Notification processing complete:")
            print(f"  Processed: {summary.processed}")
            print(f"  Sent: {summary.sent}")
            print(f"  Failed: {summary.failed}")
            print(f"  Skipped: {summary.skipped}")
            print(f"  Still pending: {summary.total_pending}")
            if summary.error:
                print(f"  Error: {summary.error}")
        else:
            await worker.run_forever(interval_seconds=args.interval)
    except KeyboardInterrupt:
        logger.info("Received shutdown signal")
    finally:
        await worker.shutdown()


if __name__ == "__main__":
    asyncio.run(main())
