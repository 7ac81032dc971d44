"""Notification Queue Domain Entity

Durable outbox of WhatsApp notifications drained by the delivery worker.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import JSON, String, Text
from src.domain.base import BaseModel, generate_uuid


class NotificationStatus(str, Enum):
    """Delivery state of a queue entry"""
    PENDING = "pending"
    PROCESSING = "processing"
    SENT = "sent"
    FAILED = "failed"


TERMINAL_STATUSES = (NotificationStatus.SENT, NotificationStatus.FAILED)


class NotificationEventType(str, Enum):
    """Domain events that produce notifications"""
    VEHICLE_INWARD_CREATED = "vehicle_inward_created"
    VEHICLE_STATUS_UPDATED = "vehicle_status_updated"
    INSTALLATION_COMPLETE = "installation_complete"
    INVOICE_NUMBER_ADDED = "invoice_number_added"
    ACCOUNTANT_COMPLETED = "accountant_completed"
    VEHICLE_DELIVERED = "vehicle_delivered"
    INVOICE_ISSUED = "invoice_issued"
    PAYMENT_RECEIVED = "payment_received"
    INVOICE_OVERDUE = "invoice_overdue"
    INVOICE_REMINDER = "invoice_reminder"

    @classmethod
    def parse(cls, value: str) -> Optional["NotificationEventType"]:
        try:
            return cls(value)
        except ValueError:
            return None


class NotificationQueueEntry(BaseModel, table=True):
    """
    Notification Queue Entry - One pending outbound notification

    Domain Rules:
    - Created with status=pending and retry_count=0
    - Eligible for processing only while status=pending and retry_count < max_retries
    - pending -> processing -> sent | pending (retry) | failed
    - sent and failed are terminal and never reprocessed
    - Never deleted by the service; retention is an operator concern
    - event_type is stored as plain text so unknown producers' rows are
      kept and failed rather than rejected at insert
    """

    __tablename__ = "notification_queue"
    __table_args__ = (
        Index('ix_notification_queue_status_created_at', 'status', 'created_at'),
        Index('ix_notification_queue_tenant_id', 'tenant_id'),
    )

    id: str = Field(
        default_factory=generate_uuid,
        primary_key=True,
        description="Unique queue entry identifier (UUID)"
    )

    tenant_id: str = Field(
        description="Tenant ID"
    )

    event_type: str = Field(
        sa_column=Column(String(50), nullable=False),
        description="Domain event tag (see NotificationEventType)"
    )

    payload: Dict[str, Any] = Field(
        default_factory=dict,
        sa_column=Column(JSON, nullable=False),
        description="Event-specific references plus snapshot fields for templating"
    )

    status: NotificationStatus = Field(
        default=NotificationStatus.PENDING,
        description="Delivery status (pending, processing, sent, failed)"
    )

    retry_count: int = Field(
        default=0,
        ge=0,
        description="Number of failed delivery attempts"
    )

    error_message: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
        description="Last delivery error"
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Enqueue timestamp"
    )

    updated_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Last update timestamp"
    )

    processed_at: Optional[datetime] = Field(
        default=None,
        description="Timestamp when the notification was sent"
    )

    class Config:
        """SQLModel configuration"""
        json_schema_extra = {
            "example": {
                "id": "9a8b7c6d-5e4f-4a3b-2c1d-0e9f8a7b6c5d",
                "tenant_id": "b7e1c9a2-6f3d-4c1e-8a2b-1f4e5d6c7b8a",
                "event_type": "invoice_issued",
                "payload": {
                    "vehicleId": "0a9b8c7d-6e5f-4a3b-2c1d-0e9f8a7b6c5d",
                    "vehicleData": {"registration_number": "MH12AB1234"},
                    "invoiceData": {"invoiceNumber": "INV-000042", "amount": "2000.00"}
                },
                "status": "pending",
                "retry_count": 0,
                "error_message": None,
                "created_at": "2024-03-01T10:00:00Z",
                "updated_at": "2024-03-01T10:00:00Z",
                "processed_at": None
            }
        }
