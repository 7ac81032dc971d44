"""Notification DTOs"""

from datetime import datetime
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field

from src.domain.notification_queue import NotificationQueueEntry


class EnqueueNotificationCommandDTO(BaseModel):
    """Command to queue a notification for a domain event"""

    tenant_id: str = Field(..., description="Tenant the event belongs to")
    event_type: str = Field(..., description="Event type tag, e.g. vehicle_inward_created")
    payload: Dict[str, Any] = Field(
        default_factory=dict,
        description="Event references plus snapshot fields for templating",
    )

    class Config:
        json_schema_extra = {
            "example": {
                "tenant_id": "b7e1c9a2-6f3d-4c1e-8a2b-1f4e5d6c7b8a",
                "event_type": "vehicle_inward_created",
                "payload": {
                    "vehicleId": "0a9b8c7d-6e5f-4a3b-2c1d-0e9f8a7b6c5d",
                    "vehicleData": {
                        "registration_number": "MH12AB1234",
                        "customer_name": "Ravi Kumar",
                        "customer_phone": "9876543210",
                    },
                },
            }
        }


class NotificationDTO(BaseModel):
    id: str
    tenant_id: str
    event_type: str
    status: str
    retry_count: int
    error_message: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    processed_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, entry: NotificationQueueEntry) -> "NotificationDTO":
        return cls(
            id=entry.id,
            tenant_id=entry.tenant_id,
            event_type=entry.event_type,
            status=entry.status.value,
            retry_count=entry.retry_count,
            error_message=entry.error_message,
            created_at=entry.created_at,
            updated_at=entry.updated_at,
            processed_at=entry.processed_at,
        )


class NotificationRunSummaryDTO(BaseModel):
    """Outcome of one queue drain"""

    message: str = Field(default="Notification processing completed")
    processed: int = Field(default=0, description="Entries handled in this run")
    sent: int = Field(default=0, description="Entries delivered")
    failed: int = Field(default=0, description="Entries that did not deliver (retried or failed)")
    skipped: int = Field(default=0, description="Entries claimed by another run or already terminal")
    errors: List[str] = Field(default_factory=list, description="Per-entry error strings")
    error: Optional[str] = Field(default=None, description="Infrastructure failure, processed is 0")
    immediate: bool = False
    notification_id: Optional[str] = None
    total_pending: Optional[int] = Field(default=None, description="Pending rows left in the queue")
