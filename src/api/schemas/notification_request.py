"""Request schemas for Notification API"""

from typing import Any, Dict
from pydantic import BaseModel, Field


class EnqueueNotificationRequestSchema(BaseModel):
    """
    Request schema for queueing a notification

    Used for POST /notifications endpoint by producers of workflow events.
    """

    tenant_id: str = Field(..., min_length=1, description="Tenant identifier (UUID)")
    event_type: str = Field(..., min_length=1, description="Event type tag")
    payload: Dict[str, Any] = Field(default_factory=dict, description="Event payload")

    class Config:
        json_schema_extra = {
            "example": {
                "tenant_id": "b7e1c9a2-6f3d-4c1e-8a2b-1f4e5d6c7b8a",
                "event_type": "installation_complete",
                "payload": {
                    "vehicleId": "0a9b8c7d-6e5f-4a3b-2c1d-0e9f8a7b6c5d",
                    "vehicleData": {"registration_number": "MH12AB1234", "customer_name": "Ravi Kumar"}
                }
            }
        }
