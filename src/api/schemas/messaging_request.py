"""Request schemas for Messaging API"""

import base64
import binascii
from typing import Optional
from pydantic import BaseModel, Field, field_validator

from src.app.services.messaging_gateway import Attachment, MessagingConfig


class AttachmentSchema(BaseModel):
    filename: str = Field(..., min_length=1)
    content_base64: str = Field(..., min_length=1, description="File content, base64 encoded")
    mime_type: str = Field(default="application/pdf")

    @field_validator("content_base64")
    @classmethod
    def validate_content(cls, v):
        try:
            base64.b64decode(v, validate=True)
        except (binascii.Error, ValueError):
            raise ValueError("content_base64 is not valid base64")
        return v

    def to_attachment(self) -> Attachment:
        return Attachment(
            filename=self.filename,
            content=base64.b64decode(self.content_base64),
            mime_type=self.mime_type,
        )


class SendMessageRequestSchema(BaseModel):
    """
    Request schema for sending a WhatsApp message

    Used for POST /whatsapp/send endpoint.
    """

    provider: str = Field(..., min_length=1, description="messageautosender, twilio, cloud-api or custom")
    config: MessagingConfig = Field(default_factory=MessagingConfig, description="Provider credentials")
    to: str = Field(..., min_length=1, description="Destination phone number")
    message: str = Field(..., min_length=1, description="Message text")
    attachment: Optional[AttachmentSchema] = Field(default=None)

    class Config:
        json_schema_extra = {
            "example": {
                "provider": "messageautosender",
                "config": {"api_key": "key_123", "user_id": "workshop", "password": "secret"},
                "to": "9876543210",
                "message": "Your vehicle MH12AB1234 is ready for delivery."
            }
        }
