"""Messaging Gateway Interface

Defines one send operation over several WhatsApp/SMS providers.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field


class MessagingProviderType(str, Enum):
    """Supported outbound messaging providers"""
    MESSAGE_AUTO_SENDER = "messageautosender"
    TWILIO = "twilio"
    CLOUD_API = "cloud-api"
    CUSTOM = "custom"


REQUIRED_FIELDS = {
    MessagingProviderType.MESSAGE_AUTO_SENDER: ("api_key", "user_id", "password"),
    MessagingProviderType.TWILIO: ("account_sid", "auth_token", "from_number"),
    MessagingProviderType.CLOUD_API: ("business_account_id", "access_token", "from_number"),
    MessagingProviderType.CUSTOM: ("webhook_url",),
}


class MessagingConfig(BaseModel):
    """
    Provider credentials

    Which fields are required depends on the provider, see REQUIRED_FIELDS.
    """

    api_key: Optional[str] = Field(default=None, description="API key (auto-sender, custom)")
    api_secret: Optional[str] = Field(default=None, description="API secret (custom)")
    user_id: Optional[str] = Field(default=None, description="Basic auth user (auto-sender)")
    password: Optional[str] = Field(default=None, description="Basic auth password (auto-sender)")
    account_sid: Optional[str] = Field(default=None, description="Twilio account SID")
    auth_token: Optional[str] = Field(default=None, description="Twilio auth token")
    from_number: Optional[str] = Field(default=None, description="Sender number")
    webhook_url: Optional[str] = Field(default=None, description="Custom webhook or auto-sender base URL")
    business_account_id: Optional[str] = Field(default=None, description="Cloud API phone number ID")
    access_token: Optional[str] = Field(default=None, description="Cloud API bearer token")

    def missing_fields(self, provider: MessagingProviderType) -> List[str]:
        return [name for name in REQUIRED_FIELDS[provider] if not getattr(self, name)]


@dataclass
class Attachment:
    filename: str
    content: bytes
    mime_type: str = "application/pdf"


@dataclass
class OutboundMessage:
    to: str
    text: str
    attachment: Optional[Attachment] = None


@dataclass
class SendResult:
    success: bool
    error: Optional[str] = None
    status_code: Optional[int] = None

    def to_dict(self) -> dict:
        data = {"success": self.success}
        if self.error:
            data["error"] = self.error
        return data


class MessagingProvider(ABC):
    """
    A third-party messaging API

    Implementations never raise for delivery problems; every failure comes
    back as SendResult(success=False, error=...).
    """

    provider_type: MessagingProviderType

    @abstractmethod
    async def send(self, message: OutboundMessage) -> SendResult:
        """
        Send a text message and, best effort, its attachment

        Args:
            message: Destination, text and optional attachment

        Returns:
            SendResult reflecting the text delivery only
        """
        pass
