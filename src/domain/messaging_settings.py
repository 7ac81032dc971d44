"""Messaging Settings Domain Entities

Per-tenant WhatsApp provider configuration, message templates and
recipient preferences. Rows with tenant_id=NULL are global defaults.
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import JSON, String, Text
from src.domain.base import BaseModel, generate_uuid


class RecipientRole(str, Enum):
    """Staff roles that receive workflow notifications"""
    INSTALLER = "installer"
    COORDINATOR = "coordinator"
    ACCOUNTANT = "accountant"
    MANAGER = "manager"


class MessagingSettings(BaseModel, table=True):
    """
    Messaging Settings - Provider credentials for a tenant

    Domain Rules:
    - At most one row per tenant_id; tenant_id=NULL is the global fallback
    - A tenant row, when present, wins over the global row
    - Which credential fields are required depends on provider
    """

    __tablename__ = "messaging_settings"
    __table_args__ = (
        Index('ix_messaging_settings_tenant_id', 'tenant_id', unique=True),
    )

    id: str = Field(default_factory=generate_uuid, primary_key=True)
    tenant_id: Optional[str] = Field(default=None, description="Tenant ID, NULL for global")
    enabled: bool = Field(default=False, description="Master switch for outbound messages")
    provider: str = Field(default="messageautosender", description="Provider tag")
    api_key: Optional[str] = Field(default=None)
    api_secret: Optional[str] = Field(default=None)
    user_id: Optional[str] = Field(default=None)
    password: Optional[str] = Field(default=None)
    account_sid: Optional[str] = Field(default=None)
    auth_token: Optional[str] = Field(default=None)
    from_number: Optional[str] = Field(default=None)
    webhook_url: Optional[str] = Field(default=None)
    business_account_id: Optional[str] = Field(default=None)
    access_token: Optional[str] = Field(default=None)
    updated_at: datetime = Field(default_factory=datetime.utcnow)


class MessageTemplate(BaseModel, table=True):
    """
    Message Template - Custom text for one event type

    Domain Rules:
    - Tenant template wins over the global one (tenant_id=NULL)
    - Placeholders use {{name}} syntax
    """

    __tablename__ = "message_templates"
    __table_args__ = (
        Index('ix_message_templates_tenant_event', 'tenant_id', 'event_type', unique=True),
    )

    id: str = Field(default_factory=generate_uuid, primary_key=True)
    tenant_id: Optional[str] = Field(default=None, description="Tenant ID, NULL for global")
    event_type: str = Field(sa_column=Column(String(50), nullable=False))
    template: str = Field(sa_column=Column(Text, nullable=False))
    updated_at: datetime = Field(default_factory=datetime.utcnow)


class NotificationPreference(BaseModel, table=True):
    """
    Notification Preference - A staff member who receives WhatsApp alerts

    Domain Rules:
    - Only rows with whatsapp_enabled and a phone number are messaged
    - Empty subscribed_events means every event for the role
    """

    __tablename__ = "notification_preferences"
    __table_args__ = (
        Index('ix_notification_preferences_tenant_role', 'tenant_id', 'role'),
    )

    id: str = Field(default_factory=generate_uuid, primary_key=True)
    tenant_id: str = Field(description="Tenant ID")
    user_id: Optional[str] = Field(default=None)
    name: Optional[str] = Field(default=None, description="Display name used in templates")
    role: RecipientRole = Field(description="Staff role")
    phone_number: Optional[str] = Field(default=None)
    whatsapp_enabled: bool = Field(default=True)
    subscribed_events: List[str] = Field(
        default_factory=list,
        sa_column=Column(JSON, nullable=False),
        description="Event types this person wants, empty means all",
    )

    def wants(self, event_type: str) -> bool:
        if not self.whatsapp_enabled or not self.phone_number:
            return False
        return not self.subscribed_events or event_type in self.subscribed_events
