"""Messaging Settings Repository Interface"""

from abc import ABC, abstractmethod
from typing import List, Optional
from src.domain.messaging_settings import (
    MessagingSettings,
    MessageTemplate,
    NotificationPreference,
    RecipientRole,
)


class MessagingSettingsRepository(ABC):
    """
    Read access to provider settings, templates and recipients

    Settings and templates resolve tenant row first, then the global row.
    """

    @abstractmethod
    async def get_settings(self, tenant_id: str) -> Optional[MessagingSettings]:
        """
        Provider settings for a tenant

        Args:
            tenant_id: Tenant identifier

        Returns:
            Tenant settings, else global settings, else None
        """
        pass

    @abstractmethod
    async def get_template(
        self, tenant_id: str, event_type: str
    ) -> Optional[MessageTemplate]:
        """
        Custom template for an event type

        Args:
            tenant_id: Tenant identifier
            event_type: Event type tag

        Returns:
            Tenant template, else global template, else None
        """
        pass

    @abstractmethod
    async def get_recipients(
        self, tenant_id: str, roles: List[RecipientRole]
    ) -> List[NotificationPreference]:
        """
        Staff preferences for the given roles

        Args:
            tenant_id: Tenant identifier
            roles: Roles to include

        Returns:
            Preference rows (filtering by event is left to the caller)
        """
        pass
