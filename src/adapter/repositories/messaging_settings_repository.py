"""SQLAlchemy Messaging Settings Repository Implementation"""

from typing import List, Optional
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.messaging_settings_repository import MessagingSettingsRepository
from src.domain.messaging_settings import (
    MessagingSettings,
    MessageTemplate,
    NotificationPreference,
    RecipientRole,
)


class SqlAlchemyMessagingSettingsRepository(MessagingSettingsRepository):
    """
    SQLAlchemy implementation of MessagingSettingsRepository

    Tenant rows are preferred over global (tenant_id IS NULL) rows.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_settings(self, tenant_id: str) -> Optional[MessagingSettings]:
        statement = select(MessagingSettings).where(MessagingSettings.tenant_id == tenant_id)
        result = await self.session.execute(statement)
        settings = result.scalar_one_or_none()
        if settings:
            return settings

        statement = select(MessagingSettings).where(MessagingSettings.tenant_id.is_(None))
        result = await self.session.execute(statement)
        return result.scalars().first()

    async def get_template(
        self, tenant_id: str, event_type: str
    ) -> Optional[MessageTemplate]:
        for scope in (MessageTemplate.tenant_id == tenant_id, MessageTemplate.tenant_id.is_(None)):
            statement = (
                select(MessageTemplate)
                .where(scope)
                .where(MessageTemplate.event_type == event_type)
            )
            result = await self.session.execute(statement)
            template = result.scalars().first()
            if template:
                return template
        return None

    async def get_recipients(
        self, tenant_id: str, roles: List[RecipientRole]
    ) -> List[NotificationPreference]:
        if not roles:
            return []
        statement = (
            select(NotificationPreference)
            .where(NotificationPreference.tenant_id == tenant_id)
            .where(NotificationPreference.role.in_(roles))
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())
