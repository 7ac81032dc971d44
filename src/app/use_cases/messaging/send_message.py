"""SendMessage Use Case

Ad-hoc outbound message with caller-supplied provider credentials.
"""

import logging
from typing import Callable
from libs.result import Result, Return, Error
from src.app.services.messaging_gateway import (
    MessagingConfig,
    MessagingProvider,
    OutboundMessage,
    SendResult,
)
from src.domain.errors import DomainError, ValidationError
from src.domain.tenant_context import TenantContext

logger = logging.getLogger(__name__)

ProviderBuilder = Callable[[str, MessagingConfig], MessagingProvider]


class SendMessage:
    """
    Use Case: Send one WhatsApp message

    Business Rules:
    1. Caller must belong to a tenant or be an admin
    2. Unknown provider or incomplete credentials fail with
       PROVIDER_CONFIGURATION before anything is sent
    3. Delivery failures are not errors of the use case: the SendResult
       is returned as-is so the caller can mirror the upstream status
    """

    def __init__(self, provider_builder: ProviderBuilder):
        self.provider_builder = provider_builder

    async def execute(
        self,
        context: TenantContext,
        provider: str,
        config: MessagingConfig,
        message: OutboundMessage,
    ) -> Result[SendResult]:
        try:
            context.require()
            if not message.to or not message.text:
                raise ValidationError("Recipient and message are required")

            gateway = self.provider_builder(provider, config)
            result = await gateway.send(message)

            if result.success:
                logger.info(f"Message sent via {provider} for tenant {context.tenant_id}")
            else:
                logger.warning(f"Message via {provider} failed: {result.error}")
            return Return.ok(result)

        except DomainError as e:
            return Return.err(Error(code=e.code.value, message=e.message, reason=type(e).__name__))
        except Exception as e:
            logger.error(f"Unexpected error sending message via {provider}: {e}", exc_info=True)
            return Return.err(
                Error(code="SEND_MESSAGE_FAILED", message="Failed to send message", reason=str(e))
            )
