"""MessageAutoSender WhatsApp provider."""

import logging

import httpx

from src.app.services.messaging_gateway import MessagingProviderType, SendResult
from .base import HttpMessagingProvider, result_from_response

logger = logging.getLogger(__name__)

DEFAULT_URL = "https://app.messageautosender.com/api/v1/message/create"
MESSAGE_CREATE_PATH = "/api/v1/message/create"
AUTH_FAILURE_STATUSES = (401, 403)


class MessageAutoSenderProvider(HttpMessagingProvider):
    """
    Auto-sender HTTP API

    Authenticates with the x-api-key header. Only when that is refused with
    401/403 is the request repeated once with Basic user_id:password. Any
    other failure is returned as-is.
    """

    provider_type = MessagingProviderType.MESSAGE_AUTO_SENDER

    @property
    def url(self) -> str:
        webhook_url = self.config.webhook_url
        if not webhook_url:
            return DEFAULT_URL
        if webhook_url.rstrip("/").lower().endswith(MESSAGE_CREATE_PATH):
            return webhook_url
        return webhook_url.rstrip("/") + MESSAGE_CREATE_PATH

    async def _send_text(self, client: httpx.AsyncClient, to: str, text: str) -> SendResult:
        payload = {
            "receiverMobileNo": f"+{to}",
            "message": [text],
        }

        response = await client.post(
            self.url,
            json=payload,
            headers={"x-api-key": self.config.api_key},
            timeout=self.timeout,
        )
        if response.status_code not in AUTH_FAILURE_STATUSES:
            return result_from_response(response)

        logger.info(
            f"messageautosender: x-api-key rejected with {response.status_code}, retrying with basic auth"
        )
        response = await client.post(
            self.url,
            json=payload,
            auth=httpx.BasicAuth(self.config.user_id, self.config.password),
            timeout=self.timeout,
        )
        return result_from_response(response)
