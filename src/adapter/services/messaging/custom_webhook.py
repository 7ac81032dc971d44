"""Custom webhook provider.

Posts the message as JSON to a tenant-supplied URL.
"""

import base64

import httpx

from src.app.services.messaging_gateway import Attachment, MessagingProviderType, SendResult
from .base import HttpMessagingProvider, result_from_response


class CustomWebhookProvider(HttpMessagingProvider):
    provider_type = MessagingProviderType.CUSTOM

    @property
    def _headers(self) -> dict:
        if self.config.api_key:
            return {"X-API-Key": self.config.api_key}
        return {}

    async def _send_text(self, client: httpx.AsyncClient, to: str, text: str) -> SendResult:
        response = await client.post(
            self.config.webhook_url,
            json={
                "to": to,
                "message": text,
                "apiKey": self.config.api_key,
                "apiSecret": self.config.api_secret,
            },
            headers=self._headers,
            timeout=self.timeout,
        )
        return result_from_response(response)

    async def _send_attachment(
        self,
        client: httpx.AsyncClient,
        to: str,
        attachment: Attachment,
        caption: str,
    ) -> SendResult:
        response = await client.post(
            self.config.webhook_url,
            json={
                "to": to,
                "message": caption,
                "apiKey": self.config.api_key,
                "apiSecret": self.config.api_secret,
                "attachment": {
                    "type": "document",
                    "filename": attachment.filename,
                    "mimeType": attachment.mime_type,
                    "data": base64.b64encode(attachment.content).decode("ascii"),
                },
            },
            headers=self._headers,
            timeout=self.timeout,
        )
        return result_from_response(response)
