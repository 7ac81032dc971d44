"""WhatsApp Cloud API provider."""

import httpx

from src.app.services.messaging_gateway import Attachment, MessagingProviderType, SendResult
from .base import HttpMessagingProvider, result_from_response

GRAPH_API_URL = "https://graph.facebook.com/v18.0"


class CloudApiProvider(HttpMessagingProvider):
    """
    Meta Graph API

    Documents are uploaded to /media first, then referenced by id.
    """

    provider_type = MessagingProviderType.CLOUD_API

    @property
    def _headers(self) -> dict:
        return {"Authorization": f"Bearer {self.config.access_token}"}

    async def _send_text(self, client: httpx.AsyncClient, to: str, text: str) -> SendResult:
        response = await client.post(
            f"{GRAPH_API_URL}/{self.config.business_account_id}/messages",
            json={
                "messaging_product": "whatsapp",
                "to": to,
                "type": "text",
                "text": {"body": text},
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
        upload = await client.post(
            f"{GRAPH_API_URL}/{self.config.business_account_id}/media",
            data={"messaging_product": "whatsapp", "type": attachment.mime_type},
            files={"file": (attachment.filename, attachment.content, attachment.mime_type)},
            headers=self._headers,
            timeout=self.timeout,
        )
        if not upload.is_success:
            return result_from_response(upload)

        body = upload.json()
        media_id = body.get("id") if isinstance(body, dict) else None
        if not media_id:
            return SendResult(success=False, error="Media upload returned no id")

        response = await client.post(
            f"{GRAPH_API_URL}/{self.config.business_account_id}/messages",
            json={
                "messaging_product": "whatsapp",
                "to": to,
                "type": "document",
                "document": {"id": media_id, "filename": attachment.filename},
            },
            headers=self._headers,
            timeout=self.timeout,
        )
        return result_from_response(response)
