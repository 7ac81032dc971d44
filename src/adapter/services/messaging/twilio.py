"""Twilio WhatsApp provider."""

import httpx

from src.app.services.messaging_gateway import MessagingProviderType, SendResult
from .base import HttpMessagingProvider, result_from_response

TWILIO_API_URL = "https://api.twilio.com/2010-04-01"


class TwilioProvider(HttpMessagingProvider):
    provider_type = MessagingProviderType.TWILIO

    async def _send_text(self, client: httpx.AsyncClient, to: str, text: str) -> SendResult:
        url = f"{TWILIO_API_URL}/Accounts/{self.config.account_sid}/Messages.json"
        from_number = self.config.from_number
        if not from_number.startswith("whatsapp:"):
            from_number = f"whatsapp:{from_number}"

        response = await client.post(
            url,
            data={
                "From": from_number,
                "To": f"whatsapp:+{to}",
                "Body": text,
            },
            auth=httpx.BasicAuth(self.config.account_sid, self.config.auth_token),
            timeout=self.timeout,
        )
        return result_from_response(response)
