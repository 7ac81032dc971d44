"""Shared HTTP plumbing for messaging providers."""

import logging
import re
from abc import abstractmethod
from contextlib import asynccontextmanager
from typing import Any, Optional

import httpx

from src.app.services.messaging_gateway import (
    Attachment,
    MessagingConfig,
    MessagingProvider,
    OutboundMessage,
    SendResult,
)

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 5.0
TIMEOUT_ERROR = "timeout"


def normalize_phone_number(raw: Optional[str]) -> str:
    """
    Normalize a phone number to digits with an Indian country code

    "9876543210" -> "919876543210"
    "09876543210" -> "919876543210"
    "+91 98765-43210" -> "919876543210"
    """
    phone = re.sub(r"[^\d+]", "", raw or "")
    if phone.startswith("+"):
        phone = phone[1:]

    if re.fullmatch(r"\d{10}", phone):
        return "91" + phone
    if re.fullmatch(r"0\d{10}", phone):
        return "91" + phone[1:]
    return phone


def error_from_response(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        message = body.get("message") or body.get("error")
        if isinstance(message, dict):
            message = message.get("message")
        if message:
            return str(message)
    if response.text:
        return response.text[:500]
    return f"HTTP {response.status_code}: {response.reason_phrase}"


def result_from_response(response: httpx.Response) -> SendResult:
    """
    Translate a provider response into a SendResult

    A 2xx response whose JSON body reports failure (success=false, an
    error field, or status="error") counts as a failed send.
    """
    if not response.is_success:
        return SendResult(
            success=False,
            error=error_from_response(response),
            status_code=response.status_code,
        )

    try:
        body: Any = response.json()
    except ValueError:
        return SendResult(success=True, status_code=response.status_code)

    if isinstance(body, dict) and (
        body.get("success") is False or body.get("error") or body.get("status") == "error"
    ):
        error = body.get("error") or body.get("message") or "Failed to send message"
        if isinstance(error, dict):
            error = error.get("message") or "Failed to send message"
        return SendResult(success=False, error=str(error), status_code=400)

    return SendResult(success=True, status_code=response.status_code)


class HttpMessagingProvider(MessagingProvider):
    """
    Base class for providers reached over HTTP

    Subclasses implement `_send_text` and optionally `_send_attachment`.
    Every request carries the configured timeout; timeouts and transport
    errors are turned into failed SendResults here.
    """

    def __init__(
        self,
        config: MessagingConfig,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.config = config
        self.timeout = timeout
        self._client = client

    async def send(self, message: OutboundMessage) -> SendResult:
        to = normalize_phone_number(message.to)
        if not to:
            return SendResult(success=False, error="Recipient phone number is required", status_code=400)

        async with self._http() as client:
            result = await self._guarded(self._send_text(client, to, message.text))
            if not result.success:
                logger.warning(
                    f"{self.provider_type.value}: send to {to} failed: {result.error}"
                )
                return result

            if message.attachment:
                try:
                    attachment_result = await self._guarded(
                        self._send_attachment(client, to, message.attachment, message.text)
                    )
                except Exception as e:
                    attachment_result = SendResult(success=False, error=str(e) or type(e).__name__)
                if not attachment_result.success:
                    logger.warning(
                        f"{self.provider_type.value}: attachment {message.attachment.filename} "
                        f"to {to} not delivered: {attachment_result.error}"
                    )

            return result

    @abstractmethod
    async def _send_text(self, client: httpx.AsyncClient, to: str, text: str) -> SendResult:
        pass

    async def _send_attachment(
        self,
        client: httpx.AsyncClient,
        to: str,
        attachment: Attachment,
        caption: str,
    ) -> SendResult:
        return SendResult(success=False, error="Attachments are not supported by this provider")

    @asynccontextmanager
    async def _http(self):
        if self._client is not None:
            yield self._client
            return
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            yield client

    async def _guarded(self, call) -> SendResult:
        try:
            return await call
        except httpx.TimeoutException:
            return SendResult(success=False, error=TIMEOUT_ERROR)
        except httpx.HTTPError as e:
            return SendResult(success=False, error=str(e) or type(e).__name__)
        except ValueError as e:
            return SendResult(success=False, error=f"Invalid provider response: {e}")
