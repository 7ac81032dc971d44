"""Messaging provider factory."""

from typing import Optional, Union

import httpx

from src.app.services.messaging_gateway import (
    MessagingConfig,
    MessagingProvider,
    MessagingProviderType,
)
from src.domain.errors import ProviderConfigurationError
from src.domain.messaging_settings import MessagingSettings
from .base import DEFAULT_TIMEOUT_SECONDS
from .cloud_api import CloudApiProvider
from .custom_webhook import CustomWebhookProvider
from .message_auto_sender import MessageAutoSenderProvider
from .twilio import TwilioProvider

PROVIDERS = {
    MessagingProviderType.MESSAGE_AUTO_SENDER: MessageAutoSenderProvider,
    MessagingProviderType.TWILIO: TwilioProvider,
    MessagingProviderType.CLOUD_API: CloudApiProvider,
    MessagingProviderType.CUSTOM: CustomWebhookProvider,
}

PROVIDER_LABELS = {
    MessagingProviderType.MESSAGE_AUTO_SENDER: "MessageAutoSender",
    MessagingProviderType.TWILIO: "Twilio",
    MessagingProviderType.CLOUD_API: "WhatsApp Cloud API",
    MessagingProviderType.CUSTOM: "Custom webhook",
}


def config_from_settings(settings: MessagingSettings) -> MessagingConfig:
    return MessagingConfig(
        api_key=settings.api_key,
        api_secret=settings.api_secret,
        user_id=settings.user_id,
        password=settings.password,
        account_sid=settings.account_sid,
        auth_token=settings.auth_token,
        from_number=settings.from_number,
        webhook_url=settings.webhook_url,
        business_account_id=settings.business_account_id,
        access_token=settings.access_token,
    )


def create_messaging_provider(
    provider: Union[str, MessagingProviderType],
    config: MessagingConfig,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    client: Optional[httpx.AsyncClient] = None,
) -> MessagingProvider:
    """
    Factory function to build a provider from its tag and credentials

    Args:
        provider: Provider tag (messageautosender, twilio, cloud-api, custom)
        config: Provider credentials
        timeout: Per-request timeout in seconds
        client: Optional shared httpx client

    Returns:
        Configured MessagingProvider

    Raises:
        ProviderConfigurationError: Unknown provider or missing credentials
    """
    try:
        provider_type = MessagingProviderType(provider)
    except ValueError:
        raise ProviderConfigurationError(f"Unknown provider: {provider}")

    missing = config.missing_fields(provider_type)
    if missing:
        raise ProviderConfigurationError(
            f"{PROVIDER_LABELS[provider_type]} configuration is incomplete "
            f"(missing: {', '.join(missing)})"
        )

    return PROVIDERS[provider_type](config, timeout=timeout, client=client)
