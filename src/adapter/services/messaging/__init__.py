from .base import normalize_phone_number, HttpMessagingProvider
from .message_auto_sender import MessageAutoSenderProvider
from .twilio import TwilioProvider
from .cloud_api import CloudApiProvider
from .custom_webhook import CustomWebhookProvider
from .factory import create_messaging_provider, config_from_settings

__all__ = [
    "normalize_phone_number",
    "HttpMessagingProvider",
    "MessageAutoSenderProvider",
    "TwilioProvider",
    "CloudApiProvider",
    "CustomWebhookProvider",
    "create_messaging_provider",
    "config_from_settings",
]
