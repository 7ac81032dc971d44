"""Rows and headers shared by integration tests"""

from src.domain.messaging_settings import MessagingSettings, NotificationPreference, RecipientRole

TENANT_ID = "b7e1c9a2-6f3d-4c1e-8a2b-1f4e5d6c7b8a"
OTHER_TENANT_ID = "3d2c1b0a-9f8e-4d7c-8b6a-5f4e3d2c1b0a"

TENANT_HEADERS = {"X-Tenant-ID": TENANT_ID, "X-User-ID": "user_1", "X-User-Role": "accountant"}
OTHER_TENANT_HEADERS = {"X-Tenant-ID": OTHER_TENANT_ID, "X-User-ID": "user_2"}
ADMIN_HEADERS = {"X-User-ID": "root", "X-User-Role": "super_admin"}

WEBHOOK_URL = "https://hooks.example.com/whatsapp"


def webhook_settings(tenant_id=TENANT_ID, enabled=True):
    return MessagingSettings(
        tenant_id=tenant_id, enabled=enabled, provider="custom", webhook_url=WEBHOOK_URL
    )


def manager(tenant_id=TENANT_ID, phone="9000000002"):
    return NotificationPreference(
        tenant_id=tenant_id, name="Manoj", role=RecipientRole.MANAGER, phone_number=phone
    )
