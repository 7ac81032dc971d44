"""Integration tests for the WhatsApp send endpoint"""

import httpx
import pytest
from unittest.mock import patch
from httpx import AsyncClient

from src.adapter.services.messaging import create_messaging_provider
from tests.integration.seed import TENANT_HEADERS

AUTO_SENDER_REQUEST = {
    "provider": "messageautosender",
    "config": {"api_key": "key-1", "user_id": "workshop", "password": "secret"},
    "to": "9876543210",
    "message": "Your vehicle is ready",
}


def _builder_with(handler):
    """Provider builder whose HTTP calls go to handler"""
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))

    def build(provider, config):
        return create_messaging_provider(provider, config, client=client)

    return build


class TestMessagingAPIIntegration:
    @pytest.mark.asyncio
    async def test_basic_auth_fallback_succeeds(self, client: AsyncClient):
        calls = []

        def handler(request):
            calls.append(request)
            if "x-api-key" in request.headers:
                return httpx.Response(401, json={"message": "bad key"})
            return httpx.Response(200, json={"success": True})

        with patch("src.api.routes.messaging._build_provider", _builder_with(handler)):
            response = await client.post("/whatsapp/send", json=AUTO_SENDER_REQUEST, headers=TENANT_HEADERS)

        assert response.status_code == 200
        assert response.json() == {"success": True}
        assert len(calls) == 2

    @pytest.mark.asyncio
    async def test_provider_rejection_passes_status_through(self, client: AsyncClient):
        handler = lambda request: httpx.Response(403, json={"message": "forbidden"})  # noqa: E731

        with patch("src.api.routes.messaging._build_provider", _builder_with(handler)):
            response = await client.post("/whatsapp/send", json=AUTO_SENDER_REQUEST, headers=TENANT_HEADERS)

        assert response.status_code == 403
        assert response.json() == {"success": False, "error": "forbidden"}

    @pytest.mark.asyncio
    async def test_upstream_error_is_500(self, client: AsyncClient):
        handler = lambda request: httpx.Response(503, text="maintenance")  # noqa: E731

        with patch("src.api.routes.messaging._build_provider", _builder_with(handler)):
            response = await client.post("/whatsapp/send", json=AUTO_SENDER_REQUEST, headers=TENANT_HEADERS)

        assert response.status_code == 500
        assert response.json()["success"] is False

    @pytest.mark.asyncio
    async def test_incomplete_config_returns_400(self, client: AsyncClient):
        request = dict(AUTO_SENDER_REQUEST, provider="twilio", config={"account_sid": "AC1"})

        response = await client.post("/whatsapp/send", json=request, headers=TENANT_HEADERS)

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "PROVIDER_CONFIGURATION"

    @pytest.mark.asyncio
    async def test_requires_tenant(self, client: AsyncClient):
        response = await client.post("/whatsapp/send", json=AUTO_SENDER_REQUEST)

        assert response.status_code == 401
