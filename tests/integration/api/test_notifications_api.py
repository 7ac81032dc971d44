"""Integration tests for Notification and Cron API endpoints"""

import pytest
from unittest.mock import patch
from httpx import AsyncClient

from config import ApplicationConfig
from tests.integration.seed import TENANT_HEADERS, TENANT_ID


class TestNotificationAPIIntegration:
    @pytest.mark.asyncio
    async def test_enqueue_and_status(self, client: AsyncClient):
        payload = {
            "tenant_id": TENANT_ID,
            "event_type": "installation_complete",
            "payload": {"vehicleId": "veh-1", "vehicleData": {"registration_number": "MH12AB1234"}},
        }

        created = await client.post("/notifications", json=payload, headers=TENANT_HEADERS)
        status = await client.get(
            "/notifications/status",
            params={"vehicle_id": "veh-1", "event_type": "installation_complete"},
            headers=TENANT_HEADERS,
        )

        assert created.status_code == 201
        assert created.json()["status"] == "pending"
        assert status.status_code == 200
        assert status.json()["id"] == created.json()["id"]

    @pytest.mark.asyncio
    async def test_enqueue_nil_tenant_rejected(self, client: AsyncClient):
        payload = {"tenant_id": "00000000-0000-0000-0000-000000000000", "event_type": "vehicle_delivered"}

        response = await client.post(
            "/notifications", json=payload, headers={"X-User-Role": "super_admin"}
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_status_not_found(self, client: AsyncClient):
        response = await client.get(
            "/notifications/status",
            params={"vehicle_id": "veh-x", "event_type": "vehicle_delivered"},
            headers=TENANT_HEADERS,
        )

        assert response.status_code == 404


class TestCronAPIIntegration:
    @pytest.mark.asyncio
    async def test_process_notifications_with_empty_queue(self, client: AsyncClient):
        with patch.object(ApplicationConfig, "CRON_SECRET", "s3cret"):
            response = await client.get(
                "/cron/process-notifications", headers={"Authorization": "Bearer s3cret"}
            )

        assert response.status_code == 200
        data = response.json()
        assert data["processed"] == 0
        assert data["total_pending"] == 0
        assert data["message"] == "Notification processing completed"

    @pytest.mark.asyncio
    async def test_wrong_secret_returns_401(self, client: AsyncClient):
        with patch.object(ApplicationConfig, "CRON_SECRET", "s3cret"):
            response = await client.get(
                "/cron/process-notifications", headers={"Authorization": "Bearer nope"}
            )

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_immediate_bypasses_secret(self, client: AsyncClient):
        with patch.object(ApplicationConfig, "CRON_SECRET", "s3cret"):
            response = await client.get(
                "/cron/process-notifications", params={"immediate": "true", "id": "missing-id"}
            )

        assert response.status_code == 200
        assert response.json()["errors"] == ["missing-id: Notification not found"]
        assert response.json()["immediate"] is True

    @pytest.mark.asyncio
    async def test_mark_overdue_requires_secret(self, client: AsyncClient):
        with patch.object(ApplicationConfig, "CRON_SECRET", "s3cret"):
            denied = await client.get("/cron/mark-overdue-invoices", params={"immediate": "true"})
            allowed = await client.get(
                "/cron/mark-overdue-invoices", headers={"Authorization": "Bearer s3cret"}
            )

        assert denied.status_code == 401
        assert allowed.status_code == 200
        assert allowed.json()["marked_count"] == 0
