"""Integration tests for Invoice API endpoints"""

import pytest
from decimal import Decimal
from httpx import AsyncClient

from tests.integration.seed import ADMIN_HEADERS, OTHER_TENANT_HEADERS, TENANT_HEADERS


def _payload(vehicle_id, **overrides):
    payload = {
        "vehicle_inward_id": vehicle_id,
        "line_items": [
            {"product_name": "Seat covers", "brand": "AutoForm", "quantity": "2", "unit_price": "500"},
            {"product_name": "Dashcam", "quantity": "1", "unit_price": "1000"},
        ],
        "invoice_date": "2024-03-01",
        "due_date": "2024-03-31",
        "discount_amount": "100",
        "tax_amount": "100",
    }
    payload.update(overrides)
    return payload


class TestInvoiceAPIIntegration:
    """Integration test suite for Invoice API endpoints"""

    @pytest.mark.asyncio
    async def test_full_lifecycle(self, client: AsyncClient, vehicle):
        """Create draft, issue, pay in full, then list payments"""
        # Create
        response = await client.post("/invoices", json=_payload(vehicle.id), headers=TENANT_HEADERS)
        assert response.status_code == 201
        invoice = response.json()
        assert invoice["status"] == "draft"
        assert Decimal(invoice["total_amount"]) == Decimal("2000.00")
        assert len(invoice["line_items"]) == 2

        # Issue
        response = await client.post(f"/invoices/{invoice['invoice_id']}/issue", headers=TENANT_HEADERS)
        assert response.status_code == 200
        assert response.json()["invoice_number"] == "INV-000001"

        # Pay
        response = await client.post(
            f"/invoices/{invoice['invoice_id']}/payments",
            json={"amount": "2000", "payment_mode": "upi", "reference_number": "UPI-1"},
            headers=TENANT_HEADERS,
        )
        assert response.status_code == 201
        data = response.json()
        assert data["invoice"]["status"] == "paid"
        assert Decimal(data["invoice"]["balance_amount"]) == Decimal("0")

        # Payments
        response = await client.get(f"/invoices/{invoice['invoice_id']}/payments", headers=TENANT_HEADERS)
        assert response.status_code == 200
        assert [p["payment_mode"] for p in response.json()] == ["upi"]

    @pytest.mark.asyncio
    async def test_create_without_line_items_returns_400(self, client: AsyncClient, vehicle):
        response = await client.post(
            "/invoices", json=_payload(vehicle.id, line_items=[]), headers=TENANT_HEADERS
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    @pytest.mark.asyncio
    async def test_create_for_unknown_job_returns_404(self, client: AsyncClient):
        response = await client.post("/invoices", json=_payload("no-such-job"), headers=TENANT_HEADERS)

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "NOT_FOUND"

    @pytest.mark.asyncio
    async def test_requires_tenant_or_admin(self, client: AsyncClient):
        response = await client.get("/invoices")

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_other_tenant_gets_404(self, client: AsyncClient, vehicle):
        created = await client.post("/invoices", json=_payload(vehicle.id), headers=TENANT_HEADERS)

        response = await client.get(
            f"/invoices/{created.json()['invoice_id']}", headers=OTHER_TENANT_HEADERS
        )

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_payment_on_draft_returns_409(self, client: AsyncClient, vehicle):
        created = await client.post("/invoices", json=_payload(vehicle.id), headers=TENANT_HEADERS)

        response = await client.post(
            f"/invoices/{created.json()['invoice_id']}/payments",
            json={"amount": "100"},
            headers=TENANT_HEADERS,
        )

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "INVALID_STATE"

    @pytest.mark.asyncio
    async def test_cancel_then_pay_rejected(self, client: AsyncClient, vehicle):
        created = await client.post(
            "/invoices", json=_payload(vehicle.id, issue_immediately=True), headers=TENANT_HEADERS
        )
        invoice_id = created.json()["invoice_id"]

        cancelled = await client.post(
            f"/invoices/{invoice_id}/cancel", json={"reason": "duplicate"}, headers=TENANT_HEADERS
        )
        payment = await client.post(
            f"/invoices/{invoice_id}/payments", json={"amount": "100"}, headers=TENANT_HEADERS
        )

        assert cancelled.status_code == 200
        assert cancelled.json()["status"] == "cancelled"
        assert cancelled.json()["cancelled_reason"] == "duplicate"
        assert payment.status_code == 409

    @pytest.mark.asyncio
    async def test_correct_and_delete_payment(self, client: AsyncClient, vehicle):
        """Paying in full, lowering the payment, then deleting it reopens the invoice"""
        created = await client.post(
            "/invoices", json=_payload(vehicle.id, issue_immediately=True), headers=TENANT_HEADERS
        )
        invoice_id = created.json()["invoice_id"]
        paid = await client.post(
            f"/invoices/{invoice_id}/payments",
            json={"amount": "2000", "reference_number": "UPI-1"},
            headers=TENANT_HEADERS,
        )
        payment_id = paid.json()["payment"]["id"]
        assert paid.json()["invoice"]["status"] == "paid"

        # Correct the amount
        response = await client.put(
            f"/payments/{payment_id}", json={"amount": "1500"}, headers=TENANT_HEADERS
        )
        assert response.status_code == 200
        data = response.json()
        assert Decimal(data["payment"]["amount"]) == Decimal("1500.00")
        assert data["payment"]["reference_number"] == "UPI-1"
        assert data["invoice"]["status"] == "partial"
        assert Decimal(data["invoice"]["balance_amount"]) == Decimal("500.00")

        # Overpaying through a correction is rejected
        response = await client.put(
            f"/payments/{payment_id}", json={"amount": "2500"}, headers=TENANT_HEADERS
        )
        assert response.status_code == 400

        # Delete
        response = await client.delete(f"/payments/{payment_id}", headers=TENANT_HEADERS)
        assert response.status_code == 200
        assert response.json()["success"] is True
        assert response.json()["invoice"]["status"] == "issued"
        assert Decimal(response.json()["invoice"]["balance_amount"]) == Decimal("2000.00")

        payments = await client.get(f"/invoices/{invoice_id}/payments", headers=TENANT_HEADERS)
        assert payments.json() == []

    @pytest.mark.asyncio
    async def test_payment_corrections_blocked_after_cancel(self, client: AsyncClient, vehicle):
        created = await client.post(
            "/invoices", json=_payload(vehicle.id, issue_immediately=True), headers=TENANT_HEADERS
        )
        invoice_id = created.json()["invoice_id"]
        paid = await client.post(
            f"/invoices/{invoice_id}/payments", json={"amount": "500"}, headers=TENANT_HEADERS
        )
        payment_id = paid.json()["payment"]["id"]
        await client.post(f"/invoices/{invoice_id}/cancel", headers=TENANT_HEADERS)

        updated = await client.put(
            f"/payments/{payment_id}", json={"notes": "late"}, headers=TENANT_HEADERS
        )
        deleted = await client.delete(f"/payments/{payment_id}", headers=TENANT_HEADERS)
        other_tenant = await client.delete(f"/payments/{payment_id}", headers=OTHER_TENANT_HEADERS)

        assert updated.status_code == 409
        assert updated.json()["error"]["message"] == "Cannot update payment for cancelled invoice"
        assert deleted.status_code == 409
        assert other_tenant.status_code == 404

    @pytest.mark.asyncio
    async def test_list_filters_and_admin_view(self, client: AsyncClient, vehicle):
        await client.post("/invoices", json=_payload(vehicle.id), headers=TENANT_HEADERS)
        await client.post(
            "/invoices", json=_payload(vehicle.id, issue_immediately=True), headers=TENANT_HEADERS
        )

        issued = await client.get("/invoices", params={"status": "issued"}, headers=TENANT_HEADERS)
        everything = await client.get("/invoices", headers=ADMIN_HEADERS)
        unknown = await client.get("/invoices", params={"status": "lost"}, headers=TENANT_HEADERS)

        assert issued.json()["count"] == 1
        assert issued.json()["invoices"][0]["invoice_number"] == "INV-000001"
        assert everything.json()["count"] == 2
        assert unknown.status_code == 400

    @pytest.mark.asyncio
    async def test_summary(self, client: AsyncClient, vehicle):
        await client.post("/invoices", json=_payload(vehicle.id), headers=TENANT_HEADERS)
        created = await client.post(
            "/invoices", json=_payload(vehicle.id, issue_immediately=True), headers=TENANT_HEADERS
        )
        await client.post(
            f"/invoices/{created.json()['invoice_id']}/payments",
            json={"amount": "500"},
            headers=TENANT_HEADERS,
        )

        response = await client.get("/invoices/summary", headers=TENANT_HEADERS)

        assert response.status_code == 200
        summary = response.json()
        assert Decimal(summary["total_invoiced"]) == Decimal("2000")
        assert Decimal(summary["total_received"]) == Decimal("500")
        assert Decimal(summary["total_outstanding"]) == Decimal("1500")
        assert summary["counts_by_status"] == {"draft": 1, "partial": 1}

    @pytest.mark.asyncio
    async def test_pdf_download(self, client: AsyncClient, vehicle):
        created = await client.post("/invoices", json=_payload(vehicle.id), headers=TENANT_HEADERS)

        response = await client.get(
            f"/invoices/{created.json()['invoice_id']}/pdf", headers=TENANT_HEADERS
        )

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert response.content.startswith(b"%PDF")
