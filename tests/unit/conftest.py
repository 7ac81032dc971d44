"""Shared fixtures for unit tests"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from src.domain.tenant_context import TenantContext
from src.domain.vehicle_inward import VehicleInward
from tests.unit.factories import TENANT_ID


@pytest.fixture
def mock_uow():
    """Mock unit of work"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock()
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()
    return uow


@pytest.fixture
def tenant_context():
    """Caller belonging to TENANT_ID"""
    return TenantContext(tenant_id=TENANT_ID, user_id="user_1")


@pytest.fixture
def sample_vehicle():
    return VehicleInward(
        id="veh-0001-aaaa-bbbb",
        tenant_id=TENANT_ID,
        registration_number="MH12AB1234",
        model="Creta",
        customer_name="Ravi Kumar",
        customer_phone="9876543210",
        status="completed",
    )
