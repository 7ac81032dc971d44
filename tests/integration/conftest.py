import os

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

import src.domain  # noqa: F401  registers every table on SQLModel.metadata
from src.depends import get_session
from src.domain.vehicle_inward import VehicleInward
from tests.integration.seed import TENANT_ID

TEST_DB_URI = os.getenv("TEST_DB_URI", "sqlite+aiosqlite:///:memory:")


@pytest_asyncio.fixture(scope="function")
async def engine():
    """Test database engine, in-memory SQLite unless TEST_DB_URI is set"""
    if TEST_DB_URI.startswith("sqlite"):
        engine = create_async_engine(
            TEST_DB_URI,
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        engine = create_async_engine(TEST_DB_URI, echo=False, future=True)

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    """Create a new database session for each test"""
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)
    async with Session() as session:
        yield session


@pytest_asyncio.fixture
async def vehicle(db_session):
    """Completed job with a reachable customer"""
    vehicle = VehicleInward(
        tenant_id=TENANT_ID,
        registration_number="MH12AB1234",
        model="Creta",
        customer_name="Ravi Kumar",
        customer_phone="9876543210",
        status="completed",
    )
    db_session.add(vehicle)
    await db_session.commit()
    return vehicle


@pytest_asyncio.fixture
async def client(db_session):
    """Create test client with database session override"""
    from src.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    # Override the session dependency to use test session
    async def override_get_session():
        yield db_session

    app.dependency_overrides[get_session] = override_get_session

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
