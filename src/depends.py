"""Database engine and the per-request session dependency."""

from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig


def build_engine(db_uri: str):
    """SQLite needs check_same_thread off; server databases get pre-ping"""
    if db_uri.startswith("sqlite"):
        return create_async_engine(
            db_uri, echo=False, future=True, connect_args={"check_same_thread": False}
        )
    return create_async_engine(db_uri, echo=False, future=True, pool_pre_ping=True)


engine = build_engine(ApplicationConfig.DB_URI)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)


async def get_session() -> AsyncSession:
    """One session per request, shared by every repository the route builds"""
    async with AsyncSessionLocal() as session:
        yield session
