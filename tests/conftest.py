# tests/conftest.py
import os
import sys

import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import StaticPool

project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from upload_common.db_base import Base  # noqa: E402
import upload_common.database_models  # noqa: E402,F401  registers the uploads table


@pytest_asyncio.fixture(scope="function")
async def async_db_engine():
    """
    Provides an async engine over a fresh in-memory SQLite database with all
    tables created. StaticPool keeps every session on the same connection so
    they all see the same in-memory database.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def async_db_session(async_db_engine):
    """
    A function-scoped async fixture that provides a SQLAlchemy AsyncSession.
    """
    AsyncSessionLocal = async_sessionmaker(
        bind=async_db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    async with AsyncSessionLocal() as session:
        yield session
