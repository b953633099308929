# src/libs/upload-common/upload_common/db.py
import os
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from .config import POSTGRES_USER, POSTGRES_PASSWORD, POSTGRES_HOST, POSTGRES_PORT, POSTGRES_DB


def get_async_database_url():
    """
    Determines the correct async database URL, with an asyncpg driver scheme.
    Prioritizes DATABASE_URL for containerized environments.
    """
    url = os.getenv("DATABASE_URL") or f"postgresql+asyncpg://{POSTGRES_USER}:{POSTGRES_PASSWORD}@{POSTGRES_HOST}:{POSTGRES_PORT}/{POSTGRES_DB}"
    if url.startswith("postgresql://"):
        url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return url

async_engine = create_async_engine(
    get_async_database_url(),
    pool_pre_ping=True,
)

AsyncSessionLocal = async_sessionmaker(
    bind=async_engine,
    class_=AsyncSession,
    autoflush=False,
    expire_on_commit=False,
)

async def get_async_db_session():
    """
    An async generator that provides an SQLAlchemy AsyncSession and always closes it.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()
