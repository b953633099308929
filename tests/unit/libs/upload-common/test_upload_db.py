# tests/unit/libs/upload-common/test_upload_db.py
import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from upload_common import db


def test_database_url_defaults_to_asyncpg(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    url = db.get_async_database_url()
    assert url.startswith("postgresql+asyncpg://")


def test_database_url_upgrades_plain_postgres_scheme(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql://u:p@db:5432/uploads")
    assert db.get_async_database_url() == "postgresql+asyncpg://u:p@db:5432/uploads"


def test_database_url_keeps_explicit_driver(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///uploads.db")
    assert db.get_async_database_url() == "sqlite+aiosqlite:///uploads.db"


@pytest.mark.asyncio
async def test_get_async_db_session_yields_a_session():
    sessions = db.get_async_db_session()
    session = await sessions.__anext__()
    try:
        assert isinstance(session, AsyncSession)
    finally:
        await sessions.aclose()
