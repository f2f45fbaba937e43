"""Unit tests for crudcore/infrastructure/database.py.

Tests cover Settings defaults, env var override, and object types.
No database connection is required.
"""

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase

from crudcore.infrastructure.database import AsyncSessionLocal, Base, Settings, engine, get_session


def test_settings_default_url_uses_asyncpg(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    assert "postgresql+asyncpg" in Settings().database_url


def test_settings_reads_database_url_from_env(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql+asyncpg://u:p@myhost/mydb")
    assert Settings().database_url == "postgresql+asyncpg://u:p@myhost/mydb"


def test_settings_default_query_timeout(monkeypatch):
    monkeypatch.delenv("QUERY_TIMEOUT_SECONDS", raising=False)
    assert Settings().query_timeout_seconds == 30.0


def test_settings_reads_query_timeout_from_env(monkeypatch):
    monkeypatch.setenv("QUERY_TIMEOUT_SECONDS", "2.5")
    assert Settings().query_timeout_seconds == 2.5


def test_base_is_declarative_base():
    assert issubclass(Base, DeclarativeBase)


def test_engine_is_async():
    assert isinstance(engine, AsyncEngine)


def test_session_factory_produces_async_sessions():
    assert isinstance(AsyncSessionLocal, async_sessionmaker)
    assert AsyncSessionLocal.class_ is AsyncSession


async def test_get_session_yields_async_session():
    generator = get_session()
    session = await generator.__anext__()
    try:
        assert isinstance(session, AsyncSession)
    finally:
        await generator.aclose()
