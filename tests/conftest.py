"""Shared fixtures.

The sqlite fixtures give each test a fresh in-memory database holding the
tables declared in tests/catalog.py.
"""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from crudcore.infrastructure.database import Base

import tests.catalog  # noqa: F401  (registers the sample tables)


@pytest.fixture
async def sqlite_session_factory():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
    await engine.dispose()


@pytest.fixture
async def sqlite_session(sqlite_session_factory):
    async with sqlite_session_factory() as session:
        yield session
