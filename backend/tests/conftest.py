"""Root conftest — shared test configuration and database fixtures.

Invariants:
    - Environment defaults are set before any portfolio module is imported
      (get_settings() is cached for the whole run)
    - Every test that asks for a database gets a fresh in-memory SQLite schema

Design Decisions:
    - SQLite in-memory via aiosqlite: fast, no external dependency, sufficient for
      service and route tests (PostgreSQL-specific features not exercised here)
    - DB fixtures live here, not per directory: services/ and api/ share them
"""

import os

# Ensure tests don't accidentally use real credentials or a real relay
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")
os.environ.setdefault("ADMIN_KEY", "test-admin-key")
os.environ.setdefault("CONTACT_EMAIL", "owner@example.com")
os.environ.setdefault("SMTP_USER", "")
os.environ.setdefault("SMTP_PASSWORD", "")

import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession, async_sessionmaker, create_async_engine,
)

from portfolio.db.base import Base  # noqa: E402
import portfolio.models  # noqa: E402,F401

ADMIN_KEY = os.environ["ADMIN_KEY"]


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def admin_headers():
    return {"X-Admin-Key": ADMIN_KEY}
