"""API test fixtures — FastAPI test client over an in-memory database.

Invariants:
    - get_db dependency overridden to use the test session factory
    - get_mail_notifier overridden with a RecordingNotifier (no SMTP traffic)
    - db_manager patched so the health probes see the test engine

Design Decisions:
    - raise_app_exceptions=False: the catch-all 500 handler's response is
      observable instead of the exception propagating into the test
"""

import pytest
from httpx import ASGITransport, AsyncClient

import portfolio.infrastructure.database as db_module
from portfolio.api.dependencies import get_mail_notifier
from portfolio.infrastructure.database import DatabaseSessionManager, get_db
from portfolio.main import app
from tests.services.fake_mail import RecordingNotifier


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
async def client(test_engine, test_session_factory, notifier):
    """FastAPI test client with DB and mail dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_mail_notifier] = lambda: notifier

    original_manager = db_module.db_manager
    db_module.db_manager = DatabaseSessionManager.from_engine(test_engine)

    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager
