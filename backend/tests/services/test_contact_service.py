"""Contact Service — verifies validate → persist → notify and the admin inbox.

Invariants:
    - A rejected form stores nothing and sends nothing
    - An accepted form stores exactly one row, whatever the notifier does
    - Owner notice and auto-reply both attempted after the row is stored
    - list_all is admin-gated; limit capped at 50
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

import pytest
from sqlalchemy import func, select

from portfolio.core.domain_types import ContactSubmission
from portfolio.core.errors import UnauthorizedError, ValidationFailedError
from portfolio.infrastructure.contact_repository import SqlContactRepository
from portfolio.models.contact import Contact
from portfolio.services.contact_service import ContactService
from tests.services.fake_mail import RecordingNotifier

OWNER = "owner@example.com"
FORM = {
    "name": "Ada Lovelace",
    "email": "Ada@Example.com",
    "subject": "Project inquiry",
    "message": "I would like to talk about a project.",
}


def _service(test_db, notifier, owner_email=OWNER) -> ContactService:
    return ContactService(
        SqlContactRepository(test_db),
        notifier,
        owner_email=owner_email,
        sender_name="Portfolio Contact",
        signature_name="Halil Yüksel",
        clock=lambda: datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc),
    )


async def _row_count(test_db) -> int:
    result = await test_db.execute(select(func.count(Contact.id)))
    return result.scalar_one()


# ─── Submit ──────────────────────────────────────────────────────

async def test_submit_stores_and_notifies_both(test_db):
    notifier = RecordingNotifier()
    contact = await _service(test_db, notifier).submit(FORM, "203.0.113.7")

    assert contact.email == "ada@example.com"
    assert contact.ip_address == "203.0.113.7"
    assert contact.is_read is False
    assert await _row_count(test_db) == 1
    assert sorted(notifier.recipients) == ["ada@example.com", OWNER]


async def test_submit_survives_total_notifier_failure(test_db):
    notifier = RecordingNotifier(fail_all=True)
    contact = await _service(test_db, notifier).submit(FORM)

    assert contact.id is not None
    assert await _row_count(test_db) == 1
    assert len(notifier.attempted) == 2


async def test_submit_survives_owner_notice_failure(test_db):
    notifier = RecordingNotifier(failing_for={OWNER})
    await _service(test_db, notifier).submit(FORM)
    assert await _row_count(test_db) == 1
    assert "ada@example.com" in notifier.recipients


async def test_submit_survives_unexpected_notifier_exception(test_db):
    notifier = AsyncMock()
    notifier.send.side_effect = RuntimeError("socket closed")
    await _service(test_db, notifier).submit(FORM)
    assert await _row_count(test_db) == 1
    assert notifier.send.await_count == 2


async def test_short_message_stores_nothing(test_db):
    notifier = RecordingNotifier()
    with pytest.raises(ValidationFailedError) as exc_info:
        await _service(test_db, notifier).submit({**FORM, "message": "Hi!!!"})
    assert exc_info.value.fields == ["message"]
    assert await _row_count(test_db) == 0
    assert notifier.attempted == []


async def test_without_owner_only_auto_reply(test_db):
    notifier = RecordingNotifier()
    await _service(test_db, notifier, owner_email=None).submit(FORM)
    assert notifier.recipients == ["ada@example.com"]


# ─── Admin listing ───────────────────────────────────────────────

async def test_list_all_requires_admin():
    contacts = AsyncMock()
    service = ContactService(
        contacts, RecordingNotifier(), OWNER, "Portfolio Contact", "Halil Yüksel",
    )
    with pytest.raises(UnauthorizedError):
        await service.list_all(page=1, limit=10, is_admin=False)
    assert contacts.mock_calls == []


async def test_list_all_newest_first(test_db):
    repo = SqlContactRepository(test_db)
    times = iter([
        datetime(2024, 5, 1, 10, 0, tzinfo=timezone.utc),
        datetime(2024, 5, 1, 11, 0, tzinfo=timezone.utc),
    ])
    service = ContactService(
        repo, RecordingNotifier(), OWNER, "Portfolio Contact", "Halil Yüksel",
        clock=lambda: next(times),
    )
    await service.submit({**FORM, "subject": "First message"})
    await service.submit({**FORM, "subject": "Second message"})

    page = await service.list_all(page=1, limit=10, is_admin=True)

    assert [c.subject for c in page.items] == ["Second message", "First message"]
    assert page.pagination == {
        "current": 1, "total": 1, "hasNext": False, "hasPrev": False,
    }


async def _seed_contacts(test_db, count: int) -> None:
    repo = SqlContactRepository(test_db)
    start = datetime(2024, 5, 1, 8, 0, tzinfo=timezone.utc)
    for i in range(count):
        await repo.add(ContactSubmission(
            name="Ada Lovelace",
            email="ada@example.com",
            subject=f"Inquiry number {i:02d}",
            message="I would like to talk about a project.",
            received_at=start + timedelta(minutes=i),
        ))


async def test_list_all_caps_limit_at_50(test_db):
    await _seed_contacts(test_db, 51)
    service = _service(test_db, RecordingNotifier())

    page = await service.list_all(page=1, limit=500, is_admin=True)

    assert len(page.items) == 50
    assert page.items[0].subject == "Inquiry number 50"
    assert page.pagination == {
        "current": 1, "total": 2, "hasNext": True, "hasPrev": False,
    }


async def test_list_all_second_capped_page(test_db):
    await _seed_contacts(test_db, 51)
    service = _service(test_db, RecordingNotifier())

    page = await service.list_all(page=2, limit=500, is_admin=True)

    assert [c.subject for c in page.items] == ["Inquiry number 00"]
    assert page.pagination["hasPrev"] is True
