"""Contact Service — validates, stores and acknowledges contact form submissions.

Invariants:
    - Validation runs before persistence; a rejected form stores nothing
    - Exactly one Contact row per accepted submission
    - Notifications are best-effort: every notifier failure is logged and swallowed,
      never propagated, never rolls back the stored row
    - Notifications are attempted only after the row is stored
    - list_all is admin-gated before any repository call; limit capped at 50

Design Decisions:
    - Owner notice and auto-reply sent concurrently (asyncio.gather): one slow
      relay round trip instead of two
    - No owner address configured → only the auto-reply is attempted
"""

import asyncio
import logging
from collections.abc import Callable, Mapping
from datetime import datetime, timezone

from portfolio.core.domain_types import (
    CONTACT_MAX_LIMIT, ContactSubmission, OutgoingMail,
)
from portfolio.core.errors import UnauthorizedError
from portfolio.core.pagination import Page, build_pagination, make_page_window
from portfolio.core.repository_protocols import (
    ContactRecord, ContactRepository, MailNotifier,
)
from portfolio.core.validation import validate_contact
from portfolio.services.contact_emails import build_auto_reply, build_owner_notice

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ContactService:
    """Contact submission pipeline over a ContactRepository and a MailNotifier."""

    def __init__(
        self,
        contacts: ContactRepository,
        notifier: MailNotifier,
        owner_email: str | None,
        sender_name: str,
        signature_name: str,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.contacts = contacts
        self.notifier = notifier
        self.owner_email = owner_email
        self.sender_name = sender_name
        self.signature_name = signature_name
        self._clock = clock

    async def submit(
        self, data: Mapping[str, object], source_address: str | None = None,
    ) -> ContactRecord:
        """Validate → persist → notify (best-effort). Returns the stored record."""
        submission = validate_contact(
            data, ip_address=source_address, now=self._clock(),
        )
        contact = await self.contacts.add(submission)
        logger.info(f"Contact message stored from {submission.email}")
        await self._notify(submission)
        return contact

    async def list_all(self, page: int, limit: int, is_admin: bool) -> Page:
        if not is_admin:
            raise UnauthorizedError()
        window = make_page_window(page, limit, CONTACT_MAX_LIMIT)
        contacts = await self.contacts.list_recent(window.offset, window.limit)
        total = await self.contacts.count()
        return Page(items=contacts, pagination=build_pagination(window, total))

    async def _notify(self, submission: ContactSubmission) -> int:
        """Send owner notice + auto-reply. Returns how many were delivered."""
        mails = [build_auto_reply(submission, self.signature_name)]
        if self.owner_email:
            mails.insert(0, build_owner_notice(
                submission, self.owner_email, self.sender_name,
            ))
        delivered = await asyncio.gather(*(self._deliver(m) for m in mails))
        return sum(delivered)

    async def _deliver(self, mail: OutgoingMail) -> bool:
        try:
            await self.notifier.send(mail)
            return True
        except Exception:
            logger.warning(
                "Failed to send contact notification",
                exc_info=True, extra={"recipient": mail.to},
            )
            return False
