"""Domain Types — identity types and fixed limits shared across the codebase.

Invariants:
    - PostId and ContactId wrap UUIDs — never use bare UUID in domain logic
    - Limits live here, not scattered as literals in services and routes

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
"""

from dataclasses import dataclass
from datetime import datetime
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

PostId = NewType("PostId", UUID)
ContactId = NewType("ContactId", UUID)


# ─── Limits ──────────────────────────────────────────────────────

WORDS_PER_MINUTE = 200
EXCERPT_SOURCE_CHARS = 200
EXCERPT_ELLIPSIS = "..."

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
BLOG_MAX_LIMIT = 100
CONTACT_MAX_LIMIT = 50


# ─── Value Types ─────────────────────────────────────────────────

@dataclass(frozen=True)
class OutgoingMail:
    """A fully rendered notification, ready for a MailNotifier."""
    to: str
    subject: str
    html: str
    text: str
    sender_name: str
    reply_to: str | None = None


@dataclass(frozen=True)
class ContactSubmission:
    """A validated, normalized contact form submission."""
    name: str
    email: str
    subject: str
    message: str
    ip_address: str | None = None
    received_at: datetime | None = None
