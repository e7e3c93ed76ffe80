"""Boundary Protocols — contracts between services and the storage / mail shell.

Invariants:
    - Services depend on these Protocols, never on SQLAlchemy or aiosmtplib directly
    - Every repository method touches exactly one aggregate (post or contact)
    - Slug uniqueness is enforced by the store: add()/save() raise
      SlugConflictError when the unique index rejects a write

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
    - Repositories return ORM-shaped records (PostRecord / ContactRecord);
      serialization to the wire shape is the schema layer's job
"""

from datetime import datetime
from typing import Protocol

from portfolio.core.domain_types import (
    ContactId, ContactSubmission, OutgoingMail, PostId,
)


class PostRecord(Protocol):
    """Structural contract for stored blog posts."""
    id: PostId
    title: str
    content: str
    excerpt: str
    excerpt_is_custom: bool
    slug: str
    author: str
    tags: list[str]
    published_at: datetime
    updated_at: datetime
    created_at: datetime
    is_published: bool
    featured_image: str | None
    read_time: int


class ContactRecord(Protocol):
    """Structural contract for stored contact messages."""
    id: ContactId
    name: str
    email: str
    subject: str
    message: str
    created_at: datetime
    is_read: bool
    ip_address: str | None


class BlogPostRepository(Protocol):
    """Contract for blog post persistence — implemented by infrastructure."""
    def new(self, **fields: object) -> PostRecord: ...
    async def add(self, post: PostRecord) -> PostRecord: ...
    async def save(self, post: PostRecord) -> PostRecord: ...
    async def get_by_id(self, post_id: PostId) -> PostRecord | None: ...
    async def get_published_by_slug(self, slug: str) -> PostRecord | None: ...
    async def slug_exists(
        self, slug: str, exclude_id: PostId | None = None,
    ) -> bool: ...
    async def list_published(
        self, tag: str | None, offset: int, limit: int,
    ) -> list[PostRecord]: ...
    async def count_published(self, tag: str | None) -> int: ...
    async def distinct_published_tags(self) -> list[str]: ...
    async def delete(self, post: PostRecord) -> None: ...
    async def delete_all(self) -> int: ...


class ContactRepository(Protocol):
    """Contract for contact message persistence — implemented by infrastructure."""
    async def add(self, submission: ContactSubmission) -> ContactRecord: ...
    async def list_recent(self, offset: int, limit: int) -> list[ContactRecord]: ...
    async def count(self) -> int: ...


class MailNotifier(Protocol):
    """Outbound mail capability. Raises NotificationError on delivery failure."""
    async def send(self, mail: OutgoingMail) -> None: ...
