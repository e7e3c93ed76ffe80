"""Contact Repository — SQLAlchemy implementation of ContactRepository.

Invariants:
    - add() commits exactly one Contact row per call
    - list_recent() sorted by created_at DESC
"""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.core.domain_types import ContactSubmission
from portfolio.models.contact import Contact


class SqlContactRepository:
    """Contact persistence on an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def add(self, submission: ContactSubmission) -> Contact:
        contact = Contact(
            name=submission.name,
            email=submission.email,
            subject=submission.subject,
            message=submission.message,
            ip_address=submission.ip_address,
            is_read=False,
        )
        if submission.received_at is not None:
            contact.created_at = submission.received_at
        self.db.add(contact)
        await self.db.commit()
        return contact

    async def list_recent(self, offset: int, limit: int) -> list[Contact]:
        result = await self.db.execute(
            select(Contact)
            .order_by(Contact.created_at.desc())
            .offset(offset)
            .limit(limit),
        )
        return list(result.scalars().all())

    async def count(self) -> int:
        result = await self.db.execute(select(func.count(Contact.id)))
        return result.scalar_one()
