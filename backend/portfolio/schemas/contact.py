"""Contact Schemas — request body and response shapes for /api/contact.

Invariants:
    - ContactCreate only checks JSON types; length and address rules live in
      core.validation (CONTACT_RULES) so messages match the form labels
    - ContactOut is admin-only output (includes ip_address)
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from portfolio.core.repository_protocols import ContactRecord
from portfolio.schemas.common import CamelModel, PaginationMeta


class ContactCreate(BaseModel):
    name: str | None = None
    email: str | None = None
    subject: str | None = None
    message: str | None = None


class ContactSubmittedResponse(BaseModel):
    message: str
    success: bool


class ContactOut(CamelModel):
    id: UUID
    name: str
    email: str
    subject: str
    message: str
    created_at: datetime = Field(alias="createdAt")
    is_read: bool = Field(alias="isRead")
    ip_address: str | None = Field(None, alias="ipAddress")

    @classmethod
    def from_record(cls, contact: ContactRecord) -> "ContactOut":
        return cls(
            id=contact.id,
            name=contact.name,
            email=contact.email,
            subject=contact.subject,
            message=contact.message,
            created_at=contact.created_at,
            is_read=contact.is_read,
            ip_address=contact.ip_address,
        )


class ContactListResponse(CamelModel):
    contacts: list[ContactOut]
    pagination: PaginationMeta
