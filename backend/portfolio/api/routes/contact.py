"""Contact Routes — public form submission and admin inbox listing.

Invariants:
    - POST returns 201 {message, success: true} once the message is stored,
      whatever happened to the notification emails
    - GET is admin-only; limit silently capped at 50
"""

from fastapi import APIRouter, Depends, Query, status

from portfolio.api.dependencies import (
    get_admin_flag, get_client_address, get_contact_service,
)
from portfolio.core.domain_types import DEFAULT_LIMIT, DEFAULT_PAGE
from portfolio.schemas.common import ErrorResponse
from portfolio.schemas.contact import (
    ContactCreate, ContactListResponse, ContactOut, ContactSubmittedResponse,
)
from portfolio.services.contact_service import ContactService

router = APIRouter(
    prefix="/api/contact", tags=["contact"],
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)

SUBMITTED_MESSAGE = "Message sent successfully! I'll get back to you soon."


@router.post(
    "", response_model=ContactSubmittedResponse,
    status_code=status.HTTP_201_CREATED,
)
async def submit_contact(
    body: ContactCreate,
    client_address: str | None = Depends(get_client_address),
    service: ContactService = Depends(get_contact_service),
):
    """Store a contact message and send best-effort notifications."""
    await service.submit(body.model_dump(), source_address=client_address)
    return ContactSubmittedResponse(message=SUBMITTED_MESSAGE, success=True)


@router.get(
    "", response_model=ContactListResponse,
    responses={401: {"model": ErrorResponse}},
)
async def list_contacts(
    page: int = Query(DEFAULT_PAGE),
    limit: int = Query(DEFAULT_LIMIT),
    is_admin: bool = Depends(get_admin_flag),
    service: ContactService = Depends(get_contact_service),
):
    """Contact messages, newest first (admin)."""
    result = await service.list_all(page, limit, is_admin)
    return ContactListResponse(
        contacts=[ContactOut.from_record(c) for c in result.items],
        pagination=result.pagination,
    )
