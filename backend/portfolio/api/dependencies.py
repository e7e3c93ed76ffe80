"""API Dependencies — wires settings, sessions and services into route handlers.

Invariants:
    - One service instance per request, built on the request's AsyncSession
    - The admin flag is computed from the X-Admin-Key header with a constant-time
      comparison; an unset ADMIN_KEY makes every request non-admin
    - Routes pass the flag to services; services decide (before any data access)

Design Decisions:
    - Flag-not-guard: the header check never raises here, so every admin
      operation enforces it independently in the service layer
    - Mail notifier is its own dependency so tests can override it
"""

import hmac

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.config import Settings, get_settings
from portfolio.core.repository_protocols import MailNotifier
from portfolio.infrastructure.contact_repository import SqlContactRepository
from portfolio.infrastructure.database import get_db
from portfolio.infrastructure.mail_notifier import build_mail_notifier
from portfolio.infrastructure.post_repository import SqlBlogPostRepository
from portfolio.services.blog_service import BlogService
from portfolio.services.contact_service import ContactService


def is_admin_key(supplied: str | None, configured: str | None) -> bool:
    if not supplied or not configured:
        return False
    return hmac.compare_digest(supplied.encode(), configured.encode())


async def get_admin_flag(
    x_admin_key: str | None = Header(None),
    settings: Settings = Depends(get_settings),
) -> bool:
    return is_admin_key(x_admin_key, settings.admin_key)


def get_client_address(request: Request) -> str | None:
    return request.client.host if request.client else None


def get_mail_notifier(
    settings: Settings = Depends(get_settings),
) -> MailNotifier:
    return build_mail_notifier(settings)


async def get_blog_service(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> BlogService:
    return BlogService(SqlBlogPostRepository(db), settings.default_author)


async def get_contact_service(
    db: AsyncSession = Depends(get_db),
    notifier: MailNotifier = Depends(get_mail_notifier),
    settings: Settings = Depends(get_settings),
) -> ContactService:
    return ContactService(
        SqlContactRepository(db),
        notifier,
        owner_email=settings.owner_email,
        sender_name=settings.mail_sender_name,
        signature_name=settings.default_author,
    )
