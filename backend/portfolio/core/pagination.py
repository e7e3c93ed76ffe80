"""Pagination — page window arithmetic shared by blog and contact listings.

Invariants:
    - page and limit are >= 1; anything else raises ValidationFailedError
    - total is the number of PAGES, not items: ceil(total_items / limit)
    - has_next is True iff current < total; has_prev is True iff current > 1

Design Decisions:
    - Reject over clamp for non-positive values: a caller asking for page 0
      has a bug worth surfacing (ADR: consistent 400 for blog and contact)
    - Over-large limits ARE clamped (max_limit): matches the contact listing
      contract where the cap is silent
"""

import math
from dataclasses import dataclass

from portfolio.core.errors import FieldError, ValidationFailedError


@dataclass(frozen=True)
class PageWindow:
    """A validated page request translated to offset/limit."""
    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def make_page_window(page: int, limit: int, max_limit: int) -> PageWindow:
    """Validate page/limit and clamp limit to max_limit."""
    errors = []
    if page < 1:
        errors.append(FieldError("page", "Page must be a positive integer"))
    if limit < 1:
        errors.append(FieldError("limit", "Limit must be a positive integer"))
    if errors:
        raise ValidationFailedError(errors)
    return PageWindow(page=page, limit=min(limit, max_limit))


def build_pagination(window: PageWindow, total_items: int) -> dict:
    """Pagination metadata in the wire shape {current, total, hasNext, hasPrev}."""
    total_pages = math.ceil(total_items / window.limit)
    return {
        "current": window.page,
        "total": total_pages,
        "hasNext": window.page < total_pages,
        "hasPrev": window.page > 1,
    }


@dataclass(frozen=True)
class Page:
    """One window of an ordered result set plus its pagination metadata."""
    items: list
    pagination: dict
