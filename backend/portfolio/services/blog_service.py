"""Blog Service — listing, retrieval, creation, editing and deletion of posts.

Invariants:
    - Admin operations check the admin flag FIRST, before any repository call
    - Input validated (ordered field rules) before any persistence attempt
    - slug == derive_slug(title) for every stored post; recomputed when title changes
    - read_time == derive_read_time(content); recomputed when content changes
    - updated_at refreshed on every save; published_at set on creation and on an
      unpublished → published transition
    - Duplicate slug → SlugConflictError, whether caught by the pre-check or by the
      store's unique index (concurrent creates)

Design Decisions:
    - Stateless per request: the repository is injected, nothing cached between calls
    - A client-supplied slug is shape-checked then overridden by the derived one:
      the stored slug must always be reproducible from the title
    - Invalid id strings treated as unknown ids (404), not as server errors
    - clear_all gated by the same admin key as single deletion (documented risk,
      not tightened)
"""

import logging
from collections.abc import Callable, Mapping
from datetime import datetime, timezone
from uuid import UUID

from portfolio.core.derive_fields import (
    derive_excerpt, derive_read_time, derive_slug, normalize_tags,
)
from portfolio.core.domain_types import BLOG_MAX_LIMIT, PostId
from portfolio.core.errors import (
    FieldError, ResourceNotFoundError, SlugConflictError, UnauthorizedError,
    ValidationFailedError,
)
from portfolio.core.pagination import Page, build_pagination, make_page_window
from portfolio.core.repository_protocols import BlogPostRepository, PostRecord
from portfolio.core.validation import validate_post

logger = logging.getLogger(__name__)

_EMPTY_SLUG = FieldError(
    "title", "Title must contain at least one letter or digit",
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _require_admin(is_admin: bool) -> None:
    if not is_admin:
        raise UnauthorizedError()


def _parse_post_id(raw: str | UUID) -> PostId | None:
    if isinstance(raw, UUID):
        return PostId(raw)
    try:
        return PostId(UUID(str(raw)))
    except ValueError:
        return None


def _slug_for(title: str) -> str:
    slug = derive_slug(title)
    if not slug:
        raise ValidationFailedError([_EMPTY_SLUG])
    return slug


def _given(data: Mapping[str, object], key: str) -> bool:
    return data.get(key) is not None


class BlogService:
    """Blog post orchestration over a BlogPostRepository."""

    def __init__(
        self,
        posts: BlogPostRepository,
        default_author: str,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.posts = posts
        self.default_author = default_author
        self._clock = clock

    # ─── Public reads ────────────────────────────────────────────

    async def list_published(
        self, page: int, limit: int, tag: str | None = None,
    ) -> Page:
        """Published posts, newest first, optionally restricted to one tag."""
        window = make_page_window(page, limit, BLOG_MAX_LIMIT)
        if tag is not None:
            tag = tag.strip().lower()
            if not tag:
                raise ValidationFailedError(
                    [FieldError("tag", "Tag cannot be empty")],
                )
        posts = await self.posts.list_published(tag, window.offset, window.limit)
        total = await self.posts.count_published(tag)
        return Page(items=posts, pagination=build_pagination(window, total))

    async def get_by_slug(self, slug: str) -> PostRecord:
        post = await self.posts.get_published_by_slug(slug)
        if post is None:
            raise ResourceNotFoundError("Blog post", slug)
        return post

    async def list_tags(self) -> list[str]:
        return sorted(await self.posts.distinct_published_tags())

    # ─── Admin writes ────────────────────────────────────────────

    async def create(self, data: Mapping[str, object], is_admin: bool) -> PostRecord:
        """Validate, derive slug/excerpt/read time, reject duplicates, persist."""
        _require_admin(is_admin)
        validate_post(data)

        title = str(data["title"]).strip()
        content = str(data["content"]).strip()
        slug = _slug_for(title)
        requested = str(data.get("slug") or "").strip()
        if requested and requested != slug:
            logger.info(
                f"Requested slug '{requested}' replaced by derived slug",
                extra={"slug": slug},
            )
        if await self.posts.slug_exists(slug):
            raise SlugConflictError(slug)

        excerpt = str(data.get("excerpt") or "").strip()
        author = str(data.get("author") or "").strip() or self.default_author
        is_published = data.get("is_published")
        now = self._clock()
        post = self.posts.new(
            title=title,
            content=content,
            excerpt=excerpt or derive_excerpt(content),
            excerpt_is_custom=bool(excerpt),
            slug=slug,
            author=author,
            tags=normalize_tags(list(data.get("tags") or [])),
            is_published=True if is_published is None else bool(is_published),
            featured_image=data.get("featured_image"),
            read_time=derive_read_time(content),
            published_at=now,
            created_at=now,
            updated_at=now,
        )
        post = await self.posts.add(post)
        logger.info(
            f"Created blog post '{title}'",
            extra={"post_id": str(post.id), "slug": slug},
        )
        return post

    async def update(
        self, post_id: str | UUID, changes: Mapping[str, object], is_admin: bool,
    ) -> PostRecord:
        """Apply a partial edit, re-deriving fields whose sources changed."""
        _require_admin(is_admin)
        validate_post(changes, partial=True)
        post = await self._get_or_404(post_id)
        now = self._clock()

        if _given(changes, "title"):
            title = str(changes["title"]).strip()
            slug = _slug_for(title)
            if slug != post.slug and await self.posts.slug_exists(
                slug, exclude_id=post.id,
            ):
                raise SlugConflictError(slug)
            post.title = title
            post.slug = slug

        if _given(changes, "excerpt"):
            excerpt = str(changes["excerpt"]).strip()
            post.excerpt_is_custom = bool(excerpt)
            if excerpt:
                post.excerpt = excerpt

        if _given(changes, "content"):
            content = str(changes["content"]).strip()
            if content != post.content:
                post.content = content
                post.read_time = derive_read_time(content)
        if not post.excerpt_is_custom:
            post.excerpt = derive_excerpt(post.content)

        if _given(changes, "author"):
            post.author = str(changes["author"]).strip()
        if _given(changes, "tags"):
            post.tags = normalize_tags(list(changes["tags"]))
        if "featured_image" in changes:
            post.featured_image = changes["featured_image"]
        if _given(changes, "is_published"):
            publish = bool(changes["is_published"])
            if publish and not post.is_published:
                post.published_at = now
            post.is_published = publish

        post.updated_at = now
        post = await self.posts.save(post)
        logger.info(
            f"Updated blog post '{post.title}'",
            extra={"post_id": str(post.id), "slug": post.slug},
        )
        return post

    async def delete(self, post_id: str | UUID, is_admin: bool) -> str:
        """Delete one post; returns its title for confirmation."""
        _require_admin(is_admin)
        post = await self._get_or_404(post_id)
        title = post.title
        await self.posts.delete(post)
        logger.info(
            f"Deleted blog post '{title}'", extra={"post_id": str(post_id)},
        )
        return title

    async def clear_all(self, is_admin: bool) -> int:
        """Delete every post. Irreversible."""
        _require_admin(is_admin)
        deleted = await self.posts.delete_all()
        logger.warning(
            "Cleared all blog posts", extra={"deleted_count": deleted},
        )
        return deleted

    async def _get_or_404(self, post_id: str | UUID) -> PostRecord:
        parsed = _parse_post_id(post_id)
        post = await self.posts.get_by_id(parsed) if parsed else None
        if post is None:
            raise ResourceNotFoundError("Blog post", str(post_id))
        return post
