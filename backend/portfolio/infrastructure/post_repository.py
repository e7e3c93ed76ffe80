"""Blog Post Repository — SQLAlchemy implementation of BlogPostRepository.

Invariants:
    - Listing queries load full rows; the schema layer drops content
    - Published listings sorted by published_at DESC, ties broken by created_at DESC
    - IntegrityError on add/save means the slug unique index fired → SlugConflictError
    - Every mutating method commits; a failed commit is rolled back before raising
    - add/save leave tag_rows loaded, so reading tags never lazy-loads outside the
      event loop

Design Decisions:
    - Tag filter via EXISTS on blog_post_tags (relationship.any): no JOIN row
      multiplication, so offset/limit stay exact
"""

import logging

from sqlalchemy import delete, distinct, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.core.domain_types import PostId
from portfolio.core.errors import SlugConflictError
from portfolio.models.blog_post import BlogPost, PostTag

logger = logging.getLogger(__name__)


class SqlBlogPostRepository:
    """Blog post persistence on an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    def new(self, **fields: object) -> BlogPost:
        tags = fields.pop("tags", None) or []
        return BlogPost(**fields, tag_rows=[PostTag(tag=t) for t in tags])

    async def add(self, post: BlogPost) -> BlogPost:
        self.db.add(post)
        await self._commit(post.slug)
        await self.db.refresh(post, ["tag_rows"])
        return post

    async def save(self, post: BlogPost) -> BlogPost:
        await self._commit(post.slug)
        await self.db.refresh(post, ["tag_rows"])
        return post

    async def get_by_id(self, post_id: PostId) -> BlogPost | None:
        result = await self.db.execute(
            select(BlogPost).where(BlogPost.id == post_id),
        )
        return result.scalar_one_or_none()

    async def get_published_by_slug(self, slug: str) -> BlogPost | None:
        result = await self.db.execute(
            select(BlogPost)
            .where(BlogPost.slug == slug)
            .where(BlogPost.is_published.is_(True)),
        )
        return result.scalar_one_or_none()

    async def slug_exists(
        self, slug: str, exclude_id: PostId | None = None,
    ) -> bool:
        query = select(BlogPost.id).where(BlogPost.slug == slug)
        if exclude_id is not None:
            query = query.where(BlogPost.id != exclude_id)
        result = await self.db.execute(query.limit(1))
        return result.scalar_one_or_none() is not None

    async def list_published(
        self, tag: str | None, offset: int, limit: int,
    ) -> list[BlogPost]:
        query = (
            self._published(tag)
            .order_by(BlogPost.published_at.desc(), BlogPost.created_at.desc())
            .offset(offset)
            .limit(limit)
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def count_published(self, tag: str | None) -> int:
        query = select(func.count()).select_from(
            self._published(tag).subquery(),
        )
        result = await self.db.execute(query)
        return result.scalar_one()

    async def distinct_published_tags(self) -> list[str]:
        result = await self.db.execute(
            select(distinct(PostTag.tag))
            .join(BlogPost, PostTag.post_id == BlogPost.id)
            .where(BlogPost.is_published.is_(True))
            .order_by(PostTag.tag),
        )
        return list(result.scalars().all())

    async def delete(self, post: BlogPost) -> None:
        await self.db.delete(post)
        await self.db.commit()

    async def delete_all(self) -> int:
        await self.db.execute(delete(PostTag))
        result = await self.db.execute(delete(BlogPost))
        await self.db.commit()
        return result.rowcount or 0

    def _published(self, tag: str | None):
        query = select(BlogPost).where(BlogPost.is_published.is_(True))
        if tag is not None:
            query = query.where(BlogPost.tag_rows.any(PostTag.tag == tag))
        return query

    async def _commit(self, slug: str) -> None:
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            logger.warning("Slug rejected by unique index", extra={"slug": slug})
            raise SlugConflictError(slug)
