"""Blog Schemas — request bodies and response shapes for /api/blog.

Invariants:
    - Request bodies only check JSON types; length/format rules live in
      core.validation so every rejection carries a per-field message
    - PostSummary never carries content (listing payloads)
    - Wire names are camelCase (isPublished, publishedAt, readTime, featuredImage)

Design Decisions:
    - from_record builders copy tags into a plain list: the ORM exposes them
      through an association proxy
"""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from portfolio.core.repository_protocols import PostRecord
from portfolio.schemas.common import CamelModel, PaginationMeta


class BlogPostCreate(CamelModel):
    """Post creation — title and content required (checked by the service)."""
    title: str | None = None
    content: str | None = None
    excerpt: str | None = None
    slug: str | None = None
    author: str | None = None
    tags: list[str] | None = None
    is_published: bool | None = Field(None, alias="isPublished")
    featured_image: str | None = Field(None, alias="featuredImage")


class BlogPostUpdate(BlogPostCreate):
    """Partial post edit — only supplied fields change."""


class PostSummary(CamelModel):
    id: UUID
    title: str
    excerpt: str
    slug: str
    author: str
    tags: list[str]
    published_at: datetime = Field(alias="publishedAt")
    updated_at: datetime = Field(alias="updatedAt")
    is_published: bool = Field(alias="isPublished")
    featured_image: str | None = Field(None, alias="featuredImage")
    read_time: int = Field(alias="readTime")

    @classmethod
    def from_record(cls, post: PostRecord) -> "PostSummary":
        return cls(**_record_fields(post))


class PostDetail(PostSummary):
    content: str
    created_at: datetime = Field(alias="createdAt")

    @classmethod
    def from_record(cls, post: PostRecord) -> "PostDetail":
        return cls(
            **_record_fields(post),
            content=post.content,
            created_at=post.created_at,
        )


class BlogListResponse(CamelModel):
    posts: list[PostSummary]
    pagination: PaginationMeta


class TagPostsResponse(BlogListResponse):
    tag: str


class PostDeletedResponse(CamelModel):
    message: str
    title: str


class PostsClearedResponse(CamelModel):
    message: str
    deleted_count: int = Field(alias="deletedCount")


def _record_fields(post: PostRecord) -> dict:
    return {
        "id": post.id,
        "title": post.title,
        "excerpt": post.excerpt,
        "slug": post.slug,
        "author": post.author,
        "tags": list(post.tags),
        "published_at": post.published_at,
        "updated_at": post.updated_at,
        "is_published": post.is_published,
        "featured_image": post.featured_image,
        "read_time": post.read_time,
    }
