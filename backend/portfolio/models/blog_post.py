"""BlogPost ORM — persists published articles and their tag lists.

Invariants:
    - id is UUID primary key (client-side default)
    - slug is UNIQUE at the storage layer (uq index), not only checked in-process
    - tags live in blog_post_tags rows, exposed as a plain list[str] via
      association proxy, ordered by insertion
    - updated_at refreshed on every UPDATE (onupdate) and by services on save

Design Decisions:
    - Child table for tags over a JSON column: tag filtering and distinct-tag
      listing stay portable SQL on PostgreSQL and SQLite
    - excerpt_is_custom remembers whether the excerpt was supplied, so edits to
      content only regenerate excerpts that were derived
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    Boolean, DateTime, ForeignKey, Index, Integer, String, Text,
)
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.ext.associationproxy import AssociationProxy, association_proxy
from sqlalchemy.orm import Mapped, mapped_column, relationship

from portfolio.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BlogPost(Base):
    """Blog post aggregate — owns its tag rows."""
    __tablename__ = "blog_posts"
    __table_args__ = (
        Index("ix_blog_posts_published", "is_published", "published_at"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    excerpt: Mapped[str] = mapped_column(String(500), nullable=False)
    excerpt_is_custom: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    slug: Mapped[str] = mapped_column(
        String(200), nullable=False, unique=True, index=True,
    )
    author: Mapped[str] = mapped_column(String(100), nullable=False)
    is_published: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True,
    )
    featured_image: Mapped[str | None] = mapped_column(
        String(2048), nullable=True,
    )
    read_time: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    published_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
        onupdate=_utcnow,
    )

    tag_rows: Mapped[list["PostTag"]] = relationship(
        "PostTag", back_populates="post",
        cascade="all, delete-orphan", lazy="selectin",
        order_by="PostTag.id",
    )
    tags: AssociationProxy[list[str]] = association_proxy(
        "tag_rows", "tag", creator=lambda tag: PostTag(tag=tag),
    )


class PostTag(Base):
    """One normalized tag attached to a post."""
    __tablename__ = "blog_post_tags"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    post_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("blog_posts.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    tag: Mapped[str] = mapped_column(String(100), nullable=False, index=True)

    post: Mapped["BlogPost"] = relationship("BlogPost", back_populates="tag_rows")
