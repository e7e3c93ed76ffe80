"""Blog Routes — public listing/reading and admin publishing of posts.

Invariants:
    - Static paths (/tags/all, /tag/{tag}, /clear/all) registered before the
      /{slug} and /{post_id} catch-alls
    - Listing payloads never include post content
    - Admin endpoints pass the header-derived flag to the service; the service
      rejects with 401 before touching the database

Design Decisions:
    - Thin handlers: parse, delegate to BlogService, shape the response
    - No unauthenticated dump/seed endpoint
"""

from fastapi import APIRouter, Depends, Query, status

from portfolio.api.dependencies import get_admin_flag, get_blog_service
from portfolio.core.domain_types import DEFAULT_LIMIT, DEFAULT_PAGE
from portfolio.schemas.blog import (
    BlogListResponse, BlogPostCreate, BlogPostUpdate, PostDeletedResponse,
    PostDetail, PostsClearedResponse, PostSummary, TagPostsResponse,
)
from portfolio.schemas.common import ErrorResponse
from portfolio.services.blog_service import BlogService

router = APIRouter(
    prefix="/api/blog", tags=["blog"],
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)

_ADMIN_RESPONSES = {401: {"model": ErrorResponse}}


@router.get("", response_model=BlogListResponse)
async def list_posts(
    page: int = Query(DEFAULT_PAGE),
    limit: int = Query(DEFAULT_LIMIT),
    service: BlogService = Depends(get_blog_service),
):
    """Published posts, newest first, without content."""
    result = await service.list_published(page, limit)
    return BlogListResponse(
        posts=[PostSummary.from_record(p) for p in result.items],
        pagination=result.pagination,
    )


@router.get("/tags/all", response_model=list[str])
async def list_tags(service: BlogService = Depends(get_blog_service)):
    """Sorted distinct tags across published posts."""
    return await service.list_tags()


@router.get("/tag/{tag}", response_model=TagPostsResponse)
async def list_posts_by_tag(
    tag: str,
    page: int = Query(DEFAULT_PAGE),
    limit: int = Query(DEFAULT_LIMIT),
    service: BlogService = Depends(get_blog_service),
):
    """Published posts carrying one tag."""
    result = await service.list_published(page, limit, tag=tag)
    return TagPostsResponse(
        posts=[PostSummary.from_record(p) for p in result.items],
        tag=tag,
        pagination=result.pagination,
    )


@router.delete(
    "/clear/all", response_model=PostsClearedResponse, responses=_ADMIN_RESPONSES,
)
async def clear_posts(
    is_admin: bool = Depends(get_admin_flag),
    service: BlogService = Depends(get_blog_service),
):
    """Delete every post (admin). Irreversible."""
    deleted = await service.clear_all(is_admin)
    return PostsClearedResponse(
        message="All blog posts cleared successfully", deleted_count=deleted,
    )


@router.get(
    "/{slug}", response_model=PostDetail,
    responses={404: {"model": ErrorResponse}},
)
async def get_post(slug: str, service: BlogService = Depends(get_blog_service)):
    """One published post with full content."""
    return PostDetail.from_record(await service.get_by_slug(slug))


@router.post(
    "", response_model=PostDetail, status_code=status.HTTP_201_CREATED,
    responses={**_ADMIN_RESPONSES, 409: {"model": ErrorResponse}},
)
async def create_post(
    body: BlogPostCreate,
    is_admin: bool = Depends(get_admin_flag),
    service: BlogService = Depends(get_blog_service),
):
    """Create a post (admin). Slug and read time are derived."""
    post = await service.create(body.model_dump(exclude_unset=True), is_admin)
    return PostDetail.from_record(post)


@router.patch(
    "/{post_id}", response_model=PostDetail,
    responses={
        **_ADMIN_RESPONSES,
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def update_post(
    post_id: str,
    body: BlogPostUpdate,
    is_admin: bool = Depends(get_admin_flag),
    service: BlogService = Depends(get_blog_service),
):
    """Edit a post (admin). Derived fields follow their sources."""
    post = await service.update(
        post_id, body.model_dump(exclude_unset=True), is_admin,
    )
    return PostDetail.from_record(post)


@router.delete(
    "/{post_id}", response_model=PostDeletedResponse,
    responses={**_ADMIN_RESPONSES, 404: {"model": ErrorResponse}},
)
async def delete_post(
    post_id: str,
    is_admin: bool = Depends(get_admin_flag),
    service: BlogService = Depends(get_blog_service),
):
    """Delete one post by id (admin)."""
    title = await service.delete(post_id, is_admin)
    return PostDeletedResponse(
        message="Blog post deleted successfully", title=title,
    )
