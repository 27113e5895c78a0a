"""
Blog endpoints. Reads are public, writes need an account, edits need
ownership or the admin role.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from venue_platform.api.deps import get_current_user, get_optional_user, require_admin
from venue_platform.db.session import get_db
from venue_platform.models.user import User
from venue_platform.schemas.blog import BlogCreate, BlogListResponse, BlogResponse, BlogStats, BlogUpdate
from venue_platform.schemas.common import MessageResponse, PaginationMeta
from venue_platform.services import blog_service

router = APIRouter(prefix="/blogs", tags=["Blogs"])


def _page(blogs, page: int, limit: int, total: int) -> BlogListResponse:
    return BlogListResponse(
        blogs=[BlogResponse.model_validate(b) for b in blogs],
        pagination=PaginationMeta.build(page, limit, total),
    )


@router.get("/", response_model=BlogListResponse)
async def list_blogs(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    search: Optional[str] = None,
    author_id: Optional[int] = None,
    tags: Optional[str] = Query(None, description="Comma-separated tag list"),
    db: AsyncSession = Depends(get_db),
):
    tag_list = [t.strip() for t in tags.split(",") if t.strip()] if tags else None
    blogs, total = await blog_service.list_blogs(db, page, limit, search, author_id, tag_list)
    return _page(blogs, page, limit, total)


@router.get("/my/posts", response_model=BlogListResponse)
async def my_posts(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    include_unpublished: bool = False,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    blogs, total = await blog_service.list_my_blogs(db, user, page, limit, include_unpublished)
    return _page(blogs, page, limit, total)


@router.get("/stats/overview", response_model=BlogStats)
async def blog_stats(
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return await blog_service.blog_stats(db)


@router.get("/{blog_id}", response_model=BlogResponse)
async def get_blog(
    blog_id: int,
    viewer: Optional[User] = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db),
):
    return await blog_service.get_blog(db, blog_id, viewer)


@router.post("/", response_model=BlogResponse, status_code=status.HTTP_201_CREATED)
async def create_blog(
    data: BlogCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await blog_service.create_blog(db, user, data)


@router.put("/{blog_id}", response_model=BlogResponse)
async def update_blog(
    blog_id: int,
    data: BlogUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await blog_service.update_blog(db, user, blog_id, data)


@router.delete("/{blog_id}", response_model=MessageResponse)
async def delete_blog(
    blog_id: int,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await blog_service.unpublish_blog(db, user, blog_id)
    return MessageResponse(message="Blog deleted successfully")
