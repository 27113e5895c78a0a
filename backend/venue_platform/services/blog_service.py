"""
Blog service. Posts belong to their author; only the author or an admin
may edit or unpublish them. Deleting a post unpublishes it.
"""

from collections import Counter
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import HTTPException, status
from sqlalchemy import String, cast, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from venue_platform.api.deps import ensure_owner_or_admin
from venue_platform.core.logging import get_logger
from venue_platform.db.base import dumps_json, escape_like
from venue_platform.models.blog import DEFAULT_BLOG_IMAGE, Blog
from venue_platform.models.user import User
from venue_platform.schemas.blog import BlogCreate, BlogUpdate

logger = get_logger(__name__)


async def _paginate(db: AsyncSession, query, page: int, limit: int) -> tuple[list[Blog], int]:
    total = (await db.execute(select(func.count()).select_from(query.subquery()))).scalar()
    result = await db.execute(
        query.order_by(Blog.created_at.desc(), Blog.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
    )
    return list(result.scalars().all()), total


async def list_blogs(
    db: AsyncSession,
    page: int = 1,
    limit: int = 10,
    search: Optional[str] = None,
    author_id: Optional[int] = None,
    tags: Optional[list[str]] = None,
) -> tuple[list[Blog], int]:
    """Published posts only. `tags` matches posts carrying any of the given tags."""
    query = select(Blog).where(Blog.is_published.is_(True))

    if search:
        pattern = f"%{search}%"
        query = query.where(or_(Blog.title.ilike(pattern), Blog.content.ilike(pattern)))
    if author_id is not None:
        query = query.where(Blog.author_id == author_id)
    if tags:
        # tags is a JSON array column; match the encoded element in its text form
        tags_text = cast(Blog.tags, String)
        patterns = [f"%{escape_like(dumps_json(tag))}%" for tag in tags]
        query = query.where(or_(*(tags_text.ilike(p, escape="/") for p in patterns)))

    return await _paginate(db, query, page, limit)


async def list_my_blogs(
    db: AsyncSession,
    user: User,
    page: int = 1,
    limit: int = 10,
    include_unpublished: bool = False,
) -> tuple[list[Blog], int]:
    query = select(Blog).where(Blog.author_id == user.id)
    if not include_unpublished:
        query = query.where(Blog.is_published.is_(True))
    return await _paginate(db, query, page, limit)


async def get_blog(db: AsyncSession, blog_id: int, viewer: Optional[User] = None) -> Blog:
    """Unpublished posts are visible to their author and admins only."""
    blog = await db.get(Blog, blog_id)
    if blog is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Blog not found")
    if not blog.is_published and not (
        viewer is not None and (viewer.is_admin or viewer.id == blog.author_id)
    ):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Blog not found")
    return blog


async def create_blog(db: AsyncSession, author: User, data: BlogCreate) -> Blog:
    blog = Blog(
        title=data.title,
        content=data.content,
        image=data.image or DEFAULT_BLOG_IMAGE,
        category=data.category,
        tags=data.tags,
        is_published=data.is_published,
        author_id=author.id,
        author_name=author.full_name,
    )
    db.add(blog)
    await db.flush()
    await db.refresh(blog)

    logger.info("blog_created", blog_id=blog.id, author_id=author.id)
    return blog


async def update_blog(db: AsyncSession, user: User, blog_id: int, data: BlogUpdate) -> Blog:
    blog = await db.get(Blog, blog_id)
    if blog is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Blog not found")
    ensure_owner_or_admin(user, blog.author_id, "update this blog")

    blog.title = data.title
    blog.content = data.content
    blog.tags = data.tags
    if data.is_published is not None:
        blog.is_published = data.is_published

    await db.flush()
    await db.refresh(blog)
    logger.info("blog_updated", blog_id=blog.id, user_id=user.id)
    return blog


async def unpublish_blog(db: AsyncSession, user: User, blog_id: int) -> None:
    blog = await db.get(Blog, blog_id)
    if blog is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Blog not found")
    ensure_owner_or_admin(user, blog.author_id, "delete this blog")

    blog.is_published = False
    await db.flush()
    logger.info("blog_unpublished", blog_id=blog.id, user_id=user.id)


async def blog_stats(db: AsyncSession) -> dict:
    since = datetime.now(timezone.utc) - timedelta(days=30)

    total = (await db.execute(select(func.count()).select_from(Blog))).scalar()
    published = (
        await db.execute(select(func.count()).select_from(Blog).where(Blog.is_published.is_(True)))
    ).scalar()
    recent = (
        await db.execute(select(func.count()).select_from(Blog).where(Blog.created_at >= since))
    ).scalar()

    count_col = func.count(Blog.id).label("count")
    author_rows = await db.execute(
        select(Blog.author_id, func.max(Blog.author_name), count_col)
        .where(Blog.is_published.is_(True))
        .group_by(Blog.author_id)
        .order_by(count_col.desc())
        .limit(5)
    )

    tag_counter: Counter = Counter()
    tag_rows = await db.execute(select(Blog.tags).where(Blog.is_published.is_(True)))
    for (tags,) in tag_rows.all():
        tag_counter.update(tags or [])

    return {
        "total_blogs": total,
        "published_blogs": published,
        "unpublished_blogs": total - published,
        "recent_blogs_30_days": recent,
        "top_authors": [
            {"author_id": author_id, "author_name": author_name, "count": count}
            for author_id, author_name, count in author_rows.all()
        ],
        "popular_tags": [{"tag": tag, "count": count} for tag, count in tag_counter.most_common(10)],
    }
