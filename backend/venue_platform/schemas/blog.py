from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from venue_platform.schemas.common import PaginationMeta


def _clean_tags(value: list[str]) -> list[str]:
    cleaned = [tag.strip() for tag in value if tag.strip()]
    if any(len(tag) > 50 for tag in cleaned):
        raise ValueError("Tag cannot exceed 50 characters")
    return cleaned


class BlogCreate(BaseModel):
    title: str = Field(..., min_length=5, max_length=300)
    content: str = Field(..., min_length=50, max_length=10000)
    image: Optional[str] = Field(None, max_length=500)
    category: Optional[str] = Field(None, max_length=50)
    tags: list[str] = Field(default_factory=list)
    is_published: bool = True

    model_config = {"str_strip_whitespace": True}

    @field_validator("tags")
    @classmethod
    def check_tags(cls, value: list[str]) -> list[str]:
        return _clean_tags(value)


class BlogUpdate(BaseModel):
    title: str = Field(..., min_length=5, max_length=300)
    content: str = Field(..., min_length=50, max_length=10000)
    tags: list[str] = Field(default_factory=list)
    is_published: Optional[bool] = None

    model_config = {"str_strip_whitespace": True}

    @field_validator("tags")
    @classmethod
    def check_tags(cls, value: list[str]) -> list[str]:
        return _clean_tags(value)


class BlogResponse(BaseModel):
    id: int
    title: str
    content: str
    image: str
    author_id: int
    author_name: Optional[str]
    category: Optional[str]
    tags: list[str]
    is_published: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class BlogListResponse(BaseModel):
    blogs: list[BlogResponse]
    pagination: PaginationMeta


class AuthorCount(BaseModel):
    author_id: int
    author_name: Optional[str]
    count: int


class TagCount(BaseModel):
    tag: str
    count: int


class BlogStats(BaseModel):
    total_blogs: int
    published_blogs: int
    unpublished_blogs: int
    recent_blogs_30_days: int
    top_authors: list[AuthorCount]
    popular_tags: list[TagCount]
