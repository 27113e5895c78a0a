from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

from venue_platform.models.review import ENTITY_TYPES
from venue_platform.schemas.common import PaginationMeta

EntityType = Literal[ENTITY_TYPES]


class ReviewCreate(BaseModel):
    entity_type: EntityType
    entity_id: int
    rating: int = Field(..., ge=1, le=5)
    comment: str = Field(..., min_length=5, max_length=1000)

    model_config = {"str_strip_whitespace": True}


class ReviewUpdate(BaseModel):
    rating: int = Field(..., ge=1, le=5)
    comment: str = Field(..., min_length=5, max_length=1000)

    model_config = {"str_strip_whitespace": True}


class ReviewResponse(BaseModel):
    id: int
    user_id: int
    user_name: str
    entity_type: str
    entity_id: int
    rating: int
    comment: str
    created_at: datetime

    model_config = {"from_attributes": True}


class RatingBucket(BaseModel):
    rating: int
    count: int


class RatingStats(BaseModel):
    average_rating: float
    total_reviews: int
    rating_distribution: list[RatingBucket]


class EntityReviewsResponse(BaseModel):
    reviews: list[ReviewResponse]
    stats: Optional[RatingStats]
    pagination: PaginationMeta


class ReviewListResponse(BaseModel):
    reviews: list[ReviewResponse]
    pagination: PaginationMeta
