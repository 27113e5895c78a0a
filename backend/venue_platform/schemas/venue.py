"""
Pydantic schemas for venue request/response validation.
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from venue_platform.models.venue import VENUE_TYPES
from venue_platform.schemas.common import PHONE_PATTERN, PaginationMeta

VenueType = Literal[VENUE_TYPES]


class VenueCreate(BaseModel):
    name: str = Field(..., min_length=2, max_length=200)
    description: str = Field(..., min_length=10, max_length=1000)
    venue_type: VenueType
    location: str = Field(..., min_length=5, max_length=500)
    capacity: int = Field(..., ge=1, le=100000)
    amenities: list[str] = Field(default_factory=list)
    contact_phone: str = Field(..., pattern=PHONE_PATTERN)
    contact_email: EmailStr
    image: str = Field("", max_length=500)

    model_config = {"str_strip_whitespace": True}

    @field_validator("amenities")
    @classmethod
    def check_amenities(cls, value: list[str]) -> list[str]:
        cleaned = [item.strip() for item in value if item.strip()]
        if any(len(item) > 100 for item in cleaned):
            raise ValueError("Amenity name cannot exceed 100 characters")
        return cleaned

    @field_validator("contact_email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.lower()


class VenueUpdate(VenueCreate):
    pass


class VenueResponse(BaseModel):
    id: int
    name: str
    description: str
    venue_type: str
    location: str
    capacity: int
    amenities: list[str]
    contact_phone: str
    contact_email: str
    rating: float
    image: str
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class VenueListResponse(BaseModel):
    venues: list[VenueResponse]
    pagination: PaginationMeta
    cached: bool = False


class VenueStats(BaseModel):
    total_venues: int
    active_venues: int
    inactive_venues: int
    sports_venues: int
    entertainment_venues: int
    both_venues: int
