from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from venue_platform.schemas.common import PHONE_PATTERN, PaginationMeta


class PartnerCreate(BaseModel):
    company_name: str = Field(..., min_length=2, max_length=200)
    contact_person: str = Field(..., min_length=2, max_length=100)
    email: EmailStr
    phone: str = Field(..., pattern=PHONE_PATTERN)
    partnership_type: str = Field(..., min_length=2, max_length=100)
    description: str = Field(..., min_length=10, max_length=1000)
    website: Optional[str] = Field(None, pattern=r"^https?://.+", max_length=500)
    image: Optional[str] = Field(None, max_length=500)
    location: Optional[str] = Field(None, max_length=500)

    model_config = {"str_strip_whitespace": True}

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.lower()


class PartnerUpdate(PartnerCreate):
    pass


class PartnerResponse(BaseModel):
    id: int
    company_name: str
    contact_person: str
    email: str
    phone: str
    partnership_type: str
    description: str
    website: Optional[str]
    image: Optional[str]
    location: Optional[str]
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class PartnerListResponse(BaseModel):
    partners: list[PartnerResponse]
    pagination: PaginationMeta


class PartnershipTypeCount(BaseModel):
    partnership_type: str
    count: int


class PartnerStats(BaseModel):
    total_partners: int
    active_partners: int
    inactive_partners: int
    recent_partners_30_days: int
    partnership_type_distribution: list[PartnershipTypeCount]
