from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from venue_platform.schemas.common import PHONE_PATTERN, PaginationMeta


class ContactCreate(BaseModel):
    name: str = Field(..., min_length=2, max_length=100)
    email: EmailStr
    phone: str = Field(..., pattern=PHONE_PATTERN)
    subject: str = Field(..., min_length=5, max_length=200)
    message: str = Field(..., min_length=10, max_length=2000)

    model_config = {"str_strip_whitespace": True}

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.lower()


class ContactResponse(BaseModel):
    id: int
    name: str
    email: str
    phone: str
    subject: str
    message: str
    is_resolved: bool
    created_at: datetime
    resolved_at: Optional[datetime]

    model_config = {"from_attributes": True}


class ContactListResponse(BaseModel):
    contacts: list[ContactResponse]
    pagination: PaginationMeta


class MonthlyCount(BaseModel):
    year: int
    month: int
    count: int


class ContactStats(BaseModel):
    total_contacts: int
    resolved_contacts: int
    pending_contacts: int
    recent_contacts_30_days: int
    monthly_trends: list[MonthlyCount]
