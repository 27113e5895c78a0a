"""
Shared schema pieces: pagination metadata and field patterns.
"""

import math
from datetime import datetime, timezone

from pydantic import BaseModel

PHONE_PATTERN = r"^\+?[1-9]\d{0,15}$"


class PaginationMeta(BaseModel):
    current_page: int
    per_page: int
    total_items: int
    total_pages: int
    has_next: bool
    has_prev: bool

    @classmethod
    def build(cls, page: int, per_page: int, total: int) -> "PaginationMeta":
        total_pages = math.ceil(total / per_page) if per_page else 1
        return cls(
            current_page=page,
            per_page=per_page,
            total_items=total,
            total_pages=total_pages,
            has_next=page < total_pages,
            has_prev=page > 1,
        )


class MessageResponse(BaseModel):
    message: str


def ensure_utc(value: datetime) -> datetime:
    """Naive datetimes from clients are read as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
