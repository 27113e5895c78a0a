"""
Pydantic schemas for appointment request/response validation.

Malformed dates are rejected here, before any domain logic runs. The
"strictly in the future" rule needs the current clock and lives in the
appointment service.
"""

from datetime import date as calendar_date, datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from venue_platform.models.appointment import APPOINTMENT_STATUSES
from venue_platform.schemas.common import PaginationMeta, ensure_utc

AppointmentStatus = Literal[APPOINTMENT_STATUSES]


class AppointmentCreate(BaseModel):
    venue_id: int
    appointment_date: datetime
    duration_hours: int = Field(default=1, ge=1, le=24)
    purpose: str = Field(..., min_length=5, max_length=500)
    notes: str = Field(default="", max_length=1000)

    model_config = {"str_strip_whitespace": True}

    @field_validator("appointment_date")
    @classmethod
    def to_utc(cls, value: datetime) -> datetime:
        return ensure_utc(value)


class AppointmentUpdate(BaseModel):
    appointment_date: Optional[datetime] = None
    duration_hours: Optional[int] = Field(None, ge=1, le=24)
    purpose: Optional[str] = Field(None, min_length=5, max_length=500)
    notes: Optional[str] = Field(None, max_length=1000)

    model_config = {"str_strip_whitespace": True}

    @field_validator("appointment_date")
    @classmethod
    def to_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(value) if value is not None else None


class AppointmentStatusUpdate(BaseModel):
    status: AppointmentStatus


class AppointmentResponse(BaseModel):
    id: int
    user_id: int
    user_name: str
    venue_id: int
    venue_name: str
    appointment_date: datetime
    duration_hours: int
    purpose: str
    notes: str
    status: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class AppointmentListResponse(BaseModel):
    appointments: list[AppointmentResponse]
    pagination: PaginationMeta


class BookedSlot(BaseModel):
    start: datetime
    end: datetime
    duration: int


class AvailabilityResponse(BaseModel):
    venue_id: int
    date: calendar_date
    booked_slots: list[BookedSlot]
    total_bookings: int


class VenueBookingCount(BaseModel):
    venue_id: int
    venue_name: str
    count: int


class AppointmentStats(BaseModel):
    total_appointments: int
    pending_appointments: int
    confirmed_appointments: int
    cancelled_appointments: int
    completed_appointments: int
    upcoming_appointments: int
    appointments_by_venue: list[VenueBookingCount]
