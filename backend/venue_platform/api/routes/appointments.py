"""
Appointment endpoints: booking with conflict detection, lifecycle changes,
availability and admin statistics.
"""

from datetime import date, datetime, timedelta
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from venue_platform.api.deps import get_current_user, require_admin
from venue_platform.db.session import get_db
from venue_platform.models.user import User
from venue_platform.schemas.appointment import (
    AppointmentCreate,
    AppointmentListResponse,
    AppointmentResponse,
    AppointmentStats,
    AppointmentStatus,
    AppointmentStatusUpdate,
    AppointmentUpdate,
    AvailabilityResponse,
    BookedSlot,
)
from venue_platform.schemas.common import MessageResponse, PaginationMeta, ensure_utc
from venue_platform.services import appointment_service

router = APIRouter(prefix="/appointments", tags=["Appointments"])


@router.post("/", response_model=AppointmentResponse, status_code=status.HTTP_201_CREATED)
async def create_appointment(
    data: AppointmentCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Book a venue.

    Rejected with 400 when the start is not in the future or when another
    pending/confirmed appointment at the venue starts within
    duration_hours of the requested start.
    """
    return await appointment_service.book_appointment(db, user, data)


@router.get("/", response_model=AppointmentListResponse)
async def list_appointments(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    user_id: Optional[int] = None,
    venue_id: Optional[int] = None,
    status_filter: Optional[AppointmentStatus] = Query(None, alias="status"),
    date_from: Optional[datetime] = None,
    date_to: Optional[datetime] = None,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    appointments, total = await appointment_service.list_appointments(
        db,
        user,
        page=page,
        limit=limit,
        user_id=user_id,
        venue_id=venue_id,
        status_filter=status_filter,
        date_from=ensure_utc(date_from) if date_from else None,
        date_to=ensure_utc(date_to) if date_to else None,
    )
    return AppointmentListResponse(
        appointments=[AppointmentResponse.model_validate(a) for a in appointments],
        pagination=PaginationMeta.build(page, limit, total),
    )


@router.get("/availability/{venue_id}", response_model=AvailabilityResponse)
async def venue_availability(
    venue_id: int,
    day: date = Query(..., alias="date"),
    db: AsyncSession = Depends(get_db),
):
    """Booked windows at a venue for one UTC day. Public."""
    appointments = await appointment_service.get_availability(db, venue_id, day)
    slots = [
        BookedSlot(
            start=a.appointment_date,
            end=a.appointment_date + timedelta(hours=a.duration_hours),
            duration=a.duration_hours,
        )
        for a in appointments
    ]
    return AvailabilityResponse(
        venue_id=venue_id,
        date=day,
        booked_slots=slots,
        total_bookings=len(slots),
    )


@router.get("/stats/overview", response_model=AppointmentStats)
async def appointment_stats(
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return await appointment_service.appointment_stats(db)


@router.get("/{appointment_id}", response_model=AppointmentResponse)
async def get_appointment(
    appointment_id: int,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await appointment_service.get_appointment(db, user, appointment_id)


@router.put("/{appointment_id}", response_model=AppointmentResponse)
async def update_appointment(
    appointment_id: int,
    data: AppointmentUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await appointment_service.update_appointment(db, user, appointment_id, data)


@router.put("/{appointment_id}/status", response_model=AppointmentResponse)
async def update_appointment_status(
    appointment_id: int,
    data: AppointmentStatusUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Admins may set any status; owners may only cancel. Terminal states stay put."""
    return await appointment_service.change_status(db, user, appointment_id, data.status)


@router.delete("/{appointment_id}", response_model=MessageResponse)
async def delete_appointment(
    appointment_id: int,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await appointment_service.delete_appointment(db, user, appointment_id)
    return MessageResponse(message="Appointment deleted successfully")
