"""
Appointment service: booking, listing, editing, status changes, deletion,
availability and statistics.

The conflict check and the insert run as two statements in the request's
session. Two simultaneous requests for the same slot can both pass the check;
see DESIGN.md for why that gap is left open.
"""

import time
from datetime import date, datetime, time as dt_time, timedelta, timezone
from typing import Optional

from fastapi import HTTPException, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from venue_platform.api.deps import ensure_owner_or_admin
from venue_platform.core.logging import get_logger
from venue_platform.core.metrics import booking_latency, record_booking_attempt, record_status_transition
from venue_platform.models.appointment import (
    ACTIVE_STATUSES,
    APPOINTMENT_STATUSES,
    CANCELLED,
    COMPLETED,
    CONFIRMED,
    PENDING,
    Appointment,
)
from venue_platform.models.user import User
from venue_platform.models.venue import Venue
from venue_platform.schemas.appointment import AppointmentCreate, AppointmentUpdate
from venue_platform.services.booking_rules import (
    check_status_transition,
    conflict_window,
    ensure_editable,
    ensure_future,
)

logger = get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


async def has_conflict(
    db: AsyncSession,
    venue_id: int,
    proposed_start: datetime,
    duration_hours: int,
) -> bool:
    """True when an active appointment at the venue starts inside the window."""
    low, high = conflict_window(proposed_start, duration_hours)
    result = await db.execute(
        select(Appointment.id)
        .where(
            Appointment.venue_id == venue_id,
            Appointment.status.in_(ACTIVE_STATUSES),
            Appointment.appointment_date >= low,
            Appointment.appointment_date <= high,
        )
        .limit(1)
    )
    return result.scalar_one_or_none() is not None


async def book_appointment(
    db: AsyncSession,
    user: User,
    data: AppointmentCreate,
    now: Optional[datetime] = None,
) -> Appointment:
    """
    Book a venue. Order of checks: venue exists and is active (404), date is
    strictly in the future (400), no overlapping active booking (400).
    """
    started = time.perf_counter()
    now = now or _utcnow()

    venue = await db.get(Venue, data.venue_id)
    if venue is None or not venue.is_active:
        record_booking_attempt("rejected")
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Venue not found or inactive",
        )

    try:
        ensure_future(data.appointment_date, now)
    except HTTPException:
        record_booking_attempt("rejected")
        raise

    if await has_conflict(db, venue.id, data.appointment_date, data.duration_hours):
        record_booking_attempt("conflict")
        logger.warning(
            "booking_conflict",
            venue_id=venue.id,
            requested_start=data.appointment_date.isoformat(),
            duration_hours=data.duration_hours,
        )
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Time slot is not available",
        )

    appointment = Appointment(
        user_id=user.id,
        user_name=user.full_name,
        venue_id=venue.id,
        venue_name=venue.name,
        appointment_date=data.appointment_date,
        duration_hours=data.duration_hours,
        purpose=data.purpose,
        notes=data.notes,
        status=PENDING,
    )
    db.add(appointment)
    await db.flush()
    await db.refresh(appointment)

    record_booking_attempt("success")
    booking_latency.observe(time.perf_counter() - started)
    logger.info(
        "appointment_booked",
        appointment_id=appointment.id,
        user_id=user.id,
        venue_id=venue.id,
        start=appointment.appointment_date.isoformat(),
        duration_hours=appointment.duration_hours,
    )
    return appointment


async def list_appointments(
    db: AsyncSession,
    user: User,
    page: int = 1,
    limit: int = 10,
    user_id: Optional[int] = None,
    venue_id: Optional[int] = None,
    status_filter: Optional[str] = None,
    date_from: Optional[datetime] = None,
    date_to: Optional[datetime] = None,
) -> tuple[list[Appointment], int]:
    """Admins see everything (optionally one user's); everyone else only their own."""
    query = select(Appointment)

    if user.is_admin:
        if user_id is not None:
            query = query.where(Appointment.user_id == user_id)
    else:
        query = query.where(Appointment.user_id == user.id)

    if venue_id is not None:
        query = query.where(Appointment.venue_id == venue_id)
    if status_filter in APPOINTMENT_STATUSES:
        query = query.where(Appointment.status == status_filter)
    if date_from is not None:
        query = query.where(Appointment.appointment_date >= date_from)
    if date_to is not None:
        query = query.where(Appointment.appointment_date <= date_to)

    total = (await db.execute(select(func.count()).select_from(query.subquery()))).scalar()

    result = await db.execute(
        query.order_by(Appointment.appointment_date.asc(), Appointment.id.asc())
        .offset((page - 1) * limit)
        .limit(limit)
    )
    return list(result.scalars().all()), total


async def _get_or_404(db: AsyncSession, appointment_id: int) -> Appointment:
    appointment = await db.get(Appointment, appointment_id)
    if appointment is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Appointment not found",
        )
    return appointment


async def get_appointment(db: AsyncSession, user: User, appointment_id: int) -> Appointment:
    appointment = await _get_or_404(db, appointment_id)
    ensure_owner_or_admin(user, appointment.user_id, "view this appointment")
    return appointment


async def update_appointment(
    db: AsyncSession,
    user: User,
    appointment_id: int,
    data: AppointmentUpdate,
    now: Optional[datetime] = None,
) -> Appointment:
    """
    Edit date, duration, purpose or notes.

    A new date must still be in the future, but the conflict check is not
    re-run on reschedule.
    """
    appointment = await _get_or_404(db, appointment_id)
    ensure_owner_or_admin(user, appointment.user_id, "update this appointment")
    ensure_editable(appointment.status)

    if data.appointment_date is not None:
        ensure_future(data.appointment_date, now or _utcnow())
        appointment.appointment_date = data.appointment_date
    if data.duration_hours is not None:
        appointment.duration_hours = data.duration_hours
    if data.purpose is not None:
        appointment.purpose = data.purpose
    if data.notes is not None:
        appointment.notes = data.notes

    appointment.updated_at = _utcnow()
    await db.flush()
    await db.refresh(appointment)

    logger.info("appointment_updated", appointment_id=appointment.id, user_id=user.id)
    return appointment


async def change_status(
    db: AsyncSession,
    user: User,
    appointment_id: int,
    new_status: str,
) -> Appointment:
    appointment = await _get_or_404(db, appointment_id)
    previous = appointment.status
    check_status_transition(user, appointment.user_id, previous, new_status)

    appointment.status = new_status
    appointment.updated_at = _utcnow()
    await db.flush()
    await db.refresh(appointment)

    record_status_transition(previous, new_status)
    logger.info(
        "appointment_status_changed",
        appointment_id=appointment.id,
        from_status=previous,
        to_status=new_status,
        by_user=user.id,
        by_admin=user.is_admin,
    )
    return appointment


async def delete_appointment(db: AsyncSession, user: User, appointment_id: int) -> None:
    appointment = await _get_or_404(db, appointment_id)
    ensure_owner_or_admin(user, appointment.user_id, "delete this appointment")

    await db.delete(appointment)
    await db.flush()
    logger.info("appointment_deleted", appointment_id=appointment_id, user_id=user.id)


async def get_availability(db: AsyncSession, venue_id: int, day: date) -> list[Appointment]:
    """Active appointments starting on `day` (UTC), ordered by start."""
    venue = await db.get(Venue, venue_id)
    if venue is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Venue not found",
        )

    start_of_day = datetime.combine(day, dt_time.min, tzinfo=timezone.utc)
    end_of_day = start_of_day + timedelta(days=1)

    result = await db.execute(
        select(Appointment)
        .where(
            Appointment.venue_id == venue_id,
            Appointment.status.in_(ACTIVE_STATUSES),
            Appointment.appointment_date >= start_of_day,
            Appointment.appointment_date < end_of_day,
        )
        .order_by(Appointment.appointment_date.asc())
    )
    return list(result.scalars().all())


async def appointment_stats(db: AsyncSession, now: Optional[datetime] = None) -> dict:
    now = now or _utcnow()

    status_rows = await db.execute(
        select(Appointment.status, func.count()).group_by(Appointment.status)
    )
    by_status = {row[0]: row[1] for row in status_rows.all()}

    upcoming = (
        await db.execute(
            select(func.count())
            .select_from(Appointment)
            .where(
                Appointment.appointment_date >= now,
                Appointment.status.in_(ACTIVE_STATUSES),
            )
        )
    ).scalar()

    count_col = func.count(Appointment.id).label("count")
    venue_rows = await db.execute(
        select(Appointment.venue_id, func.max(Appointment.venue_name), count_col)
        .group_by(Appointment.venue_id)
        .order_by(count_col.desc())
        .limit(10)
    )

    return {
        "total_appointments": sum(by_status.values()),
        "pending_appointments": by_status.get(PENDING, 0),
        "confirmed_appointments": by_status.get(CONFIRMED, 0),
        "cancelled_appointments": by_status.get(CANCELLED, 0),
        "completed_appointments": by_status.get(COMPLETED, 0),
        "upcoming_appointments": upcoming,
        "appointments_by_venue": [
            {"venue_id": venue_id, "venue_name": venue_name, "count": count}
            for venue_id, venue_name, count in venue_rows.all()
        ],
    }
