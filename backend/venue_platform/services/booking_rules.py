"""
Booking rules: the conflict window and the appointment lifecycle.

CONFLICT WINDOW
===============

A new booking at (start, duration_hours) collides with any active
(pending/confirmed) appointment at the same venue whose stored start lies in

    conflict_window(start, duration_hours) == [start - duration_hours, start + duration_hours]

Both ends inclusive. The window is symmetric around the *requested* start
and only uses the *requested* duration; the existing appointment's own
duration is not considered. appointment_service.has_conflict turns these
bounds into the SQL range filter.

LIFECYCLE
=========

    pending ──> confirmed ──> completed
       │            │
       └──> cancelled <┘

Status changes are checked in this order:
  1. the caller must own the appointment or be an admin (403)
  2. a non-admin may only request "cancelled" (403)
  3. nothing moves away from "completed" (400); re-setting it is a no-op

Admins may otherwise set any status, including reopening a cancelled
appointment. Field edits are refused on completed and cancelled
appointments alike. The sweeper moves pending/confirmed straight to
completed.

Everything here is pure so it can be tested without a database; the
appointment service wires it to queries.
"""

from datetime import datetime, timedelta

from fastapi import HTTPException, status

from venue_platform.models.appointment import CANCELLED, COMPLETED, TERMINAL_STATUSES
from venue_platform.models.user import User


def conflict_window(proposed_start: datetime, duration_hours: int) -> tuple[datetime, datetime]:
    """Inclusive (low, high) bounds on the start of a conflicting booking."""
    window = timedelta(hours=duration_hours)
    return proposed_start - window, proposed_start + window


def ensure_future(appointment_date: datetime, now: datetime) -> None:
    if appointment_date <= now:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Appointment date must be in the future",
        )


def check_status_transition(actor: User, owner_id: int, current: str, requested: str) -> None:
    """Raise unless `actor` may move an appointment from `current` to `requested`."""
    if not actor.is_admin:
        if actor.id != owner_id:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Not authorized to update this appointment",
            )
        if requested != CANCELLED:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Users can only cancel appointments",
            )

    if current == COMPLETED and requested != COMPLETED:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot change status of completed appointments",
        )


def ensure_editable(current: str) -> None:
    if current in TERMINAL_STATUSES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot update completed or cancelled appointments",
        )
