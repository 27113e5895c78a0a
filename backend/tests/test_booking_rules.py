"""
Unit tests for the pure booking rules: conflict window, status transitions
and the allowed-value sets shared by schemas and tables.
"""

from datetime import datetime, timedelta, timezone
from typing import get_args

import pytest
from fastapi import HTTPException

from venue_platform.models.appointment import APPOINTMENT_STATUSES, Appointment
from venue_platform.models.review import ENTITY_TYPES, Review
from venue_platform.models.user import User
from venue_platform.models.venue import VENUE_TYPES, Venue
from venue_platform.schemas.appointment import AppointmentStatus
from venue_platform.schemas.review import EntityType
from venue_platform.schemas.venue import VenueType
from venue_platform.services.booking_rules import (
    check_status_transition,
    conflict_window,
    ensure_editable,
    ensure_future,
)

START = datetime(2030, 1, 1, 10, tzinfo=timezone.utc)

owner = User(id=1, role="user", email="owner@example.com", full_name="Owner")
stranger = User(id=2, role="user", email="stranger@example.com", full_name="Stranger")
admin = User(id=3, role="admin", email="admin@example.com", full_name="Admin")


def test_window_is_symmetric_around_requested_start():
    low, high = conflict_window(START, 2)
    assert low == START - timedelta(hours=2)
    assert high == START + timedelta(hours=2)


@pytest.mark.parametrize("hours", [1, 3, 24])
def test_window_spans_the_requested_duration_each_way(hours):
    low, high = conflict_window(START, hours)
    assert high - low == timedelta(hours=2 * hours)
    assert low < START < high


def test_ensure_future():
    ensure_future(START, START - timedelta(seconds=1))
    with pytest.raises(HTTPException) as exc:
        ensure_future(START, START)
    assert exc.value.status_code == 400


@pytest.mark.parametrize("current", ["pending", "confirmed"])
def test_owner_may_cancel(current):
    check_status_transition(owner, owner.id, current, "cancelled")


@pytest.mark.parametrize("requested", ["pending", "confirmed", "completed"])
def test_owner_may_not_set_anything_else(requested):
    with pytest.raises(HTTPException) as exc:
        check_status_transition(owner, owner.id, "pending", requested)
    assert exc.value.status_code == 403


def test_stranger_is_forbidden_before_anything_else():
    with pytest.raises(HTTPException) as exc:
        check_status_transition(stranger, owner.id, "completed", "cancelled")
    assert exc.value.status_code == 403


@pytest.mark.parametrize("requested", ["pending", "confirmed", "cancelled", "completed"])
def test_admin_may_set_any_status_from_active(requested):
    check_status_transition(admin, owner.id, "pending", requested)


@pytest.mark.parametrize("requested", ["pending", "confirmed", "cancelled"])
def test_admin_may_not_leave_completed(requested):
    with pytest.raises(HTTPException) as exc:
        check_status_transition(admin, owner.id, "completed", requested)
    assert exc.value.status_code == 400


def test_owner_cancelling_completed_is_400():
    with pytest.raises(HTTPException) as exc:
        check_status_transition(owner, owner.id, "completed", "cancelled")
    assert exc.value.status_code == 400


@pytest.mark.parametrize("current", ["cancelled", "completed"])
def test_owner_role_check_comes_before_state_check(current):
    with pytest.raises(HTTPException) as exc:
        check_status_transition(owner, owner.id, current, "confirmed")
    assert exc.value.status_code == 403


@pytest.mark.parametrize("requested", ["pending", "confirmed", "completed"])
def test_admin_may_reopen_cancelled(requested):
    check_status_transition(admin, owner.id, "cancelled", requested)


def test_resetting_same_terminal_status_is_allowed():
    check_status_transition(owner, owner.id, "cancelled", "cancelled")
    check_status_transition(admin, owner.id, "completed", "completed")


def test_ensure_editable():
    ensure_editable("pending")
    ensure_editable("confirmed")
    for terminal in ("completed", "cancelled"):
        with pytest.raises(HTTPException):
            ensure_editable(terminal)


@pytest.mark.parametrize(
    "model, constraint_name, values, literal",
    [
        (Appointment, "check_appointment_status", APPOINTMENT_STATUSES, AppointmentStatus),
        (Venue, "check_venue_type", VENUE_TYPES, VenueType),
        (Review, "check_review_entity_type", ENTITY_TYPES, EntityType),
    ],
)
def test_schema_and_table_share_allowed_values(model, constraint_name, values, literal):
    assert get_args(literal) == values
    constraint = next(c for c in model.__table__.constraints if c.name == constraint_name)
    for value in values:
        assert f"'{value}'" in str(constraint.sqltext)
