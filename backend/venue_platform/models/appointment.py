"""
Appointment model: a user's booking of a venue for a time window.

Key design decisions:
- user_name / venue_name are denormalised at booking time so listings and
  dashboard aggregates don't need joins
- Composite index on (venue_id, status, appointment_date) backs the
  conflict check and the availability query
- Index on (status, appointment_date) backs the completion sweeper
"""

from sqlalchemy import Column, Integer, String, ForeignKey, Index, CheckConstraint

from venue_platform.db.base import Base, TimestampMixin, UTCDateTime, one_of

PENDING = "pending"
CONFIRMED = "confirmed"
CANCELLED = "cancelled"
COMPLETED = "completed"

APPOINTMENT_STATUSES = (PENDING, CONFIRMED, CANCELLED, COMPLETED)
ACTIVE_STATUSES = (PENDING, CONFIRMED)
TERMINAL_STATUSES = (COMPLETED, CANCELLED)


class Appointment(Base, TimestampMixin):
    __tablename__ = "appointments"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    user_name = Column(String(100), nullable=False)
    venue_id = Column(Integer, ForeignKey("venues.id"), nullable=False, index=True)
    venue_name = Column(String(200), nullable=False)
    appointment_date = Column(UTCDateTime(), nullable=False)
    duration_hours = Column(Integer, nullable=False, default=1)
    purpose = Column(String(500), nullable=False)
    notes = Column(String(1000), nullable=False, default="")
    status = Column(String(20), nullable=False, default=PENDING)

    __table_args__ = (
        CheckConstraint("duration_hours >= 1 AND duration_hours <= 24", name="check_appointment_duration"),
        one_of("status", APPOINTMENT_STATUSES, name="check_appointment_status"),
        Index("ix_appointments_venue_status_date", "venue_id", "status", "appointment_date"),
        Index("ix_appointments_status_date", "status", "appointment_date"),
    )

    def __repr__(self) -> str:
        return (
            f"<Appointment(id={self.id}, venue={self.venue_id}, "
            f"date={self.appointment_date}, status={self.status})>"
        )
