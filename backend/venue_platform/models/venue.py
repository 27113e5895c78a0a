"""
Venue model. Venues are never physically removed through the API;
`is_active` is the soft-delete flag.
"""

from sqlalchemy import Column, Integer, String, Float, Boolean, JSON, Index, CheckConstraint

from venue_platform.db.base import Base, TimestampMixin, one_of

VENUE_TYPES = ("sports", "entertainment", "both")


class Venue(Base, TimestampMixin):
    __tablename__ = "venues"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False)
    description = Column(String(1000), nullable=False)
    venue_type = Column(String(20), nullable=False)
    location = Column(String(500), nullable=False)
    capacity = Column(Integer, nullable=False)
    amenities = Column(JSON, nullable=False, default=list)
    contact_phone = Column(String(20), nullable=False)
    contact_email = Column(String(255), nullable=False)
    rating = Column(Float, nullable=False, default=0)
    image = Column(String(500), nullable=False, default="")
    is_active = Column(Boolean, nullable=False, default=True)

    __table_args__ = (
        CheckConstraint("capacity >= 1 AND capacity <= 100000", name="check_venue_capacity_range"),
        one_of("venue_type", VENUE_TYPES, name="check_venue_type"),
        Index("ix_venues_venue_type", "venue_type"),
        Index("ix_venues_is_active", "is_active"),
    )

    def __repr__(self) -> str:
        return f"<Venue(id={self.id}, name={self.name}, active={self.is_active})>"
