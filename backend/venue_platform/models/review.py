"""
Review model. One review per user per target, enforced by a unique
constraint on (user_id, entity_type, entity_id).
"""

from sqlalchemy import Column, Integer, String, ForeignKey, UniqueConstraint, CheckConstraint, Index

from venue_platform.db.base import Base, UTCDateTime, one_of, utcnow

ENTITY_TYPES = ("venue", "blog", "partner")


class Review(Base):
    __tablename__ = "reviews"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    user_name = Column(String(100), nullable=False)
    entity_type = Column(String(20), nullable=False)
    entity_id = Column(Integer, nullable=False)
    rating = Column(Integer, nullable=False)
    comment = Column(String(1000), nullable=False)
    created_at = Column(UTCDateTime(), nullable=False, default=utcnow)

    __table_args__ = (
        UniqueConstraint("user_id", "entity_type", "entity_id", name="uq_review_user_entity"),
        CheckConstraint("rating >= 1 AND rating <= 5", name="check_review_rating_range"),
        one_of("entity_type", ENTITY_TYPES, name="check_review_entity_type"),
        Index("ix_reviews_entity", "entity_type", "entity_id"),
    )

    def __repr__(self) -> str:
        return f"<Review(id={self.id}, {self.entity_type}={self.entity_id}, rating={self.rating})>"
