from sqlalchemy import Column, Integer, String, Boolean, Index

from venue_platform.db.base import Base, UTCDateTime, utcnow


class Contact(Base):
    __tablename__ = "contacts"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False, index=True)
    phone = Column(String(20), nullable=False)
    subject = Column(String(200), nullable=False)
    message = Column(String(2000), nullable=False)
    is_resolved = Column(Boolean, nullable=False, default=False)
    created_at = Column(UTCDateTime(), nullable=False, default=utcnow)
    resolved_at = Column(UTCDateTime(), nullable=True)

    __table_args__ = (
        Index("ix_contacts_is_resolved", "is_resolved"),
    )

    def __repr__(self) -> str:
        return f"<Contact(id={self.id}, subject={self.subject}, resolved={self.is_resolved})>"
