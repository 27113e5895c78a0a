from sqlalchemy import Column, Integer, String, Boolean, Index

from venue_platform.db.base import Base, TimestampMixin


class Partner(Base, TimestampMixin):
    __tablename__ = "partners"

    id = Column(Integer, primary_key=True, index=True)
    company_name = Column(String(200), nullable=False)
    contact_person = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, nullable=False)
    phone = Column(String(20), nullable=False)
    partnership_type = Column(String(100), nullable=False)
    description = Column(String(1000), nullable=False)
    website = Column(String(500), nullable=True)
    image = Column(String(500), nullable=True)
    location = Column(String(500), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)

    __table_args__ = (
        Index("ix_partners_is_active", "is_active"),
        Index("ix_partners_partnership_type", "partnership_type"),
    )

    def __repr__(self) -> str:
        return f"<Partner(id={self.id}, company={self.company_name})>"
