"""
User model with hashed credential storage.
"""

from sqlalchemy import Column, Integer, String, Boolean, Index

from venue_platform.db.base import Base, TimestampMixin, UTCDateTime

DEFAULT_AVATAR = (
    "https://res.cloudinary.com/dzsjtq4zd/image/upload/v1756229683/"
    "default-avatar-icon-of-social-media-user-vector_abij8s.jpg"
)


class User(Base, TimestampMixin):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)
    full_name = Column(String(100), nullable=False)
    image = Column(String(500), nullable=False, default=DEFAULT_AVATAR)
    role = Column(String(20), nullable=False, default="user")  # user, admin
    is_active = Column(Boolean, default=True, nullable=False)
    last_login = Column(UTCDateTime(), nullable=True)

    __table_args__ = (
        Index("ix_users_role", "role"),
    )

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email}, role={self.role})>"
