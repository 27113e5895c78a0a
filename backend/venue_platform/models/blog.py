from sqlalchemy import Column, Integer, String, Text, Boolean, JSON, ForeignKey, Index

from venue_platform.db.base import Base, TimestampMixin

DEFAULT_BLOG_IMAGE = "https://via.placeholder.com/400x250"


class Blog(Base, TimestampMixin):
    __tablename__ = "blogs"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(300), nullable=False)
    content = Column(Text, nullable=False)
    image = Column(String(500), nullable=False, default=DEFAULT_BLOG_IMAGE)
    author_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    author_name = Column(String(100), nullable=True)
    category = Column(String(50), nullable=True)
    tags = Column(JSON, nullable=False, default=list)
    is_published = Column(Boolean, nullable=False, default=True)

    __table_args__ = (
        Index("ix_blogs_is_published", "is_published"),
    )

    def __repr__(self) -> str:
        return f"<Blog(id={self.id}, title={self.title}, published={self.is_published})>"
