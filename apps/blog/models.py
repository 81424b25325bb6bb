"""
Blog database models.

Image pairs are stored as JSON documents ({"public_id": ..., "url": ...}).
"""
from datetime import datetime, timezone
from uuid import uuid4
from sqlalchemy import Column, String, Text, Boolean, DateTime, JSON

from apps.shared.database import Base


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Post(Base):
    """
    Blog post.

    slug is derived from the title once at creation and is unique.
    cover_image is required, feature_image is optional.
    """
    __tablename__ = "posts"

    id = Column(String(32), primary_key=True, default=lambda: uuid4().hex)
    title = Column(String(300), nullable=False)
    content = Column(Text, nullable=False)
    slug = Column(String(300), unique=True, index=True, nullable=False)
    cover_image = Column(JSON, nullable=False)
    feature_image = Column(JSON(none_as_null=True), nullable=True)
    is_published = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), default=_now, index=True)
    updated_at = Column(DateTime(timezone=True), default=_now, onupdate=_now)
