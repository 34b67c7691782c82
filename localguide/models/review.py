"""Review model."""

from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, Column, DateTime, Integer, String, Text
from sqlalchemy.orm import relationship

from localguide.db.base import Base


def utcnow() -> datetime:
    """Naive UTC timestamp (SQLite stores no offset)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Review(Base):
    """User submitted review of a place."""

    __tablename__ = "reviews"
    __table_args__ = (
        CheckConstraint("rating >= 1 AND rating <= 5", name="ck_reviews_rating_range"),
        {"sqlite_autoincrement": True},
    )

    id = Column(Integer, primary_key=True, index=True)
    place_id = Column(String(100), nullable=False, index=True)  # places.json id
    author_name = Column(String(100), nullable=False)
    content = Column(Text, nullable=False)
    rating = Column(Integer, nullable=False)
    image_path = Column(String(255))  # /uploads/<file>
    created_at = Column(DateTime, nullable=False, default=utcnow)
    helpful_count = Column(Integer, nullable=False, default=0)

    votes = relationship("HelpfulVote", back_populates="review", passive_deletes=True)
