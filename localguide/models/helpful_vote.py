"""Helpful vote model."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from localguide.db.base import Base
from localguide.models.review import utcnow


class HelpfulVote(Base):
    """One "helpful" vote per voter per review, never withdrawn."""

    __tablename__ = "helpful_votes"
    __table_args__ = (
        UniqueConstraint("review_id", "voter_identity", name="uq_helpful_vote_review_voter"),
    )

    id = Column(Integer, primary_key=True, index=True)
    review_id = Column(Integer, ForeignKey("reviews.id", ondelete="CASCADE"), nullable=False, index=True)
    voter_identity = Column(String(100), nullable=False)  # client network address
    created_at = Column(DateTime, nullable=False, default=utcnow)

    review = relationship("Review", back_populates="votes")
