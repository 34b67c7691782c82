"""Review persistence and the helpful-vote protocol."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from localguide.core.errors import (
    AlreadyVoted,
    Forbidden,
    NotFound,
    PersistenceFailure,
    ValidationError,
)
from localguide.models.helpful_vote import HelpfulVote
from localguide.models.review import Review
from localguide.schemas.review import ReviewOut
from localguide.services.uploads import remove_upload

logger = logging.getLogger(__name__)

MIN_RATING = 1
MAX_RATING = 5


def _local_time(value: datetime) -> str:
    """Render a stored naive-UTC timestamp in the server's local time."""
    return value.replace(tzinfo=timezone.utc).astimezone().strftime("%Y-%m-%d %H:%M:%S")


def to_review_out(review: Review) -> ReviewOut:
    return ReviewOut(
        id=review.id,
        place_id=review.place_id,
        author_name=review.author_name,
        content=review.content,
        rating=review.rating,
        image_path=review.image_path,
        created_at=_local_time(review.created_at),
        helpful_count=review.helpful_count,
    )


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def _parse_rating(rating: Any) -> int:
    if rating is None or (isinstance(rating, str) and _is_blank(rating)):
        raise ValidationError("rating is required")
    if isinstance(rating, bool):
        raise ValidationError("rating must be an integer")
    try:
        value = int(str(rating).strip()) if not isinstance(rating, int) else rating
    except ValueError as exc:
        raise ValidationError("rating must be an integer") from exc
    if not MIN_RATING <= value <= MAX_RATING:
        raise ValidationError(f"rating must be between {MIN_RATING} and {MAX_RATING}")
    return value


def list_reviews(db: Session, place_id: str | None = None) -> list[ReviewOut]:
    """Return reviews newest first, optionally for one place."""
    stmt = select(Review).order_by(Review.created_at.desc(), Review.id.desc())
    if place_id:
        stmt = stmt.where(Review.place_id == place_id)
    try:
        rows = db.execute(stmt).scalars().all()
    except SQLAlchemyError as exc:
        logger.error("review query failed: %s", exc)
        raise PersistenceFailure("failed to load reviews") from exc
    return [to_review_out(r) for r in rows]


def recent_reviews(db: Session, place_id: str, limit: int = 3) -> list[ReviewOut]:
    return list_reviews(db, place_id)[:limit]


def create_review(
    db: Session,
    *,
    place_id: str | None,
    author_name: str | None,
    content: str | None,
    rating: Any,
    image_path: str | None = None,
) -> int:
    """Insert a review and return its id."""
    if _is_blank(author_name):
        raise ValidationError("author_name is required")
    if _is_blank(content):
        raise ValidationError("content is required")
    value = _parse_rating(rating)
    if _is_blank(place_id):
        raise ValidationError("place_id is required")

    review = Review(
        place_id=place_id,
        author_name=author_name,
        content=content,
        rating=value,
        image_path=image_path,
        helpful_count=0,
    )
    try:
        db.add(review)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("review insert failed: %s", exc)
        raise PersistenceFailure("failed to save review") from exc

    logger.info("review %s posted for place %s (rating=%s)", review.id, place_id, value)
    return review.id


def delete_review(
    db: Session,
    review_id: int,
    *,
    author_name: str | None,
    admin_password: str | None,
    expected_admin_password: str,
    upload_dir: Path,
) -> None:
    """Delete a review and its votes if the requester is the admin or the author."""
    try:
        review = db.get(Review, review_id)
    except SQLAlchemyError as exc:
        logger.error("review lookup failed: %s", exc)
        raise PersistenceFailure("failed to load review") from exc
    if review is None:
        raise NotFound("review not found")

    is_admin = bool(admin_password) and admin_password == expected_admin_password
    is_author = author_name is not None and author_name == review.author_name
    if not (is_admin or is_author):
        raise Forbidden("not allowed to delete this review")

    image_path = review.image_path
    try:
        db.execute(delete(HelpfulVote).where(HelpfulVote.review_id == review_id))
        db.execute(delete(Review).where(Review.id == review_id))
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("review %s delete failed: %s", review_id, exc)
        raise PersistenceFailure("failed to delete review") from exc

    logger.info("review %s deleted (%s)", review_id, "admin" if is_admin else "author")
    if image_path:
        remove_upload(image_path, upload_dir)


def cast_helpful_vote(db: Session, review_id: int, voter_identity: str) -> int:
    """Record one helpful vote and bump the counter in the same transaction.

    Returns the new ``helpful_count``.
    """
    try:
        if db.get(Review, review_id) is None:
            raise NotFound("review not found")

        existing = db.execute(
            select(HelpfulVote.id).where(
                HelpfulVote.review_id == review_id,
                HelpfulVote.voter_identity == voter_identity,
            )
        ).first()
        if existing:
            raise AlreadyVoted("already voted")

        db.add(HelpfulVote(review_id=review_id, voter_identity=voter_identity))
        db.flush()
        db.execute(
            update(Review)
            .where(Review.id == review_id)
            .values(helpful_count=Review.helpful_count + 1)
            .execution_options(synchronize_session=False)
        )
        db.commit()
    except IntegrityError as exc:
        # a concurrent request inserted the same (review, voter) pair first
        db.rollback()
        raise AlreadyVoted("already voted") from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("helpful vote on review %s failed: %s", review_id, exc)
        raise PersistenceFailure("failed to record vote") from exc
    except (NotFound, AlreadyVoted):
        db.rollback()
        raise

    count = db.execute(select(Review.helpful_count).where(Review.id == review_id)).scalar_one()
    logger.info("review %s marked helpful by %s (count=%s)", review_id, voter_identity, count)
    return count
