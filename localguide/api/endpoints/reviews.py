"""Review and helpful-vote endpoints."""

from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from sqlalchemy.orm import Session

from localguide.api.deps import get_app_settings, get_db, get_place_store, get_voter_identity
from localguide.core.config import Settings
from localguide.core.errors import GuideError
from localguide.schemas.place import MessageOut
from localguide.schemas.review import HelpfulVoteResult, ReviewCreated, ReviewDeleteIn, ReviewOut
from localguide.services.place_store import PlaceStore
from localguide.services.review_store import (
    cast_helpful_vote,
    create_review,
    delete_review,
    list_reviews,
)
from localguide.services.uploads import remove_upload, save_review_image

router = APIRouter(prefix="/reviews", tags=["reviews"])


@router.get("", response_model=list[ReviewOut])
def get_reviews(place_id: Optional[str] = None, db: Session = Depends(get_db)) -> list[ReviewOut]:
    """Return reviews newest first, optionally for one place."""
    try:
        return list_reviews(db, place_id)
    except GuideError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.message) from exc


@router.post("", response_model=ReviewCreated)
def post_review(
    place_id: Optional[str] = Form(None),
    author_name: Optional[str] = Form(None),
    content: Optional[str] = Form(None),
    rating: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    store: PlaceStore = Depends(get_place_store),
    settings: Settings = Depends(get_app_settings),
) -> ReviewCreated:
    """Submit a review (multipart form, optional ``image``)."""
    image_path = None
    try:
        if place_id:
            store.get(place_id)
        if image is not None and image.filename:
            image_path = save_review_image(image, Path(settings.upload_dir), settings.max_upload_bytes)
        review_id = create_review(
            db,
            place_id=place_id,
            author_name=author_name,
            content=content,
            rating=rating,
            image_path=image_path,
        )
    except GuideError as exc:
        if image_path:
            remove_upload(image_path, Path(settings.upload_dir))
        raise HTTPException(status_code=exc.status_code, detail=exc.message) from exc
    return ReviewCreated(message="review posted", id=review_id)


@router.post("/{review_id}/helpful", response_model=HelpfulVoteResult)
def mark_helpful(
    review_id: int,
    voter: str = Depends(get_voter_identity),
    db: Session = Depends(get_db),
) -> HelpfulVoteResult:
    try:
        count = cast_helpful_vote(db, review_id, voter)
    except GuideError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.message) from exc
    return HelpfulVoteResult(message="marked as helpful", helpful_count=count)


@router.delete("/{review_id}", response_model=MessageOut)
def remove_review(
    review_id: int,
    payload: Optional[ReviewDeleteIn] = None,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> MessageOut:
    """Delete a review; requires the admin password or the author's name."""
    payload = payload or ReviewDeleteIn()
    try:
        delete_review(
            db,
            review_id,
            author_name=payload.author_name,
            admin_password=payload.admin_password,
            expected_admin_password=settings.admin_password,
            upload_dir=Path(settings.upload_dir),
        )
    except GuideError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.message) from exc
    return MessageOut(message="review deleted")
