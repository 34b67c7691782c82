"""Place endpoints."""

import logging
from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, HTTPException
from sqlalchemy.orm import Session

from localguide.api.deps import get_db, get_place_store
from localguide.core.errors import GuideError, PersistenceFailure
from localguide.schemas.place import MessageOut, PlaceMutationResult
from localguide.services.place_store import PlaceStore
from localguide.services.review_store import recent_reviews

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/places", tags=["places"])


@router.get("", response_model=list[dict[str, Any]])
def list_places(
    category: Optional[str] = None,
    lat: Optional[float] = None,
    lng: Optional[float] = None,
    store: PlaceStore = Depends(get_place_store),
) -> list[dict[str, Any]]:
    """Return places; ``category`` filters, ``lat``/``lng`` add distance and walk time."""
    try:
        return store.list(category=category, lat=lat, lng=lng)
    except GuideError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.message) from exc


@router.get("/{place_id}", response_model=dict[str, Any])
def get_place(
    place_id: str,
    store: PlaceStore = Depends(get_place_store),
    db: Session = Depends(get_db),
) -> dict[str, Any]:
    """Return one place with its three most recent reviews."""
    try:
        place = store.get(place_id)
    except GuideError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.message) from exc

    try:
        reviews = [r.model_dump() for r in recent_reviews(db, place_id)]
    except PersistenceFailure:
        logger.warning("recent reviews unavailable for %s", place_id)
        reviews = []
    return {**place, "recent_reviews": reviews}


@router.post("", response_model=PlaceMutationResult)
def create_place(
    payload: dict[str, Any] = Body(...),
    store: PlaceStore = Depends(get_place_store),
) -> PlaceMutationResult:
    try:
        place = store.create(payload)
    except GuideError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.message) from exc
    return PlaceMutationResult(message="place created", place=place)


@router.put("/{place_id}", response_model=PlaceMutationResult)
def update_place(
    place_id: str,
    payload: dict[str, Any] = Body(...),
    store: PlaceStore = Depends(get_place_store),
) -> PlaceMutationResult:
    """Shallow-merge the payload into the place; the id cannot change."""
    try:
        place = store.update(place_id, payload)
    except GuideError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.message) from exc
    return PlaceMutationResult(message="place updated", place=place)


@router.delete("/{place_id}", response_model=MessageOut)
def delete_place(place_id: str, store: PlaceStore = Depends(get_place_store)) -> MessageOut:
    try:
        store.delete(place_id)
    except GuideError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.message) from exc
    return MessageOut(message="place deleted")
