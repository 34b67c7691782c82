"""Store-staff endpoints: realtime status and social feeds."""

import asyncio

from fastapi import APIRouter, Depends, HTTPException

from localguide.api.deps import get_place_store, get_social_fetcher
from localguide.core.errors import GuideError
from localguide.schemas.place import RealtimeUpdateIn, RealtimeUpdateResult
from localguide.schemas.social import SocialPosts, StoreSocialPostsOut
from localguide.services.place_store import PlaceStore
from localguide.services.realtime import apply_realtime_update
from localguide.services.social import SocialFetcher

router = APIRouter(prefix="/store", tags=["store"])


@router.post("/realtime-update", response_model=RealtimeUpdateResult)
def realtime_update(
    payload: RealtimeUpdateIn,
    store: PlaceStore = Depends(get_place_store),
) -> RealtimeUpdateResult:
    """Update crowd level, wait time, hours and social accounts of a store."""
    try:
        place = apply_realtime_update(store, payload)
    except GuideError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.message) from exc
    return RealtimeUpdateResult(message="updated", store=place)


@router.get("/{store_id}/social-posts", response_model=StoreSocialPostsOut)
async def social_posts(
    store_id: str,
    store: PlaceStore = Depends(get_place_store),
    fetcher: SocialFetcher = Depends(get_social_fetcher),
) -> StoreSocialPostsOut:
    """Fetch the latest posts of the store's Twitter and Instagram accounts."""
    try:
        place = await asyncio.to_thread(store.get, store_id)
    except GuideError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.message) from exc

    twitter = place.get("twitter_account") or ""
    instagram = place.get("instagram_account") or ""
    posts = SocialPosts()
    if twitter:
        posts.twitter = await fetcher.fetch_tweets(twitter)
    if instagram:
        posts.instagram = await fetcher.fetch_instagram_posts(instagram)

    return StoreSocialPostsOut(
        store_id=store_id,
        store_name=place.get("name", ""),
        has_twitter=bool(twitter),
        has_instagram=bool(instagram),
        posts=posts,
    )
