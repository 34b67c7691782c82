"""Schemas for social feed posts."""

from typing import Optional

from pydantic import BaseModel, Field


class SocialPost(BaseModel):
    id: str
    author: str
    text: str
    created_at: Optional[str] = None
    likes: int = 0
    retweets: int = 0
    media_url: Optional[str] = None


class SocialPosts(BaseModel):
    twitter: list[SocialPost] = Field(default_factory=list)
    instagram: list[SocialPost] = Field(default_factory=list)


class StoreSocialPostsOut(BaseModel):
    store_id: str
    store_name: str
    has_twitter: bool
    has_instagram: bool
    posts: SocialPosts


class SweepSummary(BaseModel):
    """Counts logged after one social refresh sweep."""

    places_checked: int = 0
    fetches: int = 0
    posts_fetched: int = 0
    failures: int = 0
    skipped: bool = False
