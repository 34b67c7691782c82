"""Social feed fetchers for store accounts.

Both fetchers are coroutines that never raise: any failure (missing token,
unknown account, rate limit, network error, odd payload) yields ``[]``.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any

import aiohttp

from localguide.schemas.social import SocialPost

logger = logging.getLogger(__name__)

TWITTER_API_BASE = "https://api.twitter.com/2"
TWITTER_TIMELINE_FETCH = 5
MAX_POSTS = 2


class SocialFetcher:
    """Wrapper around the Twitter API v2 (read only) and Instagram posts."""

    def __init__(self, twitter_bearer_token: str | None, timeout_seconds: float = 10.0) -> None:
        self._bearer_token = twitter_bearer_token
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)

    async def _get_json(self, session: aiohttp.ClientSession, url: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        async with session.get(url, params=params) as response:
            if response.status != 200:
                raise RuntimeError(f"HTTP {response.status} from {url}")
            return await response.json()

    async def fetch_tweets(self, account: str) -> list[SocialPost]:
        """Return the latest tweets (at most two) of ``account``."""
        username = (account or "").strip().lstrip("@")
        if not username:
            return []
        if not self._bearer_token:
            logger.warning("TWITTER_BEARER_TOKEN is not configured; skipping @%s", username)
            return []

        headers = {"Authorization": f"Bearer {self._bearer_token}"}
        try:
            async with aiohttp.ClientSession(headers=headers, timeout=self._timeout) as session:
                user = await self._get_json(session, f"{TWITTER_API_BASE}/users/by/username/{username}")
                user_id = (user.get("data") or {}).get("id")
                if not user_id:
                    logger.info("Twitter user @%s not found", username)
                    return []

                timeline = await self._get_json(
                    session,
                    f"{TWITTER_API_BASE}/users/{user_id}/tweets",
                    params={
                        "max_results": TWITTER_TIMELINE_FETCH,
                        "tweet.fields": "created_at,public_metrics",
                        "exclude": "retweets,replies",
                    },
                )
            posts = []
            for tweet in (timeline.get("data") or [])[:MAX_POSTS]:
                metrics = tweet.get("public_metrics") or {}
                posts.append(
                    SocialPost(
                        id=str(tweet["id"]),
                        author=f"@{username}",
                        text=tweet.get("text", ""),
                        created_at=tweet.get("created_at"),
                        likes=metrics.get("like_count", 0),
                        retweets=metrics.get("retweet_count", 0),
                    )
                )
        except Exception as exc:  # noqa: BLE001
            logger.error("Twitter API error for @%s: %s", username, exc)
            return []

        logger.info("fetched %d tweets for @%s", len(posts), username)
        return posts

    async def fetch_instagram_posts(self, account: str) -> list[SocialPost]:
        """Return recent Instagram posts of ``account``.

        No Graph API credentials are wired in yet, so this serves two fixed
        sample posts for any configured account.
        """
        username = (account or "").strip().lstrip("@")
        if not username:
            return []
        now = datetime.now(timezone.utc)
        return [
            SocialPost(
                id="ig_1",
                author=username,
                text="📸 本日の一押し！特製餃子プレート✨ #宇都宮餃子 #グルメ",
                media_url="/images/demo_gyoza.jpg",
                created_at=(now - timedelta(hours=2)).isoformat(),
                likes=234,
            ),
            SocialPost(
                id="ig_2",
                author=username,
                text="🎉 おかげさまで創業60周年！感謝の気持ちを込めて特別メニューをご用意しました",
                media_url="/images/demo_celebration.jpg",
                created_at=(now - timedelta(hours=48)).isoformat(),
                likes=512,
            ),
        ]
