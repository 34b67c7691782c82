"""Periodic refresh of store social feeds.

Each sweep reads the place file, fetches posts for every configured Twitter
and Instagram account and logs the counts. Nothing is written back and the
posts are not cached. A sweep that would start while another is still
running is skipped.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable

from localguide.schemas.social import SocialPost, SweepSummary
from localguide.services.place_store import PlaceStore
from localguide.services.social import SocialFetcher

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL_SECONDS = 30 * 60


class SocialRefreshScheduler:
    def __init__(
        self,
        store: PlaceStore,
        fetcher: SocialFetcher,
        interval_seconds: float = DEFAULT_INTERVAL_SECONDS,
        fetch_timeout_seconds: float = 10.0,
    ) -> None:
        self._store = store
        self._fetcher = fetcher
        self.interval_seconds = interval_seconds
        self.fetch_timeout_seconds = fetch_timeout_seconds
        self._sweep_lock = asyncio.Lock()
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def _fetch(
        self,
        label: str,
        fetch: Callable[[str], Awaitable[list[SocialPost]]],
        account: str,
    ) -> list[SocialPost] | None:
        """Run one fetch with a timeout; ``None`` marks a failure."""
        try:
            return await asyncio.wait_for(fetch(account), timeout=self.fetch_timeout_seconds)
        except asyncio.TimeoutError:
            logger.warning("%s fetch for %s timed out", label, account)
        except Exception:  # noqa: BLE001
            logger.exception("%s fetch for %s failed", label, account)
        return None

    async def run_sweep(self) -> SweepSummary:
        """Fetch posts for every place with a social account once."""
        if self._sweep_lock.locked():
            logger.warning("social refresh still running; skipping this tick")
            return SweepSummary(skipped=True)

        async with self._sweep_lock:
            logger.info("social refresh sweep started")
            places = await asyncio.to_thread(self._store.list)
            summary = SweepSummary()

            for place in places:
                name = place.get("name") or place.get("id")
                twitter = place.get("twitter_account")
                instagram = place.get("instagram_account")
                if not twitter and not instagram:
                    continue
                summary.places_checked += 1

                for label, fetch, account in (
                    ("Twitter", self._fetcher.fetch_tweets, twitter),
                    ("Instagram", self._fetcher.fetch_instagram_posts, instagram),
                ):
                    if not account:
                        continue
                    summary.fetches += 1
                    posts = await self._fetch(label, fetch, account)
                    if posts is None:
                        summary.failures += 1
                        posts = []
                    summary.posts_fetched += len(posts)
                    logger.info("%s: %d %s posts", name, len(posts), label)

            logger.info(
                "social refresh sweep finished: places=%d fetches=%d posts=%d failures=%d",
                summary.places_checked,
                summary.fetches,
                summary.posts_fetched,
                summary.failures,
            )
            return summary

    async def _loop(self) -> None:
        while True:
            await asyncio.sleep(self.interval_seconds)
            try:
                await self.run_sweep()
            except Exception:  # noqa: BLE001
                logger.exception("social refresh sweep aborted")

    def start(self) -> None:
        """Schedule the periodic loop on the running event loop."""
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._loop())
        logger.info("social refresh scheduled every %.0f seconds", self.interval_seconds)

    async def stop(self) -> None:
        """Cancel the loop; an in-flight sweep is abandoned."""
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("social refresh stopped")
