"""Realtime status updates pushed by store staff."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from localguide.core.errors import ValidationError
from localguide.schemas.place import RealtimeUpdateIn
from localguide.services.place_store import Place, PlaceStore

logger = logging.getLogger(__name__)


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def build_realtime_info(crowd_level: Any, wait_time: Any, special_info: Any) -> str:
    return f"現在の混雑度: {_text(crowd_level)}% | 待ち時間: {_text(wait_time)}分 | {_text(special_info)}"


def utc_timestamp() -> str:
    """ISO 8601 UTC with milliseconds, e.g. ``2024-05-01T09:30:00.123Z``."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def apply_realtime_update(store: PlaceStore, payload: RealtimeUpdateIn) -> Place:
    """Apply crowd/wait/hours/social-handle changes to one place."""
    if not payload.store_id:
        raise ValidationError("store_id is required")

    def build_partial(current: Place) -> Place:
        partial: Place = {
            "realtime_info": build_realtime_info(
                payload.crowd_level, payload.wait_time, payload.special_info
            ),
            "today_hours": f"{_text(payload.open_time)}〜{_text(payload.close_time)}",
            "last_updated": utc_timestamp(),
            # a blank handle never clears a stored one
            "twitter_account": payload.twitter_account or current.get("twitter_account") or "",
            "instagram_account": payload.instagram_account or current.get("instagram_account") or "",
        }
        if payload.status is not None:
            partial["status"] = payload.status
        return partial

    place = store.modify(payload.store_id, build_partial)
    logger.info("realtime info updated for %s", place.get("name", payload.store_id))
    if payload.twitter_account or payload.instagram_account:
        logger.info(
            "social accounts for %s: twitter=%s instagram=%s",
            payload.store_id,
            payload.twitter_account or "-",
            payload.instagram_account or "-",
        )
    return place
