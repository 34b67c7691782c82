"""Pydantic schemas for places.

Places themselves are free-form JSON documents, so handlers return them as
plain dicts; only the envelopes and the realtime payload are modelled here.
"""

from typing import Any, Optional

from pydantic import BaseModel


class PlaceMutationResult(BaseModel):
    message: str
    place: dict[str, Any]


class MessageOut(BaseModel):
    message: str


class RealtimeUpdateIn(BaseModel):
    store_id: Optional[str] = None
    status: Optional[str] = None
    wait_time: Optional[int | float | str] = None
    crowd_level: Optional[int | float | str] = None
    special_info: Optional[str] = None
    open_time: Optional[str] = None
    close_time: Optional[str] = None
    twitter_account: Optional[str] = None
    instagram_account: Optional[str] = None


class RealtimeUpdateResult(BaseModel):
    message: str
    store: dict[str, Any]
