"""Schemas for reviews and helpful votes."""

from typing import Optional

from pydantic import BaseModel


class ReviewOut(BaseModel):
    id: int
    place_id: str
    author_name: str
    content: str
    rating: int
    image_path: Optional[str] = None
    created_at: str  # local time, YYYY-MM-DD HH:MM:SS
    helpful_count: int


class ReviewCreated(BaseModel):
    message: str
    id: int


class ReviewDeleteIn(BaseModel):
    author_name: Optional[str] = None
    admin_password: Optional[str] = None


class HelpfulVoteResult(BaseModel):
    message: str
    helpful_count: int
