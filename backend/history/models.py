from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from ..search.models import Notification


class HistoryRecord(BaseModel):
    id: str
    session_id: str
    place_id: str
    name: str
    address: str | None = None
    rating: float | None = None
    price_level: int | None = None
    cuisine_type: str | None = None
    latitude: float
    longitude: float
    revealed: bool = False
    user_rating: int | None = Field(default=None, ge=1, le=5)
    visited_at: datetime


class RatingRequest(BaseModel):
    rating: int = Field(..., ge=1, le=5)


class RatingResponse(BaseModel):
    record: HistoryRecord
    notification: Notification
