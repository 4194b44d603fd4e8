from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..places.models import Candidate, LatLng, PlaceQuery, TravelDuration
from .config import MAX_RADIUS_METERS

PRICE_LABELS = {1: "$", 2: "$$", 3: "$$$", 4: "$$$$"}


class FilterSpec(BaseModel):
    """User-specified search constraints before any relaxation."""

    model_config = ConfigDict(frozen=True)

    radius_meters: int = Field(default=10_000, gt=0, le=MAX_RADIUS_METERS)
    max_price_level: int = Field(default=2, ge=1, le=4)
    min_rating: float = Field(default=4.0, ge=0.0, le=4.5)
    cuisine_type: str = Field(default="", max_length=100)
    max_duration_minutes: int | None = Field(default=20, gt=0)

    @field_validator("min_rating")
    @classmethod
    def _half_star_steps(cls, value: float) -> float:
        if (value * 2) != int(value * 2):
            raise ValueError("min_rating must be a multiple of 0.5")
        return value

    @field_validator("cuisine_type")
    @classmethod
    def _strip_cuisine(cls, value: str) -> str:
        return value.strip()


@dataclass
class WorkingFilterState:
    """Mutable copy of a FilterSpec that the orchestrator relaxes in place."""

    radius_meters: int
    max_price_level: int
    min_rating: float
    cuisine_type: str
    max_duration_minutes: int | None

    @classmethod
    def from_spec(cls, spec: FilterSpec) -> WorkingFilterState:
        return cls(
            radius_meters=spec.radius_meters,
            max_price_level=spec.max_price_level,
            min_rating=spec.min_rating,
            cuisine_type=spec.cuisine_type,
            max_duration_minutes=spec.max_duration_minutes,
        )

    def to_query(self) -> PlaceQuery:
        return PlaceQuery(
            radius_meters=self.radius_meters,
            max_price_level=self.max_price_level,
            min_rating=self.min_rating or None,
            keyword=self.cuisine_type or None,
        )


class NotificationKind(str, Enum):
    warning = "warning"
    error = "error"
    success = "success"


class Notification(BaseModel):
    kind: NotificationKind
    message: str


class SearchResult(BaseModel):
    candidates: list[Candidate] = Field(default_factory=list)
    notifications: list[Notification] = Field(default_factory=list)


class SearchRequest(BaseModel):
    origin: LatLng
    filters: FilterSpec = Field(default_factory=FilterSpec)


class SelectRequest(BaseModel):
    origin: LatLng
    candidates: list[Candidate] = Field(default_factory=list)


class SelectResponse(BaseModel):
    restaurant: Candidate | None = None
    history_id: str | None = None
    travel: TravelDuration | None = None
    navigation_url: str | None = None
