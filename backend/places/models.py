from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field


class LatLng(BaseModel):
    model_config = ConfigDict(frozen=True)

    lat: float = Field(..., ge=-90.0, le=90.0)
    lng: float = Field(..., ge=-180.0, le=180.0)


class TravelDuration(BaseModel):
    model_config = ConfigDict(frozen=True)

    seconds: int = Field(..., ge=0)
    distance_meters: int = Field(..., ge=0)
    display_text: str
    distance_text: str
    estimated: bool = Field(
        default=False,
        description="True when computed from straight-line distance instead of routing",
    )


class Candidate(BaseModel):
    """A place returned by the search provider.

    Candidates are immutable: the duration post-filter attaches
    ``travel_duration`` through :meth:`with_duration`, which returns a copy.
    """

    model_config = ConfigDict(frozen=True)

    place_id: str = Field(..., min_length=1)
    name: str
    location: LatLng
    address: str | None = None
    rating: float | None = None
    user_ratings_total: int | None = None
    price_level: int | None = None
    types: list[str] = Field(default_factory=list)
    open_now: bool | None = None
    travel_duration: TravelDuration | None = None

    def with_duration(self, duration: TravelDuration) -> Candidate:
        return self.model_copy(update={"travel_duration": duration})


class GeocodeResult(BaseModel):
    location: LatLng
    formatted_address: str


class PlaceReview(BaseModel):
    author_name: str | None = None
    rating: int | None = None
    text: str = ""
    relative_time: str | None = None


class PlaceDetails(BaseModel):
    place_id: str
    name: str
    formatted_address: str | None = None
    location: LatLng | None = None
    rating: float | None = None
    user_ratings_total: int | None = None
    price_level: int | None = None
    types: list[str] = Field(default_factory=list)
    phone_number: str | None = None
    website: str | None = None
    opening_hours: list[str] = Field(default_factory=list)
    reviews: list[PlaceReview] = Field(default_factory=list)


@dataclass(frozen=True)
class PlaceQuery:
    """Filters understood by the place-search provider.

    ``None`` / empty values mean "no constraint" on that dimension.
    """

    radius_meters: int
    max_price_level: int | None = None
    min_rating: float | None = None
    keyword: str | None = None


class GeocodeRequest(BaseModel):
    address: str = Field(..., min_length=1, max_length=500)
