from __future__ import annotations

import pytest

from backend.places.models import (
    Candidate,
    GeocodeResult,
    LatLng,
    PlaceDetails,
    PlaceQuery,
    TravelDuration,
)
from backend.places.provider import ProviderError

ORIGIN = LatLng(lat=46.2044, lng=6.1432)


class FakeProvider:
    """Scripted place-search provider.

    ``search_results`` is consumed one entry per search call; an entry is a
    list of candidates or an exception to raise. Once exhausted every call
    returns ``[]``. ``durations`` maps place_id to seconds or an exception;
    unknown ids take 5 minutes.
    """

    def __init__(self) -> None:
        self.search_results: list = []
        self.durations: dict = {}
        self.queries: list[PlaceQuery] = []
        self.exclusions: list[frozenset[str]] = []
        self.duration_calls: list[LatLng] = []
        self.geocode_result: GeocodeResult | Exception | None = None
        self.details: PlaceDetails | Exception | None = None

    async def search(self, origin, query, exclusions=frozenset()):
        self.queries.append(query)
        self.exclusions.append(frozenset(exclusions))
        if not self.search_results:
            return []
        result = self.search_results.pop(0)
        if isinstance(result, Exception):
            raise result
        return [c for c in result if c.place_id not in exclusions]

    async def get_travel_duration(self, origin, destination):
        self.duration_calls.append(destination)
        place_id = f"{destination.lat:.4f},{destination.lng:.4f}"
        value = self.durations.get(place_id, 300)
        if isinstance(value, Exception):
            raise value
        return TravelDuration(
            seconds=value,
            distance_meters=value * 10,
            display_text=f"{value // 60} mins",
            distance_text=f"{value / 100:.1f} km",
        )

    async def geocode(self, address):
        if isinstance(self.geocode_result, Exception):
            raise self.geocode_result
        return self.geocode_result

    async def get_place_details(self, place_id):
        if isinstance(self.details, Exception):
            raise self.details
        return self.details


def make_candidate(n: int, **overrides) -> Candidate:
    # Each candidate gets a distinct coordinate so durations can be keyed on it
    data = {
        "place_id": f"place-{n}",
        "name": f"Bistro {n}",
        "location": LatLng(lat=46.2 + n / 1000, lng=6.1),
        "address": f"{n} Rue du Lac",
        "rating": 4.3,
        "price_level": 2,
        "types": ["restaurant", "food"],
        "open_now": True,
    }
    data.update(overrides)
    return Candidate(**data)


def duration_key(candidate: Candidate) -> str:
    return f"{candidate.location.lat:.4f},{candidate.location.lng:.4f}"


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def candidates():
    def _make(count: int, start: int = 1) -> list[Candidate]:
        return [make_candidate(i) for i in range(start, start + count)]

    return _make


@pytest.fixture
def set_duration(provider):
    def _set(candidate: Candidate, value) -> None:
        provider.durations[duration_key(candidate)] = value

    return _set


@pytest.fixture
def provider_error() -> ProviderError:
    return ProviderError("Places search failed: OVER_QUERY_LIMIT", status="OVER_QUERY_LIMIT")
