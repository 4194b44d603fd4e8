from __future__ import annotations

from collections.abc import Collection
from typing import Protocol

from .models import Candidate, LatLng, PlaceQuery, TravelDuration


class ProviderError(Exception):
    """Transport, quota or invalid-request failure from the places provider."""

    def __init__(self, message: str, status: str | None = None) -> None:
        super().__init__(message)
        self.status = status


class PlaceSearchProvider(Protocol):
    async def search(
        self,
        origin: LatLng,
        query: PlaceQuery,
        exclusions: Collection[str] = frozenset(),
    ) -> list[Candidate]:
        """Return matching places, ``[]`` on a legitimate zero match."""
        ...

    async def get_travel_duration(
        self, origin: LatLng, destination: LatLng
    ) -> TravelDuration:
        ...
