from __future__ import annotations

import logging
from collections.abc import Collection
from typing import Any

import httpx

from .config import DEFAULT_PLACES_CONFIG, PlacesConfig
from .filters import is_excluded_chain, is_non_restaurant, passes_min_rating
from .models import (
    Candidate,
    GeocodeResult,
    LatLng,
    PlaceDetails,
    PlaceQuery,
    PlaceReview,
    TravelDuration,
)
from .provider import ProviderError

logger = logging.getLogger(__name__)

DETAIL_FIELDS = (
    "place_id",
    "name",
    "formatted_address",
    "geometry",
    "rating",
    "user_ratings_total",
    "price_level",
    "types",
    "opening_hours",
    "formatted_phone_number",
    "website",
    "reviews",
)


def _latlng_param(point: LatLng) -> str:
    return f"{point.lat},{point.lng}"


def _parse_location(geometry: dict[str, Any] | None) -> LatLng | None:
    loc = (geometry or {}).get("location") or {}
    lat, lng = loc.get("lat"), loc.get("lng")
    if lat is None or lng is None:
        return None
    try:
        return LatLng(lat=lat, lng=lng)
    except ValueError:
        return None


def _parse_candidate(raw: dict[str, Any]) -> Candidate | None:
    location = _parse_location(raw.get("geometry"))
    if not raw.get("place_id") or location is None:
        return None
    opening_hours = raw.get("opening_hours") or {}
    return Candidate(
        place_id=raw["place_id"],
        name=raw.get("name", ""),
        location=location,
        address=raw.get("vicinity") or raw.get("formatted_address"),
        rating=raw.get("rating"),
        user_ratings_total=raw.get("user_ratings_total"),
        price_level=raw.get("price_level"),
        types=raw.get("types", []),
        open_now=opening_hours.get("open_now"),
    )


class GoogleMapsClient:
    """Async client for the Google Maps Places, Distance Matrix and Geocoding
    web services.

    Implements ``PlaceSearchProvider``. Every failure (missing key, HTTP
    error, malformed body, non-OK status) is raised as ``ProviderError``.
    """

    def __init__(
        self,
        config: PlacesConfig = DEFAULT_PLACES_CONFIG,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.config = config
        self._http = http_client

    def _client(self) -> httpx.AsyncClient:
        if self._http is None:
            self._http = httpx.AsyncClient(timeout=self.config.timeout)
        return self._http

    async def aclose(self) -> None:
        if self._http is not None:
            await self._http.aclose()
            self._http = None

    async def _get(self, path: str, params: dict[str, Any]) -> dict[str, Any]:
        if not self.config.api_key:
            raise ProviderError("GOOGLE_MAPS_API_KEY is not configured")

        url = f"{self.config.base_url}/{path}/json"
        try:
            resp = await self._client().get(url, params={**params, "key": self.config.api_key})
            resp.raise_for_status()
            data = resp.json()
        except httpx.HTTPError as exc:
            raise ProviderError(f"{path} request failed: {exc}") from exc
        except ValueError as exc:
            raise ProviderError(f"{path} returned invalid JSON") from exc

        if not isinstance(data, dict):
            raise ProviderError(f"{path} returned an unexpected payload")
        return data

    @staticmethod
    def _raise_for_status(path: str, data: dict[str, Any]) -> None:
        status = data.get("status", "UNKNOWN_ERROR")
        detail = data.get("error_message")
        message = f"{path} failed: {status}"
        if detail:
            message = f"{message} ({detail})"
        raise ProviderError(message, status=status)

    # ── Place search ─────────────────────────────────────────────────────

    async def search(
        self,
        origin: LatLng,
        query: PlaceQuery,
        exclusions: Collection[str] = frozenset(),
    ) -> list[Candidate]:
        params: dict[str, Any] = {
            "location": _latlng_param(origin),
            "radius": query.radius_meters,
            "type": self.config.place_type,
        }
        if self.config.open_now:
            params["opennow"] = "true"
        if query.max_price_level:
            params["maxprice"] = query.max_price_level
        if query.keyword:
            params["keyword"] = query.keyword

        data = await self._get("place/nearbysearch", params)
        status = data.get("status")
        if status == "ZERO_RESULTS":
            return []
        if status != "OK":
            self._raise_for_status("Places search", data)

        excluded = set(exclusions)
        candidates: list[Candidate] = []
        for raw in data.get("results", []):
            try:
                candidate = _parse_candidate(raw)
            except (ValueError, TypeError, AttributeError):
                logger.warning("Skipping malformed place in nearby search", exc_info=True)
                continue
            if candidate is None or candidate.place_id in excluded:
                continue
            if is_non_restaurant(candidate.types) or is_excluded_chain(candidate.name):
                continue
            # Places without opening hours get the benefit of the doubt
            if candidate.open_now is False:
                continue
            if not passes_min_rating(candidate.rating, query.min_rating):
                continue
            candidates.append(candidate)

        logger.debug(
            "Nearby search returned %d raw places, kept %d",
            len(data.get("results", [])),
            len(candidates),
        )
        return candidates

    # ── Travel duration ──────────────────────────────────────────────────

    async def get_travel_duration(
        self,
        origin: LatLng,
        destination: LatLng,
        mode: str | None = None,
    ) -> TravelDuration:
        data = await self._get(
            "distancematrix",
            {
                "origins": _latlng_param(origin),
                "destinations": _latlng_param(destination),
                "mode": (mode or self.config.travel_mode).lower(),
                "units": "metric",
            },
        )
        if data.get("status") != "OK":
            self._raise_for_status("Distance Matrix", data)

        try:
            element = data["rows"][0]["elements"][0]
        except (KeyError, IndexError, TypeError) as exc:
            raise ProviderError("Distance Matrix returned no elements") from exc

        if element.get("status") != "OK":
            raise ProviderError(
                f"Distance Matrix failed: {element.get('status')}",
                status=element.get("status"),
            )

        try:
            return TravelDuration(
                seconds=element["duration"]["value"],
                distance_meters=element["distance"]["value"],
                display_text=element["duration"]["text"],
                distance_text=element["distance"]["text"],
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise ProviderError("Distance Matrix returned a malformed element") from exc

    # ── Geocoding & details ──────────────────────────────────────────────

    async def geocode(self, address: str) -> GeocodeResult:
        data = await self._get("geocode", {"address": address})
        results = data.get("results") or []
        if data.get("status") != "OK" or not results:
            self._raise_for_status("Geocoding", data)

        first = results[0]
        location = _parse_location(first.get("geometry"))
        if location is None:
            raise ProviderError("Geocoding returned no location")
        return GeocodeResult(
            location=location,
            formatted_address=first.get("formatted_address", address),
        )

    async def get_place_details(self, place_id: str) -> PlaceDetails:
        data = await self._get(
            "place/details",
            {"place_id": place_id, "fields": ",".join(DETAIL_FIELDS)},
        )
        if data.get("status") != "OK":
            self._raise_for_status("Place details", data)

        raw = data.get("result") or {}
        return PlaceDetails(
            place_id=raw.get("place_id", place_id),
            name=raw.get("name", ""),
            formatted_address=raw.get("formatted_address"),
            location=_parse_location(raw.get("geometry")),
            rating=raw.get("rating"),
            user_ratings_total=raw.get("user_ratings_total"),
            price_level=raw.get("price_level"),
            types=raw.get("types", []),
            phone_number=raw.get("formatted_phone_number"),
            website=raw.get("website"),
            opening_hours=(raw.get("opening_hours") or {}).get("weekday_text", []),
            reviews=[
                PlaceReview(
                    author_name=r.get("author_name"),
                    rating=r.get("rating"),
                    text=r.get("text", ""),
                    relative_time=r.get("relative_time_description"),
                )
                for r in raw.get("reviews", [])
            ],
        )
