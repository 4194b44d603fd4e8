from __future__ import annotations

import math
from urllib.parse import urlencode

from .models import LatLng, TravelDuration

EARTH_RADIUS_METERS = 6_371_000.0

# Rough city averages, traffic and stops included.
DRIVING_SPEED_KMH = 30.0
WALKING_SPEED_KMH = 5.0


def haversine_meters(a: LatLng, b: LatLng) -> float:
    """Great-circle distance between two coordinates, in meters."""
    lat1, lat2 = math.radians(a.lat), math.radians(b.lat)
    dlat = lat2 - lat1
    dlng = math.radians(b.lng - a.lng)
    h = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlng / 2) ** 2
    return 2 * EARTH_RADIUS_METERS * math.asin(math.sqrt(h))


def _plural(n: int, unit: str) -> str:
    return f"{n} {unit}{'s' if n != 1 else ''}"


def format_duration(minutes: int) -> str:
    if minutes < 60:
        return _plural(minutes, "min")
    hours, mins = divmod(minutes, 60)
    if mins:
        return f"{_plural(hours, 'hour')} {_plural(mins, 'min')}"
    return _plural(hours, "hour")


def format_distance(meters: float) -> str:
    if meters < 1000:
        return f"{round(meters)} m"
    return f"{meters / 1000:.1f} km"


def _estimate(distance_m: float, speed_kmh: float) -> TravelDuration:
    minutes = round(distance_m / 1000 / speed_kmh * 60)
    return TravelDuration(
        seconds=minutes * 60,
        distance_meters=round(distance_m),
        display_text=format_duration(minutes),
        distance_text=format_distance(distance_m),
        estimated=True,
    )


def estimate_travel_time(origin: LatLng, destination: LatLng) -> dict[str, TravelDuration]:
    """Approximate driving and walking times from straight-line distance.

    Used when the routing service cannot produce a duration.
    """
    distance_m = haversine_meters(origin, destination)
    return {
        "driving": _estimate(distance_m, DRIVING_SPEED_KMH),
        "walking": _estimate(distance_m, WALKING_SPEED_KMH),
    }


def navigation_url(destination: LatLng) -> str:
    query = urlencode(
        {"api": 1, "destination": f"{destination.lat},{destination.lng}"}, safe=","
    )
    return f"https://www.google.com/maps/dir/?{query}"
