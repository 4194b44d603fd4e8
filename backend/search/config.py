from __future__ import annotations

from dataclasses import dataclass


# Provider limit for a nearby-search radius
MAX_RADIUS_METERS = 50_000


@dataclass(frozen=True)
class SearchConfig:
    min_results: int = 3
    max_radius_meters: int = MAX_RADIUS_METERS
    rating_floor: float = 3.0
    rating_step: float = 0.5
    max_price_level: int = 4
    duration_concurrency: int = 10


DEFAULT_SEARCH_CONFIG = SearchConfig()
