"""
Restaurant search core.

Responsibilities:
- Query the places provider with the user's filters.
- Relax filters stage by stage until at least three candidates qualify.
- Drop candidates beyond the travel-time cap (fail-open on lookup errors).
- Pick the reveal candidate uniformly at random.
"""
from __future__ import annotations

from collections.abc import Collection

from ..places.models import LatLng
from ..places.provider import PlaceSearchProvider
from .config import DEFAULT_SEARCH_CONFIG, SearchConfig
from .models import FilterSpec, SearchResult
from .orchestrator import SearchOrchestrator
from .selector import choose

select_random = choose


async def find_restaurants(
    origin: LatLng,
    filters: FilterSpec,
    exclusions: Collection[str],
    provider: PlaceSearchProvider,
    config: SearchConfig = DEFAULT_SEARCH_CONFIG,
) -> SearchResult:
    return await SearchOrchestrator(provider, config).search(origin, filters, exclusions)


__all__ = ["find_restaurants", "select_random", "SearchOrchestrator", "choose"]
