"""
Staged constraint-relaxation search.

Stages run in a fixed order, each at most once:

1. baseline query with the filters as supplied
2. radius doubled (capped at the provider maximum)
3. minimum rating lowered in half-star steps down to the floor
4. budget raised by exactly one level
5. cuisine keyword removed

The search stops at the first query whose duration-filtered result holds
enough candidates. Relaxation amounts are always derived from the original
FilterSpec; only the working copy is mutated.
"""
from __future__ import annotations

import logging
from collections.abc import Collection, Iterator

from ..places.models import Candidate, LatLng
from ..places.provider import PlaceSearchProvider, ProviderError
from .config import DEFAULT_SEARCH_CONFIG, SearchConfig
from .duration import filter_by_duration
from .models import (
    PRICE_LABELS,
    FilterSpec,
    Notification,
    NotificationKind,
    SearchResult,
    WorkingFilterState,
)

logger = logging.getLogger(__name__)

NO_RESULTS_MESSAGE = (
    "Unable to find enough restaurants matching your criteria. "
    "Please try different settings or a different location."
)


class SearchOrchestrator:
    def __init__(
        self,
        provider: PlaceSearchProvider,
        config: SearchConfig = DEFAULT_SEARCH_CONFIG,
    ) -> None:
        self.provider = provider
        self.config = config

    async def search(
        self,
        origin: LatLng,
        filters: FilterSpec,
        exclusions: Collection[str] = frozenset(),
    ) -> SearchResult:
        """
        Find at least ``config.min_results`` candidates around ``origin``.

        Provider failures never escape: a failed stage counts as an empty
        result and the next stage still runs. When every stage is exhausted
        the result has no candidates and ends with an ``error`` notification.
        """
        working = WorkingFilterState.from_spec(filters)
        excluded = frozenset(exclusions)
        notifications: list[Notification] = []

        qualifying = await self._attempt(origin, working, excluded)
        if qualifying is not None:
            return SearchResult(candidates=qualifying, notifications=notifications)

        for message in self._relaxations(filters, working):
            logger.info("Relaxing search: %s", message)
            notifications.append(Notification(kind=NotificationKind.warning, message=message))
            qualifying = await self._attempt(origin, working, excluded)
            if qualifying is not None:
                return SearchResult(candidates=qualifying, notifications=notifications)

        notifications.append(Notification(kind=NotificationKind.error, message=NO_RESULTS_MESSAGE))
        return SearchResult(candidates=[], notifications=notifications)

    def _relaxations(
        self, original: FilterSpec, working: WorkingFilterState
    ) -> Iterator[str]:
        """Relax ``working`` one step at a time, yielding the user-facing
        message for each step before it is queried.

        Lazy: nothing past the current step is applied once the caller stops
        iterating.
        """
        cfg = self.config

        if working.radius_meters < cfg.max_radius_meters:
            old_radius = working.radius_meters
            working.radius_meters = min(old_radius * 2, cfg.max_radius_meters)
            yield (
                "Not enough options found. Expanded search radius from "
                f"{old_radius / 1000:.1f}km to {working.radius_meters / 1000:.1f}km."
            )

        if working.min_rating > cfg.rating_floor:
            for rating in self._rating_steps(original.min_rating):
                working.min_rating = rating
                yield (
                    "Still searching... Lowered minimum rating from "
                    f"{original.min_rating:.1f}+ to {rating:.1f}+ stars."
                )

        if working.max_price_level < cfg.max_price_level:
            new_budget = min(original.max_price_level + 1, cfg.max_price_level)
            working.max_price_level = new_budget
            yield (
                "Still not enough options. Relaxed budget from "
                f"{PRICE_LABELS[original.max_price_level]} to {PRICE_LABELS[new_budget]} "
                "(max 1 level increase)."
            )

        if original.cuisine_type and working.cuisine_type:
            working.cuisine_type = ""
            yield (
                f'Broadening search... Removed "{original.cuisine_type}" '
                "cuisine filter to find more options."
            )

    def _rating_steps(self, original_rating: float) -> list[float]:
        cfg = self.config
        count = int(round((original_rating - cfg.rating_floor) / cfg.rating_step))
        return [original_rating - cfg.rating_step * i for i in range(1, count + 1)]

    async def _attempt(
        self,
        origin: LatLng,
        working: WorkingFilterState,
        exclusions: frozenset[str],
    ) -> list[Candidate] | None:
        """Run one provider query plus the duration post-filter.

        Returns the qualifying candidates, or None when there are too few.
        """
        min_results = self.config.min_results
        try:
            raw = await self.provider.search(origin, working.to_query(), exclusions)
        except ProviderError:
            logger.warning("Place search failed for %s, treating as no results", working, exc_info=True)
            return None

        if len(raw) < min_results:
            return None

        if not working.max_duration_minutes:
            return raw

        kept = await filter_by_duration(
            self.provider,
            origin,
            raw,
            working.max_duration_minutes,
            concurrency=self.config.duration_concurrency,
        )
        return kept if len(kept) >= min_results else None
