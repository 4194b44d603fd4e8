from __future__ import annotations

import asyncio
import logging

from ..places.models import Candidate, LatLng, TravelDuration
from ..places.provider import PlaceSearchProvider, ProviderError

logger = logging.getLogger(__name__)


async def _lookup(
    provider: PlaceSearchProvider,
    origin: LatLng,
    candidate: Candidate,
    semaphore: asyncio.Semaphore,
) -> TravelDuration | None:
    async with semaphore:
        try:
            return await provider.get_travel_duration(origin, candidate.location)
        except ProviderError:
            logger.debug(
                "Travel duration unavailable for %s, keeping it unfiltered",
                candidate.place_id,
                exc_info=True,
            )
            return None
        except Exception:
            logger.warning(
                "Travel duration lookup crashed for %s, keeping it unfiltered",
                candidate.place_id,
                exc_info=True,
            )
            return None


async def filter_by_duration(
    provider: PlaceSearchProvider,
    origin: LatLng,
    candidates: list[Candidate],
    max_duration_minutes: int,
    concurrency: int = 10,
) -> list[Candidate]:
    """
    Keep candidates reachable within ``max_duration_minutes``.

    Lookups run concurrently and all finish before this returns. Kept
    candidates are annotated with their duration. A candidate whose lookup
    fails is kept unannotated rather than dropped. Provider order is
    preserved.
    """
    if not candidates:
        return []

    limit_seconds = max_duration_minutes * 60
    semaphore = asyncio.Semaphore(max(1, concurrency))
    durations = await asyncio.gather(
        *(_lookup(provider, origin, c, semaphore) for c in candidates)
    )

    kept: list[Candidate] = []
    for candidate, duration in zip(candidates, durations):
        if duration is None:
            kept.append(candidate)
        elif duration.seconds <= limit_seconds:
            kept.append(candidate.with_duration(duration))
    return kept
