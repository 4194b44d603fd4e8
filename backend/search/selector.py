from __future__ import annotations

import random
from collections.abc import Sequence

from ..places.models import Candidate


def choose(
    candidates: Sequence[Candidate],
    rng: random.Random | None = None,
) -> Candidate | None:
    """Pick one candidate uniformly at random, or None for an empty list.

    Every call draws afresh; recently visited places are excluded upstream.
    """
    if not candidates:
        return None
    index = (rng or random).randrange(len(candidates))
    return candidates[index]
