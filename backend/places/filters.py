"""
Result hygiene for nearby-search responses.

The provider's ``restaurant`` type is loose: it happily returns fast-food
chains, supermarket cafeterias, gas stations with a sandwich counter and
bars. These helpers decide which raw places are worth recommending.
"""
from __future__ import annotations

from collections.abc import Iterable

# Matched as lowercase substrings of the place name.
EXCLUDED_CHAINS: tuple[str, ...] = (
    # Fast food
    "mcdonald",
    "mcdo",
    "burger king",
    "burgerking",
    "bk",
    "kfc",
    "subway",
    "taco bell",
    "wendy",
    "five guys",
    "in-n-out",
    "white castle",
    "jack in the box",
    "carl's jr",
    "hardee",
    "sonic",
    "arby",
    "popeyes",
    "chick-fil-a",
    "chipotle",
    # Supermarket restaurants
    "coop restaurant",
    "migros restaurant",
    "aldi restaurant",
    "lidl restaurant",
    "walmart",
    "target cafe",
    "costco food court",
    "ikea restaurant",
    "whole foods",
    "trader joe",
    "safeway",
    "kroger",
    "publix",
    "carrefour",
    "tesco cafe",
    "asda cafe",
    "sainsbury",
    "waitrose cafe",
    "auchan",
    "leclerc",
    "intermarché",
    "casino",
    "monoprix",
)

EXCLUDED_PLACE_TYPES: frozenset[str] = frozenset({
    "gas_station",
    "convenience_store",
    "store",
    "supermarket",
    "grocery_or_supermarket",
    "shopping_mall",
    "lodging",
    "car_dealer",
    "car_repair",
    "parking",
    "bank",
    "atm",
    "hospital",
    "pharmacy",
    "airport",
    "train_station",
    "transit_station",
    "bus_station",
    "subway_station",
    "school",
    "university",
    "library",
    "church",
    "mosque",
    "synagogue",
    "hindu_temple",
})

RESTAURANT_TYPES: frozenset[str] = frozenset({
    "restaurant",
    "food",
    "cafe",
    "meal_takeaway",
    "meal_delivery",
})

BAR_TYPES: frozenset[str] = frozenset({"bar", "night_club"})


def is_excluded_chain(name: str | None) -> bool:
    if not name:
        return False
    lower = name.lower()
    return any(chain in lower for chain in EXCLUDED_CHAINS)


def is_non_restaurant(place_types: Iterable[str] | None) -> bool:
    """Return True for places that are not restaurants.

    A restaurant type always wins, so a bar that serves food is kept.
    Pure bars and places tagged only with an excluded type are dropped.
    Untyped places get the benefit of the doubt.
    """
    types = set(place_types or ())
    if not types:
        return False
    if types & RESTAURANT_TYPES:
        return False
    if types & BAR_TYPES:
        return True
    return bool(types & EXCLUDED_PLACE_TYPES)


def passes_min_rating(rating: float | None, min_rating: float | None) -> bool:
    if not min_rating:
        return True
    return rating is not None and rating >= min_rating
