from __future__ import annotations

import pytest

from backend.places.filters import is_excluded_chain, is_non_restaurant, passes_min_rating
from backend.places.geo import (
    estimate_travel_time,
    format_distance,
    format_duration,
    haversine_meters,
    navigation_url,
)
from backend.places.models import LatLng


@pytest.mark.parametrize("name", ["McDonald's", "Burger King Plainpalais", "KFC", "Migros Restaurant"])
def test_chains_are_excluded(name):
    assert is_excluded_chain(name)


def test_independent_restaurant_is_kept():
    assert not is_excluded_chain("Café du Soleil")
    assert not is_excluded_chain(None)


def test_restaurant_type_wins_over_bar():
    assert not is_non_restaurant(["bar", "restaurant", "point_of_interest"])


def test_pure_bar_is_excluded():
    assert is_non_restaurant(["bar", "point_of_interest"])


def test_gas_station_without_food_is_excluded():
    assert is_non_restaurant(["gas_station", "point_of_interest"])


def test_untyped_place_gets_benefit_of_doubt():
    assert not is_non_restaurant([])
    assert not is_non_restaurant(None)
    assert not is_non_restaurant(["point_of_interest"])


def test_min_rating():
    assert passes_min_rating(None, None)
    assert passes_min_rating(None, 0)
    assert not passes_min_rating(None, 3.5)
    assert passes_min_rating(3.5, 3.5)
    assert not passes_min_rating(3.4, 3.5)


def test_haversine_one_degree_latitude():
    distance = haversine_meters(LatLng(lat=0, lng=0), LatLng(lat=1, lng=0))
    assert distance == pytest.approx(111_195, rel=1e-3)


def test_format_duration():
    assert format_duration(1) == "1 min"
    assert format_duration(12) == "12 mins"
    assert format_duration(60) == "1 hour"
    assert format_duration(65) == "1 hour 5 mins"
    assert format_duration(121) == "2 hours 1 min"


def test_format_distance():
    assert format_distance(850.4) == "850 m"
    assert format_distance(3420) == "3.4 km"


def test_estimate_travel_time_marks_estimates():
    origin = LatLng(lat=0, lng=0)
    destination = LatLng(lat=0.09, lng=0)  # ~10 km

    estimates = estimate_travel_time(origin, destination)

    assert estimates["driving"].estimated
    assert estimates["driving"].seconds == 20 * 60
    assert estimates["walking"].seconds == 120 * 60
    assert estimates["walking"].display_text == "2 hours"
    assert estimates["driving"].distance_text == "10.0 km"


def test_navigation_url():
    url = navigation_url(LatLng(lat=46.2, lng=6.15))
    assert url == "https://www.google.com/maps/dir/?api=1&destination=46.2,6.15"
