import math

import pytest

from app.services.distance import MIN_DISTANCE_KM, distance_km

A = {"lat": 40.0, "lng": -74.0}
B = {"lat": 40.001, "lng": -74.001}
C = {"lat": 41.0, "lng": -75.0}


def test_distance_is_symmetric():
    assert distance_km(A, C) == pytest.approx(distance_km(C, A))
    assert distance_km(A, B) == pytest.approx(distance_km(B, A))


def test_same_point_is_floored():
    assert distance_km(A, A) == MIN_DISTANCE_KM == 0.1


def test_short_distance():
    assert distance_km(A, B) == pytest.approx(0.14, abs=0.01)


def test_long_distance():
    assert 135 < distance_km(A, C) < 145


def test_zero_axis_is_a_real_coordinate():
    d = distance_km({"lat": 0.0, "lng": 0.0}, {"lat": 0.0, "lng": 1.0})
    assert d == pytest.approx(111.19, abs=0.1)


@pytest.mark.parametrize(
    "point",
    [
        None,
        {},
        {"lat": 40.0},
        {"lat": None, "lng": -74.0},
        {"lat": "40.0", "lng": -74.0},
        {"lat": True, "lng": -74.0},
        {"lat": float("nan"), "lng": -74.0},
        [40.0, -74.0],
    ],
)
def test_missing_or_malformed_coordinates_are_infinitely_far(point):
    assert distance_km(A, point) == math.inf
    assert distance_km(point, A) == math.inf
