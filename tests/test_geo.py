# tests/test_geo.py
"""
Geo utility tests: haversine distance, proximity tiers, linear decay.
"""
from __future__ import annotations

import math

import pytest

from relevance.geo import (
    EARTH_RADIUS_KM,
    haversine,
    linear_decay,
    proximity_multiplier,
)


class TestHaversine:

    def test_same_point_is_zero(self):
        assert haversine(47.37, 8.54, 47.37, 8.54) == 0.0

    def test_one_degree_of_latitude(self):
        assert haversine(0.0, 0.0, 1.0, 0.0) == pytest.approx(EARTH_RADIUS_KM * math.pi / 180)

    def test_berlin_to_paris(self):
        assert haversine(52.52, 13.405, 48.8566, 2.3522) == pytest.approx(878, abs=5)

    def test_symmetric(self):
        a = haversine(52.52, 13.405, 48.8566, 2.3522)
        b = haversine(48.8566, 2.3522, 52.52, 13.405)
        assert a == pytest.approx(b)

    def test_nan_propagates(self):
        assert math.isnan(haversine(float("nan"), 0.0, 0.0, 0.0))


class TestProximityMultiplier:

    @pytest.mark.parametrize("distance_km,expected", [
        (0.0, 10),
        (0.05, 10),
        (0.0999, 10),
        (0.1, 5),
        (0.2, 5),
        (0.25, 2),
        (0.4, 2),
        (0.5, 1),
        (3.0, 1),
    ])
    def test_tiers(self, distance_km, expected):
        assert proximity_multiplier(distance_km) == expected


class TestLinearDecay:

    @pytest.mark.parametrize("distance_km,radius_km,expected", [
        (0.0, 10.0, 1.0),
        (5.0, 10.0, 0.5),
        (10.0, 10.0, 0.0),
        (11.0, 10.0, 0.0),
        (1.0, 0.0, 0.0),
    ])
    def test_values(self, distance_km, radius_km, expected):
        assert linear_decay(distance_km, radius_km) == pytest.approx(expected)

    def test_monotonic_inside_radius(self):
        values = [linear_decay(d, 10.0) for d in (0.5, 1, 2, 4, 8, 9.9)]
        assert values == sorted(values, reverse=True)
