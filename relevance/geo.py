# relevance/geo.py
"""
Great-circle distance and proximity tiers.

Pure utility: no state. Invalid (non-finite) coordinates propagate NaN;
callers guard their input upstream.
"""
from __future__ import annotations

import math

EARTH_RADIUS_KM = 6371.0

# (upper_bound_km_exclusive, multiplier), checked in order.
PROXIMITY_TIERS: tuple[tuple[float, int], ...] = (
    (0.100, 10),
    (0.250, 5),
    (0.500, 2),
)
NO_PROXIMITY_BOOST = 1


def haversine(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Distance in kilometers between two (lat, lng) points in degrees."""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlmb = math.radians(lng2 - lng1)

    a = (
        math.sin(dphi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(dlmb / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def proximity_multiplier(distance_km: float) -> int:
    """x10 under 100 m, x5 under 250 m, x2 under 500 m, else x1."""
    for upper, multiplier in PROXIMITY_TIERS:
        if distance_km < upper:
            return multiplier
    return NO_PROXIMITY_BOOST


def linear_decay(distance_km: float, radius_km: float) -> float:
    """1 at the center, 0 at the radius edge and beyond."""
    if radius_km <= 0 or distance_km > radius_km:
        return 0.0
    return 1.0 - distance_km / radius_km
