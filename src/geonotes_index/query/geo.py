"""
Great-circle distance on a spherical earth.

Uses the same mean earth radius as the index's geofilt so in-memory
filtering agrees with the server near the radius boundary.
"""

from __future__ import annotations

import numpy as np

EARTH_MEAN_RADIUS_KM = 6371.0087714


def haversine_km(
    lat1: float,
    lon1: float,
    lat2: float | np.ndarray,
    lon2: float | np.ndarray,
) -> float | np.ndarray:
    """
    Distance in km from (lat1, lon1) to one or many points.

    lat2/lon2 may be arrays, in which case an array of distances is returned.
    """
    phi1 = np.radians(lat1)
    phi2 = np.radians(lat2)
    dphi = phi2 - phi1
    dlambda = np.radians(lon2) - np.radians(lon1)

    a = np.sin(dphi / 2) ** 2 + np.cos(phi1) * np.cos(phi2) * np.sin(dlambda / 2) ** 2
    c = 2 * np.arcsin(np.sqrt(np.clip(a, 0.0, 1.0)))
    distance = EARTH_MEAN_RADIUS_KM * c

    if np.ndim(distance) == 0:
        return float(distance)
    return distance
