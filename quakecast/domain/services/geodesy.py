"""Great-circle helpers on a spherical Earth (R = 6371 km)."""

from __future__ import annotations

import math
from typing import Tuple, Union

import numpy as np

from quakecast.shared.consts import EARTH_RADIUS_KM

ArrayLike = Union[float, np.ndarray]


def haversine_km(
    lat1: ArrayLike,
    lon1: ArrayLike,
    lat2: ArrayLike,
    lon2: ArrayLike,
    radius_km: float = EARTH_RADIUS_KM,
) -> ArrayLike:
    """
    Haversine distance in kilometres.

    Accepts scalars or numpy arrays (broadcast), so one query point can be
    measured against a whole catalog in a single call.
    """
    phi1 = np.radians(lat1)
    phi2 = np.radians(lat2)
    d_phi = phi2 - phi1
    d_lambda = np.radians(np.asarray(lon2) - np.asarray(lon1))
    a = (
        np.sin(d_phi / 2) ** 2
        + np.cos(phi1) * np.cos(phi2) * np.sin(d_lambda / 2) ** 2
    )
    distance = 2 * radius_km * np.arcsin(np.minimum(1.0, np.sqrt(a)))
    if np.ndim(distance) == 0:
        return float(distance)
    return distance


def normalize_longitude(lon: float) -> float:
    """Wrap a longitude into ``[-180, 180)``."""
    return (lon + 180.0) % 360.0 - 180.0


def destination_point(
    lat: float,
    lon: float,
    bearing_rad: float,
    distance_km: float,
    radius_km: float = EARTH_RADIUS_KM,
) -> Tuple[float, float]:
    """Forward geodesic: the point ``distance_km`` away along ``bearing_rad``."""
    phi1 = math.radians(lat)
    lambda1 = math.radians(lon)
    delta = distance_km / radius_km

    phi2 = math.asin(
        math.sin(phi1) * math.cos(delta)
        + math.cos(phi1) * math.sin(delta) * math.cos(bearing_rad)
    )
    lambda2 = lambda1 + math.atan2(
        math.sin(bearing_rad) * math.sin(delta) * math.cos(phi1),
        math.cos(delta) - math.sin(phi1) * math.sin(phi2),
    )
    return math.degrees(phi2), normalize_longitude(math.degrees(lambda2))
