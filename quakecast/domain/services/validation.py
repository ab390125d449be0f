"""
Query validation.

Every numeric query input is checked here before any grid, catalog or kernel
work happens. Failures raise ``InvalidQueryError`` with the offending
parameter in ``details``.
"""

from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Optional, Sequence

from quakecast.domain.entities.errors import InvalidQueryError
from quakecast.domain.entities.grid import BoundingBox

MAX_CELL_DEG = 10.0
MAX_HORIZON_DAYS = 30.0
MAX_RING_RADIUS_KM = 1000.0
MAX_RING_POINTS = 360


def require_finite(name: str, value: float) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidQueryError(
            f"{name} must be a number", details={"parameter": name}
        ) from exc
    if not math.isfinite(number):
        raise InvalidQueryError(
            f"{name} must be a finite number", details={"parameter": name}
        )
    return number


def _require_in_range(
    name: str, value: float, low: float, high: float, low_inclusive: bool = True
) -> float:
    number = require_finite(name, value)
    below = number < low if low_inclusive else number <= low
    if below or number > high:
        bracket = "[" if low_inclusive else "("
        raise InvalidQueryError(
            f"{name} must be in {bracket}{low}, {high}], got {number}",
            details={"parameter": name, "value": number},
        )
    return number


def parse_bbox(raw: str) -> BoundingBox:
    """Parse ``"minLon,minLat,maxLon,maxLat"`` and validate it."""
    parts = [part.strip() for part in raw.split(",")]
    if len(parts) != 4:
        raise InvalidQueryError(
            "bbox must be minLon,minLat,maxLon,maxLat",
            details={"parameter": "bbox", "value": raw},
        )
    return validate_bbox(parts)


def validate_bbox(values: Sequence[float]) -> BoundingBox:
    min_lon, min_lat, max_lon, max_lat = (
        require_finite("bbox", value) for value in values
    )
    for name, lon in (("minLon", min_lon), ("maxLon", max_lon)):
        _require_in_range(name, lon, -180.0, 180.0)
    for name, lat in (("minLat", min_lat), ("maxLat", max_lat)):
        _require_in_range(name, lat, -90.0, 90.0)
    if min_lon >= max_lon or min_lat >= max_lat:
        raise InvalidQueryError(
            "bbox min values must be smaller than max values",
            details={
                "parameter": "bbox",
                "value": [min_lon, min_lat, max_lon, max_lat],
            },
        )
    return BoundingBox(
        min_lon=min_lon, min_lat=min_lat, max_lon=max_lon, max_lat=max_lat
    )


def validate_cell_deg(cell_deg: float) -> float:
    return _require_in_range(
        "cellDeg", cell_deg, 0.0, MAX_CELL_DEG, low_inclusive=False
    )


def validate_horizon(horizon_days: float) -> float:
    return _require_in_range(
        "horizon", horizon_days, 0.0, MAX_HORIZON_DAYS, low_inclusive=False
    )


def validate_latitude(lat: float) -> float:
    return _require_in_range("lat", lat, -90.0, 90.0)


def validate_longitude(lon: float) -> float:
    return _require_in_range("lon", lon, -180.0, 180.0)


def validate_ring_radius(radius_km: float) -> float:
    return _require_in_range(
        "radius", radius_km, 0.0, MAX_RING_RADIUS_KM, low_inclusive=False
    )


def validate_ring_points(n_points: int) -> int:
    number = _require_in_range("nPoints", n_points, 1, MAX_RING_POINTS)
    if number != int(number):
        raise InvalidQueryError(
            "nPoints must be an integer", details={"parameter": "nPoints"}
        )
    return int(number)


def parse_number(
    name: str, raw: Optional[str], default: Optional[float] = None
) -> Optional[float]:
    """Parse an optional query string number; missing values use ``default``."""
    if raw is None or raw.strip() == "":
        return default
    return require_finite(name, raw)


def require_number(name: str, raw: Optional[str]) -> float:
    number = parse_number(name, raw)
    if number is None:
        raise InvalidQueryError(f"{name} is required", details={"parameter": name})
    return number


def parse_epoch_millis(name: str, raw: Optional[str]) -> datetime:
    millis = require_number(name, raw)
    try:
        return datetime.fromtimestamp(millis / 1000.0, tz=timezone.utc)
    except (OverflowError, OSError, ValueError) as exc:
        raise InvalidQueryError(
            f"{name} is not a valid epoch timestamp in milliseconds",
            details={"parameter": name, "value": millis},
        ) from exc
