"""Domain entities for the aftershock probability ring."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True, slots=True)
class RingParameters:
    m0: float = 3.0
    horizon_days: float = 3.0
    radius_km: float = 150.0
    n_points: int = 64
    lookback_days: float = 90.0


@dataclass(frozen=True, slots=True)
class RingPoint:
    lat: float
    lon: float
    probability: float
    lambda_: float = 0.0


@dataclass(frozen=True, slots=True)
class RingCenter:
    lat: float
    lon: float
    probability: float
    lambda_: float


@dataclass(frozen=True, slots=True)
class RingStatistics:
    max_probability: float
    mean_probability: float
    min_probability: float


@dataclass(frozen=True, slots=True)
class AftershockRing:
    center: RingCenter
    statistics: RingStatistics
    ring: List[RingPoint] = field(default_factory=list)
    events_used: int = 0
