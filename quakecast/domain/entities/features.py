"""Domain entities for classifier features and labelled samples."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Tuple

FEATURE_NAMES: Tuple[str, ...] = (
    "rate_7",
    "rate_30",
    "rate_90",
    "maxMag_7",
    "maxMag_30",
    "maxMag_90",
    "time_since_last",
    "etas",
)

RATE_WINDOWS_DAYS: Tuple[int, ...] = (7, 30, 90)

TIME_SINCE_LAST_SENTINEL = 999.0


class FeatureVector(Mapping[str, float]):
    """Read-only mapping from the fixed feature names to values."""

    __slots__ = ("_values",)

    def __init__(self, values: Mapping[str, float]):
        self._values: Dict[str, float] = {
            name: float(values.get(name, 0.0)) for name in FEATURE_NAMES
        }

    def __getitem__(self, key: str) -> float:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(FEATURE_NAMES)

    def __len__(self) -> int:
        return len(FEATURE_NAMES)

    def __repr__(self) -> str:
        return f"FeatureVector({self._values!r})"

    def as_dict(self) -> Dict[str, float]:
        return dict(self._values)


@dataclass(frozen=True, slots=True)
class LabeledSample:
    """A feature vector at (lat, lon, time) with its look-ahead label."""

    lat: float
    lon: float
    time: datetime
    features: FeatureVector
    label: int


@dataclass(frozen=True, slots=True)
class FeatureSettings:
    """Spatial radius and label threshold shared by training and scoring."""

    label_magnitude: float
    radius_km: float = 100.0
