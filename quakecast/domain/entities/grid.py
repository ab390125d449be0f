"""Domain entities for the scoring grid."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from quakecast.domain.entities.features import FeatureVector


@dataclass(frozen=True, slots=True)
class BoundingBox:
    """Rectangular lat/lon region, ordered as ``[minLon, minLat, maxLon, maxLat]``."""

    min_lon: float
    min_lat: float
    max_lon: float
    max_lat: float

    @property
    def width_deg(self) -> float:
        return self.max_lon - self.min_lon

    @property
    def height_deg(self) -> float:
        return self.max_lat - self.min_lat

    @property
    def area_deg2(self) -> float:
        return self.width_deg * self.height_deg

    def padded(self, degrees: float) -> "BoundingBox":
        return BoundingBox(
            min_lon=max(-180.0, self.min_lon - degrees),
            min_lat=max(-90.0, self.min_lat - degrees),
            max_lon=min(180.0, self.max_lon + degrees),
            max_lat=min(90.0, self.max_lat + degrees),
        )

    def to_list(self) -> List[float]:
        return [self.min_lon, self.min_lat, self.max_lon, self.max_lat]

    @classmethod
    def from_sequence(cls, values: Sequence[float]) -> "BoundingBox":
        if len(values) != 4:
            raise ValueError("bbox must have exactly four values")
        min_lon, min_lat, max_lon, max_lat = (float(v) for v in values)
        return cls(min_lon=min_lon, min_lat=min_lat, max_lon=max_lon, max_lat=max_lat)


@dataclass(slots=True)
class GridCell:
    """A single grid cell center. Lives for one request/response cycle."""

    lat: float
    lon: float
    lambda_: float = 0.0
    probability: float = 0.0
    features: Optional[FeatureVector] = None


@dataclass(slots=True)
class Grid:
    """Row-major lattice of cell centers (latitude is the outer loop)."""

    bbox: BoundingBox
    cell_deg: float
    rows: int
    cols: int
    cells: List[GridCell] = field(default_factory=list)
