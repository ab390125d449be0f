"""
Application DTOs - Aftershock

Data Transfer Objects for the aftershock probability ring query.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from quakecast.domain.entities.aftershock import AftershockRing, RingPoint
from quakecast.shared.consts import AFTERSHOCK_DISCLAIMER


class AftershockQueryDTO(BaseModel):
    """Mainshock description and ring parameters."""

    lat: float
    lon: float
    magnitude: float
    time: datetime
    event_id: Optional[str] = Field(
        default=None, description="Catalog event id, used as the cache key"
    )
    m0: float = Field(default=3.0, description="Aftershock magnitude threshold")
    horizon_days: float = 3.0
    radius_km: float = 150.0
    n_points: int = 64


class MainshockDTO(BaseModel):
    event_id: str
    lat: float
    lon: float
    mag: float
    time: datetime


class RingParametersDTO(BaseModel):
    m0_threshold: float
    horizon_days: float
    radius_km: float


class RingPointDTO(BaseModel):
    lat: float
    lon: float
    probability: float

    @classmethod
    def from_domain(cls, point: RingPoint) -> "RingPointDTO":
        return cls(lat=point.lat, lon=point.lon, probability=point.probability)


class RingStatisticsDTO(BaseModel):
    max_probability: float
    mean_probability: float
    min_probability: float


class AftershockResponseDTO(BaseModel):
    """DTO returned by the aftershock endpoint."""

    type: str = "aftershock"
    generated: datetime
    mainshock: MainshockDTO
    parameters: RingParametersDTO
    center_probability: float
    center_lambda: float
    ring: List[RingPointDTO]
    statistics: RingStatisticsDTO
    recent_events_count: int = Field(
        description="Events used by the kernel, including the mainshock"
    )
    disclaimer: str = AFTERSHOCK_DISCLAIMER

    @classmethod
    def from_domain(
        cls,
        query: AftershockQueryDTO,
        ring: AftershockRing,
        generated: datetime,
    ) -> "AftershockResponseDTO":
        return cls(
            generated=generated,
            mainshock=MainshockDTO(
                event_id=query.event_id or "unknown",
                lat=query.lat,
                lon=query.lon,
                mag=query.magnitude,
                time=query.time,
            ),
            parameters=RingParametersDTO(
                m0_threshold=query.m0,
                horizon_days=query.horizon_days,
                radius_km=query.radius_km,
            ),
            center_probability=ring.center.probability,
            center_lambda=ring.center.lambda_,
            ring=[RingPointDTO.from_domain(point) for point in ring.ring],
            statistics=RingStatisticsDTO(
                max_probability=ring.statistics.max_probability,
                mean_probability=ring.statistics.mean_probability,
                min_probability=ring.statistics.min_probability,
            ),
            recent_events_count=ring.events_used,
        )
