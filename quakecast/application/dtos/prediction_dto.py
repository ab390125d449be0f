"""
Application DTOs - Prediction

Data Transfer Objects for nowcast grid queries and their responses.
"""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from quakecast.domain.entities.grid import GridCell
from quakecast.shared.consts import DISCLAIMER


class PredictionQueryDTO(BaseModel):
    """Parsed nowcast query; unset fields fall back to the model's config."""

    bbox: Optional[List[float]] = Field(
        default=None,
        min_length=4,
        max_length=4,
        description="[minLon, minLat, maxLon, maxLat]",
    )
    cell_deg: Optional[float] = Field(default=None, description="Cell size in degrees")
    horizon_days: Optional[float] = Field(
        default=None, description="Forecast horizon in days"
    )


class CellDTO(BaseModel):
    """A scored grid cell."""

    model_config = ConfigDict(populate_by_name=True)

    lat: float
    lon: float
    probability: float = Field(description="Calibrated probability of a label event")
    lambda_: float = Field(
        alias="lambda", description="Intensity kernel rate (events/day)"
    )
    features: Dict[str, float] = Field(default_factory=dict)

    @classmethod
    def from_domain(cls, cell: GridCell) -> "CellDTO":
        return cls(
            lat=cell.lat,
            lon=cell.lon,
            probability=cell.probability,
            lambda_=cell.lambda_,
            features=cell.features.as_dict() if cell.features is not None else {},
        )


class NowcastResponseDTO(BaseModel):
    """DTO returned by the nowcast endpoint."""

    model_config = ConfigDict(protected_namespaces=())

    type: str = "nowcast"
    generated: datetime
    model_version: str
    model_trained: datetime
    horizon_days: float
    label_magnitude: float = Field(
        description="Magnitude threshold the probabilities refer to"
    )
    bbox: List[float]
    cell_deg: float
    total_cells: int = Field(description="Cells evaluated before filtering")
    cells: List[CellDTO] = Field(
        description="Cells whose probability exceeds the reporting threshold"
    )
    max_probability: float
    mean_probability: float
    disclaimer: str = DISCLAIMER
