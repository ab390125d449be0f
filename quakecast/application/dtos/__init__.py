"""
DTOs Package - Application Layer

This package contains Data Transfer Objects (DTOs) used for data exchange
between the application layer and the presentation layer.
"""

from .aftershock_dto import AftershockQueryDTO, AftershockResponseDTO
from .health_dto import (
    ApplicationInfoDTO,
    DependencyStatusDTO,
    ModelSummaryDTO,
    SystemHealthDTO,
)
from .prediction_dto import CellDTO, NowcastResponseDTO, PredictionQueryDTO
from .training_dto import TrainingResultDTO

__all__ = [
    "AftershockQueryDTO",
    "AftershockResponseDTO",
    "SystemHealthDTO",
    "DependencyStatusDTO",
    "ApplicationInfoDTO",
    "ModelSummaryDTO",
    "CellDTO",
    "NowcastResponseDTO",
    "PredictionQueryDTO",
    "TrainingResultDTO",
]
