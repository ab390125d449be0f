"""
Use Cases Package - Application Layer

This package contains use cases that implement the business logic
of the application. Use cases orchestrate the flow of data to and from
the entities and implement the business rules of the application.
"""

from .aftershock_use_case import AftershockRingUseCase
from .health_use_cases import GetApplicationInfoUseCase, GetHealthStatusUseCase
from .nowcast_prediction_use_case import NowcastPredictionUseCase
from .nowcast_training_use_case import NowcastTrainingUseCase

__all__ = [
    "AftershockRingUseCase",
    "GetApplicationInfoUseCase",
    "GetHealthStatusUseCase",
    "NowcastPredictionUseCase",
    "NowcastTrainingUseCase",
]
