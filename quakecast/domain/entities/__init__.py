"""
Domain Entities Package

This package contains the core domain entities: catalog events, kernel
parameters, grid cells, feature vectors, the trained model artifact, the
evaluation report and the aftershock ring.
"""

from .aftershock import (
    AftershockRing,
    RingCenter,
    RingParameters,
    RingPoint,
    RingStatistics,
)
from .errors import (
    CatalogUnavailableError,
    ClassifierTrainingError,
    DomainError,
    GridTooLargeError,
    InvalidQueryError,
    ModelArtifactFormatError,
    ModelArtifactNotFoundError,
    TrainingPipelineError,
)
from .evaluation import (
    DatasetStats,
    EvaluationReport,
    FeatureImportance,
    ReliabilityBin,
    ScoreMetrics,
)
from .event import Event, EventCatalog
from .features import FEATURE_NAMES, FeatureSettings, FeatureVector, LabeledSample
from .grid import BoundingBox, Grid, GridCell
from .health import DependencyStatus, ModelSummary, ServiceStatus, SystemHealth
from .kernel import DEFAULT_KERNEL_PARAMS, KernelParams
from .model import ArtifactConfig, Calibration, LogisticModel, ModelArtifact

__all__ = [
    "AftershockRing",
    "RingCenter",
    "RingParameters",
    "RingPoint",
    "RingStatistics",
    "DomainError",
    "InvalidQueryError",
    "GridTooLargeError",
    "CatalogUnavailableError",
    "ModelArtifactNotFoundError",
    "ModelArtifactFormatError",
    "ClassifierTrainingError",
    "TrainingPipelineError",
    "DatasetStats",
    "EvaluationReport",
    "FeatureImportance",
    "ReliabilityBin",
    "ScoreMetrics",
    "Event",
    "EventCatalog",
    "FEATURE_NAMES",
    "FeatureSettings",
    "FeatureVector",
    "LabeledSample",
    "BoundingBox",
    "Grid",
    "GridCell",
    "DependencyStatus",
    "ModelSummary",
    "ServiceStatus",
    "SystemHealth",
    "DEFAULT_KERNEL_PARAMS",
    "KernelParams",
    "ArtifactConfig",
    "Calibration",
    "LogisticModel",
    "ModelArtifact",
]
