"""
Application DTOs - Training

Data Transfer Objects summarising a completed training run.
"""

from datetime import datetime
from typing import List

from pydantic import BaseModel, ConfigDict, Field

from quakecast.domain.entities.evaluation import EvaluationReport
from quakecast.domain.entities.model import ModelArtifact


class ScoreMetricsDTO(BaseModel):
    auc: float = Field(description="Area under the ROC curve")
    brier: float = Field(description="Mean squared probability error")


class FeatureImportanceDTO(BaseModel):
    name: str
    coeff: float


class TrainingResultDTO(BaseModel):
    """Outcome of one run of the training pipeline."""

    model_config = ConfigDict(protected_namespaces=())

    model_version: str
    trained_at: datetime
    artifact_location: str
    evaluation_location: str
    horizon_days: float
    train_samples: int
    val_samples: int
    positive_rate: float
    raw: ScoreMetricsDTO
    calibrated: ScoreMetricsDTO
    calibration_a: float
    calibration_b: float
    feature_importance: List[FeatureImportanceDTO] = Field(default_factory=list)

    @classmethod
    def from_domain(
        cls,
        artifact: ModelArtifact,
        report: EvaluationReport,
        artifact_location: str,
        evaluation_location: str,
    ) -> "TrainingResultDTO":
        return cls(
            model_version=artifact.version,
            trained_at=artifact.trained_at,
            artifact_location=artifact_location,
            evaluation_location=evaluation_location,
            horizon_days=artifact.config.horizon_days,
            train_samples=report.dataset.train_samples,
            val_samples=report.dataset.val_samples,
            positive_rate=report.dataset.positive_rate,
            raw=ScoreMetricsDTO(auc=report.raw.auc, brier=report.raw.brier),
            calibrated=ScoreMetricsDTO(
                auc=report.calibrated.auc, brier=report.calibrated.brier
            ),
            calibration_a=artifact.calibration.A,
            calibration_b=artifact.calibration.B,
            feature_importance=[
                FeatureImportanceDTO(name=f.name, coeff=f.coeff)
                for f in report.feature_importance
            ],
        )
