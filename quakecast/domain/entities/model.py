"""
Domain Entities - Model

Trained classifier, calibration and the persisted, versioned model artifact.
Every entity here is immutable once produced by the training pipeline. The
artifact's dictionary form is the JSON document read by the prediction
service.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Tuple

from quakecast.domain.entities.errors import ModelArtifactFormatError
from quakecast.domain.entities.features import FEATURE_NAMES
from quakecast.domain.entities.grid import BoundingBox
from quakecast.domain.entities.kernel import KernelParams

ARTIFACT_VERSION = "1.0.0"


@dataclass(frozen=True, slots=True)
class LogisticModel:
    """Logistic regression operating directly on raw (unstandardized) features."""

    intercept: float
    coeffs: Mapping[str, float]
    feature_names: Tuple[str, ...] = FEATURE_NAMES

    def to_dict(self) -> Dict[str, Any]:
        return {
            "intercept": self.intercept,
            "coeffs": {
                name: float(self.coeffs.get(name, 0.0)) for name in self.feature_names
            },
            "featureNames": list(self.feature_names),
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "LogisticModel":
        names = tuple(payload.get("featureNames") or FEATURE_NAMES)
        coeffs = payload.get("coeffs") or {}
        return cls(
            intercept=float(payload["intercept"]),
            coeffs={name: float(coeffs.get(name, 0.0)) for name in names},
            feature_names=names,
        )


@dataclass(frozen=True, slots=True)
class Calibration:
    """Platt scaling parameters: ``sigmoid(A * logit(p) + B)``."""

    A: float = 1.0
    B: float = 0.0

    def to_dict(self) -> Dict[str, float]:
        return {"A": self.A, "B": self.B}

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Calibration":
        return cls(A=float(payload.get("A", 1.0)), B=float(payload.get("B", 0.0)))


IDENTITY_CALIBRATION = Calibration()


@dataclass(frozen=True, slots=True)
class ArtifactConfig:
    """Training configuration recorded with the artifact; supplies query defaults."""

    bbox: BoundingBox
    cell_deg: float
    label_magnitude: float
    horizon_days: float
    completeness_magnitude: float
    rate_radius_km: float = 100.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "bbox": self.bbox.to_list(),
            "cellDeg": self.cell_deg,
            "labelMagnitude": self.label_magnitude,
            "horizon": self.horizon_days,
            "completenessMagnitude": self.completeness_magnitude,
            "rateRadiusKm": self.rate_radius_km,
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "ArtifactConfig":
        # Artifacts written by the first release used M0_label / Mc_min.
        label_magnitude = payload.get("labelMagnitude", payload.get("M0_label"))
        completeness = payload.get(
            "completenessMagnitude", payload.get("Mc_min", label_magnitude)
        )
        return cls(
            bbox=BoundingBox.from_sequence(payload["bbox"]),
            cell_deg=float(payload["cellDeg"]),
            label_magnitude=float(label_magnitude),
            horizon_days=float(payload["horizon"]),
            completeness_magnitude=float(completeness),
            rate_radius_km=float(payload.get("rateRadiusKm", 100.0)),
        )


@dataclass(frozen=True, slots=True)
class ModelArtifact:
    """The complete persisted model loaded by the prediction service."""

    config: ArtifactConfig
    model: LogisticModel
    calibration: Calibration = IDENTITY_CALIBRATION
    kernel_params: KernelParams = field(default_factory=KernelParams)
    version: str = ARTIFACT_VERSION
    trained_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "trained": self.trained_at.isoformat(),
            "config": self.config.to_dict(),
            "model": self.model.to_dict(),
            "calibration": self.calibration.to_dict(),
            "etas_params": self.kernel_params.to_dict(),
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "ModelArtifact":
        try:
            trained = datetime.fromisoformat(
                str(payload["trained"]).replace("Z", "+00:00")
            )
            if trained.tzinfo is None:
                trained = trained.replace(tzinfo=timezone.utc)
            return cls(
                version=str(payload.get("version", ARTIFACT_VERSION)),
                trained_at=trained,
                config=ArtifactConfig.from_dict(payload["config"]),
                model=LogisticModel.from_dict(payload["model"]),
                calibration=Calibration.from_dict(payload.get("calibration") or {}),
                kernel_params=KernelParams.from_dict(payload.get("etas_params") or {}),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise ModelArtifactFormatError(
                f"Invalid model artifact: {exc}", details={"error": str(exc)}
            ) from exc
