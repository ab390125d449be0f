"""Domain entities for the write-once evaluation report."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping


@dataclass(frozen=True, slots=True)
class ScoreMetrics:
    auc: float
    brier: float


@dataclass(frozen=True, slots=True)
class ReliabilityBin:
    """One non-empty bin of the reliability diagram."""

    pred_mean: float
    obs_mean: float
    count: int


@dataclass(frozen=True, slots=True)
class FeatureImportance:
    name: str
    coeff: float


@dataclass(frozen=True, slots=True)
class DatasetStats:
    train_samples: int
    val_samples: int
    positive_rate: float


@dataclass(frozen=True, slots=True)
class EvaluationReport:
    """Observability artifact; never consumed by the prediction service."""

    dataset: DatasetStats
    raw: ScoreMetrics
    calibrated: ScoreMetrics
    reliability: List[ReliabilityBin] = field(default_factory=list)
    feature_importance: List[FeatureImportance] = field(default_factory=list)
    version: str = "1.0.0"
    evaluated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "evaluated": self.evaluated_at.isoformat(),
            "dataset": {
                "train_samples": self.dataset.train_samples,
                "val_samples": self.dataset.val_samples,
                "positive_rate": self.dataset.positive_rate,
            },
            "metrics": {
                "raw": {"auc": self.raw.auc, "brier": self.raw.brier},
                "calibrated": {
                    "auc": self.calibrated.auc,
                    "brier": self.calibrated.brier,
                },
            },
            "reliability": [
                {"predMean": b.pred_mean, "obsMean": b.obs_mean, "count": b.count}
                for b in self.reliability
            ],
            "feature_importance": [
                {"name": f.name, "coeff": f.coeff} for f in self.feature_importance
            ],
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "EvaluationReport":
        dataset = payload["dataset"]
        metrics = payload["metrics"]
        evaluated = datetime.fromisoformat(
            str(payload["evaluated"]).replace("Z", "+00:00")
        )
        return cls(
            version=str(payload.get("version", "1.0.0")),
            evaluated_at=evaluated,
            dataset=DatasetStats(
                train_samples=int(dataset["train_samples"]),
                val_samples=int(dataset["val_samples"]),
                positive_rate=float(dataset["positive_rate"]),
            ),
            raw=ScoreMetrics(**metrics["raw"]),
            calibrated=ScoreMetrics(**metrics["calibrated"]),
            reliability=[
                ReliabilityBin(
                    pred_mean=float(b["predMean"]),
                    obs_mean=float(b["obsMean"]),
                    count=int(b["count"]),
                )
                for b in payload.get("reliability", [])
            ],
            feature_importance=[
                FeatureImportance(name=str(f["name"]), coeff=float(f["coeff"]))
                for f in payload.get("feature_importance", [])
            ],
        )
