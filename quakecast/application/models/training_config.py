"""Training pipeline configuration as seen by the application layer."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

from quakecast.domain.entities.grid import BoundingBox
from quakecast.domain.entities.kernel import KernelParams

NOW = "now"


@dataclass(frozen=True)
class TrainingConfig:
    """
    Everything the offline pipeline needs to produce one model artifact.

    ``train_start`` and ``train_end`` are ISO dates or ``"now"``. The last
    ``holdout_days`` before ``train_end`` are always held out, so the resolved
    end is ``train_end - holdout_days``. A ``train_start`` of ``"now"`` means
    one year before the resolved end.
    """

    bbox: BoundingBox = field(
        default_factory=lambda: BoundingBox(95.0, -12.0, 141.0, 7.0)
    )
    cell_deg: float = 0.25
    label_magnitude: float = 4.5
    horizons: Tuple[float, ...] = (1.0, 3.0, 7.0)
    train_start: str = "2010-01-01"
    train_end: str = NOW
    holdout_days: float = 90.0
    completeness_magnitude: float = 4.0
    rate_radius_km: float = 100.0
    sample_every_days: float = 7.0
    warmup_days: float = 90.0
    validation_days: float = 180.0
    l2: float = 0.01
    learning_rate: float = 0.01
    max_iterations: int = 1000
    kernel_params: KernelParams = field(default_factory=KernelParams)
    preset: Optional[str] = None

    @property
    def horizon_days(self) -> float:
        """The primary horizon; the pipeline trains one model for it."""
        return self.horizons[0]

    @property
    def fetch_min_magnitude(self) -> float:
        return max(self.completeness_magnitude - 1.0, 2.5)

    def resolve_period(self, now: datetime) -> Tuple[datetime, datetime]:
        end = now if self.train_end == NOW else _parse_date(self.train_end)
        end -= timedelta(days=self.holdout_days)
        if self.train_start == NOW:
            start = end - timedelta(days=365)
        else:
            start = _parse_date(self.train_start)
        return start, end


def _parse_date(value: str) -> datetime:
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
